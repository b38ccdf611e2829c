"""Tests for documentation tree scanning."""

from __future__ import annotations

from pathlib import Path

import pytest

from doclinkchecker.core.walker import scan_documentation
from doclinkchecker.errors import DocumentationRootError


def test_scan_finds_markdown_and_resources(sample_docs: Path) -> None:
    tree = scan_documentation(sample_docs)

    assert tree.root == sample_docs
    assert [p.relative_to(sample_docs).as_posix() for p in tree.markdown_files] == [
        "guide/intro.md",
        "index.md",
    ]
    assert [p.relative_to(sample_docs).as_posix() for p in tree.resource_files] == [
        ".attachments/logo.png",
        ".attachments/unused.png",
    ]


def test_scan_applies_default_and_custom_excludes(make_docs) -> None:
    root = make_docs(
        {
            "a.md": "# A\n",
            "B.MD": "# B\n",
            "node_modules/pkg/readme.md": "# pkg\n",
            "drafts/wip.md": "# WIP\n",
            "notes.txt": "plain",
        }
    )

    tree = scan_documentation(root, exclude=["drafts/"])

    assert sorted(p.name for p in tree.markdown_files) == ["B.MD", "a.md"]
    assert tree.resource_files == []


def test_scan_uses_custom_resource_folders(make_docs) -> None:
    root = make_docs({"index.md": "# x\n", "images/a.png": b"", ".attachments/b.png": b""})

    tree = scan_documentation(root, resource_folders=["images"])

    assert [p.name for p in tree.resource_files] == ["a.png"]


def test_scan_rejects_missing_root(tmp_path: Path) -> None:
    with pytest.raises(DocumentationRootError):
        scan_documentation(tmp_path / "nope")


def test_scan_rejects_file_root(tmp_path: Path) -> None:
    file_path = tmp_path / "file.md"
    file_path.write_text("# x\n", encoding="utf-8")
    with pytest.raises(DocumentationRootError):
        scan_documentation(file_path)
