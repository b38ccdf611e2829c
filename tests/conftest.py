"""Shared fixtures for building documentation trees."""

from __future__ import annotations

from pathlib import Path
from typing import Callable

import pytest


def write_files(root: Path, files: dict[str, str | bytes]) -> Path:
    for relative, content in files.items():
        path = root / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        if isinstance(content, bytes):
            path.write_bytes(content)
        else:
            path.write_text(content, encoding="utf-8")
    return root


@pytest.fixture
def make_docs(tmp_path: Path) -> Callable[[dict[str, str | bytes]], Path]:
    """Return a builder that writes ``files`` below a fresh docs folder."""

    def _build(files: dict[str, str | bytes]) -> Path:
        return write_files(tmp_path / "docs", files).resolve()

    return _build


@pytest.fixture
def sample_docs(make_docs) -> Path:
    return make_docs(
        {
            "index.md": (
                "# Welcome\n\n"
                "- [Guide](guide/intro.md#setup)\n"
                "- [Missing](guide/missing.md)\n"
                "- [Bad anchor](guide/intro.md#nope)\n"
                "- [Top](#welcome)\n"
                "- [Site](https://example.com)\n"
                "![Logo](.attachments/logo.png)\n"
            ),
            "guide/intro.md": "# Intro\n\n## Setup\n\nBack to [home](../index.md).\n",
            ".attachments/logo.png": b"\x89PNG",
            ".attachments/unused.png": b"\x89PNG",
        }
    )
