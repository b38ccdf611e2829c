"""Tests for the Typer command line interface."""

from __future__ import annotations

import json
from pathlib import Path

from typer.testing import CliRunner

from doclinkchecker import __version__
from doclinkchecker.cli import app

runner = CliRunner()


def test_check_reports_errors_with_exit_code_one(sample_docs: Path) -> None:
    result = runner.invoke(app, ["check", str(sample_docs), "--format", "json"])

    assert result.exit_code == 1
    data = json.loads(result.stdout)
    assert sorted(i["code"] for i in data["issues"]) == ["DEAD_LINK", "INVALID_ANCHOR"]
    assert data["summary"]["passed"] is False


def test_check_passes_on_clean_docs(make_docs) -> None:
    root = make_docs({"index.md": "# Home\n\n[Guide](guide.md#top)\n", "guide.md": "# Top\n"})

    result = runner.invoke(app, ["check", str(root)])

    assert result.exit_code == 0
    assert "DocLinkChecker" in result.stdout


def test_check_orphans_flag(sample_docs: Path) -> None:
    result = runner.invoke(app, ["check", str(sample_docs), "--format", "json", "--orphans"])

    codes = [i["code"] for i in json.loads(result.stdout)["issues"]]
    assert "ORPHANED_RESOURCE" in codes


def test_check_reads_config_docs_folder(tmp_path: Path) -> None:
    (tmp_path / ".doclinkchecker.toml").write_text(
        'docs_folder = "docs"\ncheck_orphaned_resources = true\n', encoding="utf-8"
    )
    docs = tmp_path / "docs"
    (docs / ".attachments").mkdir(parents=True)
    (docs / "index.md").write_text("# Home\n", encoding="utf-8")
    (docs / ".attachments" / "lonely.png").write_bytes(b"")

    result = runner.invoke(app, ["check", str(tmp_path), "--format", "json"])

    assert result.exit_code == 0
    data = json.loads(result.stdout)
    assert data["stats"]["files"] == 1
    assert [i["code"] for i in data["issues"]] == ["ORPHANED_RESOURCE"]


def test_check_missing_directory_exits_two(tmp_path: Path) -> None:
    result = runner.invoke(app, ["check", str(tmp_path / "missing")])

    assert result.exit_code == 2
    assert "Path does not exist" in result.stdout


def test_check_invalid_config_exits_two(tmp_path: Path) -> None:
    (tmp_path / ".doclinkchecker.toml").write_text("bogus = 1\n", encoding="utf-8")

    result = runner.invoke(app, ["check", str(tmp_path)])

    assert result.exit_code == 2
    assert "Unknown configuration keys" in result.stdout


def test_check_rejects_unknown_strategy(tmp_path: Path) -> None:
    result = runner.invoke(app, ["check", str(tmp_path), "--strategy", "github"])

    assert result.exit_code == 2


def test_links_command_lists_classified_links(make_docs) -> None:
    root = make_docs({"a.md": "[m](mailto:a@b.c) [l](b.md#x)\n"})

    result = runner.invoke(app, ["links", str(root / "a.md")])

    assert result.exit_code == 0
    assert "mail" in result.stdout
    assert "local" in result.stdout


def test_version_command() -> None:
    result = runner.invoke(app, ["version"])

    assert result.exit_code == 0
    assert __version__ in result.stdout
