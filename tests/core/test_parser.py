"""Tests for markdown link and heading extraction."""

from __future__ import annotations

import posixpath
from pathlib import Path

from doclinkchecker.core.hyperlink import LinkType
from doclinkchecker.core.parser import generate_heading_id, parse_markdown, parse_markdown_file


def test_generate_heading_id_matches_github() -> None:
    assert generate_heading_id("Getting Started") == "getting-started"
    assert generate_heading_id("Build & Test") == "build-test"
    assert generate_heading_id("  What's new?  ") == "whats-new"
    assert generate_heading_id("安装 指南") == "安装-指南"


def test_parse_extracts_links_images_and_positions() -> None:
    content = (
        "# Title\n"
        "\n"
        "See [the guide](guide.md#setup) and ![logo](img/logo.png).\n"
        "Mail [me](mailto:me@example.com).\n"
    )
    doc = parse_markdown(content, "/docs/index.md", pathmod=posixpath)

    assert [link.url for link in doc.links] == [
        "guide.md#setup",
        "img/logo.png",
        "mailto:me@example.com",
    ]
    guide, logo, mail = doc.links
    assert (guide.line, guide.column) == (3, 17)
    assert (logo.line, logo.column) == (3, 45)
    assert (mail.line, mail.column) == (4, 11)
    assert guide.link_type == LinkType.LOCAL
    assert logo.link_type == LinkType.RESOURCE
    assert mail.link_type == LinkType.MAIL
    assert guide.url_full_path == "/docs/guide.md"


def test_parse_locates_repeated_targets_in_order() -> None:
    content = "[a](x.md) and [b](x.md)\n"
    doc = parse_markdown(content, "/docs/a.md", pathmod=posixpath)
    assert [link.column for link in doc.links] == [5, 19]


def test_parse_keeps_raw_url_text() -> None:
    content = "[doc](<my file.md>) [cn](文档.md)\n"
    doc = parse_markdown(content, "/docs/a.md", pathmod=posixpath)
    assert [link.url for link in doc.links] == ["my file.md", "文档.md"]


def test_parse_links_in_multiline_paragraph_and_table() -> None:
    content = (
        "First line\n"
        "second [link](second.md)\n"
        "\n"
        "| Name | Link |\n"
        "| ---- | ---- |\n"
        "| one  | [x](one.md) |\n"
    )
    doc = parse_markdown(content, "/docs/a.md", pathmod=posixpath)
    assert [(link.url, link.line) for link in doc.links] == [("second.md", 2), ("one.md", 6)]


def test_code_is_not_parsed_for_links() -> None:
    content = "```\n[a](missing.md)\n```\n\n`[b](also-missing.md)`\n"
    doc = parse_markdown(content, "/docs/a.md", pathmod=posixpath)
    assert doc.links == []


def test_autolinks_are_web_links() -> None:
    doc = parse_markdown("<https://example.com>\n", "/docs/a.md", pathmod=posixpath)
    assert len(doc.links) == 1
    assert doc.links[0].link_type == LinkType.WEBPAGE


def test_empty_link_target() -> None:
    doc = parse_markdown("[nothing]()\n", "/docs/a.md", pathmod=posixpath)
    assert len(doc.links) == 1
    assert doc.links[0].link_type == LinkType.EMPTY


def test_headings_get_unique_ids() -> None:
    content = "# Intro\n\n## Setup\n\n## Setup\n\n### Setup\n"
    doc = parse_markdown(content, "/docs/a.md")
    assert [h.id for h in doc.headings] == ["intro", "setup", "setup-1", "setup-2"]
    assert [h.level for h in doc.headings] == [1, 2, 2, 3]
    assert doc.headings[1].line == 3
    assert doc.heading_ids == {"intro", "setup", "setup-1", "setup-2"}


def test_parse_markdown_file_uses_file_path(tmp_path: Path) -> None:
    md_file = tmp_path / "page.md"
    md_file.write_text("# Page\n\n[self](#page)\n", encoding="utf-8")

    doc = parse_markdown_file(md_file)

    assert doc.file_path == str(md_file)
    assert doc.links[0].url_full_path == str(md_file)


def test_heading_id_ignores_inline_markup() -> None:
    content = "## See [the docs](guide.md) now\n\n# Use `pip` **today**\n"
    doc = parse_markdown(content, "/d/a.md", pathmod=posixpath)
    assert [h.id for h in doc.headings] == ["see-the-docs-now", "use-pip-today"]
    assert doc.headings[0].title == "See the docs now"
