from __future__ import annotations

import textwrap
from pathlib import Path

from md_preview.cli import cli
from md_preview.filesystem import MAX_FILE_SIZE_ENV_VAR


def _write(tmp_path: Path, filename: str, content: str) -> Path:
    path = tmp_path / filename
    path.write_text(textwrap.dedent(content).lstrip(), encoding="utf-8")
    return path


def _write_pyproject(base: Path, body: str) -> Path:
    path = base / "pyproject.toml"
    path.write_text(textwrap.dedent(body).lstrip(), encoding="utf-8")
    return path


def test_cli_prints_html(cli_runner, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    target = _write(
        tmp_path,
        "doc.md",
        """
        # Introduction
        - first
        - second
        """,
    )

    result = cli_runner.invoke(cli, [str(target)])
    assert result.exit_code == 0
    assert result.output.startswith('<h1 id="introduction"')
    assert result.output.count("<li") == 2
    assert target.read_text(encoding="utf-8").startswith("# Introduction")


def test_cli_writes_output_file(cli_runner, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    target = _write(tmp_path, "doc.md", "Hello **world**\n")
    destination = tmp_path / "doc.html"

    result = cli_runner.invoke(cli, [str(target), "-o", str(destination)])
    assert result.exit_code == 0
    assert result.output == ""
    assert "<strong" in destination.read_text(encoding="utf-8")


def test_cli_mobile_flag(cli_runner, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    target = _write(tmp_path, "doc.md", "# Title\n")

    result = cli_runner.invoke(cli, ["--mobile", str(target)])
    assert result.exit_code == 0
    assert 'class="text-2xl font-bold' in result.output


def test_cli_reads_config_from_pyproject(cli_runner, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    _write_pyproject(
        tmp_path,
        """
        [tool.md-preview]
        is_slideshow = true
        """,
    )
    target = _write(tmp_path, "slides.md", "# Title\n")

    result = cli_runner.invoke(cli, [str(target)])
    assert result.exit_code == 0
    assert "text-center" in result.output


def test_cli_flags_override_config(cli_runner, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    _write_pyproject(
        tmp_path,
        """
        [tool.md-preview]
        is_slideshow = true
        """,
    )
    target = _write(tmp_path, "slides.md", "# Title\n")

    result = cli_runner.invoke(cli, ["--no-slideshow", str(target)])
    assert result.exit_code == 0
    assert "text-center" not in result.output
    assert "text-3xl" in result.output


def test_cli_host_option_marks_external_links(cli_runner, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    target = _write(
        tmp_path,
        "links.md",
        """
        [home](https://example.com/)
        [away](https://other.org/)
        """,
    )

    result = cli_runner.invoke(cli, ["--host", "example.com", str(target)])
    assert result.exit_code == 0
    assert result.output.count('target="_blank"') == 1


def test_cli_rejects_invalid_config(cli_runner, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    _write_pyproject(
        tmp_path,
        """
        [tool.md-preview]
        theme = "dark"
        """,
    )
    target = _write(tmp_path, "doc.md", "# Title\n")

    result = cli_runner.invoke(cli, [str(target)])
    assert result.exit_code == 2
    assert "Invalid `[tool.md-preview]` settings" in result.output


def test_cli_rejects_invalid_config_values(cli_runner, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    _write_pyproject(
        tmp_path,
        """
        [tool.md-preview]
        wiki_route_prefix = "wiki"
        """,
    )
    target = _write(tmp_path, "doc.md", "# Title\n")

    result = cli_runner.invoke(cli, [str(target)])
    assert result.exit_code == 2
    assert "wiki_route_prefix" in result.output


def test_cli_rejects_non_markdown_files(cli_runner, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    target = _write(tmp_path, "page.html", "<p>hi</p>\n")

    result = cli_runner.invoke(cli, [str(target)])
    assert result.exit_code == 2
    assert "is not a Markdown file" in result.output


def test_cli_rejects_missing_file(cli_runner, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)

    result = cli_runner.invoke(cli, [str(tmp_path / "missing.md")])
    assert result.exit_code == 2


def test_cli_enforces_file_size_from_environment(cli_runner, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv(MAX_FILE_SIZE_ENV_VAR, "5")
    target = _write(tmp_path, "doc.md", "# A heading that is too long\n")

    result = cli_runner.invoke(cli, [str(target)])
    assert result.exit_code == 1
    assert "exceeds the maximum allowed size of 5 bytes" in result.output


def test_cli_rejects_invalid_size_environment(cli_runner, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv(MAX_FILE_SIZE_ENV_VAR, "lots")
    target = _write(tmp_path, "doc.md", "# Title\n")

    result = cli_runner.invoke(cli, [str(target)])
    assert result.exit_code == 1
    assert MAX_FILE_SIZE_ENV_VAR in result.output


def test_cli_enforces_configured_file_size(cli_runner, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv(MAX_FILE_SIZE_ENV_VAR, raising=False)
    _write_pyproject(
        tmp_path,
        """
        [tool.md-preview]
        max_file_size = 4
        """,
    )
    target = _write(tmp_path, "doc.md", "# Title\n")

    result = cli_runner.invoke(cli, [str(target)])
    assert result.exit_code == 1
    assert "exceeds the maximum allowed size of 4 bytes" in result.output


def test_cli_enforces_max_input_chars(cli_runner, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    _write_pyproject(
        tmp_path,
        """
        [tool.md-preview]
        max_input_chars = 3
        """,
    )
    target = _write(tmp_path, "doc.md", "# Title\n")

    result = cli_runner.invoke(cli, [str(target)])
    assert result.exit_code == 1
    assert "exceeds the maximum allowed length of 3" in result.output


def test_cli_rejects_invalid_utf8(cli_runner, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    target = tmp_path / "binary.md"
    target.write_bytes(b"# \xff\xfe\n")

    result = cli_runner.invoke(cli, [str(target)])
    assert result.exit_code == 1
    assert "Invalid UTF-8" in result.output


def test_cli_verbose_flag(cli_runner, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    target = _write(tmp_path, "doc.md", "text\n")

    result = cli_runner.invoke(cli, ["-v", str(target)])
    assert result.exit_code == 0
    assert "<p" in result.output


def test_cli_public_api_exports_only_command():
    import md_preview.cli as cli_module

    assert cli_module.__all__ == ["cli"]
