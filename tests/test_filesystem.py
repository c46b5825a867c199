from __future__ import annotations

import os
import stat
from pathlib import Path

import pytest

from md_preview.filesystem import (
    MAX_FILE_SIZE_ENV_VAR,
    collect_file_stat,
    contains_symlink,
    enforce_file_size,
    get_max_file_size,
    normalize_filepath,
    safe_read,
    write_output,
)


def test_get_max_file_size_uses_default(monkeypatch):
    monkeypatch.delenv(MAX_FILE_SIZE_ENV_VAR, raising=False)

    assert get_max_file_size(default=123) == 123


def test_get_max_file_size_reads_environment(monkeypatch):
    monkeypatch.setenv(MAX_FILE_SIZE_ENV_VAR, "2048")

    assert get_max_file_size(default=123) == 2048


def test_get_max_file_size_rejects_non_integer(monkeypatch):
    monkeypatch.setenv(MAX_FILE_SIZE_ENV_VAR, "invalid")
    with pytest.raises(ValueError, match="expected positive integer"):
        get_max_file_size()


def test_get_max_file_size_rejects_non_positive(monkeypatch):
    monkeypatch.setenv(MAX_FILE_SIZE_ENV_VAR, "0")
    with pytest.raises(ValueError, match="must be a positive integer"):
        get_max_file_size()


def test_normalize_filepath_accepts_markdown(tmp_path: Path):
    target = tmp_path / "notes.md"
    target.write_text("# Notes\n", encoding="utf-8")

    assert normalize_filepath(str(target), tmp_path) == target.resolve()


def test_normalize_filepath_missing_file(tmp_path: Path):
    with pytest.raises(ValueError, match="does not exist"):
        normalize_filepath(str(tmp_path / "missing.md"), tmp_path)


def test_normalize_filepath_rejects_directory(tmp_path: Path):
    folder = tmp_path / "folder"
    folder.mkdir()
    with pytest.raises(ValueError, match="not a regular file"):
        normalize_filepath(str(folder), tmp_path)


def test_normalize_filepath_rejects_other_extensions(tmp_path: Path):
    target = tmp_path / "page.html"
    target.write_text("<p>hi</p>", encoding="utf-8")

    with pytest.raises(ValueError, match="is not a Markdown file"):
        normalize_filepath(str(target), tmp_path)


def test_normalize_filepath_rejects_paths_outside_base(tmp_path: Path):
    outside = tmp_path / "outside.md"
    outside.write_text("# Out\n", encoding="utf-8")
    base_dir = tmp_path / "project"
    base_dir.mkdir()

    with pytest.raises(ValueError, match="outside of the working directory"):
        normalize_filepath(str(outside), base_dir)


def test_normalize_filepath_rejects_symlink(tmp_path: Path):
    target = tmp_path / "actual.md"
    target.write_text("# Heading\n", encoding="utf-8")
    link = tmp_path / "alias.md"
    os.symlink(target, link)

    with pytest.raises(ValueError, match="Symlinks are not supported"):
        normalize_filepath(str(link), tmp_path)


def test_contains_symlink_detects_parent_link(tmp_path: Path):
    real_dir = tmp_path / "real"
    real_dir.mkdir()
    linked_dir = tmp_path / "linked"
    os.symlink(real_dir, linked_dir)

    assert contains_symlink(linked_dir / "notes.md") is True
    assert contains_symlink(real_dir / "notes.md") is False


def test_collect_file_stat_handles_missing_file(tmp_path: Path):
    with pytest.raises(IOError, match="Error accessing"):
        collect_file_stat(tmp_path / "missing.md")


def test_collect_file_stat_rejects_symlink(tmp_path: Path):
    target = tmp_path / "actual.md"
    target.write_text("# Heading\n", encoding="utf-8")
    link = tmp_path / "alias.md"
    os.symlink(target, link)

    with pytest.raises(IOError, match="Symlinks are not supported"):
        collect_file_stat(link)


@pytest.mark.skipif(not hasattr(os, "mkfifo"), reason="mkfifo not available")
def test_collect_file_stat_rejects_fifo(tmp_path: Path):
    fifo = tmp_path / "pipe.md"
    try:
        os.mkfifo(fifo)
    except OSError:  # pragma: no cover
        pytest.skip("Unable to create FIFO")

    with pytest.raises(IOError, match="is not a regular file"):
        collect_file_stat(fifo)


def test_enforce_file_size(tmp_path: Path):
    target = tmp_path / "big.md"
    target.write_text("x" * 10, encoding="utf-8")
    stat_result = collect_file_stat(target)

    enforce_file_size(stat_result, 10, target)
    with pytest.raises(IOError, match="exceeds the maximum allowed size of 9 bytes"):
        enforce_file_size(stat_result, 9, target)


def test_safe_read_raises_for_directory(tmp_path: Path):
    directory = tmp_path / "folder"
    directory.mkdir()

    with pytest.raises(IOError):
        safe_read(directory)


def test_write_output_creates_file(tmp_path: Path):
    destination = tmp_path / "preview.html"

    write_output(destination, "<p>hello</p>")

    assert destination.read_text(encoding="utf-8") == "<p>hello</p>"
    assert [path.name for path in tmp_path.iterdir()] == ["preview.html"]


def test_write_output_keeps_permissions(tmp_path: Path):
    destination = tmp_path / "preview.html"
    destination.write_text("old", encoding="utf-8")
    destination.chmod(0o640)

    write_output(destination, "new")

    assert destination.read_text(encoding="utf-8") == "new"
    assert stat.S_IMODE(destination.stat().st_mode) == 0o640


def test_write_output_rejects_symlink(tmp_path: Path):
    target = tmp_path / "real.html"
    target.write_text("keep", encoding="utf-8")
    link = tmp_path / "link.html"
    os.symlink(target, link)

    with pytest.raises(IOError, match="Symlinks are not supported"):
        write_output(link, "new")
    assert target.read_text(encoding="utf-8") == "keep"


def test_write_output_requires_existing_directory(tmp_path: Path):
    with pytest.raises(IOError, match="does not exist"):
        write_output(tmp_path / "missing" / "preview.html", "x")
