import asyncio
import os
import time
from pathlib import Path

import pytest

from conftest import make_image, make_pdf, set_mtime
from rechnungen.core.errors import DirectoryAccessError, FileStatError
from rechnungen.core.models import FileKind, SourceFile
from rechnungen.logic import collector
from rechnungen.logic.collector import collect_files, is_supported, kind_for, sort_chronologically


def test_is_supported_is_case_sensitive() -> None:
    assert is_supported("rechnung.pdf")
    assert is_supported("scan.jpg")
    assert is_supported("scan.jpeg")
    assert is_supported("scan.png")
    assert not is_supported("scan.PDF")
    assert not is_supported("notes.txt")
    assert not is_supported("offer.docx")
    assert not is_supported("archive.pdf.zip")


def test_kind_for() -> None:
    assert kind_for("a.pdf") is FileKind.PDF
    assert kind_for("a.jpeg") is FileKind.IMAGE
    assert kind_for("a.png") is FileKind.IMAGE


def test_collect_files_filters_extensions(tmp_path: Path) -> None:
    make_pdf(tmp_path / "a.pdf")
    make_pdf(tmp_path / "b.PDF")
    make_image(tmp_path / "c.jpg")
    make_image(tmp_path / "d.jpeg")
    make_image(tmp_path / "e.png")
    (tmp_path / "f.txt").write_text("x", encoding="utf-8")
    (tmp_path / "g.docx").write_bytes(b"x")

    result = asyncio.run(collect_files(tmp_path))

    assert sorted(f.name for f in result.files) == ["a.pdf", "c.jpg", "d.jpeg", "e.png"]
    assert result.errors == []
    kinds = {f.name: f.kind for f in result.files}
    assert kinds["a.pdf"] is FileKind.PDF
    assert kinds["e.png"] is FileKind.IMAGE
    assert all(f.path == tmp_path / f.name for f in result.files)


def test_collect_files_reads_mtime(tmp_path: Path) -> None:
    set_mtime(make_pdf(tmp_path / "a.pdf"), 1_234_567)
    result = asyncio.run(collect_files(tmp_path))
    assert result.files[0].modified_at == 1_234_567


def test_collect_files_missing_directory(tmp_path: Path) -> None:
    with pytest.raises(DirectoryAccessError) as excinfo:
        asyncio.run(collect_files(tmp_path / "missing"))
    assert excinfo.value.path == tmp_path / "missing"


def test_collect_files_not_a_directory(tmp_path: Path) -> None:
    file_path = make_pdf(tmp_path / "a.pdf")
    with pytest.raises(DirectoryAccessError):
        asyncio.run(collect_files(file_path))


def test_collect_files_drops_entry_on_stat_failure(tmp_path: Path, monkeypatch) -> None:
    make_pdf(tmp_path / "good.pdf")
    make_pdf(tmp_path / "broken.pdf")
    real_stat = os.stat

    def fake_stat(path, *args, **kwargs):
        if Path(path).name == "broken.pdf":
            raise PermissionError(13, "Permission denied")
        return real_stat(path, *args, **kwargs)

    monkeypatch.setattr(collector.os, "stat", fake_stat)
    result = asyncio.run(collect_files(tmp_path))

    assert [f.name for f in result.files] == ["good.pdf"]
    assert len(result.errors) == 1
    assert isinstance(result.errors[0], FileStatError)
    assert result.errors[0].path.name == "broken.pdf"


def test_collect_files_skips_directories_with_matching_names(tmp_path: Path) -> None:
    (tmp_path / "folder.pdf").mkdir()
    make_pdf(tmp_path / "a.pdf")
    result = asyncio.run(collect_files(tmp_path))
    assert [f.name for f in result.files] == ["a.pdf"]
    assert [e.path.name for e in result.errors] == ["folder.pdf"]


def test_collect_files_listing_timeout(tmp_path: Path, monkeypatch) -> None:
    def slow_listdir(path):
        time.sleep(0.3)
        return []

    monkeypatch.setattr(collector.os, "listdir", slow_listdir)
    with pytest.raises(DirectoryAccessError) as excinfo:
        asyncio.run(collect_files(tmp_path, timeout=0.01))
    assert excinfo.value.reason == "Zeitüberschreitung"


def _source(name: str, modified_at: float) -> SourceFile:
    return SourceFile(name=name, path=Path(name), modified_at=modified_at, kind=kind_for(name))


def test_sort_chronologically_ascending() -> None:
    files = [_source("c.pdf", 30), _source("a.png", 10), _source("b.pdf", 20)]
    assert [f.name for f in sort_chronologically(files)] == ["a.png", "b.pdf", "c.pdf"]


def test_sort_chronologically_keeps_listing_order_on_ties() -> None:
    files = [_source("z.pdf", 10), _source("m.png", 5), _source("a.pdf", 10), _source("k.jpg", 10)]
    assert [f.name for f in sort_chronologically(files)] == ["m.png", "z.pdf", "a.pdf", "k.jpg"]


def test_collected_files_sort_by_mtime(tmp_path: Path) -> None:
    set_mtime(make_pdf(tmp_path / "first.pdf"), 100)
    set_mtime(make_image(tmp_path / "second.png"), 200)
    set_mtime(make_pdf(tmp_path / "third.pdf"), 300)
    result = asyncio.run(collect_files(tmp_path))
    assert [f.name for f in sort_chronologically(result.files)] == ["first.pdf", "second.png", "third.pdf"]
