from __future__ import annotations

import os
from pathlib import Path
from typing import Sequence

import pytest
from PIL import Image
from pypdf import PdfWriter
from pypdf.generic import NameObject, NumberObject

from rechnungen.core.config import DEFAULT_SETTINGS


def make_pdf(path: Path, widths: Sequence[int] = (200,), height: int = 300) -> Path:
    """Writes a blank PDF with one page per entry in ``widths``."""
    writer = PdfWriter()
    for width in widths:
        writer.add_blank_page(width=width, height=height)
    with open(path, "wb") as f:
        writer.write(f)
    writer.close()
    return path


def make_image(path: Path, size=(40, 80), mode: str = "RGB", color=None) -> Path:
    if color is None:
        color = (255, 0, 0, 128) if mode == "RGBA" else (0, 128, 255)
    Image.new(mode, size, color).save(path)
    return path


def set_mtime(path: Path, timestamp: float) -> Path:
    os.utime(path, (timestamp, timestamp))
    return path


@pytest.fixture(autouse=True)
def _no_user_settings(monkeypatch):
    monkeypatch.setattr("rechnungen.cli.load_settings", lambda: dict(DEFAULT_SETTINGS))


@pytest.fixture
def month_tree(tmp_path: Path) -> Path:
    """ROOT/march/{incoming,outgoing} with a few invoices each."""
    root = tmp_path / "invoices"
    incoming = root / "march" / "incoming"
    outgoing = root / "march" / "outgoing"
    incoming.mkdir(parents=True)
    outgoing.mkdir(parents=True)

    set_mtime(make_image(incoming / "a.png"), 1_000)
    set_mtime(make_pdf(incoming / "b.pdf", widths=(210, 220)), 2_000)
    set_mtime(make_pdf(outgoing / "c.pdf", widths=(310,)), 3_000)
    set_mtime(make_image(outgoing / "d.jpg"), 1_500)
    (outgoing / "notes.txt").write_text("nicht übernehmen", encoding="utf-8")
    return root


def make_broken_acroform_pdf(path: Path) -> Path:
    """PDF whose catalog carries ``/AcroForm 5`` instead of a dictionary."""
    writer = PdfWriter()
    writer.add_blank_page(width=200, height=300)
    writer._root_object[NameObject("/AcroForm")] = NumberObject(5)
    with open(path, "wb") as f:
        writer.write(f)
    writer.close()
    return path
