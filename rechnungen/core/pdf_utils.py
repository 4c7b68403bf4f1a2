"""PDF utility functions for the invoice statement builder.

This module assembles source files into one output PDF: PDF sources are
appended page by page, images are rendered onto a single A4 page each.
"""

import logging
import os
import tempfile
from io import BytesIO
from pathlib import Path
from typing import Iterable, Tuple, Union

from PIL import Image
from pypdf import PdfReader, PdfWriter
from reportlab.lib.utils import ImageReader
from reportlab.pdfgen import canvas

from .config import PAGE_HEIGHT, PAGE_WIDTH
from .errors import CompositionError, FinalizationError
from .models import FileKind, SourceFile

logger = logging.getLogger(__name__)


def fit_to_page(
    width: float,
    height: float,
    page_width: float = PAGE_WIDTH,
    page_height: float = PAGE_HEIGHT,
) -> Tuple[float, float]:
    """Skaliert (width, height) proportional in die Seitenbox.

    Es wird immer skaliert, auch wenn das Bild kleiner als die Seite ist.
    """
    if width <= 0 or height <= 0:
        raise ValueError(f"Ungültige Bildgröße: {width}x{height}")
    scale = min(page_width / width, page_height / height)
    return width * scale, height * scale


def _load_rgb(path: Union[str, Path]) -> Image.Image:
    with Image.open(path) as src:
        # Transparenz (falls vorhanden) auf Weiß setzen und in RGB konvertieren
        if src.mode in ("RGBA", "LA", "P"):
            rgba = src.convert("RGBA")
            img = Image.new("RGB", rgba.size, (255, 255, 255))
            img.paste(rgba, mask=rgba.split()[3])
        else:
            img = src.convert("RGB")
    return img


def image_to_pdf_page(path: Union[str, Path]) -> BytesIO:
    """Rendert ein Bild auf eine einzelne A4-Seite, verankert im Seitenursprung."""
    img = _load_rgb(path)
    draw_w, draw_h = fit_to_page(img.width, img.height)

    buf = BytesIO()
    c = canvas.Canvas(buf, pagesize=(PAGE_WIDTH, PAGE_HEIGHT))
    c.drawImage(ImageReader(img), 0, 0, width=draw_w, height=draw_h)
    c.showPage()
    c.save()
    buf.seek(0)
    return buf


def _write_atomic(writer: PdfWriter, output_path: Path) -> None:
    """Schreibt in eine temporäre Datei im Zielordner und ersetzt dann das Ziel."""
    tmp_name = None
    try:
        fd, tmp_name = tempfile.mkstemp(suffix=".tmp", prefix=f".{output_path.name}.", dir=output_path.parent)
        with os.fdopen(fd, "wb") as f_out:
            writer.write(f_out)
        os.replace(tmp_name, output_path)
    except Exception as e:
        if tmp_name and os.path.exists(tmp_name):
            os.remove(tmp_name)
        raise FinalizationError(f"Konnte {output_path} nicht schreiben: {e}") from e


def compose_pdf(files: Iterable[SourceFile], output_path: Union[str, Path]) -> int:
    """Schreibt alle Quelldateien in der gegebenen Reihenfolge in eine PDF.

    Args:
        files: Bereits sortierte Quelldateien
        output_path: Zielpfad, eine vorhandene Datei wird überschrieben

    Returns:
        Anzahl der geschriebenen Seiten

    Raises:
        CompositionError: Eine Quelldatei ist nicht lesbar
        FinalizationError: Die Ausgabedatei konnte nicht geschrieben werden
    """
    writer = PdfWriter()
    try:
        for source in files:
            try:
                if source.kind is FileKind.PDF:
                    writer.append(PdfReader(str(source.path)))
                elif source.kind is FileKind.IMAGE:
                    writer.append(PdfReader(image_to_pdf_page(source.path)))
                else:
                    logger.warning("Nicht unterstützte Datei: %s", source.name)
                    continue
            except Exception as e:
                raise CompositionError(f"{source.name}: {e}") from e
            logger.debug("Übernommen: %s", source.name)

        page_count = len(writer.pages)
        _write_atomic(writer, Path(output_path))
    finally:
        writer.close()

    return page_count
