"""Pfade der Monats- und Kategorie-Ordner sowie der Ausgabedateien."""

import os
from pathlib import Path
from typing import Optional, Union

from .config import CATEGORIES, FILE_PREFIX, MONTHS, OUTPUT_EXTENSION


def _check_keys(month: str, category: Optional[str] = None) -> None:
    if month not in MONTHS:
        raise ValueError(f"Unbekannter Monat: {month!r}")
    if category is not None and category not in CATEGORIES:
        raise ValueError(f"Unbekannte Kategorie: {category!r}")


def resolve_dir(root: Union[str, Path], month: str, category: Optional[str] = None) -> Path:
    """ROOT/<month>[/<category>] als absoluter Pfad, ohne Dateisystemzugriff."""
    _check_keys(month, category)
    parts = [os.fspath(root), month]
    if category is not None:
        parts.append(category)
    return Path(os.path.abspath(os.path.join(*parts)))


def output_filename(
    category: str,
    month: str,
    user_name: Optional[str] = None,
    ext: str = OUTPUT_EXTENSION,
) -> str:
    """Dateiname nach dem Muster ``rechnungen_<kategorie>[_<name>]_<monat>.pdf``."""
    _check_keys(month, category)
    segments = [FILE_PREFIX, CATEGORIES[category]]
    if user_name:
        segments.append(user_name)
    segments.append(MONTHS[month])
    return f"{'_'.join(segments)}.{ext}"


def output_path(
    root: Union[str, Path],
    month: str,
    category: str,
    user_name: Optional[str] = None,
) -> Path:
    return resolve_dir(root, month) / output_filename(category, month, user_name)
