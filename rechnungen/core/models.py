from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import List, Optional, Tuple


class FileKind(str, Enum):
    PDF = "pdf"
    IMAGE = "image"


@dataclass(frozen=True)
class SourceFile:
    """Eine Rechnungsdatei aus einem Kategorie-Ordner."""

    name: str
    path: Path
    modified_at: float
    kind: FileKind


@dataclass(frozen=True)
class CompositionJob:
    """Arbeitseinheit für genau ein Ausgabedokument."""

    root_dir: Path
    month: str
    category: str
    output_path: Path
    ordered_files: Tuple[SourceFile, ...] = ()
    # Dateien, die beim Einlesen verworfen wurden (Stat-Fehler)
    skipped: Tuple[str, ...] = ()


@dataclass
class CategoryResult:
    category: str
    output_path: Optional[Path] = None
    ok: bool = False
    error: Optional[str] = None
    page_sources: int = 0
    pages: int = 0
    skipped: List[str] = field(default_factory=list)
