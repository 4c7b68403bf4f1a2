"""Fehlerklassen für den Rechnungs-Zusammenführer.

Nur ``FatalPreconditionError`` beendet den Lauf. Alle anderen Fehler betreffen
eine einzelne Kategorie oder eine einzelne Datei und werden gemeldet, ohne den
Rest des Laufs abzubrechen.
"""

from pathlib import Path
from typing import Optional, Union


class RechnungenError(Exception):
    """Basisklasse aller Fehler des Tools."""


class FatalPreconditionError(RechnungenError):
    """Wurzel- oder Monatsordner fehlt bzw. ist nicht lesbar."""


class DirectoryAccessError(RechnungenError):
    """Ein Ordner existiert nicht oder kann nicht gelesen werden."""

    def __init__(self, path: Union[str, Path], reason: Optional[str] = None):
        self.path = Path(path)
        self.reason = reason
        msg = f"Kein Zugriff auf {self.path}"
        if reason:
            msg = f"{msg} ({reason})"
        super().__init__(msg)


class CategoryAccessError(DirectoryAccessError):
    """Der Kategorie-Ordner (incoming/outgoing) fehlt oder ist nicht lesbar."""


class FileStatError(RechnungenError):
    """Änderungszeit einer einzelnen Datei konnte nicht gelesen werden."""

    def __init__(self, path: Union[str, Path], reason: Optional[str] = None):
        self.path = Path(path)
        self.reason = reason
        msg = f"Konnte {self.path.name} nicht lesen"
        if reason:
            msg = f"{msg} ({reason})"
        super().__init__(msg)


class CompositionError(RechnungenError):
    """Eine Quelldatei konnte nicht in das Ausgabedokument übernommen werden."""


class FinalizationError(RechnungenError):
    """Das Ausgabedokument konnte nicht geschrieben werden."""
