"""Monatliche Rechnungs-Sammel-PDFs.

Pakete:
- core: Konfiguration, Pfade, Datenmodell und PDF-Erzeugung.
- logic: Einlesen, Sortieren und Zusammenführen je Kategorie.
"""

from rechnungen.core.config import APP_VERSION as __version__
