import asyncio
import logging
import os
from pathlib import Path
from typing import Callable, List, Mapping, Optional, Union

from rechnungen.core.config import CATEGORIES
from rechnungen.core.errors import (
    CategoryAccessError,
    CompositionError,
    DirectoryAccessError,
    FatalPreconditionError,
    FinalizationError,
)
from rechnungen.core.models import CategoryResult, CompositionJob
from rechnungen.core.paths import output_path, resolve_dir
from rechnungen.core.pdf_utils import compose_pdf
from rechnungen.logic.collector import collect_files, sort_chronologically

logger = logging.getLogger(__name__)

StatusCallback = Callable[[str], None]


def _accessible_dir(path: Union[str, Path]) -> bool:
    return os.path.isdir(path) and os.access(path, os.R_OK | os.X_OK)


def check_root(root: Union[str, Path]) -> Path:
    if not _accessible_dir(root):
        raise FatalPreconditionError(f"Kein Zugriff auf {root}. Existiert der Ordner?")
    return Path(root)


def check_preconditions(root: Union[str, Path], month: str) -> Path:
    """Prüft Wurzel- und Monatsordner, bevor irgendeine Kategorie startet."""
    check_root(root)
    month_dir = resolve_dir(root, month)
    if not _accessible_dir(month_dir):
        raise FatalPreconditionError(f"Kein Zugriff auf {month}. Existiert der Ordner?")
    return month_dir


async def build_job(
    root: Union[str, Path],
    month: str,
    category: str,
    user_name: Optional[str] = None,
    timeout: Optional[float] = None,
) -> CompositionJob:
    """Ermittelt, liest und sortiert die Dateien einer Kategorie.

    Raises:
        CategoryAccessError: Kategorie-Ordner fehlt oder ist nicht lesbar
    """
    category_dir = resolve_dir(root, month, category)
    try:
        collected = await collect_files(category_dir, timeout=timeout)
    except DirectoryAccessError as e:
        raise CategoryAccessError(e.path, e.reason) from e

    for err in collected.errors:
        logger.warning("⚠️ %s/%s: %s wird übersprungen", month, category, err)

    return CompositionJob(
        root_dir=Path(root),
        month=month,
        category=category,
        output_path=output_path(root, month, category, user_name),
        ordered_files=tuple(sort_chronologically(collected.files)),
        skipped=tuple(err.path.name for err in collected.errors),
    )


async def run_category(
    root: Union[str, Path],
    month: str,
    category: str,
    user_name: Optional[str] = None,
    timeout: Optional[float] = None,
    status: Optional[StatusCallback] = None,
) -> CategoryResult:
    """Erstellt die Sammel-PDF einer Kategorie und meldet das Ergebnis.

    Fehler werden gemeldet und im Ergebnis vermerkt, nicht weitergereicht.
    """
    status = status or logger.info
    result = CategoryResult(category=category)
    try:
        job = await build_job(root, month, category, user_name=user_name, timeout=timeout)
        result.output_path = job.output_path
        result.skipped = list(job.skipped)
        if not job.ordered_files:
            status(f"ℹ️ {month}/{category}: keine Rechnungen gefunden.")
        result.pages = await asyncio.to_thread(compose_pdf, job.ordered_files, job.output_path)
        result.page_sources = len(job.ordered_files)
    except CategoryAccessError as e:
        result.error = f"Kein Zugriff auf {month}/{category}. Existiert der Ordner? ({e.reason})"
    except CompositionError as e:
        result.error = f"{month}/{category}: Datei konnte nicht übernommen werden: {e}"
    except FinalizationError as e:
        result.error = f"{month}/{category}: {e}"
    except Exception as e:
        logger.debug("Unerwarteter Fehler in %s/%s", month, category, exc_info=True)
        result.error = f"{month}/{category}: Ein unerwarteter Fehler ist aufgetreten: {e}"

    if result.error:
        logger.error("❌ %s", result.error)
        return result

    result.ok = True
    status(f"✅ Erstellt: {result.output_path}")
    return result


async def run_month(
    root: Union[str, Path],
    month: str,
    user_name: Optional[str] = None,
    categories: Mapping[str, str] = CATEGORIES,
    timeout: Optional[float] = None,
    status: Optional[StatusCallback] = None,
) -> List[CategoryResult]:
    """Startet alle Kategorien gleichzeitig und wartet auf jede einzelne."""
    jobs = [
        run_category(root, month, category, user_name=user_name, timeout=timeout, status=status)
        for category in categories
    ]
    return list(await asyncio.gather(*jobs))
