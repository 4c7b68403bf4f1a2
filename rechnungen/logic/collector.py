import asyncio
import logging
import os
import re
import stat
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, List, Optional, Union

from rechnungen.core.errors import DirectoryAccessError, FileStatError
from rechnungen.core.models import FileKind, SourceFile

logger = logging.getLogger(__name__)

# Groß-/Kleinschreibung wird beachtet: "scan.PDF" wird nicht übernommen
_supported_re = re.compile(r"\.(pdf|jpe?g|png)$")


@dataclass
class CollectionResult:
    files: List[SourceFile] = field(default_factory=list)
    errors: List[FileStatError] = field(default_factory=list)


def is_supported(name: str) -> bool:
    return bool(_supported_re.search(name))


def kind_for(name: str) -> FileKind:
    return FileKind.PDF if name.endswith(".pdf") else FileKind.IMAGE


async def _run_io(func, *args, timeout: Optional[float] = None):
    """Blocking file system call in a worker thread, optionally bounded."""
    return await asyncio.wait_for(asyncio.to_thread(func, *args), timeout=timeout)


async def _stat_entry(path: Path, timeout: Optional[float]) -> os.stat_result:
    try:
        st = await _run_io(os.stat, path, timeout=timeout)
    except asyncio.TimeoutError as e:
        raise FileStatError(path, "Zeitüberschreitung") from e
    except OSError as e:
        raise FileStatError(path, e.strerror or str(e)) from e
    if not stat.S_ISREG(st.st_mode):
        raise FileStatError(path, "keine reguläre Datei")
    return st


async def collect_files(
    category_dir: Union[str, Path],
    timeout: Optional[float] = None,
) -> CollectionResult:
    """Liest alle unterstützten Dateien eines Kategorie-Ordners samt Änderungszeit.

    Die Reihenfolge entspricht der Verzeichnisauflistung. Dateien, deren
    Änderungszeit nicht gelesen werden kann, landen in ``errors`` statt in
    ``files``.

    Raises:
        DirectoryAccessError: Ordner fehlt, ist kein Ordner oder ist nicht lesbar
    """
    category_dir = Path(category_dir)
    try:
        names = await _run_io(os.listdir, category_dir, timeout=timeout)
    except asyncio.TimeoutError as e:
        raise DirectoryAccessError(category_dir, "Zeitüberschreitung") from e
    except OSError as e:
        raise DirectoryAccessError(category_dir, e.strerror or str(e)) from e

    names = [name for name in names if is_supported(name)]
    paths = [category_dir / name for name in names]

    stats = await asyncio.gather(
        *(_stat_entry(path, timeout) for path in paths),
        return_exceptions=True,
    )

    result = CollectionResult()
    for name, path, st in zip(names, paths, stats):
        if isinstance(st, FileStatError):
            result.errors.append(st)
            continue
        if isinstance(st, BaseException):
            raise st
        result.files.append(SourceFile(name=name, path=path, modified_at=st.st_mtime, kind=kind_for(name)))

    logger.debug("%d Dateien in %s gefunden", len(result.files), category_dir)
    return result


def sort_chronologically(files: Iterable[SourceFile]) -> List[SourceFile]:
    """Aufsteigend nach Änderungszeit; bei Gleichstand bleibt die Auflistungsreihenfolge."""
    return sorted(files, key=lambda f: f.modified_at)
