import logging
import os
from pathlib import Path
from types import MappingProxyType

# App-Informationen
APP_NAME = "rechnungen"
APP_VERSION = "1.0.0"


# Pfade
SETTINGS_FILE = Path(
    os.environ.get("RECHNUNGEN_SETTINGS", Path.home() / ".config" / "rechnungen" / "settings.json")
)
LOG_DIR = os.environ.get("RECHNUNGEN_LOG_DIR") or None


# Dateisystem
def positive_float(value):
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    return number if number > 0 else None


FS_TIMEOUT = None
if os.environ.get("RECHNUNGEN_FS_TIMEOUT"):
    FS_TIMEOUT = positive_float(os.environ["RECHNUNGEN_FS_TIMEOUT"])
    if FS_TIMEOUT is None:
        logging.getLogger(__name__).warning(
            "RECHNUNGEN_FS_TIMEOUT=%r ignoriert (positive Zahl erwartet)", os.environ["RECHNUNGEN_FS_TIMEOUT"]
        )

# Ausgabe
FILE_PREFIX = "rechnungen"
OUTPUT_EXTENSION = "pdf"

# Seitengeometrie (A4 bei 72 dpi)
PAGE_WIDTH = 595
PAGE_HEIGHT = 842

PDF_EXTENSIONS = (".pdf",)
IMAGE_EXTENSIONS = (".jpg", ".jpeg", ".png")
VALID_EXTENSIONS = PDF_EXTENSIONS + IMAGE_EXTENSIONS

# Verzeichnisname -> Label im Dateinamen
CATEGORIES = MappingProxyType({
    "incoming": "eingehend",
    "outgoing": "ausgehend",
})

MONTHS = MappingProxyType({
    "january": "januar",
    "february": "februar",
    "march": "märz",
    "april": "april",
    "may": "mai",
    "june": "juni",
    "july": "juli",
    "august": "august",
    "september": "september",
    "october": "oktober",
    "november": "november",
    "december": "dezember",
})

# Standardmäßige Einstellungen
DEFAULT_SETTINGS = {
    "name": None,
    "log_dir": LOG_DIR,
}
