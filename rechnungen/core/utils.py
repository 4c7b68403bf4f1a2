import json
import logging
from pathlib import Path
from typing import Optional, Dict, Any, Union
from datetime import datetime

from .config import DEFAULT_SETTINGS, SETTINGS_FILE

CONSOLE_FORMAT = '%(levelname)s: %(message)s'
FILE_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def setup_logger(
    name: str,
    log_dir: Optional[Union[str, Path]] = None,
    verbose: bool = False,
) -> logging.Logger:
    """Konfiguriert einen Logger mit Konsolen- und optionaler Dateiausgabe."""
    logger = logging.getLogger(name)
    logger.setLevel(logging.DEBUG)

    # Bei wiederholtem Aufruf keine doppelten Handler
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    # Konsole
    console_handler = logging.StreamHandler()
    console_handler.setLevel(logging.DEBUG if verbose else logging.INFO)
    console_handler.setFormatter(logging.Formatter(CONSOLE_FORMAT))
    logger.addHandler(console_handler)

    # Log-Datei
    if log_dir:
        log_dir = Path(log_dir)
        log_dir.mkdir(parents=True, exist_ok=True)
        log_file = log_dir / f"{datetime.now().strftime('%Y%m%d')}.log"
        file_handler = logging.FileHandler(log_file, encoding='utf-8')
        file_handler.setFormatter(logging.Formatter(FILE_FORMAT, datefmt='%Y-%m-%d %H:%M:%S'))
        logger.addHandler(file_handler)

    return logger


# Einstellungen
def load_settings(settings_file: Optional[Union[str, Path]] = None) -> Dict[str, Any]:
    """Lädt die Einstellungen aus der settings.json, ergänzt um Standardwerte."""
    settings = dict(DEFAULT_SETTINGS)
    settings_file = Path(settings_file) if settings_file else SETTINGS_FILE
    if settings_file.exists():
        try:
            with open(settings_file, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            logging.getLogger(__name__).warning("Einstellungen %s ignoriert: %s", settings_file, e)
            return settings
        if isinstance(data, dict):
            settings.update({k: v for k, v in data.items() if v is not None})
    return settings
