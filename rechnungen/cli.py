"""
Kommandozeile für den Rechnungs-Zusammenführer

Erwartet eine Ordnerstruktur wie ROOT_DIR/<monat>/<kategorie>/*.(pdf|jpe?g|png),
z.B. ~/rechnungen/march/incoming/rechnung-1.pdf
"""

from __future__ import annotations

import argparse
import asyncio
import logging
from typing import Callable, List, Optional

from rechnungen.core import config
from rechnungen.core.errors import FatalPreconditionError
from rechnungen.core.utils import load_settings, setup_logger
from rechnungen.logic.merger import check_preconditions, check_root, run_month

logger = logging.getLogger("rechnungen")

MONTH_KEYS = list(config.MONTHS)


def positive_seconds(value: str) -> float:
    seconds = config.positive_float(value)
    if seconds is None:
        raise argparse.ArgumentTypeError(f"positive Zahl erwartet, nicht {value!r}")
    return seconds


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog=config.APP_NAME,
        description="Fügt die Rechnungen eines Monats zu je einer PDF für eingehende und ausgehende Rechnungen zusammen.",
    )
    parser.add_argument("root_dir", nargs="?", help="Wurzelordner mit den Monatsordnern")
    parser.add_argument("--name", help="Name, der in die Ausgabedateinamen eingefügt wird")
    parser.add_argument("--month", help="Monat ohne Rückfrage wählen (z.B. march, märz oder 3)")
    parser.add_argument("--timeout", type=positive_seconds, default=config.FS_TIMEOUT,
                        help="Zeitlimit in Sekunden für Dateisystemzugriffe")
    parser.add_argument("--log-dir", help="Ordner für Log-Dateien")
    parser.add_argument("-v", "--verbose", action="store_true", help="Ausführliche Ausgabe")
    parser.add_argument("--version", action="version", version=f"{config.APP_NAME} {config.APP_VERSION}")
    return parser


def parse_month(value: str) -> Optional[str]:
    """Monatsschlüssel aus Nummer (1-12), englischem Schlüssel oder deutschem Label."""
    value = (value or "").strip().lower()
    if not value:
        return None
    if value.isdecimal():
        idx = int(value)
        return MONTH_KEYS[idx - 1] if 1 <= idx <= len(MONTH_KEYS) else None
    if value in config.MONTHS:
        return value
    for key, label in config.MONTHS.items():
        if label == value:
            return key
    return None


def prompt_month(input_func: Callable[[str], str] = input) -> Optional[str]:
    """Fragt den Monat interaktiv ab. None bei Abbruch (Strg+C/Strg+D)."""
    for i, key in enumerate(MONTH_KEYS, start=1):
        print(f"{i:2d}) {key} ({config.MONTHS[key]})")
    while True:
        try:
            answer = input_func("Welcher Monat? ")
        except (EOFError, KeyboardInterrupt):
            return None
        month = parse_month(answer)
        if month:
            return month
        print(f"Unbekannter Monat: {answer!r}")


def main(argv: Optional[List[str]] = None, input_func: Callable[[str], str] = input) -> int:
    args = build_parser().parse_args(argv)
    settings = load_settings()
    setup_logger("rechnungen", log_dir=args.log_dir or settings.get("log_dir"), verbose=args.verbose)

    if not args.root_dir:
        logger.error("Bitte einen Wurzelordner angeben.")
        return 1

    # Wurzelordner vor der Monatsauswahl prüfen
    try:
        check_root(args.root_dir)
    except FatalPreconditionError as e:
        logger.error("%s", e)
        return 1

    if args.month:
        month = parse_month(args.month)
        if month is None:
            logger.error("Unbekannter Monat: %s", args.month)
            return 1
    else:
        month = prompt_month(input_func)
        if month is None:
            logger.error("Kein Monat gewählt.")
            return 1

    try:
        check_preconditions(args.root_dir, month)
    except FatalPreconditionError as e:
        logger.error("%s", e)
        return 1

    user_name = args.name or settings.get("name")
    asyncio.run(run_month(args.root_dir, month, user_name=user_name, timeout=args.timeout))
    return 0
