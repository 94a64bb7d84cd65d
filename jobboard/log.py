"""Logging setup for the job board client.

Everything logs through ``get_logger(__name__)``. The first call installs a
stdout handler and, unless ``JOBBOARD_LOG_FILE=0``, a daily file under
``logs/`` (or ``JOBBOARD_LOG_DIR``). Hosts that already configured the root
logger keep their handlers.
"""
from __future__ import annotations

import logging
import os
import sys
from datetime import date
from pathlib import Path

_LOG_DIR = Path(os.environ.get("JOBBOARD_LOG_DIR") or Path(__file__).resolve().parent.parent / "logs")
_FORMAT = "%(asctime)s  %(levelname)-8s  %(name)s  %(message)s"
_DATE_FMT = "%Y-%m-%d %H:%M:%S"
# chatty at DEBUG, one line per HTTP connection
_QUIET = ("urllib3", "requests")

_configured = False


def get_logger(name: str) -> logging.Logger:
    global _configured
    if not _configured:
        _configure(os.environ.get("LOG_LEVEL", "INFO"))
        _configured = True
    return logging.getLogger(name)


def _file_handler(formatter: logging.Formatter) -> logging.Handler | None:
    if os.environ.get("JOBBOARD_LOG_FILE", "1") == "0":
        return None
    try:
        _LOG_DIR.mkdir(parents=True, exist_ok=True)
        handler = logging.FileHandler(_LOG_DIR / f"jobboard_{date.today():%Y-%m-%d}.log", encoding="utf-8")
    except OSError as exc:
        sys.stderr.write(f"jobboard: file logging disabled ({exc})\n")
        return None
    handler.setLevel(logging.DEBUG)
    handler.setFormatter(formatter)
    return handler


def _configure(level_name: str) -> None:
    level = getattr(logging, level_name.upper(), logging.INFO)
    root = logging.getLogger()
    root.setLevel(level)
    for name in _QUIET:
        logging.getLogger(name).setLevel(max(level, logging.WARNING))

    # streamlit and pytest install their own handlers
    if root.handlers:
        return

    formatter = logging.Formatter(_FORMAT, datefmt=_DATE_FMT)
    console = logging.StreamHandler(sys.stdout)
    console.setLevel(level)
    console.setFormatter(formatter)
    root.addHandler(console)

    handler = _file_handler(formatter)
    if handler is not None:
        root.addHandler(handler)
