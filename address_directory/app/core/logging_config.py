"""
Logging setup driven by ``Settings``.

``setup_logging`` attaches a console handler, plus a file handler when
``settings.log_file`` is set, to the root logger (or to ``target``).
``settings.debug`` forces ``DEBUG`` regardless of ``log_level``.

Handlers added here are tagged by name, so repeated calls (one per
``create_app``) neither stack duplicates nor get confused by handlers
other tools attached, such as pytest's capture handler.
"""

import logging
from pathlib import Path
from typing import Optional

from .config import Settings

HANDLER_PREFIX = "address_directory"
LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def resolve_level(app_settings: Settings) -> int:
    """Numeric level for ``app_settings``; unknown names fall back to INFO."""
    if app_settings.debug:
        return logging.DEBUG
    level = logging.getLevelName(app_settings.log_level.upper())
    return level if isinstance(level, int) else logging.INFO


def setup_logging(app_settings: Settings, target: Optional[logging.Logger] = None) -> logging.Logger:
    logger = target or logging.getLogger()
    logger.setLevel(resolve_level(app_settings))

    owned = {h.get_name() for h in logger.handlers if (h.get_name() or "").startswith(HANDLER_PREFIX)}
    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S")

    if f"{HANDLER_PREFIX}.console" not in owned:
        console_handler = logging.StreamHandler()
        console_handler.set_name(f"{HANDLER_PREFIX}.console")
        console_handler.setFormatter(formatter)
        logger.addHandler(console_handler)

    if app_settings.log_file:
        log_path = Path(app_settings.log_file).resolve()
        name = f"{HANDLER_PREFIX}.file:{log_path}"
        if name not in owned:
            file_handler = logging.FileHandler(log_path, encoding="utf-8")
            file_handler.set_name(name)
            file_handler.setFormatter(formatter)
            logger.addHandler(file_handler)
    return logger
