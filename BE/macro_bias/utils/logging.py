# BE/macro_bias/utils/logging.py
"""
Logger factory for macro_bias.

As a library, macro_bias leaves handlers to the host application: by default
`get_logger` only attaches a `NullHandler` and records propagate to whatever
the host configured. Output is opt-in:
- console: pass console=True or set MACRO_BIAS_LOG_CONSOLE=1
- file: pass file_path or set MACRO_BIAS_LOG_FILE
- level: pass level or set MACRO_BIAS_LOG_LEVEL (otherwise inherited)
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Optional

_CONSOLE_FMT = "[%(levelname).1s] %(message)s"
_VERBOSE_FMT = "[%(levelname).1s] %(name)s: %(message)s"
_FILE_FMT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def _env_flag(name: str) -> bool:
    return os.getenv(name, "").strip().lower() in {"1", "true", "yes"}


def _env_level() -> Optional[int]:
    raw = os.getenv("MACRO_BIAS_LOG_LEVEL", "").strip().upper()
    if not raw:
        return None
    lvl = logging.getLevelName(raw)
    return lvl if isinstance(lvl, int) else None


def get_logger(
    name: str = "macro_bias",
    *,
    level: Optional[int] = None,
    console: Optional[bool] = None,
    file_path: Optional[str | Path] = None,
) -> logging.Logger:
    """
    Create/reuse a namespaced logger. Idempotent: the first call configures
    it, later calls return it unchanged.
    """
    logger = logging.getLogger(name)
    if getattr(logger, "_macro_bias_configured", False):
        return logger

    lvl = level if level is not None else _env_level()
    if lvl is not None:
        logger.setLevel(lvl)

    if console if console is not None else _env_flag("MACRO_BIAS_LOG_CONSOLE"):
        ch = logging.StreamHandler()
        ch.setFormatter(logging.Formatter(_VERBOSE_FMT if _env_flag("MACRO_BIAS_LOG_VERBOSE") else _CONSOLE_FMT))
        logger.addHandler(ch)

    path = file_path or os.getenv("MACRO_BIAS_LOG_FILE")
    if path:
        p = Path(path)
        p.parent.mkdir(parents=True, exist_ok=True)
        fh = logging.FileHandler(p, encoding="utf-8")
        fh.setFormatter(logging.Formatter(_FILE_FMT))
        logger.addHandler(fh)

    if not logger.handlers:
        logger.addHandler(logging.NullHandler())

    logger._macro_bias_configured = True  # type: ignore[attr-defined]
    return logger
