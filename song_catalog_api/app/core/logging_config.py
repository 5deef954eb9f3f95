"""
Logging setup shared by the API server and the command line client.

``setup_logging`` installs a console handler (plus a file handler when
``logfile`` is given) on the root logger.  Handlers installed here are
remembered, so a later call is a no-op unless ``force`` is set, in
which case they are replaced and the new level applied.  Handlers
added by anything else (uvicorn, pytest) are left alone.
"""

import logging
from pathlib import Path
from typing import List, Optional

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

_installed: List[logging.Handler] = []


def _level(name: str) -> int:
    level = logging.getLevelName(name.upper())
    return level if isinstance(level, int) else logging.INFO


def setup_logging(level: str = "INFO", logfile: Optional[str] = None, force: bool = False) -> None:
    """Configure the root logger once.

    Parameters
    ----------
    level : str
        Level name such as ``"DEBUG"``; unknown names mean ``INFO``.
    logfile : Optional[str]
        Also write to this file, resolved against the working directory.
    force : bool
        Replace handlers from a previous call instead of keeping them.
    """
    root = logging.getLogger()
    if _installed and not force:
        return

    for handler in _installed:
        root.removeHandler(handler)
        handler.close()
    _installed.clear()

    root.setLevel(_level(level))
    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT)

    handlers: List[logging.Handler] = [logging.StreamHandler()]
    if logfile:
        handlers.append(logging.FileHandler(Path(logfile).resolve(), encoding="utf-8"))
    for handler in handlers:
        handler.setFormatter(formatter)
        root.addHandler(handler)
        _installed.append(handler)
