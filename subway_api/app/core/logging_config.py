"""
Logging setup shared by the API and ``run.py``.

Records go to stderr and, when ``LOG_FILE`` is set, to that file too,
formatted as ``time [LEVEL] logger: message``.  Uvicorn's own loggers
are brought to the same level so server and application lines agree.
"""

import logging
from pathlib import Path
from typing import List, Optional

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
SERVER_LOGGERS = ("uvicorn", "uvicorn.error", "uvicorn.access")


def setup_logging(level: str = "INFO", logfile: Optional[str] = None) -> None:
    """Configure the root logger once per process.

    ``level`` is a level name, case insensitive; unknown names mean
    ``INFO``.  Calling this again, or after something else (uvicorn,
    pytest) installed root handlers, changes nothing.
    """
    if logging.getLogger().handlers:
        return

    numeric_level = logging.getLevelName(level.upper())
    if not isinstance(numeric_level, int):
        numeric_level = logging.INFO

    handlers: List[logging.Handler] = [logging.StreamHandler()]
    if logfile:
        handlers.append(logging.FileHandler(Path(logfile).resolve(), encoding="utf-8"))

    logging.basicConfig(
        level=numeric_level,
        format=LOG_FORMAT,
        datefmt=DATE_FORMAT,
        handlers=handlers,
    )
    for name in SERVER_LOGGERS:
        logging.getLogger(name).setLevel(numeric_level)
