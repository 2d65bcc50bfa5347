"""Process-wide logging setup."""

from __future__ import annotations

import logging
from pathlib import Path

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"


def configure_logging(level: str = "INFO", logfile_path: Path | None = None) -> None:
    """Attach a stream handler and, optionally, a file handler to the root logger."""

    handlers: list[logging.Handler] = [logging.StreamHandler()]
    if logfile_path is not None:
        try:
            logfile_path.parent.mkdir(parents=True, exist_ok=True)
            handlers.append(logging.FileHandler(logfile_path, encoding="utf-8"))
        except OSError as exc:
            logging.getLogger(__name__).error(
                "failed to open log file %s: %s", logfile_path, exc
            )
    logging.basicConfig(level=level.upper(), format=LOG_FORMAT, handlers=handlers, force=True)
