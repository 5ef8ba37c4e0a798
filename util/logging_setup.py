from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Optional

LOG_FILE_NAME = "debug.log"
_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


class _PlaintasksOnly(logging.Filter):
    """Keep our loggers; third-party libraries only at ERROR and above."""

    def filter(self, record: logging.LogRecord) -> bool:
        if record.name.startswith("plaintasks"):
            return True
        return record.levelno >= logging.ERROR


def setup_logging(
    log_dir: Optional[Path] = None,
    *,
    console_level: int = logging.WARNING,
    file_level: int = logging.DEBUG,
) -> Optional[Path]:
    """Configure stderr + debug.log handlers. Returns the log file path, if any.

    A log directory that cannot be created only disables the file handler.
    """
    root = logging.getLogger()
    root.setLevel(logging.DEBUG)
    for handler in list(root.handlers):
        root.removeHandler(handler)

    fmt = logging.Formatter(_FORMAT, datefmt="%Y-%m-%d %H:%M:%S")

    console = logging.StreamHandler(sys.stderr)
    console.setLevel(console_level)
    console.setFormatter(fmt)
    console.addFilter(_PlaintasksOnly())
    root.addHandler(console)

    if log_dir is None:
        return None
    log_file = Path(log_dir) / LOG_FILE_NAME
    try:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(str(log_file), encoding="utf-8")
    except OSError as exc:
        logging.getLogger("plaintasks.cli").warning("file logging disabled: %s", exc)
        return None
    file_handler.setLevel(file_level)
    file_handler.setFormatter(fmt)
    root.addHandler(file_handler)
    logging.captureWarnings(True)
    return log_file
