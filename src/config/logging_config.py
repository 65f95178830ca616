# src/config/logging_config.py

"""Per-run timestamped logging configuration for buyback_tracker.

Each crawl creates two files inside ``logs/`` named with the launch
timestamp: ``run_<ts>.log`` receives every record from the
``buyback_tracker.*`` loggers, ``errors_<ts>.log`` only ERROR and above.
Console echo is a separate handler switched on or off by
``Settings.LOG_TO_CONSOLE`` without touching the files.
"""

import logging
import sys
from datetime import datetime
from pathlib import Path

from src.config.settings import Settings

# Reusable format strings --------------------------------------------------

_DETAILED_FORMAT = (
    "%(asctime)s | %(levelname)-8s | %(name)s | %(module)s:%(funcName)s:%(lineno)d | "
    "%(message)s"
)

_CONSOLE_FORMAT = "%(asctime)s | %(levelname)-8s | %(message)s"

_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def setup_logging(console: bool | None = None) -> Path:
    """Initialise the root ``buyback_tracker`` logger for the current run.

    Args:
        console: Override for ``Settings.LOG_TO_CONSOLE``.

    Returns:
        The :class:`~pathlib.Path` to the operational log file for this run.
    """
    logs_dir: Path = Settings.LOGS_DIR
    logs_dir.mkdir(parents=True, exist_ok=True)

    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    log_file = logs_dir / f"run_{timestamp}.log"
    error_file = logs_dir / f"errors_{timestamp}.log"

    # --- Root project logger -----------------------------------------------
    root_logger = logging.getLogger("buyback_tracker")
    root_logger.setLevel(logging.DEBUG)

    # Prevent duplicate handlers on repeated calls (e.g. tests)
    if root_logger.handlers:
        return log_file

    detailed = logging.Formatter(_DETAILED_FORMAT, datefmt=_DATE_FORMAT)

    # --- Operational log (DEBUG+) ------------------------------------------
    file_handler = logging.FileHandler(log_file, encoding="utf-8")
    file_handler.setLevel(logging.DEBUG)
    file_handler.setFormatter(detailed)
    root_logger.addHandler(file_handler)

    # --- Error log (ERROR+) ------------------------------------------------
    error_handler = logging.FileHandler(error_file, encoding="utf-8")
    error_handler.setLevel(logging.ERROR)
    error_handler.setFormatter(detailed)
    root_logger.addHandler(error_handler)

    # --- Console echo (INFO+) ----------------------------------------------
    echo = Settings.LOG_TO_CONSOLE if console is None else console
    if echo:
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setLevel(logging.INFO)
        console_handler.setFormatter(
            logging.Formatter(_CONSOLE_FORMAT, datefmt=_DATE_FORMAT)
        )
        root_logger.addHandler(console_handler)

    root_logger.info(
        "Logging initialised (log file: %s, error log: %s)",
        log_file,
        error_file,
    )

    return log_file
