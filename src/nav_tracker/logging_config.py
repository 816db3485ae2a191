"""Logging configuration for the NAV tracker.

Console shows INFO+ with concise timestamps. When a log directory is
given, a file handler additionally captures DEBUG+ with full timestamps
and logger names.
"""

import logging
from datetime import datetime
from pathlib import Path


def setup_logging(
    log_dir: str | None = None, console_level: int = logging.INFO
) -> Path | None:
    """Configure logging with a console handler and an optional file handler.

    Existing handlers on the root logger are cleared first so that calling
    this function multiple times (e.g. in tests) does not produce duplicate
    output.

    Args:
        log_dir: Directory for a timestamped run log. ``None`` disables
            file logging (nothing is written to disk).
        console_level: Minimum level for console output.

    Returns:
        Path to the newly created log file, or ``None`` without ``log_dir``.
    """
    root = logging.getLogger()
    root.setLevel(logging.DEBUG)
    root.handlers.clear()

    console = logging.StreamHandler()
    console.setLevel(console_level)
    console.setFormatter(
        logging.Formatter(
            "%(asctime)s %(levelname)-5s %(message)s",
            datefmt="%H:%M:%S",
        )
    )
    root.addHandler(console)

    log_file = None
    if log_dir is not None:
        path = Path(log_dir)
        path.mkdir(parents=True, exist_ok=True)
        timestamp = datetime.now().strftime("%Y-%m-%d-%H%M%S")
        log_file = path / f"run-{timestamp}.log"

        file_handler = logging.FileHandler(str(log_file), encoding="utf-8")
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(
            logging.Formatter("%(asctime)s %(levelname)-5s [%(name)s] %(message)s")
        )
        root.addHandler(file_handler)

    # Suppress noisy third-party loggers.
    logging.getLogger("aiohttp").setLevel(logging.WARNING)
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)

    return log_file
