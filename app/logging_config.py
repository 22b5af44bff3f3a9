import logging
import os
from logging.handlers import RotatingFileHandler
from pathlib import Path

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
LOG_DATEFMT = "%Y-%m-%d %H:%M:%S"

# requests/urllib3 are chatty at DEBUG about every connection
NOISY_LOGGERS = ("urllib3", "httpx")


def setup_logging(log_file: str = "app.log", log_dir: Path | str | None = None):
    """
    Configure the root logger once per process.

    - Console + rotating file (logs/<log_file>, 5MB x 5)
    - Level comes from LOG_LEVEL, directory from LOG_DIR
    - The proxy writes app.log, the schedule client CLI writes client.log
    """
    level = os.getenv("LOG_LEVEL", "INFO").upper()

    root = logging.getLogger()
    root.setLevel(level)

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    # Prevent duplicate handlers (uvicorn --reload, repeated CLI calls in tests)
    if root.handlers:
        return

    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=LOG_DATEFMT)

    console = logging.StreamHandler()
    console.setLevel(level)
    console.setFormatter(formatter)
    root.addHandler(console)

    target_dir = Path(log_dir or os.getenv("LOG_DIR", "logs"))
    target_dir.mkdir(parents=True, exist_ok=True)
    file_handler = RotatingFileHandler(
        target_dir / log_file,
        maxBytes=5 * 1024 * 1024,
        backupCount=5,
        encoding="utf-8",
    )
    file_handler.setLevel(level)
    file_handler.setFormatter(formatter)
    root.addHandler(file_handler)
