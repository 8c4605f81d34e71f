from __future__ import annotations
from pathlib import Path

APP_NAME = "mdnotes"
APP_DIR = Path.home() / f".{APP_NAME}"
LOG_DIR = APP_DIR / "logs"
LOG_PATH = LOG_DIR / f"{APP_NAME}.log"
RECOVERY_DIR = APP_DIR / "recovery"
DEFAULT_STORE_DIR = APP_DIR / "notes"

LOG_MAX_BYTES = 2 * 1024 * 1024
LOG_BACKUP_COUNT = 5
