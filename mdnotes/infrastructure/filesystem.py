# mdnotes/infrastructure/filesystem.py

from __future__ import annotations

import os
import uuid
from datetime import datetime
from pathlib import Path

from mdnotes.core.filenames import NOTE_SUFFIX, safe_filename
from mdnotes.settings import RECOVERY_DIR


def atomic_write_text(
    path: Path,
    text: str,
    *,
    encoding: str = "utf-8",
) -> None:
    """
    Atomic-ish file write:
    - write to a hidden temp file in the same directory
    - fsync
    - replace()

    Readers never observe a half-written note. The temp file never ends in
    .md, so it does not show up in a store listing.
    """
    path = Path(path)
    tmp_path = path.parent / f".{path.name}.tmp-{uuid.uuid4().hex}"

    try:
        with open(tmp_path, "w", encoding=encoding, newline="") as f:
            f.write(text)
            f.flush()
            os.fsync(f.fileno())
        tmp_path.replace(path)
    finally:
        if tmp_path.exists():
            tmp_path.unlink()


def write_recovery_copy(note_path: Path, text: str, *, recovery_dir: Path = RECOVERY_DIR) -> Path:
    """
    Best-effort emergency save when a normal save fails.

    Writes a timestamped copy into recovery_dir:
      <stem>.recovery.<YYYYmmdd-HHMMSS>.md
    """
    note_path = Path(note_path)
    recovery_dir = Path(recovery_dir)
    recovery_dir.mkdir(parents=True, exist_ok=True)

    stem = safe_filename(note_path.stem) if note_path.stem else "Untitled"
    ts = datetime.now().strftime("%Y%m%d-%H%M%S")

    recovery_path = recovery_dir / f"{stem}.recovery.{ts}{NOTE_SUFFIX}"
    atomic_write_text(recovery_path, text, encoding="utf-8")
    return recovery_path
