from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path

from mdnotes.core.errors import NoteExistsError, NoteNotFoundError, NoteStoreError
from mdnotes.core.filenames import NOTE_SUFFIX, generate_note_name, normalize_note_name
from mdnotes.infrastructure.filesystem import atomic_write_text

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class Note:
    name: str
    content: str


class NoteStore:
    """
    A flat directory of Markdown notes, one `<name>.md` file per note.

    The directory is the only source of truth: nothing is cached, every
    list() re-reads it. No locking: concurrent writers race and the last
    filesystem operation wins.

    In lenient mode (the default) reading a missing or unreadable note gives
    an empty string. In strict mode the same miss raises NoteNotFoundError /
    NoteStoreError.
    """

    def __init__(self, root: Path, *, strict: bool = False):
        self.root = Path(root)
        self.strict = strict

    def __repr__(self) -> str:
        return f"NoteStore(root={str(self.root)!r}, strict={self.strict})"

    def ensure(self) -> None:
        try:
            self.root.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise NoteStoreError.from_os_error(exc) from exc

    def path_for(self, name: str) -> Path:
        return self.root / normalize_note_name(name)

    def exists(self, name: str) -> bool:
        return self.path_for(name).is_file()

    # ───────────────────────── operations ─────────────────────────

    def list(self) -> list[str]:
        """Names of all notes, in directory enumeration order."""
        try:
            with os.scandir(self.root) as it:
                return [
                    entry.name
                    for entry in it
                    if entry.name.endswith(NOTE_SUFFIX) and entry.is_file()
                ]
        except OSError as exc:
            log.warning("Cannot list notes in %s: %s", self.root, exc)
            raise NoteStoreError.from_os_error(exc) from exc

    def read(self, name: str) -> str:
        path = self.path_for(name)
        try:
            return path.read_text(encoding="utf-8")
        except FileNotFoundError as exc:
            if self.strict:
                raise NoteNotFoundError("Note does not exist", name=path.name) from exc
            log.debug("Read of missing note %s treated as empty", path.name)
            return ""
        except (OSError, UnicodeDecodeError) as exc:
            if self.strict:
                if isinstance(exc, OSError):
                    raise NoteStoreError.from_os_error(exc, name=path.name) from exc
                raise NoteStoreError(f"Note is not valid UTF-8: {exc.reason}", name=path.name) from exc
            log.warning("Unreadable note %s treated as empty: %s", path.name, exc)
            return ""

    def load(self, name: str) -> Note:
        name = normalize_note_name(name)
        return Note(name=name, content=self.read(name))

    def write(self, name: str | None, content: str) -> str:
        """
        Create or overwrite a note. Returns the name actually written.

        With name=None a fresh `<uuid>.md` name is generated.
        """
        if name is None:
            name = generate_note_name()
            while (self.root / name).exists():
                name = generate_note_name()
        else:
            name = normalize_note_name(name)

        path = self.root / name
        try:
            atomic_write_text(path, content, encoding="utf-8")
        except OSError as exc:
            log.error("Failed to write note %s: %s", name, exc)
            raise NoteStoreError.from_os_error(exc, name=name) from exc

        log.info("Note saved: %s (%d chars)", name, len(content))
        return name

    def rename(self, old_name: str, new_name: str) -> None:
        old_name = normalize_note_name(old_name)
        new_name = normalize_note_name(new_name)
        if old_name == new_name:
            log.debug("Rename skipped: name unchanged (%s)", old_name)
            return

        old_path = self.root / old_name
        new_path = self.root / new_name

        if not old_path.is_file():
            raise NoteNotFoundError("Note does not exist", name=old_name)

        # On case-insensitive filesystems "a.md" -> "A.md" resolves to the
        # same file, which is a rename and not a conflict.
        if new_path.exists() and not _same_file(old_path, new_path):
            raise NoteExistsError("A note with this name already exists", name=new_name)

        try:
            if new_path.exists():
                old_path.rename(new_path)
            else:
                _move_no_clobber(old_path, new_path)
        except FileExistsError as exc:
            # created between the check above and the move
            raise NoteExistsError("A note with this name already exists", name=new_name) from exc
        except OSError as exc:
            log.error("Failed to rename note %s -> %s: %s", old_name, new_name, exc)
            raise NoteStoreError.from_os_error(exc, name=old_name) from exc

        log.info("Note renamed: %s -> %s", old_name, new_name)

    def delete(self, name: str) -> None:
        name = normalize_note_name(name)
        path = self.root / name
        if path.is_dir():
            raise NoteNotFoundError("Note does not exist", name=name)
        try:
            path.unlink()
        except FileNotFoundError as exc:
            raise NoteNotFoundError("Note does not exist", name=name) from exc
        except OSError as exc:
            log.error("Failed to delete note %s: %s", name, exc)
            raise NoteStoreError.from_os_error(exc, name=name) from exc

        log.info("Note deleted: %s", name)


def _same_file(a: Path, b: Path) -> bool:
    try:
        return os.path.samefile(a, b)
    except OSError:
        return False


def _move_no_clobber(src: Path, dst: Path) -> None:
    """
    Move src to dst, failing with FileExistsError if dst appears meanwhile.

    Path.rename() replaces an existing target on POSIX; a hard link does
    not. Filesystems without hard links get a plain rename.
    """
    try:
        os.link(src, dst)
    except FileExistsError:
        raise
    except OSError:
        log.debug("Hard link unavailable for %s, falling back to rename", src)
        src.rename(dst)
        return
    os.unlink(src)
