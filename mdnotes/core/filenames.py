from __future__ import annotations

import re
import unicodedata
import uuid

from mdnotes.core.errors import InvalidNoteNameError

NOTE_SUFFIX = ".md"

WINDOWS_RESERVED_NAMES = {
    "con", "prn", "aux", "nul",
    *(f"com{i}" for i in range(1, 10)),
    *(f"lpt{i}" for i in range(1, 10)),
}

INVALID_CHARS_RE = re.compile(r'[<>:"/\\|?*\u0000-\u001f]')
WHITESPACE_RE = re.compile(r"\s+")

MAX_FILENAME_LENGTH = 120


def safe_filename(title: str | None, *, max_len: int = MAX_FILENAME_LENGTH) -> str:
    """
    Convert an arbitrary note title into a filesystem-safe file stem.

    Cross-platform (Windows / macOS / Linux), unicode-safe, never empty.
    """
    if title is None:
        return _generate_untitled()

    # Unicode normalization (visual equality -> binary equality)
    name = unicodedata.normalize("NFKC", str(title))

    name = "".join(ch for ch in name if unicodedata.category(ch)[0] != "C")

    name = name.strip()
    name = WHITESPACE_RE.sub(" ", name)

    name = name.replace("/", "-").replace("\\", "-")
    name = INVALID_CHARS_RE.sub("_", name)

    # Windows: no trailing dot or space
    name = name.rstrip(" .")

    if not name:
        return _generate_untitled()

    base = name.split(".", 1)[0].strip().lower()
    if base in WINDOWS_RESERVED_NAMES:
        name = f"_{name}"

    if len(name) > max_len:
        name = name[:max_len].rstrip(" .")

    return name


def note_name_from_title(title: str | None) -> str:
    return safe_filename(title) + NOTE_SUFFIX


def generate_note_name() -> str:
    """Fresh note name of the form <uuid4>.md."""
    return f"{uuid.uuid4()}{NOTE_SUFFIX}"


def normalize_note_name(name: str) -> str:
    """
    Validate a note name and make sure it carries the .md suffix.

    Names are taken as given otherwise: no case folding, no character
    replacement. Use safe_filename() for free-form titles.
    """
    if name is None:
        raise InvalidNoteNameError("Note name is missing")

    name = str(name).strip()
    if not name:
        raise InvalidNoteNameError("Note name is empty", name=name)
    if "/" in name or "\\" in name:
        raise InvalidNoteNameError("Note name must not contain path separators", name=name)
    if any(unicodedata.category(ch) == "Cc" for ch in name):
        raise InvalidNoteNameError("Note name must not contain control characters", name=name)

    if not name.endswith(NOTE_SUFFIX):
        name = f"{name}{NOTE_SUFFIX}"

    stem = name[: -len(NOTE_SUFFIX)]
    if not stem.strip() or stem in {".", ".."}:
        raise InvalidNoteNameError("Note name has no stem", name=name)

    return name


def _generate_untitled() -> str:
    """Generate a safe fallback file stem."""
    return f"Untitled-{uuid.uuid4().hex[:6]}"
