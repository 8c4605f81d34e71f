from .errors import InvalidNoteNameError, NoteExistsError, NoteNotFoundError, NoteStoreError
from .filenames import (
    NOTE_SUFFIX,
    generate_note_name,
    normalize_note_name,
    note_name_from_title,
    safe_filename,
)

__all__ = ["InvalidNoteNameError",
           "NoteExistsError",
           "NoteNotFoundError",
           "NoteStoreError",
           "NOTE_SUFFIX",
           "generate_note_name",
           "normalize_note_name",
           "note_name_from_title",
           "safe_filename",
           ]
