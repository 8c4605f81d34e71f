from .core.errors import (
    InvalidNoteNameError,
    NoteExistsError,
    NoteNotFoundError,
    NoteStoreError,
)
from .core.filenames import generate_note_name, normalize_note_name, safe_filename
from .store.note_store import Note, NoteStore

__all__ = ["InvalidNoteNameError",
           "NoteExistsError",
           "NoteNotFoundError",
           "NoteStoreError",
           "generate_note_name",
           "normalize_note_name",
           "safe_filename",
           "Note",
           "NoteStore",
           ]
