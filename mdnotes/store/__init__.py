from .note_store import Note, NoteStore

__all__ = ["Note", "NoteStore"]
