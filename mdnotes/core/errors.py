from __future__ import annotations

import errno


class NoteStoreError(OSError):
    """
    Base error of the note store.

    Subclasses OSError so callers may treat every store failure as an I/O
    error; `errno` tells the kinds apart, `name` is the note involved.
    """

    default_errno = errno.EIO

    def __init__(self, message: str, *, name: str | None = None, code: int | None = None):
        super().__init__(self.default_errno if code is None else code, message, name)

    @property
    def name(self) -> str | None:
        return self.filename

    @classmethod
    def from_os_error(cls, exc: OSError, *, name: str | None = None) -> "NoteStoreError":
        message = exc.strerror or str(exc)
        return cls(message, name=name, code=exc.errno)


class NoteNotFoundError(NoteStoreError):
    default_errno = errno.ENOENT


class NoteExistsError(NoteStoreError):
    default_errno = errno.EEXIST


class InvalidNoteNameError(NoteStoreError, ValueError):
    default_errno = errno.EINVAL
