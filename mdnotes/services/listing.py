from __future__ import annotations

import logging
from typing import Iterable

from mdnotes.core.errors import NoteStoreError
from mdnotes.core.filenames import normalize_note_name
from mdnotes.store.note_store import NoteStore

log = logging.getLogger(__name__)


class NoteListing:
    """
    Current listing + selection of a presentation layer.

    `names` is a snapshot taken at the last refresh(). Positions shown to
    the user are resolved against that snapshot into names before anything
    is deleted, so a refresh in between cannot shift the target.
    """

    def __init__(self, store: NoteStore):
        self.store = store
        self._names: list[str] = []
        self.selected: str | None = None

    @property
    def names(self) -> tuple[str, ...]:
        return tuple(self._names)

    def __len__(self) -> int:
        return len(self._names)

    def __contains__(self, name: object) -> bool:
        return name in self._names

    def refresh(self) -> bool:
        """
        Re-read the store. On failure keep the previous snapshot, log a
        warning and return False.
        """
        try:
            names = self.store.list()
        except NoteStoreError as exc:
            log.warning("Listing not refreshed, keeping %d cached names: %s", len(self._names), exc)
            return False

        self._names = sorted(names, key=str.lower)
        if self.selected is not None and self.selected not in self._names:
            self.selected = None
        return True

    def select(self, name: str | None) -> None:
        if name is None:
            self.selected = None
            return
        if name not in self._names:
            raise KeyError(name)
        self.selected = name

    def names_at(self, indexes: Iterable[int]) -> list[str]:
        out: list[str] = []
        for i in indexes:
            if not 0 <= i < len(self._names):
                raise IndexError(f"no note at position {i}")
            out.append(self._names[i])
        return out

    # ───────────────────────── mutations ─────────────────────────

    def create(self, content: str, name: str | None = None) -> str:
        name = self.store.write(name, content)
        self.refresh()
        return name

    def save(self, name: str, content: str) -> str:
        return self.create(content, name=name)

    def rename(self, old_name: str, new_name: str) -> str:
        old_name = normalize_note_name(old_name)
        new_name = normalize_note_name(new_name)
        follow = self.selected == old_name
        self.store.rename(old_name, new_name)
        self.refresh()
        if follow and new_name in self._names:
            self.selected = new_name
        return new_name

    def delete(self, names: Iterable[str]) -> None:
        """
        Delete notes by name. Each success drops exactly that entry from
        the snapshot; the first failure propagates.
        """
        for name in list(names):
            name = normalize_note_name(name)
            self.store.delete(name)
            if name in self._names:
                self._names.remove(name)
            if self.selected == name:
                self.selected = None
