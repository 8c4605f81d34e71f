import sys
import os

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

import pytest

from mdnotes.store.note_store import NoteStore


@pytest.fixture
def store(tmp_path):
    root = tmp_path / "notes"
    root.mkdir()
    return NoteStore(root)


@pytest.fixture
def strict_store(store):
    return NoteStore(store.root, strict=True)
