import errno

import pytest

from mdnotes.core.errors import (
    InvalidNoteNameError,
    NoteExistsError,
    NoteNotFoundError,
    NoteStoreError,
)
from mdnotes.store.note_store import Note, NoteStore


def test_write_read_roundtrip(store):
    name = store.write("todo.md", "- [ ] milk\n- [ ] bread\n")
    assert name == "todo.md"
    assert store.read(name) == "- [ ] milk\n- [ ] bread\n"


def test_unicode_and_empty_content(store):
    store.write("ru.md", "Привет, мир ✓")
    store.write("empty.md", "")
    assert store.read("ru.md") == "Привет, мир ✓"
    assert store.read("empty.md") == ""
    assert (store.root / "ru.md").read_bytes() == "Привет, мир ✓".encode("utf-8")


def test_write_without_name_generates_fresh_name(store):
    before = set(store.list())
    name = store.write(None, "# Hello")
    assert name.endswith(".md")
    assert name not in before
    assert store.read(name) == "# Hello"


def test_generated_names_differ(store):
    assert store.write(None, "a") != store.write(None, "b")


def test_hello_scenario(store):
    name = store.write(None, "# Hello")
    assert store.read(name) == "# Hello"
    store.delete(name)
    assert name not in store.list()


def test_overwrite(store):
    store.write("notes.md", "v1")
    store.write("notes.md", "v2")
    assert store.read("notes.md") == "v2"
    assert store.list() == ["notes.md"]


def test_write_normalizes_suffix(store):
    assert store.write("plain", "x") == "plain.md"
    assert (store.root / "plain.md").is_file()


def test_write_rejects_path_escape(store):
    with pytest.raises(InvalidNoteNameError):
        store.write("../outside.md", "x")
    assert not (store.root.parent / "outside.md").exists()


def test_write_failure_raises(tmp_path):
    s = NoteStore(tmp_path / "missing")
    with pytest.raises(NoteStoreError) as info:
        s.write("a.md", "text")
    assert info.value.errno == errno.ENOENT
    assert info.value.name == "a.md"


def test_list_only_md_files(store):
    store.write("a.md", "")
    store.write("b.md", "")
    (store.root / "image.png").write_bytes(b"\x89PNG")
    (store.root / "readme.txt").write_text("x", encoding="utf-8")
    (store.root / "folder.md").mkdir()
    assert sorted(store.list()) == ["a.md", "b.md"]


def test_list_excludes_temp_files(store):
    store.write("a.md", "x")
    (store.root / ".a.md.tmp-deadbeef").write_text("partial", encoding="utf-8")
    assert store.list() == ["a.md"]


def test_list_unreadable_dir_raises(tmp_path):
    not_a_dir = tmp_path / "file"
    not_a_dir.write_text("", encoding="utf-8")
    with pytest.raises(NoteStoreError):
        NoteStore(not_a_dir).list()


def test_read_missing_is_empty_when_lenient(store):
    assert store.read("nope.md") == ""


def test_read_missing_raises_when_strict(strict_store):
    with pytest.raises(NoteNotFoundError) as info:
        strict_store.read("nope.md")
    assert info.value.errno == errno.ENOENT


def test_read_invalid_utf8(store, strict_store):
    (store.root / "bin.md").write_bytes(b"\xff\xfe\x00broken")
    assert store.read("bin.md") == ""
    with pytest.raises(NoteStoreError):
        strict_store.read("bin.md")


def test_load(store):
    store.write("a.md", "text")
    assert store.load("a") == Note(name="a.md", content="text")


def test_rename_same_name_is_noop(store):
    store.write("a.md", "content")
    store.rename("a.md", "a.md")
    assert store.list() == ["a.md"]
    assert store.read("a.md") == "content"


def test_rename(store):
    store.write("a.md", "content")
    store.rename("a.md", "b.md")
    names = store.list()
    assert "b.md" in names and "a.md" not in names
    assert store.read("b.md") == "content"


def test_rename_appends_suffix(store):
    store.write("a.md", "content")
    store.rename("a.md", "renamed")
    assert store.list() == ["renamed.md"]


def test_rename_onto_existing_fails(store):
    store.write("a.md", "A")
    store.write("b.md", "B")
    with pytest.raises(NoteExistsError) as info:
        store.rename("a.md", "b.md")
    assert info.value.errno == errno.EEXIST
    assert store.read("a.md") == "A"
    assert store.read("b.md") == "B"


def test_rename_missing_fails(store):
    with pytest.raises(NoteNotFoundError):
        store.rename("ghost.md", "b.md")
    assert store.list() == []


def test_rename_errors_are_os_errors(store):
    with pytest.raises(OSError):
        store.rename("ghost.md", "b.md")


def test_delete(store):
    store.write("a.md", "x")
    store.write("b.md", "y")
    store.delete("a.md")
    assert store.list() == ["b.md"]
    assert store.read("a.md") == ""


def test_delete_missing_fails(store):
    with pytest.raises(NoteNotFoundError):
        store.delete("ghost.md")


def test_delete_directory_is_not_a_note(store):
    (store.root / "folder.md").mkdir()
    with pytest.raises(NoteNotFoundError):
        store.delete("folder.md")
    assert (store.root / "folder.md").is_dir()


def test_ensure_creates_root(tmp_path):
    s = NoteStore(tmp_path / "a" / "b")
    s.ensure()
    assert s.root.is_dir()
    assert s.list() == []


def test_exists(store):
    assert not store.exists("a")
    store.write("a", "")
    assert store.exists("a")
    assert store.exists("a.md")


def test_rename_never_overwrites_a_late_target(store, monkeypatch):
    store.write("a.md", "A")
    store.write("b.md", "B")
    # the existence check misses b.md, as if it appeared right after it
    monkeypatch.setattr(type(store.root), "exists", lambda self: False)
    with pytest.raises(NoteExistsError):
        store.rename("a.md", "b.md")
    monkeypatch.undo()
    assert store.read("a.md") == "A"
    assert store.read("b.md") == "B"


def test_rename_without_hard_links(store, monkeypatch):
    store.write("a.md", "A")

    def no_links(src, dst):
        raise OSError(errno.EPERM, "Operation not permitted")

    monkeypatch.setattr("mdnotes.store.note_store.os.link", no_links)
    store.rename("a.md", "b.md")
    assert store.list() == ["b.md"]
    assert store.read("b.md") == "A"
