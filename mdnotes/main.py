"""Command-line front end for a directory of Markdown notes.

    mdnotes list --numbered
    mdnotes new --title "Shopping" --text "# Shopping"
    mdnotes rename Shopping.md Groceries.md
    mdnotes delete --index 0 2
    mdnotes preview Groceries.md --output groceries.html
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from mdnotes.core.errors import NoteStoreError
from mdnotes.core.filenames import normalize_note_name, note_name_from_title
from mdnotes.infrastructure.filesystem import atomic_write_text, write_recovery_copy
from mdnotes.logging_setup import SESSION_ID, install_global_exception_hooks, log, setup_logging
from mdnotes.services.listing import NoteListing
from mdnotes.services.markdown_renderer import MarkdownRenderer
from mdnotes.settings import APP_NAME, DEFAULT_STORE_DIR, LOG_PATH, RECOVERY_DIR
from mdnotes.store.note_store import NoteStore


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog=APP_NAME, description="Manage a folder of Markdown notes")
    p.add_argument(
        "--store",
        type=Path,
        default=DEFAULT_STORE_DIR,
        help="Path to the notes folder (default: %(default)s)",
    )
    p.add_argument(
        "--strict",
        action="store_true",
        help="Reading a missing or unreadable note is an error instead of an empty note",
    )
    p.add_argument("-v", "--verbose", action="store_true", help="Log progress to stderr")
    p.add_argument("--log-file", type=Path, default=LOG_PATH, help="Log file (default: %(default)s)")
    p.add_argument("--no-log-file", action="store_true", help="Do not write a log file")

    sub = p.add_subparsers(dest="command", required=True)

    sp = sub.add_parser("list", help="List notes")
    sp.add_argument("--numbered", action="store_true", help="Prefix each note with its position")

    sp = sub.add_parser("show", help="Print the raw text of a note")
    sp.add_argument("name")

    sp = sub.add_parser("new", help="Create a note (text from --text or stdin)")
    group = sp.add_mutually_exclusive_group()
    group.add_argument("--name", help="File name; a random one is generated when omitted")
    group.add_argument("--title", help="Free-form title turned into a safe file name")
    sp.add_argument("--text", help="Note text")

    sp = sub.add_parser("save", help="Create or overwrite a note (text from --text or stdin)")
    sp.add_argument("name")
    sp.add_argument("--text", help="Note text")

    sp = sub.add_parser("rename", help="Rename a note")
    sp.add_argument("old_name")
    sp.add_argument("new_name")

    sp = sub.add_parser("delete", help="Delete notes by name or by listed position")
    sp.add_argument("names", nargs="*")
    sp.add_argument("--index", type=int, nargs="+", default=[], help="Positions as shown by 'list --numbered'")

    sp = sub.add_parser("preview", help="Render a note as an HTML page")
    sp.add_argument("name")
    sp.add_argument("--output", type=Path, help="Write the page here instead of stdout")

    return p


def _read_text(args: argparse.Namespace) -> str:
    if args.text is not None:
        return args.text
    return sys.stdin.read()


def _save(store: NoteStore, name: str | None, text: str) -> str:
    try:
        return store.write(name, text)
    except NoteStoreError:
        target = store.root / (name or "Untitled.md")
        try:
            recovery = write_recovery_copy(target, text, recovery_dir=RECOVERY_DIR)
        except OSError:
            log.exception("Recovery copy failed as well: %s", target)
        else:
            log.warning("Save failed, recovery copy written: %s", recovery)
            print(f"recovery copy: {recovery}", file=sys.stderr)
        raise


def cmd_list(store: NoteStore, args: argparse.Namespace) -> int:
    listing = NoteListing(store)
    if not listing.refresh():
        print("warning: could not read the notes folder", file=sys.stderr)
    for i, name in enumerate(listing.names):
        print(f"{i}\t{name}" if args.numbered else name)
    return 0


def cmd_show(store: NoteStore, args: argparse.Namespace) -> int:
    sys.stdout.write(store.read(args.name))
    return 0


def cmd_new(store: NoteStore, args: argparse.Namespace) -> int:
    name = args.name
    if args.title is not None:
        name = note_name_from_title(args.title)
    if name is not None and store.exists(name):
        print(f"error: note already exists: {name}", file=sys.stderr)
        return 1
    print(_save(store, name, _read_text(args)))
    return 0


def cmd_save(store: NoteStore, args: argparse.Namespace) -> int:
    print(_save(store, args.name, _read_text(args)))
    return 0


def cmd_rename(store: NoteStore, args: argparse.Namespace) -> int:
    listing = NoteListing(store)
    print(listing.rename(args.old_name, args.new_name))
    return 0


def cmd_delete(store: NoteStore, args: argparse.Namespace) -> int:
    names = list(args.names)
    if args.index:
        listing = NoteListing(store)
        listing.refresh()
        # resolve positions once, against this snapshot
        names.extend(listing.names_at(args.index))
    if not names:
        print("error: nothing to delete", file=sys.stderr)
        return 2
    listing = NoteListing(store)
    # "a" and "a.md" are the same note
    for name in dict.fromkeys(normalize_note_name(n) for n in names):
        listing.delete([name])
        print(f"deleted {name}")
    return 0


def cmd_preview(store: NoteStore, args: argparse.Namespace) -> int:
    note = store.load(args.name)
    page = MarkdownRenderer().render_page(note.content, title=note.name)
    if args.output is None:
        sys.stdout.write(page)
    else:
        try:
            atomic_write_text(args.output, page, encoding="utf-8")
        except OSError as exc:
            raise NoteStoreError.from_os_error(exc, name=str(args.output)) from exc
        print(args.output)
    return 0


COMMANDS = {
    "list": cmd_list,
    "show": cmd_show,
    "new": cmd_new,
    "save": cmd_save,
    "rename": cmd_rename,
    "delete": cmd_delete,
    "preview": cmd_preview,
}


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    setup_logging(
        None if args.no_log_file else args.log_file,
        console_level=logging.INFO if args.verbose else logging.WARNING,
    )
    install_global_exception_hooks()

    store = NoteStore(args.store, strict=args.strict)
    log.info("Command %s on %r, SID=%s", args.command, store, SESSION_ID)

    try:
        store.ensure()
        return COMMANDS[args.command](store, args)
    except NoteStoreError as exc:
        log.error("Command %s failed: %s", args.command, exc)
        print(f"error: {exc}", file=sys.stderr)
        return 1
    except IndexError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2


if __name__ == "__main__":
    raise SystemExit(main())
