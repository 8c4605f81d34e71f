# mdnotes/workers/store_ops.py

from __future__ import annotations

import logging
from typing import Any

from PySide6.QtCore import QObject, QRunnable, QThreadPool, Signal, Slot

from mdnotes.store.note_store import NoteStore

log = logging.getLogger(__name__)

STORE_OPERATIONS = ("list", "read", "write", "rename", "delete")

# Results of these may be superseded by a newer call of the same kind.
QUERY_OPERATIONS = ("list", "read")


class NoteStoreSignals(QObject):
    """
    Signals emitted by NoteStoreWorker.

    finished(req_id, op, result)
    failed(req_id, op, error_message)
    """
    finished = Signal(int, str, object)
    failed = Signal(int, str, str)


class NoteStoreWorker(QRunnable):
    """
    Runs a single NoteStore call off the UI/event thread.

    No widgets here; the store itself holds no state, so workers may run
    concurrently (last filesystem operation wins).
    """

    def __init__(self, *, req_id: int, store: NoteStore, op: str, args: tuple = ()):
        super().__init__()
        if op not in STORE_OPERATIONS:
            raise ValueError(f"unknown store operation: {op}")
        self.req_id = req_id
        self.store = store
        self.op = op
        self.args = tuple(args)

        self.signals = NoteStoreSignals()

    def run(self) -> None:
        try:
            result = getattr(self.store, self.op)(*self.args)
        except Exception as exc:
            log.warning("Store operation failed: op=%s args=%s err=%s", self.op, self.args, exc)
            self.signals.failed.emit(self.req_id, self.op, str(exc))
            return
        self.signals.finished.emit(self.req_id, self.op, result)


class NoteStoreService(QObject):
    """
    Submits store calls to a QThreadPool.

    - numbers every request (req_id)
    - drops list/read results superseded by a newer call of the same kind
    - always delivers results and failures of write/rename/delete
    """

    def __init__(
        self,
        *,
        store: NoteStore,
        thread_pool: QThreadPool | None = None,
        on_finished,
        on_failed,
    ):
        super().__init__()

        self.store = store
        self._pool = thread_pool or QThreadPool.globalInstance()
        self._on_finished = on_finished
        self._on_failed = on_failed

        self._req_id = 0
        self._latest: dict[str, int] = {}

    # ───────────────────────── public API ─────────────────────────

    def submit(self, op: str, *args: Any) -> int:
        worker = self.create_worker(op, *args)
        self._pool.start(worker)
        return worker.req_id

    def create_worker(self, op: str, *args: Any) -> NoteStoreWorker:
        self._req_id += 1
        req_id = self._req_id
        self._latest[op] = req_id

        worker = NoteStoreWorker(req_id=req_id, store=self.store, op=op, args=args)
        worker.signals.finished.connect(self._handle_finished)
        worker.signals.failed.connect(self._handle_failed)
        return worker

    def wait(self, msecs: int = -1) -> bool:
        return self._pool.waitForDone(msecs)

    # ───────────────────────── internal ─────────────────────────

    def _is_stale(self, req_id: int, op: str) -> bool:
        return op in QUERY_OPERATIONS and req_id != self._latest.get(op)

    @Slot(int, str, object)
    def _handle_finished(self, req_id: int, op: str, result: object) -> None:
        if self._is_stale(req_id, op):
            log.debug("Dropping stale result: req_id=%d op=%s", req_id, op)
            return
        self._on_finished(req_id, op, result)

    @Slot(int, str, str)
    def _handle_failed(self, req_id: int, op: str, err: str) -> None:
        if self._is_stale(req_id, op):
            log.debug("Dropping stale failure: req_id=%d op=%s", req_id, op)
            return
        self._on_failed(req_id, op, err)
