from .store_ops import NoteStoreService, NoteStoreWorker

__all__ = [
    "NoteStoreService",
    "NoteStoreWorker",
]
