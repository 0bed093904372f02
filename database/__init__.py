# School Fee Tracker record store
from .models import Base, KVEntry
from .store import RecordStore, Entry

__all__ = [
    "Base",
    "KVEntry",
    "RecordStore",
    "Entry",
]
