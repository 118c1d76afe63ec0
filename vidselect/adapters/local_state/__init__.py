"""
Stockages locaux des changements en attente.

- DiskCachePendingStore : persistance sur disque (diskcache)
- InMemoryPendingStore : dictionnaire en memoire (tests, sessions ephemeres)
"""

from vidselect.adapters.local_state.diskcache_store import DiskCachePendingStore
from vidselect.adapters.local_state.memory_store import InMemoryPendingStore

__all__ = ["DiskCachePendingStore", "InMemoryPendingStore"]
