"""
Stockage en memoire des changements en attente.
"""

import copy
from typing import Any, Optional

from vidselect.core.ports import IPendingChangeStore
from vidselect.core.value_objects import pending_key


class InMemoryPendingStore(IPendingChangeStore):
    """Dictionnaire cle -> forme persistee, sans reprise apres redemarrage."""

    def __init__(self) -> None:
        self.entries: dict[str, dict[str, Any]] = {}

    def load(self, customer_id: str) -> Optional[dict[str, Any]]:
        data = self.entries.get(pending_key(customer_id))
        return copy.deepcopy(data) if data is not None else None

    def save(self, customer_id: str, payload: dict[str, Any]) -> None:
        self.entries[pending_key(customer_id)] = copy.deepcopy(payload)

    def delete(self, customer_id: str) -> None:
        self.entries.pop(pending_key(customer_id), None)
