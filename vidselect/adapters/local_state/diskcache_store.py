"""
Stockage des changements en attente sur disque via diskcache.

Chaque client a une entree JSON sous la cle ``pending-changes-{customer_id}``.
La peremption est geree par le domaine (savedAt), pas par l'expiration
diskcache : un jeu perime doit etre lu pour etre supprime.
"""

import json
import sqlite3
from pathlib import Path
from typing import Any, Optional

from diskcache import Cache
from loguru import logger

from vidselect.core.ports import IPendingChangeStore
from vidselect.core.value_objects import pending_key


class DiskCachePendingStore(IPendingChangeStore):
    """
    Stockage local persistant entre les redemarrages.

    Les erreurs d'E/S ne sont jamais propagees : une lecture echouee
    retourne None, une ecriture echouee est journalisee.

    Example:
        store = DiskCachePendingStore("~/.vidselect/pending")
        store.save("cust-1", payload)
        payload = store.load("cust-1")
    """

    def __init__(self, cache_dir: str | Path) -> None:
        """
        Initialise le stockage.

        Args:
            cache_dir: Repertoire diskcache (cree si inexistant)
        """
        self._cache = Cache(str(Path(cache_dir).expanduser()))

    def load(self, customer_id: str) -> Optional[dict[str, Any]]:
        key = pending_key(customer_id)
        try:
            raw = self._cache.get(key)
            if raw is None:
                return None
            data = json.loads(raw)
        except (OSError, sqlite3.Error, json.JSONDecodeError, TypeError) as e:
            logger.warning(f"Lecture du jeu en attente impossible ({key}): {e}")
            return None
        if not isinstance(data, dict):
            logger.warning(f"Jeu en attente malforme ignore ({key})")
            return None
        return data

    def save(self, customer_id: str, payload: dict[str, Any]) -> None:
        key = pending_key(customer_id)
        try:
            self._cache.set(key, json.dumps(payload))
        except (OSError, sqlite3.Error, TypeError) as e:
            logger.warning(f"Sauvegarde du jeu en attente impossible ({key}): {e}")

    def delete(self, customer_id: str) -> None:
        key = pending_key(customer_id)
        try:
            self._cache.delete(key)
        except (OSError, sqlite3.Error) as e:
            logger.warning(f"Suppression du jeu en attente impossible ({key}): {e}")

    def close(self) -> None:
        """Ferme la connexion au cache (a appeler a la fin)."""
        self._cache.close()
