"""
Port du stockage local des changements en attente.

Equivalent serveur du stockage navigateur : un dictionnaire cle -> donnees
JSON, indexe par client. Le port manipule la forme persistee brute ;
la (de)serialisation reste dans les fonctions pures du domaine.
"""

from abc import ABC, abstractmethod
from typing import Any, Optional


class IPendingChangeStore(ABC):
    """
    Interface du stockage local des jeux en attente.

    Les implementations ne levent pas : un echec de lecture retourne None,
    un echec d'ecriture est journalise et ignore (pas de reprise possible).
    """

    @abstractmethod
    def load(self, customer_id: str) -> Optional[dict[str, Any]]:
        """Retourne la forme persistee du client, ou None."""
        ...

    @abstractmethod
    def save(self, customer_id: str, payload: dict[str, Any]) -> None:
        """Ecrase la forme persistee du client."""
        ...

    @abstractmethod
    def delete(self, customer_id: str) -> None:
        """Supprime la forme persistee du client."""
        ...
