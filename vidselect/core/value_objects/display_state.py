"""
Etat d'affichage d'une video pour la session d'edition d'un client.
"""

from enum import Enum


class DisplayState(str, Enum):
    """Etat derive de (detenue, en attente).

    Valeurs:
        OWNED: detenue, pas de retrait en attente
        PENDING_REMOVE: detenue, retrait en attente
        PENDING_ADD: non detenue, ajout en attente
        AVAILABLE: non detenue, aucun ajout en attente
    """

    OWNED = "owned"
    PENDING_REMOVE = "pending_remove"
    PENDING_ADD = "pending_add"
    AVAILABLE = "available"

    @classmethod
    def from_flags(
        cls, owned: bool, pending_add: bool, pending_remove: bool
    ) -> "DisplayState":
        """Table de verite des quatre etats."""
        if owned:
            return cls.PENDING_REMOVE if pending_remove else cls.OWNED
        return cls.PENDING_ADD if pending_add else cls.AVAILABLE
