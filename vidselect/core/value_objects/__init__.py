"""
Objets valeur immutables du domaine.

Exports :
- DisplayState : Etat d'affichage d'une video (owned, pending_add, ...)
- PendingChangeSet : Diff de travail non soumis d'un client
- serialize_pending_changes / deserialize_pending_changes : forme persistee
- is_expired : Predicat de peremption d'un jeu sauvegarde
"""

from vidselect.core.value_objects.display_state import DisplayState
from vidselect.core.value_objects.pending_changes import (
    DEFAULT_PENDING_TTL,
    PENDING_KEY_PREFIX,
    PendingChangeSet,
    deserialize_pending_changes,
    is_expired,
    normalize_title,
    pending_key,
    serialize_pending_changes,
)

__all__ = [
    "DisplayState",
    "DEFAULT_PENDING_TTL",
    "PENDING_KEY_PREFIX",
    "PendingChangeSet",
    "deserialize_pending_changes",
    "is_expired",
    "normalize_title",
    "pending_key",
    "serialize_pending_changes",
]
