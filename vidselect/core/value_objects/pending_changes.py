"""
Jeu de changements en attente d'un client et sa forme persistee.

Le PendingChangeSet est un diff de travail contre la liste detenue :
deux ensembles disjoints d'ajouts et de retraits. Chaque id est conserve
avec son titre, car seul le titre permet de reconnaitre la meme video
dans le batch d'un autre mois.

Forme persistee (cle ``pending-changes-{customer_id}``) :
    {"add": [ids], "remove": [ids], "addTitles": [titres],
     "removeTitles": [titres], "savedAt": "ISO-8601"}

Les listes de titres sont alignees sur les listes d'ids (meme ordre).
"""

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from itertools import zip_longest
from typing import Any, Optional

PENDING_KEY_PREFIX = "pending-changes-"

# Fenetre de validite par defaut d'un jeu sauvegarde
DEFAULT_PENDING_TTL = timedelta(hours=24)


def pending_key(customer_id: str) -> str:
    """Cle de stockage local du jeu en attente d'un client."""
    return f"{PENDING_KEY_PREFIX}{customer_id}"


def normalize_title(title: Optional[str]) -> str:
    """Forme canonique d'un titre pour la comparaison (espaces de bord retires)."""
    return (title or "").strip()


def _titles(entries: Mapping[str, str]) -> frozenset[str]:
    return frozenset(t for t in (normalize_title(v) for v in entries.values()) if t)


def _erase(
    entries: Mapping[str, str], video_ids: Iterable[str], title: Optional[str]
) -> dict[str, str]:
    ids = set(video_ids)
    key = normalize_title(title)
    return {
        vid: t
        for vid, t in entries.items()
        if vid not in ids and not (key and normalize_title(t) == key)
    }


@dataclass(frozen=True)
class PendingChangeSet:
    """
    Diff de travail non soumis (ajouts et retraits).

    Attributs :
        add : video_id -> titre des videos a ajouter
        remove : video_id -> titre des videos a retirer

    Invariant : un id n'apparait jamais dans les deux ensembles.
    Les operations retournent une nouvelle instance.
    """

    add: Mapping[str, str] = field(default_factory=dict)
    remove: Mapping[str, str] = field(default_factory=dict)

    @property
    def add_ids(self) -> frozenset[str]:
        return frozenset(self.add)

    @property
    def remove_ids(self) -> frozenset[str]:
        return frozenset(self.remove)

    @property
    def add_titles(self) -> frozenset[str]:
        return _titles(self.add)

    @property
    def remove_titles(self) -> frozenset[str]:
        return _titles(self.remove)

    @property
    def is_empty(self) -> bool:
        return not self.add and not self.remove

    def with_add(self, video_id: str, title: Optional[str]) -> "PendingChangeSet":
        """Ajoute une intention d'ajout (et la retire des retraits)."""
        add = dict(self.add)
        add[video_id] = title or ""
        remove = {k: v for k, v in self.remove.items() if k != video_id}
        return PendingChangeSet(add=add, remove=remove)

    def with_remove(self, video_id: str, title: Optional[str]) -> "PendingChangeSet":
        """Ajoute une intention de retrait (et la retire des ajouts)."""
        remove = dict(self.remove)
        remove[video_id] = title or ""
        add = {k: v for k, v in self.add.items() if k != video_id}
        return PendingChangeSet(add=add, remove=remove)

    def without_add(
        self, video_ids: Iterable[str], title: Optional[str]
    ) -> "PendingChangeSet":
        """Efface les ajouts correspondant aux ids ou au titre."""
        return PendingChangeSet(add=_erase(self.add, video_ids, title), remove=dict(self.remove))

    def without_remove(
        self, video_ids: Iterable[str], title: Optional[str]
    ) -> "PendingChangeSet":
        """Efface les retraits correspondant aux ids ou au titre."""
        return PendingChangeSet(add=dict(self.add), remove=_erase(self.remove, video_ids, title))


def is_expired(now: datetime, saved_at: datetime, ttl: timedelta = DEFAULT_PENDING_TTL) -> bool:
    """Un jeu sauvegarde est perime des que son age atteint la fenetre de validite."""
    return now - saved_at >= ttl


def serialize_pending_changes(changes: PendingChangeSet, saved_at: datetime) -> dict[str, Any]:
    """Forme persistee d'un jeu en attente, horodatee."""
    return {
        "add": list(changes.add.keys()),
        "remove": list(changes.remove.keys()),
        "addTitles": list(changes.add.values()),
        "removeTitles": list(changes.remove.values()),
        "savedAt": saved_at.isoformat(),
    }


def _pair(ids: Any, titles: Any) -> dict[str, str]:
    if not isinstance(ids, list) or not isinstance(titles, list):
        raise ValueError("add/remove et leurs titres doivent etre des listes")
    pairs: dict[str, str] = {}
    for vid, title in zip_longest(ids, titles):
        if vid is None:
            # Entree sans id (ou titre orphelin) : inutilisable, le titre suit son id
            continue
        pairs[str(vid)] = title if isinstance(title, str) else ""
    return pairs


def deserialize_pending_changes(data: Mapping[str, Any]) -> tuple[PendingChangeSet, datetime]:
    """
    Reconstruit un jeu en attente depuis sa forme persistee.

    Les ids presents dans les deux ensembles sont ecartes des deux cotes
    (intention ambigue). Un savedAt sans fuseau est interprete en UTC.

    Raises:
        ValueError: Si la forme est invalide (savedAt absent ou illisible, listes malformees)
    """
    saved_raw = data.get("savedAt")
    if not isinstance(saved_raw, str):
        raise ValueError("savedAt manquant")
    saved_at = datetime.fromisoformat(saved_raw)
    if saved_at.tzinfo is None:
        saved_at = saved_at.replace(tzinfo=timezone.utc)

    add = _pair(data.get("add", []), data.get("addTitles", []))
    remove = _pair(data.get("remove", []), data.get("removeTitles", []))

    conflicts = add.keys() & remove.keys()
    if conflicts:
        add = {k: v for k, v in add.items() if k not in conflicts}
        remove = {k: v for k, v in remove.items() if k not in conflicts}

    return PendingChangeSet(add=add, remove=remove), saved_at
