"""
Resolution de l'identite d'une video entre les mois.

Une meme video peut reapparaitre dans le batch d'un mois ulterieur sous
un nouvel id. Regle d'egalite unique, partagee par tous les appelants :

    meme video  <=>  titre normalise egal  OU  id egal

Le titre couvre le cas inter-mois, l'id les donnees ou les titres
different. Les videos sans titre ne sont comparees que par id. Une liste
ancienne peut detenir le meme titre sous plusieurs ids : toutes ces
entrees sont equivalentes a la video affichee.
"""

from collections.abc import Iterable
from typing import Optional

from loguru import logger

from vidselect.core.entities import OwnedEntry, Video
from vidselect.core.value_objects import PendingChangeSet, normalize_title


class CrossMonthIdentityResolver:
    """
    Determine si une video du catalogue est deja detenue ou en attente.

    Construit une fois par rendu a partir des entrees detenues du client.

    Example:
        resolver = CrossMonthIdentityResolver(owned_entries)
        if resolver.is_owned(video):
            ...
    """

    def __init__(self, owned_entries: Iterable[OwnedEntry]) -> None:
        self._by_id: dict[str, OwnedEntry] = {}
        # Une liste peut contenir plusieurs entrees de meme titre (mois differents)
        self._by_title: dict[str, list[OwnedEntry]] = {}
        self._reported_blank: set[str] = set()

        for entry in owned_entries:
            self._by_id[entry.video_id] = entry
            title = normalize_title(entry.title)
            if title:
                self._by_title.setdefault(title, []).append(entry)
            else:
                self._report_blank_title(entry.video_id)

    @property
    def owned_ids(self) -> frozenset[str]:
        return frozenset(self._by_id)

    @property
    def owned_titles(self) -> frozenset[str]:
        return frozenset(self._by_title)

    def _report_blank_title(self, video_id: str) -> None:
        """Journalise une seule fois un titre vide (comparaison par id uniquement)."""
        if video_id in self._reported_blank:
            return
        self._reported_blank.add(video_id)
        logger.warning(f"Video sans titre, comparaison par id uniquement: {video_id}")

    def resolve_owned(self, video: Video) -> Optional[OwnedEntry]:
        """
        Retourne l'entree detenue equivalente a la video, ou None.

        Args:
            video: Video affichee (n'importe quel mois)

        Returns:
            L'entree detenue de meme id, sinon la premiere de meme titre
        """
        entry = self._by_id.get(video.id)
        if entry is not None:
            return entry
        entries = self.equivalent_owned(video)
        return entries[0] if entries else None

    def equivalent_owned(self, video: Video) -> list[OwnedEntry]:
        """
        Toutes les entrees detenues equivalentes a la video.

        Retirer une video doit retirer chacune de ces entrees, sinon un
        doublon de meme titre reste dans la liste effective.
        """
        title = normalize_title(video.title)
        if not title:
            self._report_blank_title(video.id)
        entries = list(self._by_title.get(title, [])) if title else []
        by_id = self._by_id.get(video.id)
        if by_id is not None and by_id not in entries:
            entries.insert(0, by_id)
        return entries

    def is_owned(self, video: Video) -> bool:
        return self.resolve_owned(video) is not None

    def is_pending_add(self, video: Video, changes: PendingChangeSet) -> bool:
        title = normalize_title(video.title)
        return bool(title and title in changes.add_titles) or video.id in changes.add_ids

    def is_pending_remove(self, video: Video, changes: PendingChangeSet) -> bool:
        title = normalize_title(video.title)
        return bool(title and title in changes.remove_titles) or video.id in changes.remove_ids
