"""
Reconciliation de la liste detenue et des changements en attente.

Produit les deux vues en lecture seule utilisees par le CLI et le web :
- l'ensemble effectif : (detenues U ajouts) - retraits
- l'etat d'affichage de chaque video

Fonctions pures de leurs entrees, recalculables a chaque rendu.
"""

from collections.abc import Iterable
from dataclasses import dataclass
from typing import Optional

from vidselect.core.entities import OwnedEntry, Video
from vidselect.core.value_objects import DisplayState, PendingChangeSet
from vidselect.services.identity_resolver import CrossMonthIdentityResolver


def compute_effective_ids(
    owned_ids: Iterable[str],
    add_ids: Iterable[str],
    remove_ids: Iterable[str],
) -> frozenset[str]:
    """(owned U add) - remove."""
    return frozenset((set(owned_ids) | set(add_ids)) - set(remove_ids))


@dataclass(frozen=True)
class PendingSummary:
    """Resume affiche avant confirmation d'une soumission."""

    current_total: int
    new_total: int
    added_count: int
    removed_count: int


@dataclass(frozen=True)
class VideoView:
    """Une video du catalogue avec son etat d'affichage."""

    video: Video
    state: DisplayState


class ListReconciler:
    """
    Combine la liste detenue et le jeu en attente d'un client.

    Example:
        reconciler = ListReconciler(owned_entries, tracker.changes)
        if reconciler.has_pending_changes():
            summary = reconciler.pending_summary()
    """

    def __init__(
        self,
        owned_entries: Iterable[OwnedEntry],
        changes: PendingChangeSet,
        resolver: Optional[CrossMonthIdentityResolver] = None,
    ) -> None:
        self._owned = list(owned_entries)
        self._changes = changes
        self._resolver = resolver or CrossMonthIdentityResolver(self._owned)

    @property
    def resolver(self) -> CrossMonthIdentityResolver:
        return self._resolver

    @property
    def changes(self) -> PendingChangeSet:
        return self._changes

    def effective_selected_ids(self) -> frozenset[str]:
        return compute_effective_ids(
            (entry.video_id for entry in self._owned),
            self._changes.add_ids,
            self._changes.remove_ids,
        )

    def effective_count(self) -> int:
        return len(self.effective_selected_ids())

    def has_pending_changes(self) -> bool:
        return not self._changes.is_empty

    def display_state(self, video: Video) -> DisplayState:
        return DisplayState.from_flags(
            owned=self._resolver.is_owned(video),
            pending_add=self._resolver.is_pending_add(video, self._changes),
            pending_remove=self._resolver.is_pending_remove(video, self._changes),
        )

    def annotate(self, videos: Iterable[Video]) -> list[VideoView]:
        """Associe chaque video a son etat d'affichage."""
        return [VideoView(video=video, state=self.display_state(video)) for video in videos]

    def pending_summary(self) -> PendingSummary:
        return PendingSummary(
            current_total=len({entry.video_id for entry in self._owned}),
            new_total=self.effective_count(),
            added_count=len(self._changes.add),
            removed_count=len(self._changes.remove),
        )
