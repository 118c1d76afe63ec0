"""
Service de selection : facade utilisee par le CLI et l'API web.

Assemble le catalogue, la liste detenue et le tracker de changements
en attente d'un client, et prepare la demande de soumission.
"""

from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Optional

from loguru import logger

from vidselect.core.entities import MonthlyCatalog, OwnedEntry, Video, VideoSummary
from vidselect.core.errors import PersistenceError, ValidationError
from vidselect.core.ports import ICatalogRepository, IPendingChangeStore
from vidselect.core.value_objects import DEFAULT_PENDING_TTL, DisplayState, PendingChangeSet
from vidselect.services.catalog import CatalogService
from vidselect.services.pending_tracker import PendingChangeTracker, utcnow
from vidselect.services.reconciler import ListReconciler, PendingSummary, VideoView
from vidselect.services.submission import (
    SubmissionCoordinator,
    SubmissionRequest,
    SubmissionResult,
)


@dataclass
class SelectionSession:
    """Etat d'edition d'un client a un instant donne."""

    customer_id: str
    owned: list[OwnedEntry]
    tracker: PendingChangeTracker
    reconciler: ListReconciler

    @property
    def changes(self) -> PendingChangeSet:
        return self.tracker.changes

    def summary(self) -> PendingSummary:
        return self.reconciler.pending_summary()


@dataclass
class MonthView:
    """Catalogue d'un mois annote pour un client."""

    catalog: MonthlyCatalog
    videos: list[VideoView]
    summary: PendingSummary
    has_pending_changes: bool


@dataclass
class ToggleResult:
    """Resultat d'une bascule."""

    video: Video
    state: DisplayState
    summary: PendingSummary


class SelectionService:
    """
    Facade de la session d'edition d'un client.

    Example:
        service = SelectionService(catalog_service, catalog_repo, store, coordinator)
        view = await service.browse_month("cust-1", "2025-02")
        await service.toggle("cust-1", "B1")
        result = await service.submit("cust-1")
    """

    def __init__(
        self,
        catalog_service: CatalogService,
        catalog_repo: ICatalogRepository,
        pending_store: IPendingChangeStore,
        coordinator: SubmissionCoordinator,
        ttl: timedelta = DEFAULT_PENDING_TTL,
        now_fn: Callable[[], datetime] = utcnow,
    ) -> None:
        """
        Initialise le service.

        Args:
            catalog_service: Lectures avec repli sur un resultat vide
            catalog_repo: Catalogue (resolution des videos cliquees)
            pending_store: Stockage local des jeux en attente
            coordinator: Coordinateur de soumission
            ttl: Fenetre de validite des jeux sauvegardes
            now_fn: Horloge injectee (tests)
        """
        self._catalog_service = catalog_service
        self._catalog_repo = catalog_repo
        self._pending_store = pending_store
        self._coordinator = coordinator
        self._ttl = ttl
        self._now_fn = now_fn

    def tracker_for(self, customer_id: str) -> PendingChangeTracker:
        """Tracker du client, restaure depuis le stockage local."""
        if not customer_id:
            raise ValidationError("customer_id manquant")
        tracker = PendingChangeTracker(
            customer_id, self._pending_store, ttl=self._ttl, now_fn=self._now_fn
        )
        tracker.restore()
        return tracker

    async def load_session(self, customer_id: str) -> SelectionSession:
        tracker = self.tracker_for(customer_id)
        owned = (await self._catalog_service.get_owned_list(customer_id)).items
        return SelectionSession(
            customer_id=customer_id,
            owned=owned,
            tracker=tracker,
            reconciler=ListReconciler(owned, tracker.changes),
        )

    async def browse_month(self, customer_id: str, month: str) -> MonthView:
        """Catalogue du mois avec l'etat d'affichage de chaque video."""
        session = await self.load_session(customer_id)
        catalog = await self._catalog_service.get_catalog_for_month(month)
        return MonthView(
            catalog=catalog,
            videos=session.reconciler.annotate(catalog.videos),
            summary=session.summary(),
            has_pending_changes=session.reconciler.has_pending_changes(),
        )

    async def toggle(self, customer_id: str, video_id: str) -> ToggleResult:
        """
        Bascule une video du catalogue.

        Raises:
            ValidationError: Video inconnue du catalogue
        """
        session = await self.load_session(customer_id)
        try:
            videos = await self._catalog_repo.get_videos_by_ids([video_id])
        except PersistenceError as e:
            logger.warning(f"Lecture de la video {video_id} impossible: {e}")
            videos = []
        if not videos:
            raise ValidationError(f"Video inconnue: {video_id}")

        video = videos[0]
        state = session.tracker.toggle(video, session.reconciler.resolver)
        reconciler = ListReconciler(
            session.owned, session.tracker.changes, session.reconciler.resolver
        )
        logger.debug(f"{customer_id}: {video.id} -> {state.value}")
        return ToggleResult(video=video, state=state, summary=reconciler.pending_summary())

    async def pending(self, customer_id: str) -> SelectionSession:
        return await self.load_session(customer_id)

    def discard(self, customer_id: str) -> None:
        """Abandonne les changements en attente du client."""
        self.tracker_for(customer_id).clear()
        logger.info(f"Changements en attente abandonnes pour {customer_id}")

    async def prepare_submission(
        self,
        session: SelectionSession,
        month: Optional[str] = None,
        actor_id: Optional[str] = None,
    ) -> SubmissionRequest:
        """
        Construit la demande de soumission a partir du jeu en attente.

        Les resumes sont resolus contre le catalogue ; les retraits
        reprennent d'abord les entrees detenues, et le titre en attente
        sert de repli pour les videos introuvables.
        """
        changes = session.changes
        add_ids = tuple(changes.add)
        remove_ids = tuple(changes.remove)

        try:
            catalog_summaries = await self._catalog_repo.get_video_summaries(add_ids + remove_ids)
        except PersistenceError as e:
            logger.warning(f"Resumes des videos indisponibles: {e}")
            catalog_summaries = []
        by_id = {summary.video_id: summary for summary in catalog_summaries}
        owned_by_id = {entry.video_id: entry.to_summary() for entry in session.owned}

        added = _summaries(add_ids, changes.add, by_id)
        removed = _summaries(remove_ids, changes.remove, {**by_id, **owned_by_id})

        return SubmissionRequest(
            customer_id=session.customer_id,
            add_video_ids=add_ids,
            remove_video_ids=remove_ids,
            added_videos=added,
            removed_videos=removed,
            month=month,
            actor_id=actor_id,
        )

    async def submit(
        self,
        customer_id: str,
        month: Optional[str] = None,
        actor_id: Optional[str] = None,
    ) -> SubmissionResult:
        """Soumet le jeu en attente du client."""
        session = await self.load_session(customer_id)
        request = await self.prepare_submission(session, month=month, actor_id=actor_id)
        return await self._coordinator.submit(request, session.tracker)


def _summaries(
    video_ids: Iterable[str],
    titles: Mapping[str, str],
    known: dict[str, VideoSummary],
) -> tuple[VideoSummary, ...]:
    return tuple(
        known.get(video_id) or VideoSummary(video_id=video_id, title=titles.get(video_id, ""))
        for video_id in video_ids
    )
