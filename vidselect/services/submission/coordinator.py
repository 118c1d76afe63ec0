"""
Coordination de la soumission d'une liste client.

La soumission est un petit pipeline ordonne. Chaque etape porte un
drapeau critique :

1. apply_removals (critique) : supprime les entrees retirees
2. apply_additions (critique) : upsert des entrees ajoutees
3. write_history (non critique) : instantane de la liste resultante
4. notify (non critique) : diff transmis a la passerelle de notification
5. record_operation_log (non critique) : journal d'audit

Le succes visible par le client ne depend que des etapes 1 et 2. Les
etapes suivantes sont tentees de facon synchrone avant le retour, pour
un ordre deterministe. Le tracker du client n'est vide qu'apres succes
des etapes critiques ; en cas d'echec il est laisse intact.

Les soumissions d'un meme client doivent etre serialisees par
l'appelant : aucun verrou ni controle de version n'est applique.
"""

from collections.abc import Callable, Sequence
from datetime import datetime
from typing import Any, Optional

from loguru import logger

from vidselect.core.errors import SelectionError, UnexpectedError, ValidationError
from vidselect.core.entities import SelectionHistorySnapshot, TriggerAction
from vidselect.core.ports import (
    ICatalogRepository,
    ICustomerListRepository,
    ICustomerRepository,
    INotificationGateway,
    ISelectionHistoryRepository,
    SelectionDiffNotification,
)
from vidselect.services.operation_log import (
    ACTION_LIST_SUBMIT,
    RESOURCE_CUSTOMER_LIST,
    OperationLogRecorder,
)
from vidselect.services.pending_tracker import PendingChangeTracker, utcnow

from .dataclasses import (
    PipelineStep,
    SubmissionContext,
    SubmissionOutcome,
    SubmissionRequest,
    SubmissionResult,
)
from .summaries import dedupe_by_title, unique_ids


def _validate_ids(name: str, video_ids: Any) -> tuple[str, ...]:
    if isinstance(video_ids, (str, bytes)) or not isinstance(video_ids, Sequence):
        raise ValidationError(f"{name} doit etre une liste d'ids")
    for video_id in video_ids:
        if not isinstance(video_id, str) or not video_id.strip():
            raise ValidationError(f"{name} contient un id invalide: {video_id!r}")
    return unique_ids(video_ids)


def validate_request(request: SubmissionRequest) -> SubmissionRequest:
    """
    Verifie et normalise une demande de soumission.

    Raises:
        ValidationError: Client manquant, listes malformees, ou id present
            a la fois dans les ajouts et les retraits
    """
    if not isinstance(request.customer_id, str) or not request.customer_id.strip():
        raise ValidationError("customer_id manquant")

    add_ids = _validate_ids("add_video_ids", request.add_video_ids)
    remove_ids = _validate_ids("remove_video_ids", request.remove_video_ids)

    overlap = set(add_ids) & set(remove_ids)
    if overlap:
        raise ValidationError(f"Ids a la fois ajoutes et retires: {sorted(overlap)}")

    return SubmissionRequest(
        customer_id=request.customer_id,
        add_video_ids=add_ids,
        remove_video_ids=remove_ids,
        added_videos=tuple(request.added_videos),
        removed_videos=tuple(request.removed_videos),
        month=request.month,
        batch_id=request.batch_id,
        actor_id=request.actor_id,
    )


class SubmissionCoordinator:
    """
    Transforme un jeu en attente en mise a jour durable, audit et notification.

    Example:
        coordinator = SubmissionCoordinator(
            customer_list_repo=list_repo,
            history_repo=history_repo,
            catalog_repo=catalog_repo,
            customer_repo=customer_repo,
            notifier=gateway,
        )
        result = await coordinator.submit(request, tracker)
    """

    def __init__(
        self,
        customer_list_repo: ICustomerListRepository,
        history_repo: ISelectionHistoryRepository,
        catalog_repo: ICatalogRepository,
        customer_repo: ICustomerRepository,
        notifier: INotificationGateway,
        operation_log: Optional[OperationLogRecorder] = None,
        now_fn: Callable[[], datetime] = utcnow,
    ) -> None:
        """
        Initialise le coordinateur.

        Args:
            customer_list_repo: Stockage de la liste detenue
            history_repo: Stockage de l'historique des soumissions
            catalog_repo: Catalogue (deduction du mois d'origine)
            customer_repo: Profils (identite pour la notification)
            notifier: Passerelle de notification
            operation_log: Journal d'audit (optionnel)
            now_fn: Horloge injectee (tests)
        """
        self._list_repo = customer_list_repo
        self._history_repo = history_repo
        self._catalog_repo = catalog_repo
        self._customer_repo = customer_repo
        self._notifier = notifier
        self._operation_log = operation_log
        self._now_fn = now_fn

    def pipeline(self) -> list[PipelineStep]:
        """Etapes ordonnees de la soumission."""
        steps = [
            PipelineStep("apply_removals", critical=True, run=self._apply_removals),
            PipelineStep("apply_additions", critical=True, run=self._apply_additions),
            PipelineStep("write_history", critical=False, run=self._write_history),
            PipelineStep("notify", critical=False, run=self._notify),
        ]
        if self._operation_log is not None:
            steps.append(
                PipelineStep("record_operation_log", critical=False, run=self._record_operation_log)
            )
        return steps

    async def submit(
        self,
        request: SubmissionRequest,
        tracker: Optional[PendingChangeTracker] = None,
    ) -> SubmissionResult:
        """
        Execute la soumission.

        Args:
            request: Changements a appliquer
            tracker: Tracker du client, vide apres succes des etapes critiques

        Returns:
            SubmissionResult (NOTHING_TO_SUBMIT si aucun changement)

        Raises:
            ValidationError: Demande invalide
            PersistenceError: Le stockage a rejete un retrait ou un ajout
            UnexpectedError: Toute autre erreur d'une etape critique
        """
        request = validate_request(request)

        if request.is_empty:
            logger.info(f"Rien a soumettre pour {request.customer_id}")
            return SubmissionResult(
                outcome=SubmissionOutcome.NOTHING_TO_SUBMIT,
                customer_id=request.customer_id,
            )

        context = SubmissionContext(
            request=request,
            submitted_at=self._now_fn(),
            added_videos=dedupe_by_title(request.added_videos),
            removed_videos=dedupe_by_title(request.removed_videos),
        )
        logger.info(
            f"Soumission de {request.customer_id}: "
            f"+{len(request.add_video_ids)} / -{len(request.remove_video_ids)}"
        )

        for step in self.pipeline():
            try:
                await step.run(context)
            except SelectionError as e:
                if step.critical:
                    logger.error(f"Soumission interrompue a l'etape {step.name}: {e}")
                    raise
                self._record_warning(context, step, e)
            except Exception as e:
                if step.critical:
                    logger.exception(f"Erreur inattendue a l'etape {step.name}")
                    raise UnexpectedError(f"Echec de l'etape {step.name}: {e}") from e
                self._record_warning(context, step, e)

        if tracker is not None:
            tracker.clear()

        return SubmissionResult(
            outcome=SubmissionOutcome.SUBMITTED,
            customer_id=request.customer_id,
            added_count=context.added_count,
            removed_count=context.removed_count,
            total_count=len(context.video_ids) if context.video_ids is not None else None,
            added_from_month=context.added_from_month,
            snapshot_id=context.snapshot_id,
            notified=context.notified,
            warnings=tuple(context.warnings),
        )

    @staticmethod
    def _record_warning(context: SubmissionContext, step: PipelineStep, error: Exception) -> None:
        logger.opt(exception=error).warning(
            f"Etape non critique {step.name} en echec pour {context.request.customer_id}: {error}"
        )
        context.warnings.append(f"{step.name}: {error}")

    # ------------------------------------------------------------------
    # Etapes
    # ------------------------------------------------------------------

    async def _apply_removals(self, context: SubmissionContext) -> None:
        request = context.request
        if not request.remove_video_ids:
            return
        await self._list_repo.remove_videos(request.customer_id, request.remove_video_ids)
        context.removed_count = len(request.remove_video_ids)

    async def _apply_additions(self, context: SubmissionContext) -> None:
        request = context.request
        if not request.add_video_ids:
            return

        month = request.month
        batch_id = request.batch_id
        if month is None or batch_id is None:
            batch = await self._catalog_repo.get_batch_for_video(request.add_video_ids[0])
            if batch is not None:
                month = month or batch.month
                batch_id = batch_id or batch.id

        await self._list_repo.upsert_videos(
            request.customer_id,
            request.add_video_ids,
            added_from_month=month,
            added_from_batch_id=batch_id,
            added_at=context.submitted_at,
        )
        context.added_count = len(request.add_video_ids)
        context.added_from_month = month

    async def _read_back(self, context: SubmissionContext) -> list[str]:
        if context.video_ids is None:
            entries = await self._list_repo.list_owned(context.request.customer_id)
            context.video_ids = [entry.video_id for entry in entries]
        return context.video_ids

    async def _write_history(self, context: SubmissionContext) -> None:
        request = context.request
        video_ids = await self._read_back(context)
        snapshot = SelectionHistorySnapshot(
            customer_id=request.customer_id,
            video_ids=tuple(video_ids),
            added_videos=context.added_videos,
            removed_videos=context.removed_videos,
            total_count=len(video_ids),
            added_count=len(context.added_videos),
            removed_count=len(context.removed_videos),
            trigger_action=TriggerAction.SUBMIT,
            snapshot_date=context.submitted_at,
            metadata={
                "submitted_by": request.actor_id or request.customer_id,
                "submitted_at": context.submitted_at.isoformat(),
            },
        )
        context.snapshot_id = await self._history_repo.add(snapshot)

    async def _notify(self, context: SubmissionContext) -> None:
        request = context.request
        video_ids = await self._read_back(context)
        customer = await self._customer_repo.get_by_id(request.customer_id)
        notification = SelectionDiffNotification(
            customer_id=request.customer_id,
            customer_name=(customer.name if customer and customer.name else request.customer_id),
            customer_email=customer.email if customer else None,
            total_count=len(video_ids),
            added_videos=context.added_videos,
            removed_videos=context.removed_videos,
        )
        await self._notifier.send_selection_diff(notification)
        context.notified = True

    async def _record_operation_log(self, context: SubmissionContext) -> None:
        request = context.request
        await self._operation_log.record(
            action=ACTION_LIST_SUBMIT,
            actor_id=request.actor_id or request.customer_id,
            resource_type=RESOURCE_CUSTOMER_LIST,
            resource_id=request.customer_id,
            metadata={
                "customerId": request.customer_id,
                "totalCount": len(context.video_ids) if context.video_ids is not None else None,
                "addedCount": context.added_count,
                "removedCount": context.removed_count,
                "month": context.added_from_month,
            },
        )
