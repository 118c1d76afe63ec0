"""
Administration des listes client : vidage complet et historique.
"""

from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from loguru import logger

from vidselect.core.entities import SelectionHistorySnapshot, TriggerAction
from vidselect.core.errors import SelectionError, ValidationError
from vidselect.core.ports import (
    ICustomerListRepository,
    IPendingChangeStore,
    ISelectionHistoryRepository,
)
from vidselect.services.operation_log import (
    ACTION_LIST_CLEAR,
    RESOURCE_CUSTOMER_LIST,
    OperationLogRecorder,
)
from vidselect.services.pending_tracker import utcnow


@dataclass(frozen=True)
class ClearResult:
    """Resultat d'un vidage administratif."""

    customer_id: str
    removed_count: int
    snapshot_id: Optional[str] = None


class CustomerListAdminService:
    """
    Operations administratives sur la liste d'un client.

    Le vidage ecrit d'abord un instantane admin_clear (si la liste
    n'etait pas vide), supprime toutes les entrees puis le jeu en attente.
    """

    def __init__(
        self,
        customer_list_repo: ICustomerListRepository,
        history_repo: ISelectionHistoryRepository,
        pending_store: IPendingChangeStore,
        operation_log: Optional[OperationLogRecorder] = None,
        history_limit: int = 50,
        now_fn: Callable[[], datetime] = utcnow,
    ) -> None:
        self._list_repo = customer_list_repo
        self._history_repo = history_repo
        self._pending_store = pending_store
        self._operation_log = operation_log
        self._history_limit = history_limit
        self._now_fn = now_fn

    async def clear(self, customer_id: str, actor_id: Optional[str] = None) -> ClearResult:
        """
        Vide la liste d'un client.

        Raises:
            ValidationError: Client manquant
            PersistenceError: Le stockage a refuse la lecture ou la suppression
        """
        if not customer_id:
            raise ValidationError("customer_id manquant")

        entries = await self._list_repo.list_owned(customer_id)
        now = self._now_fn()
        snapshot_id = None

        if entries:
            snapshot = SelectionHistorySnapshot(
                customer_id=customer_id,
                video_ids=(),
                removed_videos=tuple(entry.to_summary() for entry in entries),
                total_count=0,
                added_count=0,
                removed_count=len(entries),
                trigger_action=TriggerAction.ADMIN_CLEAR,
                snapshot_date=now,
                metadata={"cleared_by": actor_id, "cleared_at": now.isoformat()},
            )
            try:
                snapshot_id = await self._history_repo.add(snapshot)
            except SelectionError as e:
                logger.warning(f"Instantane admin_clear non ecrit pour {customer_id}: {e}")

        removed = await self._list_repo.clear(customer_id)
        self._pending_store.delete(customer_id)
        logger.info(f"Liste de {customer_id} videe ({removed} video(s))")

        if self._operation_log is not None:
            await self._operation_log.record(
                action=ACTION_LIST_CLEAR,
                actor_id=actor_id,
                resource_type=RESOURCE_CUSTOMER_LIST,
                resource_id=customer_id,
                metadata={"customerId": customer_id, "removedCount": removed},
            )

        return ClearResult(customer_id=customer_id, removed_count=removed, snapshot_id=snapshot_id)

    async def list_history(
        self, customer_id: str, limit: Optional[int] = None
    ) -> list[SelectionHistorySnapshot]:
        """Instantanes du client, du plus recent au plus ancien."""
        return await self._history_repo.list_for_customer(
            customer_id, limit=limit or self._history_limit
        )
