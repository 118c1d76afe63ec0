"""
Enregistrement du journal d'audit.

L'audit est best-effort : un echec d'ecriture est journalise et n'est
jamais propage a l'action auditee. Une action sans auteur n'est pas
enregistree.
"""

from collections.abc import Callable
from datetime import datetime
from typing import Any, Optional

from loguru import logger

from vidselect.core.entities import Customer, OperationLog
from vidselect.core.errors import PersistenceError
from vidselect.core.ports import ICustomerRepository, IOperationLogRepository
from vidselect.services.pending_tracker import utcnow

# Actions auditees
ACTION_LIST_SUBMIT = "customer_list.submit"
ACTION_LIST_CLEAR = "customer_list.clear"
RESOURCE_CUSTOMER_LIST = "customer_list"


class OperationLogRecorder:
    """Service d'ecriture du journal d'audit."""

    def __init__(
        self,
        log_repo: IOperationLogRepository,
        customer_repo: ICustomerRepository,
        now_fn: Callable[[], datetime] = utcnow,
    ) -> None:
        self._log_repo = log_repo
        self._customer_repo = customer_repo
        self._now_fn = now_fn

    async def record(
        self,
        action: str,
        actor_id: Optional[str],
        resource_type: Optional[str] = None,
        resource_id: Optional[str] = None,
        description: Optional[str] = None,
        metadata: Optional[dict[str, Any]] = None,
    ) -> Optional[str]:
        """
        Enregistre une action.

        Args:
            action: Code de l'action (ex: customer_list.submit)
            actor_id: Auteur de l'action (ignore si absent)
            resource_type: Type de ressource concernee
            resource_id: Id de la ressource concernee
            description: Description lisible
            metadata: Donnees libres

        Returns:
            L'id de l'entree creee, ou None si rien n'a ete ecrit
        """
        if not action or not actor_id:
            logger.debug(f"Audit ignore (action ou auteur manquant): {action}")
            return None

        try:
            actor = await self._customer_repo.get_by_id(actor_id)
            log = OperationLog(
                action=action,
                actor_id=actor_id,
                actor_name=actor.name if actor else None,
                actor_email=actor.email if actor else None,
                resource_type=resource_type,
                resource_id=resource_id,
                description=description or _describe(action, actor),
                metadata=metadata or {},
                created_at=self._now_fn(),
            )
            return await self._log_repo.add(log)
        except PersistenceError as e:
            logger.warning(f"Ecriture du journal d'audit impossible ({action}): {e}")
            return None


def _describe(action: str, actor: Optional[Customer]) -> str:
    who = (actor.name or actor.email or actor.id) if actor else "inconnu"
    return f"{who}: {action}"
