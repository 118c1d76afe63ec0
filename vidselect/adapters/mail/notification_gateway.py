"""
Passerelle de notification par email.

Implemente INotificationGateway : choisit les destinataires (regles de
mail, sinon email administrateur), rend le diff et l'envoie via Graph.
"""

from collections.abc import Callable
from datetime import datetime
from typing import Optional

from loguru import logger

from vidselect.adapters.mail.graph_client import GraphMailClient
from vidselect.adapters.mail.renderer import MailRenderer
from vidselect.config import Settings
from vidselect.core.entities import MailEventType
from vidselect.core.ports import (
    IMailRuleRepository,
    INotificationGateway,
    SelectionDiffNotification,
)
from vidselect.services.mail_rules import is_valid_email
from vidselect.services.pending_tracker import utcnow


def create_mail_client(settings: Settings) -> Optional[GraphMailClient]:
    """Client Graph si les identifiants sont configures, sinon None."""
    if not settings.mail_enabled:
        return None
    return GraphMailClient(
        tenant_id=settings.graph_tenant_id,
        client_id=settings.graph_client_id,
        client_secret=settings.graph_client_secret,
        sender=settings.mail_sender,
    )


class EmailNotificationGateway(INotificationGateway):
    """
    Envoi du diff d'une soumission par email.

    Sans client Graph, sans destinataire ou avec l'evenement desactive,
    l'envoi est ignore (journalise) : ce n'est pas une erreur.
    """

    def __init__(
        self,
        mail_client: Optional[GraphMailClient],
        mail_rule_repo: IMailRuleRepository,
        renderer: Optional[MailRenderer] = None,
        enabled: bool = True,
        admin_email: Optional[str] = None,
        frontend_url: Optional[str] = None,
        now_fn: Callable[[], datetime] = utcnow,
    ) -> None:
        self._mail_client = mail_client
        self._mail_rule_repo = mail_rule_repo
        self._renderer = renderer or MailRenderer()
        self._enabled = enabled
        self._admin_email = admin_email
        self._frontend_url = frontend_url
        self._now_fn = now_fn

    async def recipients(self) -> list[str]:
        """Destinataires de l'evenement selection_submitted."""
        rules = await self._mail_rule_repo.list_rules(MailEventType.SELECTION_SUBMITTED)
        emails = [r.recipient_email for r in rules if is_valid_email(r.recipient_email)]
        if not emails and is_valid_email(self._admin_email):
            emails = [self._admin_email]
        return list(dict.fromkeys(emails))

    async def send_selection_diff(self, notification: SelectionDiffNotification) -> None:
        """
        Envoie le diff aux destinataires configures.

        Raises:
            NotificationError: Si l'envoi Graph echoue
        """
        if not self._enabled:
            logger.debug("Notification selection_submitted desactivee")
            return
        if self._mail_client is None:
            logger.info("Envoi d'email non configure, notification ignoree")
            return

        recipients = await self.recipients()
        if not recipients:
            logger.warning("Aucun destinataire pour selection_submitted, notification ignoree")
            return

        subject, html = self._renderer.render_selection_diff(
            notification, submitted_at=self._now_fn(), frontend_url=self._frontend_url
        )
        await self._mail_client.send_mail(recipients, subject, html)
