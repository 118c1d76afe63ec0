"""
Gestion des destinataires des emails par type d'evenement.
"""

import re
from typing import Optional

from loguru import logger

from vidselect.core.entities import MailEventType, MailRule
from vidselect.core.errors import ValidationError
from vidselect.core.ports import IMailRuleRepository

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")


def is_valid_email(email: Optional[str]) -> bool:
    return bool(email) and EMAIL_PATTERN.match(email) is not None


class MailRuleService:
    """Ajout, suppression et consultation des regles de mail."""

    def __init__(self, mail_rule_repo: IMailRuleRepository) -> None:
        self._repo = mail_rule_repo

    async def list_rules(self, event_type: Optional[MailEventType] = None) -> list[MailRule]:
        return await self._repo.list_rules(event_type)

    async def add_rule(
        self,
        event_type: MailEventType | str,
        recipient_email: str,
        recipient_name: Optional[str] = None,
        created_by: Optional[str] = None,
    ) -> MailRule:
        """
        Ajoute un destinataire pour un evenement.

        Raises:
            ValidationError: Evenement inconnu ou email invalide
        """
        try:
            event = MailEventType(event_type)
        except ValueError as e:
            raise ValidationError(f"Evenement inconnu: {event_type}") from e

        email = (recipient_email or "").strip()
        if not is_valid_email(email):
            raise ValidationError(f"Email invalide: {recipient_email!r}")

        rule = await self._repo.save(
            MailRule(
                event_type=event,
                recipient_email=email,
                recipient_name=recipient_name,
                created_by=created_by,
            )
        )
        logger.info(f"Regle de mail ajoutee: {event.value} -> {email}")
        return rule

    async def remove_rule(self, rule_id: str) -> bool:
        removed = await self._repo.delete(rule_id)
        if removed:
            logger.info(f"Regle de mail supprimee: {rule_id}")
        return removed
