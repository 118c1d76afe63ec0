"""
Implementations SQLModel des repositories peripheriques.

- SQLModelCustomerRepository : profils
- SQLModelMailRuleRepository : destinataires des emails
- SQLModelOperationLogRepository : journal d'audit
"""

import json
from typing import Optional

from sqlmodel import Session, select

from vidselect.core.entities import (
    Customer,
    CustomerRole,
    MailEventType,
    MailRule,
    OperationLog,
)
from vidselect.core.ports.repositories import (
    ICustomerRepository,
    IMailRuleRepository,
    IOperationLogRepository,
)
from vidselect.infrastructure.persistence.models import (
    MailRuleModel,
    OperationLogModel,
    ProfileModel,
)
from vidselect.infrastructure.persistence.repositories.base import persistence_errors


class SQLModelCustomerRepository(ICustomerRepository):
    """Repository SQLModel des profils."""

    def __init__(self, session: Session) -> None:
        self._session = session

    def _to_entity(self, model: ProfileModel) -> Customer:
        return Customer(
            id=model.id,
            name=model.name,
            email=model.email,
            role=CustomerRole(model.role),
        )

    async def get_by_id(self, customer_id: str) -> Optional[Customer]:
        with persistence_errors(self._session, f"profil {customer_id}"):
            model = self._session.get(ProfileModel, customer_id)
            return self._to_entity(model) if model else None

    async def save(self, customer: Customer) -> Customer:
        """Sauvegarde un profil (insertion ou mise a jour)."""
        with persistence_errors(self._session, f"sauvegarde du profil {customer.id}"):
            model = self._session.get(ProfileModel, customer.id)
            if model is None:
                model = ProfileModel(id=customer.id)
            model.name = customer.name
            model.email = customer.email
            model.role = customer.role.value
            self._session.add(model)
            self._session.commit()
            self._session.refresh(model)
            return self._to_entity(model)


class SQLModelMailRuleRepository(IMailRuleRepository):
    """Repository SQLModel des regles de mail."""

    def __init__(self, session: Session) -> None:
        self._session = session

    def _to_entity(self, model: MailRuleModel) -> MailRule:
        return MailRule(
            id=model.id,
            event_type=MailEventType(model.event_type),
            recipient_email=model.recipient_email,
            recipient_name=model.recipient_name,
            created_by=model.created_by,
        )

    async def list_rules(self, event_type: Optional[MailEventType] = None) -> list[MailRule]:
        with persistence_errors(self._session, "liste des regles de mail"):
            statement = select(MailRuleModel).order_by(MailRuleModel.created_at)
            if event_type is not None:
                statement = statement.where(MailRuleModel.event_type == event_type.value)
            return [self._to_entity(m) for m in self._session.exec(statement).all()]

    async def save(self, rule: MailRule) -> MailRule:
        with persistence_errors(self._session, "sauvegarde d'une regle de mail"):
            model = MailRuleModel(
                event_type=rule.event_type.value,
                recipient_email=rule.recipient_email,
                recipient_name=rule.recipient_name,
                created_by=rule.created_by,
            )
            if rule.id:
                model.id = rule.id
            self._session.add(model)
            self._session.commit()
            self._session.refresh(model)
            return self._to_entity(model)

    async def delete(self, rule_id: str) -> bool:
        """Supprime une regle par ID. Retourne True si supprimee."""
        with persistence_errors(self._session, f"suppression de la regle {rule_id}"):
            model = self._session.get(MailRuleModel, rule_id)
            if model:
                self._session.delete(model)
                self._session.commit()
                return True
            return False


class SQLModelOperationLogRepository(IOperationLogRepository):
    """Repository SQLModel du journal d'audit."""

    def __init__(self, session: Session) -> None:
        self._session = session

    async def add(self, log: OperationLog) -> str:
        with persistence_errors(self._session, f"journal {log.action}"):
            model = OperationLogModel(
                action=log.action,
                actor_id=log.actor_id,
                actor_name=log.actor_name,
                actor_email=log.actor_email,
                resource_type=log.resource_type,
                resource_id=log.resource_id,
                description=log.description,
                metadata_json=json.dumps(log.metadata, default=str) if log.metadata else None,
            )
            if log.created_at:
                model.created_at = log.created_at
            self._session.add(model)
            self._session.commit()
            self._session.refresh(model)
            return model.id
