"""
Entites peripheriques : profils clients, regles de mail, journal d'operations.
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Optional


class CustomerRole(str, Enum):
    """Role d'un profil."""

    ADMIN = "admin"
    UPLOADER = "uploader"
    CUSTOMER = "customer"


class MailEventType(str, Enum):
    """Evenements pouvant declencher un email."""

    SELECTION_SUBMITTED = "selection_submitted"
    BATCH_UPLOADED = "batch_uploaded"


@dataclass(frozen=True)
class Customer:
    """Profil d'un utilisateur du portail."""

    id: str
    name: Optional[str] = None
    email: Optional[str] = None
    role: CustomerRole = CustomerRole.CUSTOMER


@dataclass(frozen=True)
class MailRule:
    """Destinataire d'un type d'evenement email."""

    event_type: MailEventType
    recipient_email: str
    recipient_name: Optional[str] = None
    created_by: Optional[str] = None
    id: Optional[str] = None


@dataclass(frozen=True)
class OperationLog:
    """Entree du journal d'audit."""

    action: str
    actor_id: Optional[str] = None
    actor_name: Optional[str] = None
    actor_email: Optional[str] = None
    resource_type: Optional[str] = None
    resource_id: Optional[str] = None
    description: Optional[str] = None
    metadata: dict[str, Any] = field(default_factory=dict)
    created_at: Optional[datetime] = None
    id: Optional[str] = None
