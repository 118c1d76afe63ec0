"""
Modeles SQLModel pour la base de donnees VidSelect.

Ces modeles representent les tables de la base de donnees.
Ils sont distincts des entites de domaine (dataclass dans core/entities/)
selon l'architecture hexagonale.

Tables:
- batches: Catalogues mensuels publies
- videos: Videos d'un batch
- customer_current_list: Liste cumulative des clients (une ligne par video detenue)
- selection_history: Instantanes append-only des soumissions
- profiles: Profils (clients, administrateurs, uploaders)
- mail_rules: Destinataires des emails par evenement
- operation_logs: Journal d'audit

Les champs JSON (*_json) stockent des listes serialisees.
"""

from __future__ import annotations

import json
from datetime import datetime, timezone
from typing import Any
from uuid import uuid4

from sqlalchemy import UniqueConstraint
from sqlmodel import Field, SQLModel


def _new_id() -> str:
    return str(uuid4())


def _now() -> datetime:
    return datetime.now(timezone.utc)


class BatchModel(SQLModel, table=True):
    """Catalogue publie pour un mois (month au format YYYY-MM)."""

    __tablename__ = "batches"

    id: str = Field(default_factory=_new_id, primary_key=True)
    name: str
    month: str = Field(index=True)
    created_at: datetime | None = Field(default_factory=_now)


class VideoModel(SQLModel, table=True):
    """
    Video d'un batch.

    Le titre est indexe : c'est la cle d'identite entre les mois.
    """

    __tablename__ = "videos"

    id: str = Field(default_factory=_new_id, primary_key=True)
    batch_id: str | None = Field(default=None, foreign_key="batches.id", index=True)
    title: str = Field(default="", index=True)
    title_en: str | None = None
    thumbnail_url: str | None = None
    director: str | None = None
    cast_json: str | None = None  # JSON: ["Acteur 1", "Acteur 2"]
    duration: int | None = None  # minutes
    rating: str | None = None
    language: str | None = None
    subtitle: str | None = None

    @property
    def cast(self) -> list[str]:
        """Retourne les acteurs deserialises."""
        if self.cast_json:
            return json.loads(self.cast_json)
        return []


class CustomerListItemModel(SQLModel, table=True):
    """Entree de la liste cumulative, unique sur (customer_id, video_id)."""

    __tablename__ = "customer_current_list"
    __table_args__ = (UniqueConstraint("customer_id", "video_id", name="uq_customer_video"),)

    id: int | None = Field(default=None, primary_key=True)
    customer_id: str = Field(index=True)
    video_id: str = Field(index=True)
    added_from_month: str | None = None
    added_from_batch_id: str | None = None
    added_at: datetime | None = Field(default_factory=_now, index=True)


class SelectionHistoryModel(SQLModel, table=True):
    """Instantane d'une soumission (jamais modifie)."""

    __tablename__ = "selection_history"

    id: str = Field(default_factory=_new_id, primary_key=True)
    customer_id: str = Field(index=True)
    video_ids_json: str = "[]"  # JSON: ["id1", "id2"]
    added_videos_json: str = "[]"  # JSON: [{"video_id": ..., "title": ...}]
    removed_videos_json: str = "[]"
    total_count: int = 0
    added_count: int = 0
    removed_count: int = 0
    trigger_action: str = "submit"
    snapshot_date: datetime | None = Field(default_factory=_now, index=True)
    metadata_json: str | None = None

    @property
    def video_ids(self) -> list[str]:
        return json.loads(self.video_ids_json or "[]")

    @property
    def added_videos(self) -> list[dict[str, Any]]:
        return json.loads(self.added_videos_json or "[]")

    @property
    def removed_videos(self) -> list[dict[str, Any]]:
        return json.loads(self.removed_videos_json or "[]")


class ProfileModel(SQLModel, table=True):
    """Profil utilisateur."""

    __tablename__ = "profiles"

    id: str = Field(primary_key=True)
    name: str | None = None
    email: str | None = Field(default=None, index=True)
    role: str = "customer"


class MailRuleModel(SQLModel, table=True):
    """Destinataire d'un evenement email."""

    __tablename__ = "mail_rules"

    id: str = Field(default_factory=_new_id, primary_key=True)
    event_type: str = Field(index=True)
    recipient_email: str
    recipient_name: str | None = None
    created_by: str | None = None
    created_at: datetime | None = Field(default_factory=_now)


class OperationLogModel(SQLModel, table=True):
    """Entree du journal d'audit."""

    __tablename__ = "operation_logs"

    id: str = Field(default_factory=_new_id, primary_key=True)
    action: str = Field(index=True)
    actor_id: str | None = Field(default=None, index=True)
    actor_name: str | None = None
    actor_email: str | None = None
    resource_type: str | None = None
    resource_id: str | None = None
    description: str | None = None
    metadata_json: str | None = None
    created_at: datetime | None = Field(default_factory=_now, index=True)
