"""
Entites de la liste cumulative d'un client.

- OwnedEntry : une video actuellement detenue par le client (source de verite)
- VideoSummary : resume denormalise d'une video pour l'historique et l'email
- SelectionHistorySnapshot : instantane immuable cree a chaque soumission
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Optional


class TriggerAction(str, Enum):
    """Origine d'un instantane d'historique."""

    SUBMIT = "submit"
    ADMIN_CLEAR = "admin_clear"


@dataclass(frozen=True)
class OwnedEntry:
    """
    Paire (client, video) presente dans la liste cumulative.

    Le titre est conserve avec l'entree car l'id seul ne permet pas
    de reconnaitre la meme video dans le batch d'un autre mois.

    Attributs :
        customer_id : Client proprietaire
        video_id : Video detenue
        title : Titre de la video au moment de l'ajout
        title_en : Titre anglais
        thumbnail_url : Vignette
        added_from_month : Mois du batch d'ou la video a ete ajoutee
        added_from_batch_id : Batch d'ou la video a ete ajoutee
        added_at : Date d'ajout
    """

    customer_id: str
    video_id: str
    title: str = ""
    title_en: Optional[str] = None
    thumbnail_url: Optional[str] = None
    added_from_month: Optional[str] = None
    added_from_batch_id: Optional[str] = None
    added_at: Optional[datetime] = None

    def to_summary(self) -> "VideoSummary":
        return VideoSummary(
            video_id=self.video_id,
            title=self.title,
            title_en=self.title_en,
            thumbnail_url=self.thumbnail_url,
            month=self.added_from_month,
        )


@dataclass(frozen=True)
class VideoSummary:
    """Resume d'une video utilise dans les diffs d'historique et d'email."""

    video_id: str
    title: str = ""
    title_en: Optional[str] = None
    thumbnail_url: Optional[str] = None
    month: Optional[str] = None

    def to_dict(self) -> dict[str, Any]:
        """Forme JSON stockee dans l'historique."""
        return {
            "video_id": self.video_id,
            "title": self.title,
            "title_en": self.title_en,
            "thumbnail_url": self.thumbnail_url,
            "month": self.month,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "VideoSummary":
        return cls(
            video_id=str(data.get("video_id", "")),
            title=data.get("title") or "",
            title_en=data.get("title_en"),
            thumbnail_url=data.get("thumbnail_url"),
            month=data.get("month"),
        )


@dataclass(frozen=True)
class SelectionHistorySnapshot:
    """
    Instantane immuable d'une soumission (append-only).

    Attributs :
        customer_id : Client concerne
        video_ids : Liste complete des videos detenues apres la soumission
        added_videos : Resumes des videos ajoutees (dedoublonnes par titre)
        removed_videos : Resumes des videos retirees (dedoublonnes par titre)
        total_count, added_count, removed_count : Compteurs
        trigger_action : submit ou admin_clear
        snapshot_date : Date de l'instantane
        metadata : Informations libres (auteur de la soumission...)
        id : Identifiant attribue par le stockage
    """

    customer_id: str
    video_ids: tuple[str, ...] = ()
    added_videos: tuple[VideoSummary, ...] = ()
    removed_videos: tuple[VideoSummary, ...] = ()
    total_count: int = 0
    added_count: int = 0
    removed_count: int = 0
    trigger_action: TriggerAction = TriggerAction.SUBMIT
    snapshot_date: Optional[datetime] = None
    metadata: dict[str, Any] = field(default_factory=dict)
    id: Optional[str] = None
