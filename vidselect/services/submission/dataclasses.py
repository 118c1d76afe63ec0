"""
Dataclasses et enums de la soumission d'une liste client.
"""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Optional

from vidselect.core.entities import VideoSummary


class SubmissionOutcome(str, Enum):
    """Issue d'une soumission."""

    SUBMITTED = "submitted"
    NOTHING_TO_SUBMIT = "nothing_to_submit"


@dataclass(frozen=True)
class SubmissionRequest:
    """
    Changements a rendre durables pour un client.

    Attributs :
        customer_id : Client qui soumet
        add_video_ids : Ids a ajouter a la liste detenue
        remove_video_ids : Ids a retirer de la liste detenue
        added_videos : Resumes des videos ajoutees (resolus contre le catalogue)
        removed_videos : Resumes des videos retirees
        month : Mois d'origine des ajouts (deduit du batch si absent)
        batch_id : Batch d'origine des ajouts (deduit si absent)
        actor_id : Auteur de la soumission pour l'audit (client par defaut)
    """

    customer_id: str
    add_video_ids: tuple[str, ...] = ()
    remove_video_ids: tuple[str, ...] = ()
    added_videos: tuple[VideoSummary, ...] = ()
    removed_videos: tuple[VideoSummary, ...] = ()
    month: Optional[str] = None
    batch_id: Optional[str] = None
    actor_id: Optional[str] = None

    @property
    def is_empty(self) -> bool:
        return not self.add_video_ids and not self.remove_video_ids


@dataclass
class SubmissionContext:
    """Etat partage entre les etapes d'une soumission."""

    request: SubmissionRequest
    submitted_at: datetime
    added_videos: tuple[VideoSummary, ...] = ()
    removed_videos: tuple[VideoSummary, ...] = ()
    removed_count: int = 0
    added_count: int = 0
    added_from_month: Optional[str] = None
    video_ids: Optional[list[str]] = None
    snapshot_id: Optional[str] = None
    notified: bool = False
    warnings: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class PipelineStep:
    """
    Etape de la soumission.

    Une etape critique interrompt la soumission et propage son erreur ;
    une etape non critique est journalisee et ignoree en cas d'echec.
    """

    name: str
    critical: bool
    run: Callable[[SubmissionContext], Awaitable[None]]


@dataclass(frozen=True)
class SubmissionResult:
    """Resultat retourne a l'appelant."""

    outcome: SubmissionOutcome
    customer_id: str
    added_count: int = 0
    removed_count: int = 0
    total_count: Optional[int] = None
    added_from_month: Optional[str] = None
    snapshot_id: Optional[str] = None
    notified: bool = False
    warnings: tuple[str, ...] = ()

    @property
    def submitted(self) -> bool:
        return self.outcome is SubmissionOutcome.SUBMITTED
