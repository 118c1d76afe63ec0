"""
Schemas pydantic de l'API JSON.

Les champs sont exposes en camelCase (videoId, addedFromMonth...).
"""

from datetime import datetime
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from vidselect.core.entities import (
    Batch,
    OwnedEntry,
    SelectionHistorySnapshot,
    Video,
    VideoSummary,
)
from vidselect.core.value_objects import DisplayState
from vidselect.services.reconciler import PendingSummary
from vidselect.services.submission import SubmissionResult


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def dump(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True, mode="json")


# Requetes


class ToggleRequest(CamelModel):
    video_id: str


class SubmitRequest(CamelModel):
    month: Optional[str] = None
    actor_id: Optional[str] = None


# Reponses


class BatchOut(CamelModel):
    id: str
    name: str
    month: str

    @classmethod
    def from_entity(cls, batch: Batch) -> "BatchOut":
        return cls(id=batch.id, name=batch.name, month=batch.month)


class VideoOut(CamelModel):
    id: str
    title: str
    title_en: Optional[str] = None
    thumbnail_url: Optional[str] = None
    batch_id: Optional[str] = None
    director: Optional[str] = None
    cast: list[str] = []
    duration: Optional[int] = None
    rating: Optional[str] = None
    language: Optional[str] = None
    subtitle: Optional[str] = None
    state: Optional[DisplayState] = None

    @classmethod
    def from_entity(cls, video: Video, state: Optional[DisplayState] = None) -> "VideoOut":
        return cls(
            id=video.id,
            title=video.title,
            title_en=video.title_en,
            thumbnail_url=video.thumbnail_url,
            batch_id=video.batch_id,
            director=video.director,
            cast=list(video.cast),
            duration=video.duration,
            rating=video.rating,
            language=video.language,
            subtitle=video.subtitle,
            state=state,
        )


class SummaryOut(CamelModel):
    current_total: int
    new_total: int
    added_count: int
    removed_count: int

    @classmethod
    def from_summary(cls, summary: PendingSummary) -> "SummaryOut":
        return cls(
            current_total=summary.current_total,
            new_total=summary.new_total,
            added_count=summary.added_count,
            removed_count=summary.removed_count,
        )


class OwnedEntryOut(CamelModel):
    video_id: str
    title: str
    title_en: Optional[str] = None
    thumbnail_url: Optional[str] = None
    added_from_month: Optional[str] = None
    added_at: Optional[datetime] = None

    @classmethod
    def from_entity(cls, entry: OwnedEntry) -> "OwnedEntryOut":
        return cls(
            video_id=entry.video_id,
            title=entry.title,
            title_en=entry.title_en,
            thumbnail_url=entry.thumbnail_url,
            added_from_month=entry.added_from_month,
            added_at=entry.added_at,
        )


class VideoSummaryOut(CamelModel):
    video_id: str
    title: str
    title_en: Optional[str] = None
    thumbnail_url: Optional[str] = None
    month: Optional[str] = None

    @classmethod
    def from_entity(cls, summary: VideoSummary) -> "VideoSummaryOut":
        return cls(**summary.to_dict())


class SnapshotOut(CamelModel):
    id: Optional[str] = None
    video_ids: list[str]
    added_videos: list[VideoSummaryOut]
    removed_videos: list[VideoSummaryOut]
    total_count: int
    added_count: int
    removed_count: int
    trigger_action: str
    snapshot_date: Optional[datetime] = None
    metadata: dict[str, Any] = {}

    @classmethod
    def from_entity(cls, snapshot: SelectionHistorySnapshot) -> "SnapshotOut":
        return cls(
            id=snapshot.id,
            video_ids=list(snapshot.video_ids),
            added_videos=[VideoSummaryOut.from_entity(s) for s in snapshot.added_videos],
            removed_videos=[VideoSummaryOut.from_entity(s) for s in snapshot.removed_videos],
            total_count=snapshot.total_count,
            added_count=snapshot.added_count,
            removed_count=snapshot.removed_count,
            trigger_action=snapshot.trigger_action.value,
            snapshot_date=snapshot.snapshot_date,
            metadata=snapshot.metadata,
        )


class SubmissionOut(CamelModel):
    outcome: str
    added: int
    removed: int
    total_count: Optional[int] = None
    added_from_month: Optional[str] = None
    snapshot_id: Optional[str] = None
    notified: bool = False
    warnings: list[str] = []

    @classmethod
    def from_result(cls, result: SubmissionResult) -> "SubmissionOut":
        return cls(
            outcome=result.outcome.value,
            added=result.added_count,
            removed=result.removed_count,
            total_count=result.total_count,
            added_from_month=result.added_from_month,
            snapshot_id=result.snapshot_id,
            notified=result.notified,
            warnings=list(result.warnings),
        )


def ok(data: Any) -> dict[str, Any]:
    """Enveloppe des reponses reussies."""
    return {"success": True, "data": data}
