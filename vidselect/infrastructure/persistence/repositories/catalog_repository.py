"""
Implementation SQLModel du repository du catalogue.

Lecture des batches mensuels et de leurs videos, et enregistrement
d'un catalogue par l'import administratif.
"""

import json
from collections.abc import Sequence
from typing import Optional

from sqlmodel import Session, col, select

from vidselect.core.entities import Batch, MonthlyCatalog, Video, VideoSummary
from vidselect.core.ports.repositories import ICatalogRepository
from vidselect.infrastructure.persistence.models import BatchModel, VideoModel
from vidselect.infrastructure.persistence.repositories.base import as_utc, persistence_errors


class SQLModelCatalogRepository(ICatalogRepository):
    """
    Repository SQLModel pour les batches et les videos.

    Convertit entre entites (Batch, Video) et modeles (BatchModel, VideoModel).
    """

    def __init__(self, session: Session) -> None:
        """
        Initialise le repository avec une session SQLModel.

        Args :
            session : Session SQLModel active pour les operations DB
        """
        self._session = session

    def _batch_to_entity(self, model: BatchModel) -> Batch:
        return Batch(
            id=model.id,
            name=model.name,
            month=model.month,
            created_at=as_utc(model.created_at),
        )

    def _video_to_entity(self, model: VideoModel) -> Video:
        return Video(
            id=model.id,
            title=model.title or "",
            title_en=model.title_en,
            thumbnail_url=model.thumbnail_url,
            batch_id=model.batch_id,
            director=model.director,
            cast=tuple(model.cast),
            duration=model.duration,
            rating=model.rating,
            language=model.language,
            subtitle=model.subtitle,
        )

    def _video_to_model(self, entity: Video, batch_id: str) -> VideoModel:
        model = VideoModel(
            id=entity.id,
            batch_id=batch_id,
            title=entity.title,
            title_en=entity.title_en,
            thumbnail_url=entity.thumbnail_url,
            director=entity.director,
            cast_json=json.dumps(list(entity.cast)) if entity.cast else None,
            duration=entity.duration,
            rating=entity.rating,
            language=entity.language,
            subtitle=entity.subtitle,
        )
        return model

    async def list_months(self) -> list[str]:
        """Mois distincts des batches, du plus recent au plus ancien."""
        with persistence_errors(self._session, "liste des mois"):
            statement = select(BatchModel.month).distinct().order_by(col(BatchModel.month).desc())
            return [month for month in self._session.exec(statement).all() if month]

    async def get_catalog_for_month(self, month: str) -> MonthlyCatalog:
        """Batch le plus recent du mois et ses videos (triees par titre)."""
        with persistence_errors(self._session, f"catalogue {month}"):
            statement = (
                select(BatchModel)
                .where(BatchModel.month == month)
                .order_by(col(BatchModel.created_at).desc())
            )
            batch = self._session.exec(statement).first()
            if batch is None:
                return MonthlyCatalog()

            videos = self._session.exec(
                select(VideoModel)
                .where(VideoModel.batch_id == batch.id)
                .order_by(VideoModel.title)
            ).all()
            return MonthlyCatalog(
                batch=self._batch_to_entity(batch),
                videos=[self._video_to_entity(v) for v in videos],
            )

    async def get_videos_by_ids(self, video_ids: Sequence[str]) -> list[Video]:
        if not video_ids:
            return []
        with persistence_errors(self._session, "lecture des videos"):
            models = self._session.exec(
                select(VideoModel).where(col(VideoModel.id).in_(list(video_ids)))
            ).all()
            by_id = {m.id: self._video_to_entity(m) for m in models}
            return [by_id[vid] for vid in video_ids if vid in by_id]

    async def get_video_summaries(self, video_ids: Sequence[str]) -> list[VideoSummary]:
        """Resumes dans l'ordre demande ; les ids inconnus sont ignores."""
        if not video_ids:
            return []
        with persistence_errors(self._session, "resumes des videos"):
            statement = (
                select(VideoModel, BatchModel)
                .join(BatchModel, VideoModel.batch_id == BatchModel.id, isouter=True)
                .where(col(VideoModel.id).in_(list(video_ids)))
            )
            rows = self._session.exec(statement).all()
            by_id = {
                video.id: VideoSummary(
                    video_id=video.id,
                    title=video.title or "",
                    title_en=video.title_en,
                    thumbnail_url=video.thumbnail_url,
                    month=batch.month if batch else None,
                )
                for video, batch in rows
            }
            return [by_id[vid] for vid in video_ids if vid in by_id]

    async def get_batch_for_video(self, video_id: str) -> Optional[Batch]:
        with persistence_errors(self._session, f"batch de la video {video_id}"):
            statement = (
                select(BatchModel)
                .join(VideoModel, VideoModel.batch_id == BatchModel.id)
                .where(VideoModel.id == video_id)
            )
            model = self._session.exec(statement).first()
            return self._batch_to_entity(model) if model else None

    async def save_catalog(self, batch: Batch, videos: Sequence[Video]) -> MonthlyCatalog:
        """Insere ou met a jour le batch et ses videos (cle : id)."""
        with persistence_errors(self._session, f"import du batch {batch.id}"):
            existing = self._session.get(BatchModel, batch.id)
            if existing:
                existing.name = batch.name
                existing.month = batch.month
                self._session.add(existing)
            else:
                model = BatchModel(id=batch.id, name=batch.name, month=batch.month)
                if batch.created_at:
                    model.created_at = batch.created_at
                self._session.add(model)

            for video in videos:
                self._session.merge(self._video_to_model(video, batch.id))

            self._session.commit()

        return await self.get_catalog_for_month(batch.month)
