"""
Implementation SQLModel de l'historique des soumissions (append-only).
"""

import json

from sqlmodel import Session, col, select

from vidselect.core.entities import SelectionHistorySnapshot, TriggerAction, VideoSummary
from vidselect.core.ports.repositories import ISelectionHistoryRepository
from vidselect.infrastructure.persistence.models import SelectionHistoryModel
from vidselect.infrastructure.persistence.repositories.base import as_utc, persistence_errors


class SQLModelSelectionHistoryRepository(ISelectionHistoryRepository):
    """Repository SQLModel des instantanes de soumission."""

    def __init__(self, session: Session) -> None:
        self._session = session

    def _to_entity(self, model: SelectionHistoryModel) -> SelectionHistorySnapshot:
        return SelectionHistorySnapshot(
            id=model.id,
            customer_id=model.customer_id,
            video_ids=tuple(model.video_ids),
            added_videos=tuple(VideoSummary.from_dict(d) for d in model.added_videos),
            removed_videos=tuple(VideoSummary.from_dict(d) for d in model.removed_videos),
            total_count=model.total_count,
            added_count=model.added_count,
            removed_count=model.removed_count,
            trigger_action=TriggerAction(model.trigger_action),
            snapshot_date=as_utc(model.snapshot_date),
            metadata=json.loads(model.metadata_json) if model.metadata_json else {},
        )

    def _to_model(self, entity: SelectionHistorySnapshot) -> SelectionHistoryModel:
        model = SelectionHistoryModel(
            customer_id=entity.customer_id,
            video_ids_json=json.dumps(list(entity.video_ids)),
            added_videos_json=json.dumps([s.to_dict() for s in entity.added_videos]),
            removed_videos_json=json.dumps([s.to_dict() for s in entity.removed_videos]),
            total_count=entity.total_count,
            added_count=entity.added_count,
            removed_count=entity.removed_count,
            trigger_action=entity.trigger_action.value,
            metadata_json=json.dumps(entity.metadata, default=str) if entity.metadata else None,
        )
        if entity.snapshot_date:
            model.snapshot_date = entity.snapshot_date
        return model

    async def add(self, snapshot: SelectionHistorySnapshot) -> str:
        with persistence_errors(self._session, f"historique de {snapshot.customer_id}"):
            model = self._to_model(snapshot)
            self._session.add(model)
            self._session.commit()
            self._session.refresh(model)
            return model.id

    async def list_for_customer(
        self, customer_id: str, limit: int = 50
    ) -> list[SelectionHistorySnapshot]:
        with persistence_errors(self._session, f"lecture historique de {customer_id}"):
            statement = (
                select(SelectionHistoryModel)
                .where(SelectionHistoryModel.customer_id == customer_id)
                .order_by(col(SelectionHistoryModel.snapshot_date).desc())
                .limit(limit)
            )
            return [self._to_entity(m) for m in self._session.exec(statement).all()]
