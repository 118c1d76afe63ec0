"""
Implementation SQLModel du repository de la liste cumulative.

Une ligne par video detenue, unique sur (customer_id, video_id).
Le titre et la vignette sont relus depuis la table videos.
"""

from collections.abc import Sequence
from datetime import datetime
from typing import Optional

from sqlmodel import Session, col, select

from vidselect.core.entities import OwnedEntry
from vidselect.core.ports.repositories import ICustomerListRepository
from vidselect.infrastructure.persistence.models import CustomerListItemModel, VideoModel
from vidselect.infrastructure.persistence.repositories.base import as_utc, persistence_errors


class SQLModelCustomerListRepository(ICustomerListRepository):
    """Repository SQLModel de la liste detenue par chaque client."""

    def __init__(self, session: Session) -> None:
        self._session = session

    def _to_entity(
        self, model: CustomerListItemModel, video: Optional[VideoModel]
    ) -> OwnedEntry:
        return OwnedEntry(
            customer_id=model.customer_id,
            video_id=model.video_id,
            title=(video.title or "") if video else "",
            title_en=video.title_en if video else None,
            thumbnail_url=video.thumbnail_url if video else None,
            added_from_month=model.added_from_month,
            added_from_batch_id=model.added_from_batch_id,
            added_at=as_utc(model.added_at),
        )

    def _items(self, customer_id: str, video_ids: Optional[Sequence[str]] = None):
        statement = select(CustomerListItemModel).where(
            CustomerListItemModel.customer_id == customer_id
        )
        if video_ids is not None:
            statement = statement.where(col(CustomerListItemModel.video_id).in_(list(video_ids)))
        return self._session.exec(statement).all()

    async def list_owned(self, customer_id: str) -> list[OwnedEntry]:
        """Entrees du client, les plus recentes d'abord."""
        with persistence_errors(self._session, f"liste de {customer_id}"):
            statement = (
                select(CustomerListItemModel, VideoModel)
                .join(VideoModel, CustomerListItemModel.video_id == VideoModel.id, isouter=True)
                .where(CustomerListItemModel.customer_id == customer_id)
                .order_by(col(CustomerListItemModel.added_at).desc())
            )
            return [self._to_entity(item, video) for item, video in self._session.exec(statement)]

    async def remove_videos(self, customer_id: str, video_ids: Sequence[str]) -> int:
        if not video_ids:
            return 0
        with persistence_errors(self._session, f"retraits de {customer_id}"):
            items = self._items(customer_id, video_ids)
            for item in items:
                self._session.delete(item)
            self._session.commit()
            return len(items)

    async def upsert_videos(
        self,
        customer_id: str,
        video_ids: Sequence[str],
        added_from_month: Optional[str],
        added_from_batch_id: Optional[str],
        added_at: datetime,
    ) -> int:
        """Insere les nouvelles entrees et met a jour les existantes."""
        if not video_ids:
            return 0
        with persistence_errors(self._session, f"ajouts de {customer_id}"):
            existing = {item.video_id: item for item in self._items(customer_id, video_ids)}
            for video_id in dict.fromkeys(video_ids):
                item = existing.get(video_id)
                if item is None:
                    item = CustomerListItemModel(customer_id=customer_id, video_id=video_id)
                item.added_from_month = added_from_month
                item.added_from_batch_id = added_from_batch_id
                item.added_at = added_at
                self._session.add(item)
            self._session.commit()
            return len(set(video_ids))

    async def clear(self, customer_id: str) -> int:
        with persistence_errors(self._session, f"vidage de {customer_id}"):
            items = self._items(customer_id)
            for item in items:
                self._session.delete(item)
            self._session.commit()
            return len(items)
