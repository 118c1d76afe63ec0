"""
Service de lecture du catalogue et de la liste detenue.

Les lectures echouees retombent sur un resultat vide : mieux vaut
afficher "aucune video detenue" que bloquer la selection.
"""

from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from loguru import logger

from vidselect.core.entities import Batch, MonthlyCatalog, OwnedEntry, Video
from vidselect.core.errors import PersistenceError, ValidationError
from vidselect.core.ports import ICatalogRepository, ICustomerListRepository

UNKNOWN_MONTH = "unknown"


@dataclass
class OwnedList:
    """Liste detenue d'un client, avec ses vues derivees."""

    items: list[OwnedEntry] = field(default_factory=list)

    @property
    def video_ids(self) -> list[str]:
        return [item.video_id for item in self.items]

    @property
    def total_count(self) -> int:
        return len(self.items)

    @property
    def grouped_by_month(self) -> dict[str, list[OwnedEntry]]:
        """Entrees groupees par mois d'origine ("unknown" si absent)."""
        groups: dict[str, list[OwnedEntry]] = {}
        for item in self.items:
            groups.setdefault(item.added_from_month or UNKNOWN_MONTH, []).append(item)
        return groups


def parse_catalog_payload(data: Mapping[str, Any]) -> tuple[Batch, list[Video]]:
    """
    Lit un catalogue au format {batch: {...}, videos: [...]}.

    Les cles camelCase (titleEn, thumbnailUrl) et snake_case sont acceptees.

    Raises:
        ValidationError: Batch ou video sans id, mois absent
    """
    raw_batch = data.get("batch")
    if not isinstance(raw_batch, Mapping):
        raise ValidationError("Champ 'batch' manquant")
    batch_id = raw_batch.get("id")
    month = raw_batch.get("month")
    if not batch_id or not month:
        raise ValidationError("Le batch doit avoir un id et un mois (YYYY-MM)")

    created_at = raw_batch.get("created_at") or raw_batch.get("createdAt")
    batch = Batch(
        id=str(batch_id),
        name=raw_batch.get("name") or str(month),
        month=str(month),
        created_at=datetime.fromisoformat(created_at) if created_at else None,
    )

    videos = []
    for raw in data.get("videos") or []:
        if not raw.get("id"):
            raise ValidationError(f"Video sans id dans le batch {batch.id}")
        duration = raw.get("duration")
        videos.append(
            Video(
                id=str(raw["id"]),
                title=raw.get("title") or "",
                title_en=raw.get("title_en") or raw.get("titleEn"),
                thumbnail_url=raw.get("thumbnail_url") or raw.get("thumbnailUrl"),
                batch_id=batch.id,
                director=raw.get("director"),
                cast=tuple(raw.get("cast") or ()),
                duration=int(duration) if duration not in (None, "") else None,
                rating=raw.get("rating"),
                language=raw.get("language"),
                subtitle=raw.get("subtitle"),
            )
        )
    return batch, videos


class CatalogService:
    """
    Lectures du catalogue mensuel et de la liste detenue.

    Example:
        service = CatalogService(catalog_repo, customer_list_repo)
        months = await service.list_available_months()
        owned = await service.get_owned_list("cust-1")
    """

    def __init__(
        self,
        catalog_repo: ICatalogRepository,
        customer_list_repo: ICustomerListRepository,
    ) -> None:
        self._catalog_repo = catalog_repo
        self._list_repo = customer_list_repo

    async def list_available_months(self) -> list[str]:
        """Mois publies, du plus recent au plus ancien."""
        try:
            return await self._catalog_repo.list_months()
        except PersistenceError as e:
            logger.warning(f"Lecture des mois impossible, liste vide: {e}")
            return []

    async def get_catalog_for_month(self, month: str) -> MonthlyCatalog:
        try:
            return await self._catalog_repo.get_catalog_for_month(month)
        except PersistenceError as e:
            logger.warning(f"Lecture du catalogue {month} impossible, catalogue vide: {e}")
            return MonthlyCatalog()

    async def get_owned_list(self, customer_id: str) -> OwnedList:
        """Liste detenue, les plus recentes d'abord (vide si illisible)."""
        try:
            items = await self._list_repo.list_owned(customer_id)
        except PersistenceError as e:
            logger.warning(f"Lecture de la liste de {customer_id} impossible, liste vide: {e}")
            items = []
        items = sorted(
            items,
            key=lambda item: item.added_at.timestamp() if item.added_at else float("-inf"),
            reverse=True,
        )
        return OwnedList(items=items)

    async def import_catalog(self, data: Mapping[str, Any]) -> MonthlyCatalog:
        """Enregistre un catalogue au format getCatalogForMonth."""
        batch, videos = parse_catalog_payload(data)
        catalog = await self._catalog_repo.save_catalog(batch, videos)
        logger.info(f"Batch {batch.id} ({batch.month}) importe: {len(videos)} video(s)")
        return catalog
