"""
Routes du catalogue mensuel.
"""

from typing import Optional

from fastapi import APIRouter, Query, Request

from ..schemas import BatchOut, SummaryOut, VideoOut, ok

router = APIRouter(prefix="/api/videos", tags=["videos"])


@router.get("/months")
async def list_months(request: Request):
    """Mois publies, du plus recent au plus ancien."""
    container = request.app.state.container
    months = await container.catalog_service().list_available_months()
    return ok(months)


@router.get("/by-month/{month}")
async def videos_by_month(
    request: Request,
    month: str,
    customer_id: Optional[str] = Query(default=None),
):
    """
    Catalogue d'un mois.

    Avec customer_id, chaque video porte son etat d'affichage pour ce
    client, et le resume des changements en attente est joint.
    """
    container = request.app.state.container

    if not customer_id:
        catalog = await container.catalog_service().get_catalog_for_month(month)
        return ok(
            {
                "batch": BatchOut.from_entity(catalog.batch).dump() if catalog.batch else None,
                "videos": [VideoOut.from_entity(v).dump() for v in catalog.videos],
            }
        )

    view = await container.selection_service().browse_month(customer_id, month)
    return ok(
        {
            "batch": BatchOut.from_entity(view.catalog.batch).dump() if view.catalog.batch else None,
            "videos": [VideoOut.from_entity(item.video, item.state).dump() for item in view.videos],
            "summary": SummaryOut.from_summary(view.summary).dump(),
            "hasPendingChanges": view.has_pending_changes,
        }
    )
