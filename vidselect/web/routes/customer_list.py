"""
Routes de la liste cumulative d'un client.

Liste detenue, changements en attente (bascule, abandon), soumission,
historique et vidage administratif.
"""

from typing import Optional

from fastapi import APIRouter, Query, Request

from ..schemas import (
    OwnedEntryOut,
    SnapshotOut,
    SubmissionOut,
    SubmitRequest,
    SummaryOut,
    ToggleRequest,
    VideoOut,
    ok,
)

router = APIRouter(prefix="/api/customer-list", tags=["customer-list"])


@router.get("/{customer_id}")
async def get_owned_list(request: Request, customer_id: str):
    """Liste detenue, groupee par mois d'origine."""
    container = request.app.state.container
    owned = await container.catalog_service().get_owned_list(customer_id)
    return ok(
        {
            "items": [OwnedEntryOut.from_entity(e).dump() for e in owned.items],
            "videoIds": owned.video_ids,
            "groupedByMonth": {
                month: [OwnedEntryOut.from_entity(e).dump() for e in entries]
                for month, entries in owned.grouped_by_month.items()
            },
            "totalCount": owned.total_count,
        }
    )


@router.get("/{customer_id}/pending")
async def get_pending(request: Request, customer_id: str):
    """Changements en attente et resume."""
    container = request.app.state.container
    session = await container.selection_service().pending(customer_id)
    changes = session.changes
    return ok(
        {
            "add": list(changes.add),
            "remove": list(changes.remove),
            "addTitles": list(changes.add.values()),
            "removeTitles": list(changes.remove.values()),
            "hasPendingChanges": not changes.is_empty,
            "summary": SummaryOut.from_summary(session.summary()).dump(),
        }
    )


@router.post("/{customer_id}/toggle")
async def toggle_video(request: Request, customer_id: str, body: ToggleRequest):
    """Bascule l'etat d'une video."""
    container = request.app.state.container
    result = await container.selection_service().toggle(customer_id, body.video_id)
    return ok(
        {
            "video": VideoOut.from_entity(result.video, result.state).dump(),
            "state": result.state.value,
            "summary": SummaryOut.from_summary(result.summary).dump(),
        }
    )


@router.delete("/{customer_id}/pending")
async def discard_pending(request: Request, customer_id: str):
    """Abandonne les changements en attente."""
    container = request.app.state.container
    container.selection_service().discard(customer_id)
    return ok(None)


@router.post("/{customer_id}/submit")
async def submit(request: Request, customer_id: str, body: Optional[SubmitRequest] = None):
    """Soumet les changements en attente."""
    container = request.app.state.container
    body = body or SubmitRequest()
    result = await container.selection_service().submit(
        customer_id, month=body.month, actor_id=body.actor_id
    )
    return ok(SubmissionOut.from_result(result).dump())


@router.get("/{customer_id}/history")
async def get_history(
    request: Request,
    customer_id: str,
    limit: Optional[int] = Query(default=None, ge=1),
):
    """Historique des soumissions, du plus recent au plus ancien."""
    container = request.app.state.container
    snapshots = await container.customer_admin_service().list_history(customer_id, limit=limit)
    return ok([SnapshotOut.from_entity(s).dump() for s in snapshots])


@router.delete("/{customer_id}/clear")
async def clear_list(
    request: Request,
    customer_id: str,
    actor_id: Optional[str] = Query(default=None),
):
    """Vide la liste du client (administration)."""
    container = request.app.state.container
    result = await container.customer_admin_service().clear(customer_id, actor_id=actor_id)
    return ok({"removed": result.removed_count, "snapshotId": result.snapshot_id})
