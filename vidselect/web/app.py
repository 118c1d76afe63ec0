"""
Application FastAPI de VidSelect.

Initialise l'application avec le Container DI, monte les routes JSON
et traduit les erreurs du domaine en reponses HTTP.
"""

from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from loguru import logger

from ..container import Container
from ..core.errors import (
    PersistenceError,
    SelectionError,
    UnexpectedError,
    ValidationError,
)
from .routes.catalog import router as catalog_router
from .routes.customer_list import router as customer_list_router

_STATUS_BY_ERROR = (
    (ValidationError, 400),
    (PersistenceError, 503),
    (UnexpectedError, 500),
)


def _status_for(error: SelectionError) -> int:
    for error_type, status in _STATUS_BY_ERROR:
        if isinstance(error, error_type):
            return status
    return 500


async def selection_error_handler(request: Request, exc: SelectionError) -> JSONResponse:
    status = _status_for(exc)
    if status >= 500:
        logger.error(f"{request.method} {request.url.path}: {exc}")
    return JSONResponse(
        status_code=status,
        content={"error": type(exc).__name__, "message": str(exc)},
    )


def create_app(container: Optional[Container] = None) -> FastAPI:
    """
    Construit l'application.

    Args:
        container: Container a utiliser (un nouveau est cree au demarrage sinon)
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Initialise le Container DI au demarrage et ferme le client mail a l'arret."""
        active = container or Container()
        active.database.init()
        app.state.container = active
        yield
        mail_client = active.mail_client()
        if mail_client is not None:
            await mail_client.close()

    app = FastAPI(title="VidSelect", lifespan=lifespan)
    app.add_exception_handler(SelectionError, selection_error_handler)
    app.include_router(catalog_router)
    app.include_router(customer_list_router)
    return app


app = create_app()
