"""
Outils communs aux repositories SQLModel.
"""

from collections.abc import Iterator
from contextlib import contextmanager
from datetime import datetime, timezone
from typing import Optional

from loguru import logger
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session

from vidselect.core.errors import PersistenceError


@contextmanager
def persistence_errors(session: Session, operation: str) -> Iterator[None]:
    """
    Convertit les erreurs SQLAlchemy en PersistenceError.

    La session est annulee (rollback) avant la propagation.

    Args:
        session: Session utilisee par l'operation
        operation: Nom lisible de l'operation (logs et message d'erreur)
    """
    try:
        yield
    except SQLAlchemyError as e:
        session.rollback()
        logger.error(f"Erreur base de donnees ({operation}): {e}")
        raise PersistenceError(f"{operation}: {e}") from e


def as_utc(value: Optional[datetime]) -> Optional[datetime]:
    """SQLite perd le fuseau : les dates relues sans fuseau sont en UTC."""
    if value is not None and value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value
