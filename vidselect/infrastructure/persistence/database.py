"""
Configuration de la base de donnees pour VidSelect.

Ce module fournit :
- Engine SQLModel (SQLite par defaut, Postgres en production)
- Session factory
- Fonction d'initialisation des tables

La base de donnees est configuree via VIDSELECT_DATABASE_URL (defaut: sqlite:///vidselect.db).
"""

from collections.abc import Generator
from pathlib import Path
from typing import Optional

from sqlalchemy import Engine
from sqlmodel import Session, SQLModel, create_engine

# Engine global - initialise lors du premier appel a get_engine()
_engine: Optional[Engine] = None


def build_engine(db_url: str) -> Engine:
    """
    Cree un engine pour l'URL donnee.

    Pour SQLite fichier, le repertoire parent est cree ; l'option
    check_same_thread n'est passee qu'a SQLite.
    """
    connect_args = {}
    if db_url.startswith("sqlite"):
        connect_args["check_same_thread"] = False
        if db_url.startswith("sqlite:///") and ":memory:" not in db_url:
            db_path = Path(db_url.replace("sqlite:///", ""))
            db_path.parent.mkdir(exist_ok=True, parents=True)

    return create_engine(db_url, echo=False, connect_args=connect_args)


def get_engine() -> Engine:
    """
    Retourne l'engine, en le creant si necessaire.

    Utilise la configuration de l'application pour l'URL de la BDD.
    """
    global _engine
    if _engine is None:
        from vidselect.config import Settings

        _engine = build_engine(Settings().database_url)
    return _engine


def get_session() -> Generator[Session, None, None]:
    """
    Generateur de session SQLModel.

    Utilisation avec next() :
        session = next(get_session())

    Yields:
        Session SQLModel connectee a l'engine
    """
    with Session(get_engine()) as session:
        yield session


def init_db(engine: Optional[Engine] = None) -> None:
    """
    Initialise la base de donnees en creant toutes les tables.

    Les modeles sont importes ici pour enregistrer leurs metadonnees
    dans SQLModel.metadata (evite les imports circulaires).

    Doit etre appelee une fois au demarrage de l'application.
    """
    from vidselect.infrastructure.persistence import models  # noqa: F401

    SQLModel.metadata.create_all(engine or get_engine())
