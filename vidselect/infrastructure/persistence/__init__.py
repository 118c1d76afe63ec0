"""
Module de persistance SQLModel pour VidSelect.

- database.py : Engine, session factory, initialisation
- models.py : Modeles SQLModel representant les tables
- repositories/ : Implementations des ports de persistance

Les modeles sont des adapters de persistance, distincts des entites de domaine.
La conversion entre les deux se fait dans les repositories.
"""

from vidselect.infrastructure.persistence.database import (
    build_engine,
    get_engine,
    get_session,
    init_db,
)

__all__ = ["build_engine", "get_engine", "get_session", "init_db"]
