"""
Utilitaires partages pour les commandes CLI de VidSelect.

Ce module fournit :
- console : instance Rich Console partagee
- suppress_loguru : context manager pour desactiver les logs pendant l'affichage Rich
- with_container : decorateur injectant un container initialise
- cli_errors : conversion des erreurs du domaine en sortie rouge + code 1
- state_label : libelle colore d'un etat d'affichage
"""

from contextlib import contextmanager
from functools import wraps

import typer
from loguru import logger as loguru_logger
from rich.console import Console

from vidselect.container import Container
from vidselect.core.errors import SelectionError
from vidselect.core.value_objects import DisplayState

console = Console()

_STATE_STYLES = {
    DisplayState.OWNED: "[green]detenue[/green]",
    DisplayState.PENDING_REMOVE: "[red]retrait en attente[/red]",
    DisplayState.PENDING_ADD: "[cyan]ajout en attente[/cyan]",
    DisplayState.AVAILABLE: "[dim]disponible[/dim]",
}


def state_label(state: DisplayState) -> str:
    return _STATE_STYLES[state]


@contextmanager
def suppress_loguru():
    """
    Context manager pour desactiver les logs loguru pendant l'affichage Rich.

    Usage:
        with suppress_loguru():
            console.print(...)
    """
    loguru_logger.disable("vidselect")
    try:
        yield
    finally:
        loguru_logger.enable("vidselect")


@contextmanager
def cli_errors():
    """Affiche les erreurs du domaine en rouge et termine avec le code 1."""
    try:
        yield
    except SelectionError as e:
        console.print(f"[red]Erreur ({type(e).__name__}) :[/red] {e}")
        raise typer.Exit(code=1) from e


def with_container(requires_db: bool = True):
    """
    Decorateur qui injecte un container initialise en premier argument.

    Args:
        requires_db: Si True (defaut), initialise la base de donnees.

    Usage:
        @with_container()
        async def my_command(container, ...):
            config = container.config()
    """

    def decorator(func):
        @wraps(func)
        async def wrapper(*args, **kwargs):
            container = Container()
            if requires_db:
                container.database.init()
            return await func(container, *args, **kwargs)

        return wrapper

    return decorator
