"""
Point d'entree CLI de VidSelect.

Initialise le container DI, configure le logging et fournit les commandes CLI.
"""

from typing import Annotated

import typer
from loguru import logger

from .adapters.cli.commands import (
    browse,
    catalog_app,
    clear,
    customer_app,
    discard,
    history,
    mail_rules_app,
    months,
    owned,
    pending,
    submit,
    toggle,
)
from .config import Settings
from .container import Container
from .logging_config import configure_logging

__version__ = "0.1.0"

app = typer.Typer(
    name="vidselect",
    help="Portail de selection de videos mensuelles",
)
container = Container()


# Session d'edition d'un client
app.command()(months)
app.command()(browse)
app.command()(toggle)
app.command()(pending)
app.command()(discard)
app.command()(submit)
app.command()(owned)
app.command()(history)
app.command()(clear)

# Sous-commandes d'exploitation
app.add_typer(catalog_app, name="catalog")
app.add_typer(customer_app, name="customer")
app.add_typer(mail_rules_app, name="mail-rules")


def get_config() -> Settings:
    """Recupere les parametres de l'application depuis le container DI."""
    return container.config()


@app.command()
def info() -> None:
    """Affiche la configuration actuelle."""
    config = get_config()
    typer.echo(f"Base de donnees : {config.database_url}")
    typer.echo(f"Changements en attente : {config.pending_state_dir}")
    typer.echo(f"Validite des changements : {config.pending_ttl_hours} h")
    typer.echo(f"Email : {'active' if config.mail_enabled else 'desactive'}")
    typer.echo(f"Email administrateur : {config.admin_email or '-'}")
    typer.echo(f"Niveau de log : {config.log_level}")


@app.command()
def version() -> None:
    """Affiche les informations de version."""
    typer.echo(f"VidSelect v{__version__}")


@app.command()
def serve(
    host: Annotated[str, typer.Option(help="Adresse d'ecoute")] = "0.0.0.0",
    port: Annotated[int, typer.Option(help="Port d'ecoute")] = 8000,
    reload: Annotated[bool, typer.Option(help="Rechargement automatique")] = False,
) -> None:
    """Lance l'API web VidSelect."""
    import uvicorn

    typer.echo(f"Demarrage du serveur sur {host}:{port}")
    uvicorn.run("vidselect.web.app:app", host=host, port=port, reload=reload)


def main() -> None:
    """Point d'entree de l'application."""
    settings = container.config()
    configure_logging(
        log_level=settings.log_level,
        log_file=settings.log_file,
        rotation_size=settings.log_rotation_size,
        retention_count=settings.log_retention_count,
        audit_log_file=settings.log_audit_file,
    )

    container.database.init()

    logger.info("Demarrage de VidSelect", version=__version__)

    app()


if __name__ == "__main__":
    main()
