"""
Commandes CLI de gestion des destinataires des emails.
"""

import asyncio
from typing import Annotated, Optional

import typer
from rich.table import Table

from vidselect.adapters.cli.helpers import cli_errors, console, with_container
from vidselect.core.entities import MailEventType

mail_rules_app = typer.Typer(
    name="mail-rules",
    help="Destinataires des emails par evenement",
    rich_markup_mode="rich",
)


@mail_rules_app.command("list")
def mail_rules_list(
    event: Annotated[
        Optional[MailEventType], typer.Option("--event", "-e", help="Filtrer par evenement")
    ] = None,
) -> None:
    """Liste les regles de mail."""
    asyncio.run(_list_async(event))


@with_container()
async def _list_async(container, event: Optional[MailEventType]) -> None:
    with cli_errors():
        rules = await container.mail_rule_service().list_rules(event)
    if not rules:
        console.print("Aucune regle de mail.")
        return

    table = Table(title="Regles de mail")
    table.add_column("Id", style="dim")
    table.add_column("Evenement")
    table.add_column("Destinataire")
    table.add_column("Nom")
    for rule in rules:
        table.add_row(rule.id or "-", rule.event_type.value, rule.recipient_email, rule.recipient_name or "-")
    console.print(table)


@mail_rules_app.command("add")
def mail_rules_add(
    event: Annotated[MailEventType, typer.Argument(help="Evenement declencheur")],
    email: Annotated[str, typer.Argument(help="Email du destinataire")],
    name: Annotated[Optional[str], typer.Option("--name", "-n", help="Nom du destinataire")] = None,
    created_by: Annotated[Optional[str], typer.Option("--by", help="Auteur de la regle")] = None,
) -> None:
    """Ajoute un destinataire pour un evenement."""
    asyncio.run(_add_async(event, email, name, created_by))


@with_container()
async def _add_async(
    container, event: MailEventType, email: str, name: Optional[str], created_by: Optional[str]
) -> None:
    with cli_errors():
        rule = await container.mail_rule_service().add_rule(event, email, name, created_by)
    console.print(f"[green]Regle ajoutee[/green] : {rule.event_type.value} -> {rule.recipient_email}")


@mail_rules_app.command("remove")
def mail_rules_remove(
    rule_id: Annotated[str, typer.Argument(help="Id de la regle")],
) -> None:
    """Supprime une regle de mail."""
    asyncio.run(_remove_async(rule_id))


@with_container()
async def _remove_async(container, rule_id: str) -> None:
    with cli_errors():
        removed = await container.mail_rule_service().remove_rule(rule_id)
    if not removed:
        console.print(f"[yellow]Regle introuvable : {rule_id}[/yellow]")
        raise typer.Exit(code=1)
    console.print("[green]Regle supprimee.[/green]")
