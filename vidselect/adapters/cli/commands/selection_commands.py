"""
Commandes CLI de la session d'edition d'un client.

months, browse, toggle, pending, discard, submit, owned, history, clear.
"""

import asyncio
from typing import Annotated, Optional

import typer
from rich.table import Table

from vidselect.adapters.cli.helpers import cli_errors, console, state_label, with_container
from vidselect.services.reconciler import PendingSummary


def _print_summary(summary: PendingSummary) -> None:
    console.print(
        f"Detenues : {summary.current_total} -> [bold]{summary.new_total}[/bold] "
        f"([cyan]+{summary.added_count}[/cyan] / [red]-{summary.removed_count}[/red])"
    )


def months() -> None:
    """Liste les mois publies."""
    asyncio.run(_months_async())


@with_container()
async def _months_async(container) -> None:
    available = await container.catalog_service().list_available_months()
    if not available:
        console.print("[yellow]Aucun catalogue publie.[/yellow]")
        return
    for month in available:
        console.print(month)


def browse(
    month: Annotated[str, typer.Argument(help="Mois du catalogue (YYYY-MM)")],
    customer: Annotated[str, typer.Option("--customer", "-c", help="Id du client")],
) -> None:
    """Affiche le catalogue d'un mois avec l'etat de chaque video pour un client."""
    asyncio.run(_browse_async(month, customer))


@with_container()
async def _browse_async(container, month: str, customer: str) -> None:
    with cli_errors():
        view = await container.selection_service().browse_month(customer, month)

    if view.catalog.batch is None:
        console.print(f"[yellow]Aucun catalogue pour {month}.[/yellow]")
        return

    table = Table(title=f"{view.catalog.batch.name} ({month})")
    table.add_column("Id", style="dim")
    table.add_column("Titre")
    table.add_column("Titre anglais")
    table.add_column("Etat")
    for item in view.videos:
        table.add_row(
            item.video.id,
            item.video.title or "-",
            item.video.title_en or "-",
            state_label(item.state),
        )
    console.print(table)
    _print_summary(view.summary)


def toggle(
    customer: Annotated[str, typer.Argument(help="Id du client")],
    video_id: Annotated[str, typer.Argument(help="Id de la video")],
) -> None:
    """Bascule une video (ajout/retrait en attente, ou annulation)."""
    asyncio.run(_toggle_async(customer, video_id))


@with_container()
async def _toggle_async(container, customer: str, video_id: str) -> None:
    with cli_errors():
        result = await container.selection_service().toggle(customer, video_id)
    console.print(f"{result.video.title or result.video.id} : {state_label(result.state)}")
    _print_summary(result.summary)


def pending(
    customer: Annotated[str, typer.Argument(help="Id du client")],
) -> None:
    """Affiche les changements en attente d'un client."""
    asyncio.run(_pending_async(customer))


@with_container()
async def _pending_async(container, customer: str) -> None:
    with cli_errors():
        session = await container.selection_service().pending(customer)

    changes = session.changes
    if changes.is_empty:
        console.print("Aucun changement en attente.")
        return

    for video_id, title in changes.add.items():
        console.print(f"[cyan]+[/cyan] {title or video_id} [dim]({video_id})[/dim]")
    for video_id, title in changes.remove.items():
        console.print(f"[red]-[/red] {title or video_id} [dim]({video_id})[/dim]")
    _print_summary(session.summary())


def discard(
    customer: Annotated[str, typer.Argument(help="Id du client")],
) -> None:
    """Abandonne les changements en attente d'un client."""
    asyncio.run(_discard_async(customer))


@with_container(requires_db=False)
async def _discard_async(container, customer: str) -> None:
    with cli_errors():
        container.selection_service().discard(customer)
    console.print("[green]Changements en attente abandonnes.[/green]")


def submit(
    customer: Annotated[str, typer.Argument(help="Id du client")],
    month: Annotated[
        Optional[str],
        typer.Option("--month", "-m", help="Mois d'origine des ajouts (deduit sinon)"),
    ] = None,
    actor: Annotated[
        Optional[str],
        typer.Option("--actor", help="Auteur de la soumission (client par defaut)"),
    ] = None,
) -> None:
    """Soumet les changements en attente d'un client."""
    asyncio.run(_submit_async(customer, month, actor))


@with_container()
async def _submit_async(
    container, customer: str, month: Optional[str], actor: Optional[str]
) -> None:
    with cli_errors():
        result = await container.selection_service().submit(customer, month=month, actor_id=actor)

    if not result.submitted:
        console.print("[yellow]Rien a soumettre.[/yellow]")
        return

    console.print(
        f"[green]Selection soumise[/green] : +{result.added_count} / -{result.removed_count}"
        + (f", total {result.total_count}" if result.total_count is not None else "")
    )
    for warning in result.warnings:
        console.print(f"[yellow]Avertissement :[/yellow] {warning}")


def owned(
    customer: Annotated[str, typer.Argument(help="Id du client")],
) -> None:
    """Affiche la liste detenue d'un client, groupee par mois."""
    asyncio.run(_owned_async(customer))


@with_container()
async def _owned_async(container, customer: str) -> None:
    owned_list = await container.catalog_service().get_owned_list(customer)
    if not owned_list.total_count:
        console.print("Aucune video detenue.")
        return

    for month, entries in owned_list.grouped_by_month.items():
        console.print(f"\n[bold]{month}[/bold] ({len(entries)})")
        for entry in entries:
            console.print(f"  {entry.title or entry.video_id} [dim]({entry.video_id})[/dim]")
    console.print(f"\nTotal : [bold]{owned_list.total_count}[/bold]")


def history(
    customer: Annotated[str, typer.Argument(help="Id du client")],
    limit: Annotated[
        Optional[int],
        typer.Option("--limit", "-l", help="Nombre maximum d'instantanes"),
    ] = None,
) -> None:
    """Affiche l'historique des soumissions d'un client."""
    asyncio.run(_history_async(customer, limit))


@with_container()
async def _history_async(container, customer: str, limit: Optional[int]) -> None:
    with cli_errors():
        snapshots = await container.customer_admin_service().list_history(customer, limit=limit)

    if not snapshots:
        console.print("Aucun historique.")
        return

    table = Table(title=f"Historique de {customer}")
    table.add_column("Date")
    table.add_column("Action")
    table.add_column("Total", justify="right")
    table.add_column("Ajouts", justify="right")
    table.add_column("Retraits", justify="right")
    for snapshot in snapshots:
        date = snapshot.snapshot_date.strftime("%Y-%m-%d %H:%M") if snapshot.snapshot_date else "-"
        table.add_row(
            date,
            snapshot.trigger_action.value,
            str(snapshot.total_count),
            str(snapshot.added_count),
            str(snapshot.removed_count),
        )
    console.print(table)


def clear(
    customer: Annotated[str, typer.Argument(help="Id du client")],
    actor: Annotated[str, typer.Option("--actor", help="Id de l'administrateur")],
    yes: Annotated[bool, typer.Option("--yes", "-y", help="Ne pas demander confirmation")] = False,
) -> None:
    """Vide la liste detenue d'un client (administration)."""
    if not yes:
        typer.confirm(f"Vider la liste de {customer} ?", abort=True)
    asyncio.run(_clear_async(customer, actor))


@with_container()
async def _clear_async(container, customer: str, actor: str) -> None:
    with cli_errors():
        result = await container.customer_admin_service().clear(customer, actor_id=actor)
    console.print(f"[green]Liste videe[/green] : {result.removed_count} video(s) retiree(s)")
