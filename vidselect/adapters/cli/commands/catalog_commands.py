"""
Commandes CLI d'exploitation : import de catalogue et profils clients.
"""

import asyncio
import json
from pathlib import Path
from typing import Annotated, Optional

import typer

from vidselect.adapters.cli.helpers import cli_errors, console, with_container
from vidselect.core.entities import Customer, CustomerRole
from vidselect.core.errors import ValidationError
from vidselect.services.mail_rules import is_valid_email

catalog_app = typer.Typer(
    name="catalog",
    help="Gestion des catalogues mensuels",
    rich_markup_mode="rich",
)

customer_app = typer.Typer(
    name="customer",
    help="Gestion des profils",
    rich_markup_mode="rich",
)


@catalog_app.command("import")
def catalog_import(
    file: Annotated[
        Path,
        typer.Argument(exists=True, dir_okay=False, help="Fichier JSON {batch, videos}"),
    ],
) -> None:
    """Importe un catalogue mensuel depuis un fichier JSON."""
    try:
        data = json.loads(file.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        console.print(f"[red]JSON invalide :[/red] {e}")
        raise typer.Exit(code=1) from e
    asyncio.run(_catalog_import_async(data))


@with_container()
async def _catalog_import_async(container, data: dict) -> None:
    with cli_errors():
        catalog = await container.catalog_service().import_catalog(data)
    console.print(
        f"[green]Batch importe[/green] : {catalog.batch.name} ({catalog.batch.month}), "
        f"{len(catalog.videos)} video(s)"
    )


@customer_app.command("add")
def customer_add(
    customer_id: Annotated[str, typer.Argument(help="Id du profil")],
    name: Annotated[Optional[str], typer.Option("--name", "-n", help="Nom affiche")] = None,
    email: Annotated[Optional[str], typer.Option("--email", "-e", help="Email")] = None,
    role: Annotated[
        CustomerRole, typer.Option("--role", "-r", help="Role du profil")
    ] = CustomerRole.CUSTOMER,
) -> None:
    """Enregistre ou met a jour un profil."""
    asyncio.run(_customer_add_async(customer_id, name, email, role))


@with_container()
async def _customer_add_async(
    container, customer_id: str, name: Optional[str], email: Optional[str], role: CustomerRole
) -> None:
    with cli_errors():
        if email is not None and not is_valid_email(email):
            raise ValidationError(f"Email invalide: {email!r}")
        customer = await container.customer_repository().save(
            Customer(id=customer_id, name=name, email=email, role=role)
        )
    console.print(f"[green]Profil enregistre[/green] : {customer.id} ({customer.role.value})")
