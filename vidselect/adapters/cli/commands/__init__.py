"""Sous-package CLI commands - re-exporte les commandes publiques."""

from vidselect.adapters.cli.commands.catalog_commands import (
    catalog_app,
    catalog_import,
    customer_add,
    customer_app,
)
from vidselect.adapters.cli.commands.mail_commands import (
    mail_rules_add,
    mail_rules_app,
    mail_rules_list,
    mail_rules_remove,
)
from vidselect.adapters.cli.commands.selection_commands import (
    browse,
    clear,
    discard,
    history,
    months,
    owned,
    pending,
    submit,
    toggle,
)

__all__ = [
    # selection
    "months",
    "browse",
    "toggle",
    "pending",
    "discard",
    "submit",
    "owned",
    "history",
    "clear",
    # catalogue et profils
    "catalog_app",
    "catalog_import",
    "customer_app",
    "customer_add",
    # mail
    "mail_rules_app",
    "mail_rules_list",
    "mail_rules_add",
    "mail_rules_remove",
]
