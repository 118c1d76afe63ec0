"""
Tests unitaires pour les commandes CLI de VidSelect.

Tests couvrant:
- browse / toggle / pending / discard / submit : session d'edition
- owned / history / clear : liste detenue et administration
- catalog import, customer add, mail-rules : exploitation

Les implementations async sont appelees directement avec un Container
mocke dont les services sont construits sur les faux en memoire.
"""

import json
from unittest.mock import MagicMock, patch

import pytest
import typer
from typer.testing import CliRunner

from vidselect.adapters.cli.commands.catalog_commands import (
    _catalog_import_async,
    _customer_add_async,
)
from vidselect.adapters.cli.commands.mail_commands import _add_async, _remove_async
from vidselect.adapters.cli.commands.selection_commands import (
    _browse_async,
    _clear_async,
    _discard_async,
    _history_async,
    _owned_async,
    _pending_async,
    _submit_async,
    _toggle_async,
)
from vidselect.core.entities import CustomerRole, MailEventType
from vidselect.services.mail_rules import MailRuleService

# Chemins de patch des sous-modules
_SELECTION = "vidselect.adapters.cli.commands.selection_commands"
_CATALOG = "vidselect.adapters.cli.commands.catalog_commands"
_MAIL = "vidselect.adapters.cli.commands.mail_commands"

runner = CliRunner()


# ============================================================================
# Fixtures
# ============================================================================


@pytest.fixture
def mock_container(
    selection_service, catalog_service, admin_service, customer_repo, mail_rule_repo
):
    """Mock le Container pour les tests.

    Patche Container dans helpers.py car c'est la que le decorateur
    @with_container() l'importe et l'instancie.
    """
    with patch("vidselect.adapters.cli.helpers.Container") as mock_cls:
        container_instance = MagicMock()
        mock_cls.return_value = container_instance
        container_instance.database.init = MagicMock()
        container_instance.selection_service.return_value = selection_service
        container_instance.catalog_service.return_value = catalog_service
        container_instance.customer_admin_service.return_value = admin_service
        container_instance.customer_repository.return_value = customer_repo
        container_instance.mail_rule_service.return_value = MailRuleService(mail_rule_repo)
        yield container_instance


@pytest.fixture
def error_console():
    """Console de helpers.py, utilisee par cli_errors pour les erreurs du domaine."""
    with patch("vidselect.adapters.cli.helpers.console") as mock_console:
        yield mock_console


def _printed(mock_console) -> str:
    return "\n".join(str(call) for call in mock_console.print.call_args_list)


# ============================================================================
# Session d'edition
# ============================================================================


class TestBrowseCommand:
    @pytest.mark.asyncio
    async def test_browse_shows_cross_month_owned(self, mock_container, list_repo):
        """Drama X detenu en janvier apparait detenu dans le catalogue de fevrier."""
        list_repo.seed("cust-1", "A1", month="2025-01")

        with patch(f"{_SELECTION}.console") as mock_console, patch(
            f"{_SELECTION}.state_label", side_effect=lambda state: state.value
        ) as mock_label:
            await _browse_async("2025-02", "cust-1")

        states = [call.args[0].value for call in mock_label.call_args_list]
        assert states == ["owned", "available"]
        mock_container.database.init.assert_called_once()
        assert mock_console.print.called

    @pytest.mark.asyncio
    async def test_browse_unknown_month(self, mock_container):
        with patch(f"{_SELECTION}.console") as mock_console:
            await _browse_async("2030-01", "cust-1")
        assert "Aucun catalogue" in _printed(mock_console)


class TestToggleCommand:
    @pytest.mark.asyncio
    async def test_toggle_then_pending(self, mock_container, pending_store):
        with patch(f"{_SELECTION}.console") as mock_console:
            await _toggle_async("cust-1", "V2")
            await _pending_async("cust-1")

        output = _printed(mock_console)
        assert "Movie Two" in output
        assert "ajout en attente" in output
        assert pending_store.entries

    @pytest.mark.asyncio
    async def test_toggle_unknown_video_exits(self, mock_container, error_console):
        with patch(f"{_SELECTION}.console"):
            with pytest.raises(typer.Exit) as exc_info:
                await _toggle_async("cust-1", "nope")
        assert exc_info.value.exit_code == 1
        assert "ValidationError" in _printed(error_console)
        assert "nope" in _printed(error_console)

    @pytest.mark.asyncio
    async def test_pending_empty(self, mock_container):
        with patch(f"{_SELECTION}.console") as mock_console:
            await _pending_async("cust-1")
        assert "Aucun changement" in _printed(mock_console)

    @pytest.mark.asyncio
    async def test_discard_does_not_init_database(self, mock_container, pending_store):
        with patch(f"{_SELECTION}.console"):
            await _toggle_async("cust-1", "V2")
            mock_container.database.init.reset_mock()
            await _discard_async("cust-1")

        mock_container.database.init.assert_not_called()
        assert pending_store.entries == {}


class TestSubmitCommand:
    @pytest.mark.asyncio
    async def test_submit(self, mock_container, list_repo, notifier):
        list_repo.seed("cust-1", "V1", month="2025-01")
        with patch(f"{_SELECTION}.console") as mock_console:
            await _toggle_async("cust-1", "V2")
            await _toggle_async("cust-1", "V1")
            await _submit_async("cust-1", None, None)

        assert "+1 / -1" in _printed(mock_console)
        assert list_repo.ids("cust-1") == {"V2"}
        assert notifier.sent

    @pytest.mark.asyncio
    async def test_nothing_to_submit(self, mock_container):
        with patch(f"{_SELECTION}.console") as mock_console:
            await _submit_async("cust-1", None, None)
        assert "Rien a soumettre" in _printed(mock_console)

    @pytest.mark.asyncio
    async def test_submit_warnings_are_shown(self, mock_container, history_repo):
        history_repo.fail("add_history")
        with patch(f"{_SELECTION}.console") as mock_console:
            await _toggle_async("cust-1", "V2")
            await _submit_async("cust-1", "2025-01", "admin-1")
        assert "Avertissement" in _printed(mock_console)

    @pytest.mark.asyncio
    async def test_submit_failure_exits(self, mock_container, list_repo):
        list_repo.fail("upsert_videos")
        with patch(f"{_SELECTION}.console"):
            await _toggle_async("cust-1", "V2")
            with pytest.raises(typer.Exit):
                await _submit_async("cust-1", None, None)


# ============================================================================
# Liste detenue et administration
# ============================================================================


class TestOwnedAndHistory:
    @pytest.mark.asyncio
    async def test_owned_grouped_by_month(self, mock_container, list_repo):
        list_repo.seed("cust-1", "A1", month="2025-01")
        list_repo.seed("cust-1", "B2", month="2025-02")
        with patch(f"{_SELECTION}.console") as mock_console:
            await _owned_async("cust-1")
        output = _printed(mock_console)
        assert "2025-01" in output
        assert "Comedy Y" in output

    @pytest.mark.asyncio
    async def test_owned_empty(self, mock_container):
        with patch(f"{_SELECTION}.console") as mock_console:
            await _owned_async("cust-1")
        assert "Aucune video detenue" in _printed(mock_console)

    @pytest.mark.asyncio
    async def test_history_empty(self, mock_container):
        with patch(f"{_SELECTION}.console") as mock_console:
            await _history_async("cust-1", None)
        assert "Aucun historique" in _printed(mock_console)

    @pytest.mark.asyncio
    async def test_clear(self, mock_container, list_repo, history_repo):
        list_repo.seed("cust-1", "V1", month="2025-01")
        with patch(f"{_SELECTION}.console") as mock_console:
            await _clear_async("cust-1", "admin-1")
            await _history_async("cust-1", 10)

        assert list_repo.ids("cust-1") == set()
        assert "1 video(s)" in _printed(mock_console)
        assert history_repo.snapshots[0].trigger_action.value == "admin_clear"


# ============================================================================
# Exploitation
# ============================================================================


class TestOperationsCommands:
    @pytest.mark.asyncio
    async def test_catalog_import(self, mock_container, catalog_repo):
        data = {
            "batch": {"id": "batch-mar", "name": "Mars 2025", "month": "2025-03"},
            "videos": [{"id": "C1", "title": "New One"}],
        }
        with patch(f"{_CATALOG}.console") as mock_console:
            await _catalog_import_async(data)
        assert "Mars 2025" in _printed(mock_console)
        assert "C1" in catalog_repo.videos

    @pytest.mark.asyncio
    async def test_catalog_import_invalid(self, mock_container):
        with patch(f"{_CATALOG}.console"):
            with pytest.raises(typer.Exit):
                await _catalog_import_async({"videos": []})

    @pytest.mark.asyncio
    async def test_customer_add(self, mock_container, customer_repo):
        with patch(f"{_CATALOG}.console"):
            await _customer_add_async("cust-2", "Bob", "bob@example.com", CustomerRole.ADMIN)
        assert customer_repo.customers["cust-2"].role is CustomerRole.ADMIN

    @pytest.mark.asyncio
    async def test_customer_add_invalid_email(self, mock_container, error_console):
        with patch(f"{_CATALOG}.console"):
            with pytest.raises(typer.Exit):
                await _customer_add_async("cust-2", "Bob", "bob", CustomerRole.CUSTOMER)
        assert "ValidationError" in _printed(error_console)

    @pytest.mark.asyncio
    async def test_mail_rules_add_and_remove(self, mock_container, mail_rule_repo):
        with patch(f"{_MAIL}.console"):
            await _add_async(MailEventType.SELECTION_SUBMITTED, "ops@example.com", None, None)
            await _remove_async("rule-1")
            with pytest.raises(typer.Exit):
                await _remove_async("rule-1")
        assert mail_rule_repo.rules == []


class TestCliRunner:
    """Commandes invoquees par le point d'entree typer."""

    def test_version(self):
        from vidselect.main import app

        result = runner.invoke(app, ["version"])
        assert result.exit_code == 0
        assert "VidSelect v" in result.stdout

    def test_catalog_import_invalid_json(self, tmp_path, mock_container):
        from vidselect.main import app

        path = tmp_path / "catalog.json"
        path.write_text("{not json", encoding="utf-8")
        result = runner.invoke(app, ["catalog", "import", str(path)])
        assert result.exit_code == 1

    def test_catalog_import_file(self, tmp_path, mock_container, catalog_repo):
        from vidselect.main import app

        path = tmp_path / "catalog.json"
        path.write_text(
            json.dumps({"batch": {"id": "b-apr", "month": "2025-04"}, "videos": []}),
            encoding="utf-8",
        )
        result = runner.invoke(app, ["catalog", "import", str(path)])
        assert result.exit_code == 0
        assert "b-apr" in catalog_repo.batches

    def test_clear_requires_confirmation(self, mock_container, list_repo):
        from vidselect.main import app

        list_repo.seed("cust-1", "V1")
        result = runner.invoke(app, ["clear", "cust-1", "--actor", "admin-1"], input="n\n")
        assert result.exit_code == 1
        assert list_repo.ids("cust-1") == {"V1"}
