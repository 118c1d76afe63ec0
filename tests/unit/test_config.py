"""
Tests de la configuration (pydantic-settings) et du logging.
"""

import sys
from datetime import timedelta
from pathlib import Path

import pytest
from loguru import logger
from pydantic import ValidationError

from vidselect.config import Settings
from vidselect.logging_config import configure_logging, is_audit_record


class TestSettings:
    """Valeurs par defaut et surcharges par variables d'environnement."""

    def test_defaults(self, monkeypatch):
        for name in ("GRAPH_TENANT_ID", "GRAPH_CLIENT_ID", "GRAPH_CLIENT_SECRET", "MAIL_SENDER"):
            monkeypatch.delenv(f"VIDSELECT_{name}", raising=False)
        settings = Settings(_env_file=None)
        assert settings.database_url == "sqlite:///vidselect.db"
        assert settings.pending_ttl == timedelta(hours=24)
        assert settings.history_default_limit == 50
        assert settings.mail_enabled is False
        assert settings.notify_selection_submitted is True

    def test_env_override(self, monkeypatch):
        monkeypatch.setenv("VIDSELECT_PENDING_TTL_HOURS", "6")
        monkeypatch.setenv("VIDSELECT_LOG_LEVEL", "DEBUG")
        settings = Settings(_env_file=None)
        assert settings.pending_ttl == timedelta(hours=6)
        assert settings.log_level == "DEBUG"

    def test_paths_expanded(self):
        settings = Settings(_env_file=None, pending_state_dir="~/pending")
        assert settings.pending_state_dir == Path.home() / "pending"

    def test_ttl_must_be_positive(self):
        with pytest.raises(ValidationError):
            Settings(_env_file=None, pending_ttl_hours=0)

    def test_mail_requires_all_credentials(self):
        partial = Settings(_env_file=None, graph_tenant_id="t", graph_client_id="c")
        assert partial.mail_enabled is False

        full = Settings(
            _env_file=None,
            graph_tenant_id="t",
            graph_client_id="c",
            graph_client_secret="s",
            mail_sender="noreply@example.com",
        )
        assert full.mail_enabled is True


class TestConfigureLogging:
    def test_writes_json_log_file(self, tmp_path):
        log_file = tmp_path / "logs" / "vidselect.log"
        try:
            configure_logging(log_level="WARNING", log_file=log_file)
            logger.info("message de test")
            logger.complete()
        finally:
            logger.remove()
            logger.add(sys.stderr)

        content = log_file.read_text(encoding="utf-8")
        assert "message de test" in content
        assert '"level"' in content

    def test_audit_file_keeps_only_submission_records(self, tmp_path):
        log_file = tmp_path / "logs" / "vidselect.log"
        audit_file = tmp_path / "logs" / "audit.log"
        submission_logger = logger.patch(
            lambda record: record.update(name="vidselect.services.submission.coordinator")
        )
        try:
            configure_logging(log_level="WARNING", log_file=log_file, audit_log_file=audit_file)
            submission_logger.info("Soumission de cust-1")
            submission_logger.debug("detail de soumission")
            logger.info("message hors audit")
            logger.complete()
        finally:
            logger.remove()
            logger.add(sys.stderr)

        audit = audit_file.read_text(encoding="utf-8")
        assert "Soumission de cust-1" in audit
        assert "detail de soumission" not in audit
        assert "message hors audit" not in audit
        assert "message hors audit" in log_file.read_text(encoding="utf-8")

    def test_audit_file_defaults_next_to_log_file(self, tmp_path):
        log_file = tmp_path / "logs" / "vidselect.log"
        try:
            configure_logging(log_file=log_file)
        finally:
            logger.remove()
            logger.add(sys.stderr)
        assert (tmp_path / "logs" / "audit.log").exists()

    @pytest.mark.parametrize(
        "name, expected",
        [
            ("vidselect.services.submission.coordinator", True),
            ("vidselect.services.customer_admin", True),
            ("vidselect.services.operation_log", True),
            ("vidselect.services.catalog", False),
            ("vidselect.adapters.mail.graph_client", False),
        ],
    )
    def test_is_audit_record(self, name, expected):
        assert is_audit_record({"name": name}) is expected
