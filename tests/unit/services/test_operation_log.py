"""
Tests de l'OperationLogRecorder.
"""

import pytest

from tests.fakes import NOW


class TestRecord:
    @pytest.mark.asyncio
    async def test_record_with_known_actor(self, operation_log, log_repo):
        log_id = await operation_log.record(
            action="customer_list.submit",
            actor_id="cust-1",
            resource_type="customer_list",
            resource_id="cust-1",
            metadata={"addedCount": 1},
        )
        assert log_id == "log-1"
        log = log_repo.logs[0]
        assert log.actor_name == "Alice"
        assert log.actor_email == "alice@example.com"
        assert log.description == "Alice: customer_list.submit"
        assert log.metadata == {"addedCount": 1}
        assert log.created_at == NOW

    @pytest.mark.asyncio
    async def test_unknown_actor(self, operation_log, log_repo):
        await operation_log.record(action="customer_list.clear", actor_id="ghost")
        assert log_repo.logs[0].actor_name is None
        assert log_repo.logs[0].description == "inconnu: customer_list.clear"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("action,actor_id", [("", "cust-1"), ("customer_list.clear", None)])
    async def test_skipped_without_action_or_actor(self, operation_log, log_repo, action, actor_id):
        assert await operation_log.record(action=action, actor_id=actor_id) is None
        assert log_repo.calls == []

    @pytest.mark.asyncio
    async def test_write_failure_is_swallowed(self, operation_log, log_repo):
        log_repo.fail("add_log")
        assert await operation_log.record(action="customer_list.clear", actor_id="cust-1") is None

    @pytest.mark.asyncio
    async def test_actor_lookup_failure_is_swallowed(self, operation_log, customer_repo, log_repo):
        customer_repo.fail("get_customer")
        assert await operation_log.record(action="customer_list.clear", actor_id="cust-1") is None
        assert log_repo.logs == []
