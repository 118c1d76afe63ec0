"""
Fixtures pytest partagees pour les tests VidSelect.

- Catalogue de deux mois ou "Drama X" reapparait sous un nouvel id
- Faux en memoire des repositories et du stockage local
- Horloge fixe injectable
- Services assembles sur les faux
"""

import pytest

from tests.fakes import (
    FEBRUARY,
    JANUARY,
    FakeClock,
    InMemoryCatalogRepository,
    InMemoryCustomerListRepository,
    InMemoryCustomerRepository,
    InMemoryMailRuleRepository,
    InMemoryOperationLogRepository,
    InMemorySelectionHistoryRepository,
    RecordingNotificationGateway,
)
from vidselect.adapters.local_state import InMemoryPendingStore
from vidselect.core.entities import Customer, Video
from vidselect.services.catalog import CatalogService
from vidselect.services.customer_admin import CustomerListAdminService
from vidselect.services.operation_log import OperationLogRecorder
from vidselect.services.selection import SelectionService
from vidselect.services.submission import SubmissionCoordinator


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def january_videos() -> list[Video]:
    return [
        Video(id="A1", title="Drama X", title_en="Drama X (EN)", batch_id=JANUARY.id),
        Video(id="V1", title="Movie One", batch_id=JANUARY.id),
        Video(id="V2", title="Movie Two", batch_id=JANUARY.id),
        Video(id="V3", title="Movie Three", batch_id=JANUARY.id),
    ]


@pytest.fixture
def february_videos() -> list[Video]:
    return [
        Video(id="B1", title="Drama X", batch_id=FEBRUARY.id),
        Video(id="B2", title="Comedy Y", batch_id=FEBRUARY.id),
    ]


@pytest.fixture
def catalog_repo(january_videos, february_videos) -> InMemoryCatalogRepository:
    repo = InMemoryCatalogRepository()
    repo.add_batch(JANUARY, january_videos)
    repo.add_batch(FEBRUARY, february_videos)
    return repo


@pytest.fixture
def list_repo(catalog_repo) -> InMemoryCustomerListRepository:
    return InMemoryCustomerListRepository(catalog_repo)


@pytest.fixture
def history_repo() -> InMemorySelectionHistoryRepository:
    return InMemorySelectionHistoryRepository()


@pytest.fixture
def customer_repo() -> InMemoryCustomerRepository:
    return InMemoryCustomerRepository(
        Customer(id="cust-1", name="Alice", email="alice@example.com"),
        Customer(id="admin-1", name="Admin", email="admin@example.com"),
    )


@pytest.fixture
def mail_rule_repo() -> InMemoryMailRuleRepository:
    return InMemoryMailRuleRepository()


@pytest.fixture
def log_repo() -> InMemoryOperationLogRepository:
    return InMemoryOperationLogRepository()


@pytest.fixture
def notifier() -> RecordingNotificationGateway:
    return RecordingNotificationGateway()


@pytest.fixture
def pending_store() -> InMemoryPendingStore:
    return InMemoryPendingStore()


@pytest.fixture
def operation_log(log_repo, customer_repo, clock) -> OperationLogRecorder:
    return OperationLogRecorder(log_repo, customer_repo, now_fn=clock)


@pytest.fixture
def coordinator(
    list_repo, history_repo, catalog_repo, customer_repo, notifier, operation_log, clock
) -> SubmissionCoordinator:
    return SubmissionCoordinator(
        customer_list_repo=list_repo,
        history_repo=history_repo,
        catalog_repo=catalog_repo,
        customer_repo=customer_repo,
        notifier=notifier,
        operation_log=operation_log,
        now_fn=clock,
    )


@pytest.fixture
def catalog_service(catalog_repo, list_repo) -> CatalogService:
    return CatalogService(catalog_repo, list_repo)


@pytest.fixture
def selection_service(
    catalog_service, catalog_repo, pending_store, coordinator, clock
) -> SelectionService:
    return SelectionService(
        catalog_service=catalog_service,
        catalog_repo=catalog_repo,
        pending_store=pending_store,
        coordinator=coordinator,
        now_fn=clock,
    )


@pytest.fixture
def admin_service(list_repo, history_repo, pending_store, operation_log, clock):
    return CustomerListAdminService(
        customer_list_repo=list_repo,
        history_repo=history_repo,
        pending_store=pending_store,
        operation_log=operation_log,
        now_fn=clock,
    )
