"""
Container d'injection de dependances via dependency-injector.

Fournit une gestion centralisee des dependances pour les interfaces CLI et Web :
repositories SQLModel, stockage local des changements en attente,
client Graph, passerelle de notification et services.
"""

from dependency_injector import containers, providers

from .adapters.local_state import DiskCachePendingStore
from .adapters.mail import EmailNotificationGateway, MailRenderer, create_mail_client
from .config import Settings
from .infrastructure.persistence.database import get_session, init_db
from .infrastructure.persistence.repositories import (
    SQLModelCatalogRepository,
    SQLModelCustomerListRepository,
    SQLModelCustomerRepository,
    SQLModelMailRuleRepository,
    SQLModelOperationLogRepository,
    SQLModelSelectionHistoryRepository,
)
from .services.catalog import CatalogService
from .services.customer_admin import CustomerListAdminService
from .services.mail_rules import MailRuleService
from .services.operation_log import OperationLogRecorder
from .services.selection import SelectionService
from .services.submission import SubmissionCoordinator


class Container(containers.DeclarativeContainer):
    """Container DI de l'application.

    Utilisation :
        container = Container()
        container.database.init()  # Initialise la DB une fois
        service = container.selection_service()
        result = await service.submit("cust-1")
    """

    # Configuration - singleton charge une seule fois
    config = providers.Singleton(Settings)

    # Database - Resource pour initialisation unique
    database = providers.Resource(init_db)

    # Session factory - nouvelle session a chaque appel
    session = providers.Factory(lambda: next(get_session()))

    # Repositories
    catalog_repository = providers.Factory(SQLModelCatalogRepository, session=session)
    customer_list_repository = providers.Factory(SQLModelCustomerListRepository, session=session)
    history_repository = providers.Factory(SQLModelSelectionHistoryRepository, session=session)
    customer_repository = providers.Factory(SQLModelCustomerRepository, session=session)
    mail_rule_repository = providers.Factory(SQLModelMailRuleRepository, session=session)
    operation_log_repository = providers.Factory(SQLModelOperationLogRepository, session=session)

    # Stockage local des changements en attente (partage)
    pending_store = providers.Singleton(
        DiskCachePendingStore,
        cache_dir=config.provided.pending_state_dir,
    )

    # Email - client Graph None si les identifiants sont absents
    mail_client = providers.Singleton(create_mail_client, settings=config)
    mail_renderer = providers.Singleton(MailRenderer)
    notification_gateway = providers.Factory(
        EmailNotificationGateway,
        mail_client=mail_client,
        mail_rule_repo=mail_rule_repository,
        renderer=mail_renderer,
        enabled=config.provided.notify_selection_submitted,
        admin_email=config.provided.admin_email,
        frontend_url=config.provided.frontend_url,
    )

    # Services
    operation_log_recorder = providers.Factory(
        OperationLogRecorder,
        log_repo=operation_log_repository,
        customer_repo=customer_repository,
    )
    catalog_service = providers.Factory(
        CatalogService,
        catalog_repo=catalog_repository,
        customer_list_repo=customer_list_repository,
    )
    submission_coordinator = providers.Factory(
        SubmissionCoordinator,
        customer_list_repo=customer_list_repository,
        history_repo=history_repository,
        catalog_repo=catalog_repository,
        customer_repo=customer_repository,
        notifier=notification_gateway,
        operation_log=operation_log_recorder,
    )
    selection_service = providers.Factory(
        SelectionService,
        catalog_service=catalog_service,
        catalog_repo=catalog_repository,
        pending_store=pending_store,
        coordinator=submission_coordinator,
        ttl=config.provided.pending_ttl,
    )
    customer_admin_service = providers.Factory(
        CustomerListAdminService,
        customer_list_repo=customer_list_repository,
        history_repo=history_repository,
        pending_store=pending_store,
        operation_log=operation_log_recorder,
        history_limit=config.provided.history_default_limit,
    )
    mail_rule_service = providers.Factory(
        MailRuleService,
        mail_rule_repo=mail_rule_repository,
    )
