"""
Implementations SQLModel des repositories.

Ce module contient les implementations concretes des interfaces repository
definies dans vidselect/core/ports/repositories.py.

Chaque repository :
- Herite de l'interface ABC correspondante du domaine
- Recoit une session SQLModel via injection de dependances
- Convertit entre entites de domaine (dataclass) et modeles DB (SQLModel)
- Traduit les erreurs SQLAlchemy en PersistenceError
"""

from vidselect.infrastructure.persistence.repositories.account_repository import (
    SQLModelCustomerRepository,
    SQLModelMailRuleRepository,
    SQLModelOperationLogRepository,
)
from vidselect.infrastructure.persistence.repositories.catalog_repository import (
    SQLModelCatalogRepository,
)
from vidselect.infrastructure.persistence.repositories.customer_list_repository import (
    SQLModelCustomerListRepository,
)
from vidselect.infrastructure.persistence.repositories.selection_history_repository import (
    SQLModelSelectionHistoryRepository,
)

__all__ = [
    "SQLModelCatalogRepository",
    "SQLModelCustomerListRepository",
    "SQLModelSelectionHistoryRepository",
    "SQLModelCustomerRepository",
    "SQLModelMailRuleRepository",
    "SQLModelOperationLogRepository",
]
