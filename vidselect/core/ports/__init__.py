"""
Ports (interfaces abstraites) definissant les contrats pour les adaptateurs.

Les ports sont les frontieres de l'architecture hexagonale. Ils definissent
ce dont le domaine a besoin du monde exterieur sans specifier
comment ces besoins sont satisfaits.

Ports repository : Contrats de persistance des donnees
- ICatalogRepository : Catalogue mensuel (batches et videos)
- ICustomerListRepository : Liste cumulative des clients
- ISelectionHistoryRepository : Historique des soumissions
- ICustomerRepository : Profils
- IMailRuleRepository : Destinataires des emails
- IOperationLogRepository : Journal d'audit

Port stockage local : IPendingChangeStore
Port notification : INotificationGateway, SelectionDiffNotification
"""

from vidselect.core.ports.local_state import IPendingChangeStore
from vidselect.core.ports.notifications import (
    INotificationGateway,
    SelectionDiffNotification,
)
from vidselect.core.ports.repositories import (
    ICatalogRepository,
    ICustomerListRepository,
    ICustomerRepository,
    IMailRuleRepository,
    IOperationLogRepository,
    ISelectionHistoryRepository,
)

__all__ = [
    # Repositories
    "ICatalogRepository",
    "ICustomerListRepository",
    "ICustomerRepository",
    "IMailRuleRepository",
    "IOperationLogRepository",
    "ISelectionHistoryRepository",
    # Stockage local
    "IPendingChangeStore",
    # Notification
    "INotificationGateway",
    "SelectionDiffNotification",
]
