"""
Interfaces ports pour les repositories.

Interfaces abstraites (ports) definissant les contrats pour la persistance.
Les implementations (adaptateurs) fournissent les mecanismes de stockage
concrets (SQLModel, faux en memoire pour les tests, etc.).

Toutes les operations sont des I/O asynchrones : le domaine les attend
sequentiellement. Les echecs de stockage sont signales par PersistenceError.
"""

from abc import ABC, abstractmethod
from collections.abc import Sequence
from datetime import datetime
from typing import Optional

from vidselect.core.entities import (
    Batch,
    Customer,
    MailEventType,
    MailRule,
    MonthlyCatalog,
    OperationLog,
    OwnedEntry,
    SelectionHistorySnapshot,
    Video,
    VideoSummary,
)


class ICatalogRepository(ABC):
    """
    Interface de lecture du catalogue mensuel.

    Le catalogue est en lecture seule du point de vue des clients ;
    save_catalog n'est utilise que par l'import administratif.
    """

    @abstractmethod
    async def list_months(self) -> list[str]:
        """Liste les mois publies (YYYY-MM), du plus recent au plus ancien."""
        ...

    @abstractmethod
    async def get_catalog_for_month(self, month: str) -> MonthlyCatalog:
        """Retourne le batch du mois et ses videos (catalogue vide si absent)."""
        ...

    @abstractmethod
    async def get_videos_by_ids(self, video_ids: Sequence[str]) -> list[Video]:
        """Recupere des videos par leurs ids (les ids inconnus sont ignores)."""
        ...

    @abstractmethod
    async def get_video_summaries(self, video_ids: Sequence[str]) -> list[VideoSummary]:
        """Resumes des videos demandees, avec le mois de leur batch."""
        ...

    @abstractmethod
    async def get_batch_for_video(self, video_id: str) -> Optional[Batch]:
        """Retourne le batch proprietaire d'une video."""
        ...

    @abstractmethod
    async def save_catalog(self, batch: Batch, videos: Sequence[Video]) -> MonthlyCatalog:
        """Enregistre un batch et ses videos (insertion ou mise a jour)."""
        ...


class ICustomerListRepository(ABC):
    """
    Interface de stockage de la liste cumulative (une ligne par video detenue).

    Cle d'unicite : (customer_id, video_id).
    """

    @abstractmethod
    async def list_owned(self, customer_id: str) -> list[OwnedEntry]:
        """Liste les entrees detenues, les plus recentes d'abord."""
        ...

    @abstractmethod
    async def remove_videos(self, customer_id: str, video_ids: Sequence[str]) -> int:
        """Supprime les entrees (customer_id, video_id). Retourne le nombre supprime."""
        ...

    @abstractmethod
    async def upsert_videos(
        self,
        customer_id: str,
        video_ids: Sequence[str],
        added_from_month: Optional[str],
        added_from_batch_id: Optional[str],
        added_at: datetime,
    ) -> int:
        """Insere ou met a jour les entrees sur la cle (customer_id, video_id)."""
        ...

    @abstractmethod
    async def clear(self, customer_id: str) -> int:
        """Supprime toutes les entrees du client. Retourne le nombre supprime."""
        ...


class ISelectionHistoryRepository(ABC):
    """Interface de l'historique append-only des soumissions."""

    @abstractmethod
    async def add(self, snapshot: SelectionHistorySnapshot) -> str:
        """Insere un instantane. Retourne son identifiant."""
        ...

    @abstractmethod
    async def list_for_customer(
        self, customer_id: str, limit: int = 50
    ) -> list[SelectionHistorySnapshot]:
        """Liste les instantanes d'un client, du plus recent au plus ancien."""
        ...


class ICustomerRepository(ABC):
    """Interface de stockage des profils."""

    @abstractmethod
    async def get_by_id(self, customer_id: str) -> Optional[Customer]:
        """Recupere un profil par son id."""
        ...

    @abstractmethod
    async def save(self, customer: Customer) -> Customer:
        """Sauvegarde un profil (insertion ou mise a jour)."""
        ...


class IMailRuleRepository(ABC):
    """Interface de stockage des destinataires par type d'evenement."""

    @abstractmethod
    async def list_rules(self, event_type: Optional[MailEventType] = None) -> list[MailRule]:
        """Liste les regles, filtrees par evenement si precise."""
        ...

    @abstractmethod
    async def save(self, rule: MailRule) -> MailRule:
        """Enregistre une regle."""
        ...

    @abstractmethod
    async def delete(self, rule_id: str) -> bool:
        """Supprime une regle. Retourne True si supprimee."""
        ...


class IOperationLogRepository(ABC):
    """Interface du journal d'audit."""

    @abstractmethod
    async def add(self, log: OperationLog) -> str:
        """Insere une entree de journal. Retourne son identifiant."""
        ...
