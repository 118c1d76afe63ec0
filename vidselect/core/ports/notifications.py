"""
Port de notification des soumissions.

Le domaine ne sait pas rendre ni envoyer un email : il transmet un diff
a la passerelle, qui choisit les destinataires et le canal.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional

from vidselect.core.entities import VideoSummary


@dataclass(frozen=True)
class SelectionDiffNotification:
    """
    Diff d'une soumission a notifier.

    Attributs :
        customer_id : Client ayant soumis
        customer_name : Nom affiche (id a defaut)
        customer_email : Email du client
        total_count : Nombre total de videos detenues apres soumission
        added_videos : Videos ajoutees
        removed_videos : Videos retirees
    """

    customer_id: str
    customer_name: str
    customer_email: Optional[str]
    total_count: int
    added_videos: tuple[VideoSummary, ...] = ()
    removed_videos: tuple[VideoSummary, ...] = ()


class INotificationGateway(ABC):
    """Interface de la passerelle de notification (best-effort)."""

    @abstractmethod
    async def send_selection_diff(self, notification: SelectionDiffNotification) -> None:
        """
        Envoie la notification de diff.

        Raises:
            NotificationError: Si l'envoi echoue
        """
        ...
