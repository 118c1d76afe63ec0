"""
Entites metier representant les concepts du domaine.

Exports:
- Video, Batch, MonthlyCatalog : catalogue mensuel
- OwnedEntry, VideoSummary, SelectionHistorySnapshot, TriggerAction : liste client
- Customer, CustomerRole, MailRule, MailEventType, OperationLog : peripherie
"""

from vidselect.core.entities.account import (
    Customer,
    CustomerRole,
    MailEventType,
    MailRule,
    OperationLog,
)
from vidselect.core.entities.catalog import Batch, MonthlyCatalog, Video
from vidselect.core.entities.customer_list import (
    OwnedEntry,
    SelectionHistorySnapshot,
    TriggerAction,
    VideoSummary,
)

__all__ = [
    "Video",
    "Batch",
    "MonthlyCatalog",
    "OwnedEntry",
    "VideoSummary",
    "SelectionHistorySnapshot",
    "TriggerAction",
    "Customer",
    "CustomerRole",
    "MailRule",
    "MailEventType",
    "OperationLog",
]
