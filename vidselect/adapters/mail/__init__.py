"""
Notification par email (Microsoft Graph + jinja2).
"""

from vidselect.adapters.mail.graph_client import GraphMailClient, GraphThrottledError
from vidselect.adapters.mail.notification_gateway import (
    EmailNotificationGateway,
    create_mail_client,
)
from vidselect.adapters.mail.renderer import MailRenderer

__all__ = [
    "EmailNotificationGateway",
    "GraphMailClient",
    "GraphThrottledError",
    "MailRenderer",
    "create_mail_client",
]
