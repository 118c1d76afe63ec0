"""
Rendu des emails avec jinja2.
"""

from datetime import datetime
from pathlib import Path
from typing import Optional

from jinja2 import Environment, FileSystemLoader, select_autoescape

from vidselect.core.ports import SelectionDiffNotification

TEMPLATES_DIR = Path(__file__).parent / "templates"


class MailRenderer:
    """Produit le sujet et le corps HTML des notifications."""

    def __init__(self, templates_dir: Path = TEMPLATES_DIR) -> None:
        self._env = Environment(
            loader=FileSystemLoader(str(templates_dir)),
            autoescape=select_autoescape(["html"]),
        )

    def render_selection_diff(
        self,
        notification: SelectionDiffNotification,
        submitted_at: datetime,
        frontend_url: Optional[str] = None,
    ) -> tuple[str, str]:
        """
        Rend l'email de diff d'une soumission.

        Returns:
            (sujet, corps HTML)
        """
        subject = (
            f"[VidSelect] {notification.customer_name} : "
            f"+{len(notification.added_videos)} / -{len(notification.removed_videos)}"
        )
        template = self._env.get_template("selection_diff.html")
        html = template.render(
            subject=subject,
            customer_name=notification.customer_name,
            customer_email=notification.customer_email,
            total_count=notification.total_count,
            added_videos=notification.added_videos,
            removed_videos=notification.removed_videos,
            submitted_at=submitted_at,
            frontend_url=frontend_url,
        )
        return subject, html
