"""
Configuration de l'application via pydantic-settings.

La configuration est chargee depuis les variables d'environnement avec le prefixe VIDSELECT_,
et peut optionnellement etre fournie via un fichier .env.

Les identifiants Microsoft Graph sont optionnels - l'envoi d'emails est desactive si non fournis.
"""

from datetime import timedelta
from pathlib import Path
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Fichier .env a la racine du projet (parent de vidselect/)
_PROJECT_ROOT = Path(__file__).parent.parent
_ENV_FILE = _PROJECT_ROOT / ".env"


class Settings(BaseSettings):
    """Parametres de l'application avec support des variables d'environnement.

    Tous les parametres peuvent etre surcharges via des variables d'environnement
    avec le prefixe VIDSELECT_.
    Exemple : VIDSELECT_LOG_LEVEL=DEBUG

    Les chemins sont automatiquement etendus (~ -> repertoire home).
    """

    model_config = SettingsConfigDict(
        env_prefix="VIDSELECT_",
        env_file=_ENV_FILE if _ENV_FILE.exists() else ".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Base de donnees
    database_url: str = Field(default="sqlite:///vidselect.db")

    # Changements en attente (stockage local + fenetre de validite)
    pending_state_dir: Path = Field(default=Path("~/.vidselect/pending"))
    pending_ttl_hours: int = Field(default=24, ge=1)

    # Historique
    history_default_limit: int = Field(default=50, ge=1)

    # Microsoft Graph (OPTIONNEL - emails desactives si non definis)
    graph_tenant_id: Optional[str] = Field(default=None)
    graph_client_id: Optional[str] = Field(default=None)
    graph_client_secret: Optional[str] = Field(default=None)
    mail_sender: Optional[str] = Field(default=None)
    admin_email: Optional[str] = Field(default=None)
    notify_selection_submitted: bool = Field(default=True)
    frontend_url: str = Field(default="http://localhost:5173")

    # Logging (fichier + stderr, rotation 10MB, 5 fichiers de retention)
    log_level: str = Field(default="INFO")
    log_file: Path = Field(default=Path("logs/vidselect.log"))
    log_rotation_size: str = Field(default="10 MB")
    log_retention_count: int = Field(default=5)
    log_audit_file: Path = Field(default=Path("logs/audit.log"))

    @field_validator("pending_state_dir", "log_file", "log_audit_file", mode="before")
    @classmethod
    def expand_path(cls, v: str | Path) -> Path:
        """Etend ~ vers le repertoire home dans les chemins."""
        return Path(v).expanduser()

    @property
    def mail_enabled(self) -> bool:
        """Verifie si l'envoi via Microsoft Graph est configure."""
        return all(
            (
                self.graph_tenant_id,
                self.graph_client_id,
                self.graph_client_secret,
                self.mail_sender,
            )
        )

    @property
    def pending_ttl(self) -> timedelta:
        """Fenetre de validite d'un jeu de changements sauvegarde."""
        return timedelta(hours=self.pending_ttl_hours)
