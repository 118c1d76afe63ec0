"""
Configuration du logging de l'application via loguru.

Trois sorties :
- Console : coloree, niveau configurable, pour suivre une session CLI
- Fichier applicatif : tout en DEBUG, JSON avec rotation
- Fichier d'audit : uniquement les traces de soumission et d'administration
  des listes, en JSON a partir de INFO
"""

import sys
from pathlib import Path
from typing import Any, Optional

from loguru import logger

# Modules dont les messages INFO+ constituent la trace d'audit
AUDIT_MODULES = (
    "vidselect.services.submission",
    "vidselect.services.customer_admin",
    "vidselect.services.operation_log",
)


def is_audit_record(record: dict[str, Any]) -> bool:
    """Vrai pour un message emis par un module de soumission ou d'audit."""
    name = record.get("name") or ""
    return name.startswith(AUDIT_MODULES)


def configure_logging(
    log_level: str = "INFO",
    log_file: Path = Path("logs/vidselect.log"),
    rotation_size: str = "10 MB",
    retention_count: int = 5,
    audit_log_file: Optional[Path] = None,
) -> None:
    """Configure le logging de l'application.

    Args :
        log_level : Niveau minimum pour la console (DEBUG, INFO, WARNING, ERROR)
        log_file : Fichier de log applicatif
        rotation_size : Taille maximale d'un fichier avant rotation (ex: "10 MB")
        retention_count : Nombre de fichiers rotatifs a conserver
        audit_log_file : Fichier d'audit, par defaut audit.log a cote de log_file
    """
    logger.remove()

    logger.add(
        sys.stderr,
        level=log_level,
        format=(
            "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | "
            "<level>{level: <8}</level> | "
            "<cyan>{name}</cyan> | "
            "<level>{message}</level>"
        ),
        colorize=True,
    )

    log_file.parent.mkdir(parents=True, exist_ok=True)
    logger.add(
        log_file,
        level="DEBUG",
        format="{message}",
        serialize=True,
        rotation=rotation_size,
        retention=retention_count,
        compression="zip",
        enqueue=True,
    )

    audit_log_file = audit_log_file or log_file.with_name("audit.log")
    audit_log_file.parent.mkdir(parents=True, exist_ok=True)
    logger.add(
        audit_log_file,
        level="INFO",
        format="{message}",
        filter=is_audit_record,
        serialize=True,
        rotation=rotation_size,
        retention=retention_count,
        enqueue=True,
    )

    logger.debug(
        "Logging configure",
        log_file=str(log_file),
        audit_log_file=str(audit_log_file),
        rotation=rotation_size,
    )
