"""
Entites du catalogue mensuel.

Un Batch est une collection datee de videos publiee pour un mois
calendaire. Une meme video conceptuelle peut reapparaitre d'un mois a
l'autre sous un id different mais avec un titre identique.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional


@dataclass(frozen=True)
class Video:
    """
    Une entree du catalogue.

    Attributs :
        id : Identifiant opaque, unique au sein d'un batch
        title : Titre affiche, sert de cle d'identite entre batches
        title_en : Titre anglais (optionnel)
        thumbnail_url : URL de la vignette extraite du fichier Excel
        batch_id : Batch proprietaire
        director, cast, duration, rating, language, subtitle :
            metadonnees descriptives, inertes pour la reconciliation
    """

    id: str
    title: str = ""
    title_en: Optional[str] = None
    thumbnail_url: Optional[str] = None
    batch_id: Optional[str] = None
    director: Optional[str] = None
    cast: tuple[str, ...] = ()
    duration: Optional[int] = None  # minutes
    rating: Optional[str] = None
    language: Optional[str] = None
    subtitle: Optional[str] = None


@dataclass(frozen=True)
class Batch:
    """Collection de videos publiee pour un mois (month au format YYYY-MM)."""

    id: str
    name: str
    month: str
    created_at: Optional[datetime] = None


@dataclass
class MonthlyCatalog:
    """Resultat de getCatalogForMonth : le batch du mois et ses videos."""

    batch: Optional[Batch] = None
    videos: list[Video] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return self.batch is None or not self.videos
