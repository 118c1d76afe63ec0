"""
Suivi des changements en attente d'un client.

Zone de staging des intentions d'ajout/retrait non soumises. Chaque
transition re-serialise le jeu complet dans le stockage local, pour
qu'une navigation aller-retour sur le meme poste reprenne le travail.
Au chargement, un jeu sauvegarde depuis plus que la fenetre de validite
est ignore et supprime.

Le tracker n'ecrit jamais dans la liste detenue : un echec du stockage
local se traduit au pire par l'absence de reprise.
"""

from collections.abc import Callable
from datetime import datetime, timedelta, timezone

from loguru import logger

from vidselect.core.entities import Video
from vidselect.core.ports import IPendingChangeStore
from vidselect.core.value_objects import (
    DEFAULT_PENDING_TTL,
    DisplayState,
    PendingChangeSet,
    deserialize_pending_changes,
    is_expired,
    serialize_pending_changes,
)
from vidselect.services.identity_resolver import CrossMonthIdentityResolver


def utcnow() -> datetime:
    """Horloge par defaut (UTC, avec fuseau)."""
    return datetime.now(timezone.utc)


class PendingChangeTracker:
    """
    Machine a etats des videos pour la session d'edition d'un client.

    Transitions (toggle, seule transition declenchee de l'exterieur) :
        owned -> pending_remove -> owned
        available -> pending_add -> available

    Example:
        tracker = PendingChangeTracker("cust-1", store)
        tracker.restore()
        new_state = tracker.toggle(video, resolver)
    """

    def __init__(
        self,
        customer_id: str,
        store: IPendingChangeStore,
        ttl: timedelta = DEFAULT_PENDING_TTL,
        now_fn: Callable[[], datetime] = utcnow,
    ) -> None:
        """
        Initialise le tracker avec un jeu vide.

        Args:
            customer_id: Client proprietaire de la session
            store: Stockage local des jeux en attente
            ttl: Fenetre de validite d'un jeu sauvegarde
            now_fn: Horloge injectee (tests)
        """
        self._customer_id = customer_id
        self._store = store
        self._ttl = ttl
        self._now_fn = now_fn
        self._changes = PendingChangeSet()

    @property
    def customer_id(self) -> str:
        return self._customer_id

    @property
    def changes(self) -> PendingChangeSet:
        return self._changes

    def has_pending_changes(self) -> bool:
        return not self._changes.is_empty

    def restore(self) -> PendingChangeSet:
        """
        Recharge le jeu sauvegarde du client s'il est encore valide.

        Returns:
            Le jeu restaure (vide si absent, illisible ou perime)
        """
        payload = self._store.load(self._customer_id)
        if payload is None:
            self._changes = PendingChangeSet()
            return self._changes

        try:
            changes, saved_at = deserialize_pending_changes(payload)
        except (ValueError, TypeError) as e:
            logger.warning(f"Changements en attente illisibles pour {self._customer_id}: {e}")
            self._store.delete(self._customer_id)
            self._changes = PendingChangeSet()
            return self._changes

        if is_expired(self._now_fn(), saved_at, self._ttl):
            logger.info(
                f"Changements en attente perimes ignores pour {self._customer_id} "
                f"(sauvegardes le {saved_at.isoformat()})"
            )
            self._store.delete(self._customer_id)
            self._changes = PendingChangeSet()
            return self._changes

        self._changes = changes
        logger.debug(
            f"Restaure {len(changes.add)} ajout(s) et {len(changes.remove)} retrait(s) "
            f"pour {self._customer_id}"
        )
        return self._changes

    def state_of(self, video: Video, resolver: CrossMonthIdentityResolver) -> DisplayState:
        """Etat d'affichage courant d'une video."""
        return DisplayState.from_flags(
            owned=resolver.is_owned(video),
            pending_add=resolver.is_pending_add(video, self._changes),
            pending_remove=resolver.is_pending_remove(video, self._changes),
        )

    def toggle(self, video: Video, resolver: CrossMonthIdentityResolver) -> DisplayState:
        """
        Bascule l'etat d'une video et persiste le jeu complet.

        Un retrait est enregistre sous l'id de chaque entree detenue
        equivalente, qui peut differer de l'id affiche quand la video vient
        d'un autre mois.

        Args:
            video: Video cliquee
            resolver: Resolveur construit sur la liste detenue

        Returns:
            Le nouvel etat d'affichage de la video
        """
        state = self.state_of(video, resolver)
        owned_entries = resolver.equivalent_owned(video)

        if state is DisplayState.OWNED:
            for entry in owned_entries:
                self._changes = self._changes.with_remove(entry.video_id, entry.title)
        elif state is DisplayState.PENDING_REMOVE:
            self._changes = self._changes.without_remove(
                {video.id, *(entry.video_id for entry in owned_entries)}, video.title
            )
        elif state is DisplayState.AVAILABLE:
            self._changes = self._changes.with_add(video.id, video.title)
        else:
            self._changes = self._changes.without_add({video.id}, video.title)

        self._persist()
        return self.state_of(video, resolver)

    def clear(self) -> None:
        """Vide le jeu en attente et sa copie locale."""
        self._changes = PendingChangeSet()
        self._store.delete(self._customer_id)

    def _persist(self) -> None:
        payload = serialize_pending_changes(self._changes, self._now_fn())
        self._store.save(self._customer_id, payload)
