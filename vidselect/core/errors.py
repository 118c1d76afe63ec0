"""
Taxonomie des erreurs du domaine de selection.

- ValidationError : entree invalide ou manquante pour le coordinateur
- PersistenceError : le stockage durable a refuse une lecture/ecriture
- NotificationError : echec d'envoi de notification (toujours intercepte)
- UnexpectedError : toute autre erreur survenue pendant une etape critique

L'expiration d'un jeu de changements en attente n'est pas une erreur :
le jeu perime est simplement ignore au chargement.
"""


class SelectionError(Exception):
    """Classe de base des erreurs de selection."""


class ValidationError(SelectionError):
    """Entree invalide (client manquant, listes d'IDs malformees)."""


class PersistenceError(SelectionError):
    """Le stockage durable a rejete une operation."""


class NotificationError(SelectionError):
    """L'envoi d'une notification a echoue."""


class UnexpectedError(SelectionError):
    """Erreur inattendue durant une etape critique de soumission."""
