"""
VidSelect - Portail de selection de videos par catalogue mensuel.

Les administrateurs publient chaque mois un catalogue (batch) de videos.
Chaque client entretient une liste cumulative de videos choisies dans
n'importe quel mois publie, et soumet ses changements qui declenchent
une notification par email au personnel.

Architecture : Hexagonale (Ports et Adaptateurs)
- core/ : Couche domaine (entites, ports, objets valeur, erreurs)
- services/ : Couche application (reconciliation, suivi, soumission)
- adapters/ : Couche infrastructure (CLI, stockage local, email)
- infrastructure/ : Persistance SQLModel
- web/ : API JSON FastAPI
"""
