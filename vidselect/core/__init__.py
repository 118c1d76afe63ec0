"""
Couche domaine (core).

Contient les entites metier, ports (interfaces abstraites), objets valeur
et la taxonomie d'erreurs. Cette couche n'a AUCUNE dependance vers
l'infrastructure (adapters, frameworks, BDD).

Sous-packages :
- entities/ : Entites metier (Video, Batch, OwnedEntry, SelectionHistorySnapshot...)
- ports/ : Interfaces abstraites definissant les contrats pour les adaptateurs
- value_objects/ : Objets valeur immutables (PendingChangeSet, DisplayState)
"""
