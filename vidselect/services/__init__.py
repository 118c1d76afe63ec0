"""
Services applicatifs de VidSelect.

- identity_resolver : identite d'une video entre les mois
- pending_tracker : changements en attente et leur persistance locale
- reconciler : ensemble effectif et etats d'affichage
- submission : pipeline de soumission
- catalog, selection : lectures et facade de la session d'edition
- customer_admin, mail_rules, operation_log : peripherie administrative
"""
