"""Routes de l'API JSON."""
