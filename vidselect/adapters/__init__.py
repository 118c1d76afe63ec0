"""Adaptateurs : stockage local, email, CLI."""
