"""API web JSON (FastAPI)."""
