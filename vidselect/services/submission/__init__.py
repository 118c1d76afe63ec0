"""
Package de soumission des listes client.

Reexporte les symboles principaux (from vidselect.services.submission import ...).
"""

from .coordinator import SubmissionCoordinator, validate_request
from .dataclasses import (
    PipelineStep,
    SubmissionContext,
    SubmissionOutcome,
    SubmissionRequest,
    SubmissionResult,
)
from .summaries import dedupe_by_title, unique_ids

__all__ = [
    "PipelineStep",
    "SubmissionContext",
    "SubmissionCoordinator",
    "SubmissionOutcome",
    "SubmissionRequest",
    "SubmissionResult",
    "dedupe_by_title",
    "unique_ids",
    "validate_request",
]
