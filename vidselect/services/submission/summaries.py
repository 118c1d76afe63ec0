"""
Resumes de videos pour l'historique et l'email.
"""

from collections.abc import Iterable

from vidselect.core.entities import VideoSummary
from vidselect.core.value_objects import normalize_title


def dedupe_by_title(summaries: Iterable[VideoSummary]) -> tuple[VideoSummary, ...]:
    """
    Dedoublonne des resumes par titre en gardant le premier.

    La meme video peut avoir ete basculee depuis les lignes de plusieurs
    mois qui partagent un titre. Les resumes sans titre sont dedoublonnes
    par id.
    """
    seen: set[str] = set()
    result: list[VideoSummary] = []
    for summary in summaries:
        title = normalize_title(summary.title)
        key = f"title:{title}" if title else f"id:{summary.video_id}"
        if key in seen:
            continue
        seen.add(key)
        result.append(summary)
    return tuple(result)


def unique_ids(video_ids: Iterable[str]) -> tuple[str, ...]:
    """Ids sans doublon, ordre conserve."""
    return tuple(dict.fromkeys(video_ids))
