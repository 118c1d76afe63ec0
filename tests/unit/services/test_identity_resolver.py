"""
Tests du resolveur d'identite entre les mois.

Regle unique : meme video <=> titre normalise egal OU id egal.
"""

from loguru import logger

from vidselect.core.entities import OwnedEntry, Video
from vidselect.core.value_objects import PendingChangeSet
from vidselect.services.identity_resolver import CrossMonthIdentityResolver


def _owned(video_id: str, title: str) -> OwnedEntry:
    return OwnedEntry(customer_id="cust-1", video_id=video_id, title=title, added_from_month="2025-01")


class TestIsOwned:
    def test_same_title_different_id_across_months(self):
        """Movie A possede en 2025-01 est reconnu sous un nouvel id en 2025-02."""
        resolver = CrossMonthIdentityResolver([_owned("A1", "Movie A")])
        assert resolver.is_owned(Video(id="B1", title="Movie A", batch_id="batch-feb"))

    def test_id_match_when_titles_differ(self):
        resolver = CrossMonthIdentityResolver([_owned("A1", "Movie A ")])
        assert resolver.is_owned(Video(id="A1", title="Movie A (restored)"))

    def test_whitespace_is_normalized(self):
        resolver = CrossMonthIdentityResolver([_owned("A1", "  Movie A")])
        assert resolver.is_owned(Video(id="B1", title="Movie A  "))

    def test_unrelated_video_not_owned(self):
        resolver = CrossMonthIdentityResolver([_owned("A1", "Movie A")])
        assert not resolver.is_owned(Video(id="B2", title="Movie B"))

    def test_resolve_owned_returns_owned_entry(self):
        entry = _owned("A1", "Movie A")
        resolver = CrossMonthIdentityResolver([entry])
        assert resolver.resolve_owned(Video(id="B1", title="Movie A")) is entry

    def test_resolve_owned_prefers_id_over_title(self):
        january = _owned("A1", "Drama X")
        february = _owned("B1", "Drama X")
        resolver = CrossMonthIdentityResolver([january, february])
        assert resolver.resolve_owned(Video(id="B1", title="Drama X")) is february

    def test_equivalent_owned_lists_every_duplicate(self):
        january = _owned("A1", "Drama X")
        february = _owned("B1", "Drama X")
        resolver = CrossMonthIdentityResolver([january, february, _owned("V1", "Movie One")])
        assert resolver.equivalent_owned(Video(id="C1", title="Drama X")) == [january, february]
        assert resolver.equivalent_owned(Video(id="B1", title="Drama X")) == [january, february]

    def test_equivalent_owned_includes_id_match_with_other_title(self):
        entry = _owned("A1", "Movie A")
        resolver = CrossMonthIdentityResolver([entry])
        assert resolver.equivalent_owned(Video(id="A1", title="Movie A (restored)")) == [entry]

    def test_blank_title_compared_by_id_only(self):
        resolver = CrossMonthIdentityResolver([_owned("A1", "")])
        assert resolver.is_owned(Video(id="A1", title=""))
        assert not resolver.is_owned(Video(id="B1", title=""))

    def test_blank_title_logged_once(self):
        messages = []
        handler_id = logger.add(messages.append, level="WARNING")
        try:
            resolver = CrossMonthIdentityResolver([_owned("A1", "")])
            resolver.is_owned(Video(id="A1", title=""))
            resolver.is_owned(Video(id="A1", title=" "))
        finally:
            logger.remove(handler_id)
        assert len(messages) == 1

    def test_owned_ids_and_titles(self):
        resolver = CrossMonthIdentityResolver([_owned("A1", "Movie A"), _owned("V9", "")])
        assert resolver.owned_ids == {"A1", "V9"}
        assert resolver.owned_titles == {"Movie A"}


class TestPendingMembership:
    def test_pending_add_by_title(self):
        resolver = CrossMonthIdentityResolver([])
        changes = PendingChangeSet().with_add("A2", "Comedy Y")
        assert resolver.is_pending_add(Video(id="B2", title="Comedy Y"), changes)

    def test_pending_add_by_id(self):
        resolver = CrossMonthIdentityResolver([])
        changes = PendingChangeSet().with_add("V3", "")
        assert resolver.is_pending_add(Video(id="V3", title=""), changes)

    def test_pending_remove_by_title(self):
        resolver = CrossMonthIdentityResolver([_owned("A1", "Drama X")])
        changes = PendingChangeSet().with_remove("A1", "Drama X")
        assert resolver.is_pending_remove(Video(id="B1", title="Drama X"), changes)

    def test_not_pending(self):
        resolver = CrossMonthIdentityResolver([])
        changes = PendingChangeSet().with_add("V3", "Movie Three")
        assert not resolver.is_pending_add(Video(id="V2", title="Movie Two"), changes)
