"""
Tests du PendingChangeSet et de sa forme persistee.

Couvre:
- Exclusivite ajout/retrait
- Effacement par id ou par titre
- serialize/deserialize (forme pending-changes-{id})
- Predicat de peremption
"""

from datetime import datetime, timedelta, timezone

import pytest

from vidselect.core.value_objects import (
    DEFAULT_PENDING_TTL,
    PendingChangeSet,
    deserialize_pending_changes,
    is_expired,
    normalize_title,
    pending_key,
    serialize_pending_changes,
)

SAVED_AT = datetime(2025, 2, 1, 10, 0, tzinfo=timezone.utc)


class TestPendingChangeSet:
    """Operations du jeu en attente."""

    def test_empty_by_default(self):
        changes = PendingChangeSet()
        assert changes.is_empty
        assert changes.add_ids == frozenset()

    def test_with_add_removes_from_remove(self):
        changes = PendingChangeSet().with_remove("V1", "Movie One").with_add("V1", "Movie One")
        assert changes.add_ids == {"V1"}
        assert changes.remove_ids == frozenset()

    def test_with_remove_removes_from_add(self):
        changes = PendingChangeSet().with_add("V1", "Movie One").with_remove("V1", "Movie One")
        assert changes.remove_ids == {"V1"}
        assert changes.add_ids == frozenset()

    def test_operations_return_new_instances(self):
        original = PendingChangeSet()
        updated = original.with_add("V1", "Movie One")
        assert original.is_empty
        assert not updated.is_empty

    def test_without_add_erases_by_title(self):
        changes = PendingChangeSet().with_add("B1", "Drama X").with_add("V2", "Movie Two")
        updated = changes.without_add({"A1"}, " Drama X ")
        assert updated.add_ids == {"V2"}

    def test_without_remove_erases_by_id(self):
        changes = PendingChangeSet().with_remove("A1", "")
        assert changes.without_remove({"A1"}, None).is_empty

    def test_titles_are_normalized_and_blank_ignored(self):
        changes = PendingChangeSet().with_add("V1", "  Movie One ").with_add("V9", "")
        assert changes.add_titles == {"Movie One"}

    def test_missing_title_stored_as_empty(self):
        changes = PendingChangeSet().with_add("V1", None)
        assert changes.add == {"V1": ""}


class TestHelpers:
    def test_pending_key(self):
        assert pending_key("cust-1") == "pending-changes-cust-1"

    @pytest.mark.parametrize(
        "raw,expected",
        [("Drama X", "Drama X"), ("  Drama X\t", "Drama X"), (None, ""), ("   ", "")],
    )
    def test_normalize_title(self, raw, expected):
        assert normalize_title(raw) == expected


class TestSerialization:
    """Forme persistee du jeu en attente."""

    def test_serialize_shape(self):
        changes = PendingChangeSet().with_add("V2", "Movie Two").with_remove("V1", "Movie One")
        data = serialize_pending_changes(changes, SAVED_AT)
        assert data == {
            "add": ["V2"],
            "remove": ["V1"],
            "addTitles": ["Movie Two"],
            "removeTitles": ["Movie One"],
            "savedAt": "2025-02-01T10:00:00+00:00",
        }

    def test_roundtrip_preserves_ids_and_titles(self):
        changes = PendingChangeSet().with_add("V2", "Movie Two").with_remove("A1", "Drama X")
        restored, saved_at = deserialize_pending_changes(
            serialize_pending_changes(changes, SAVED_AT)
        )
        assert restored == changes
        assert saved_at == SAVED_AT

    def test_naive_saved_at_is_utc(self):
        _, saved_at = deserialize_pending_changes(
            {"add": [], "remove": [], "savedAt": "2025-02-01T10:00:00"}
        )
        assert saved_at == SAVED_AT

    def test_ids_in_both_sets_are_dropped(self):
        restored, _ = deserialize_pending_changes(
            {
                "add": ["V1", "V2"],
                "remove": ["V1"],
                "addTitles": ["Movie One", "Movie Two"],
                "removeTitles": ["Movie One"],
                "savedAt": SAVED_AT.isoformat(),
            }
        )
        assert restored.add_ids == {"V2"}
        assert restored.remove_ids == frozenset()

    def test_missing_titles_default_to_empty(self):
        restored, _ = deserialize_pending_changes(
            {"add": ["V1", "V2"], "addTitles": ["Movie One"], "savedAt": SAVED_AT.isoformat()}
        )
        assert restored.add == {"V1": "Movie One", "V2": ""}

    def test_null_id_skipped_without_dropping_following_ids(self):
        restored, _ = deserialize_pending_changes(
            {
                "add": ["V1", None, "V2"],
                "addTitles": ["Movie One", "Ghost", "Movie Two"],
                "remove": ["A1"],
                "removeTitles": ["Drama X", "Orphan"],
                "savedAt": SAVED_AT.isoformat(),
            }
        )
        assert restored.add == {"V1": "Movie One", "V2": "Movie Two"}
        assert restored.remove == {"A1": "Drama X"}

    @pytest.mark.parametrize(
        "payload",
        [
            {"add": [], "remove": []},
            {"add": [], "remove": [], "savedAt": "not-a-date"},
            {"add": "V1", "savedAt": "2025-02-01T10:00:00"},
            {"add": [], "savedAt": 12},
        ],
    )
    def test_invalid_payload_raises_value_error(self, payload):
        with pytest.raises(ValueError):
            deserialize_pending_changes(payload)


class TestIsExpired:
    """Fenetre de validite de 24h par defaut."""

    def test_default_ttl_is_24_hours(self):
        assert DEFAULT_PENDING_TTL == timedelta(hours=24)

    def test_saved_25_hours_ago_is_expired(self):
        assert is_expired(SAVED_AT + timedelta(hours=25), SAVED_AT)

    def test_saved_1_hour_ago_is_valid(self):
        assert not is_expired(SAVED_AT + timedelta(hours=1), SAVED_AT)

    def test_exactly_at_ttl_is_expired(self):
        assert is_expired(SAVED_AT + timedelta(hours=24), SAVED_AT)

    def test_custom_ttl(self):
        assert is_expired(SAVED_AT + timedelta(hours=3), SAVED_AT, ttl=timedelta(hours=2))
