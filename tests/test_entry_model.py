"""
Daily Journal API - Entry Model Unit Tests
============================================

What we test:
    ✅ Title/body presence and length limits
    ✅ All invalid fields reported together
    ✅ Timestamps assigned at construction, createdAt immutable
    ✅ Timestamp rendering for the JSON contract
"""

from datetime import datetime, timedelta, timezone

import pytest

from journal_api.exceptions import ValidationError
from journal_api.models.entry import (
    BODY_MAX_LENGTH,
    TITLE_MAX_LENGTH,
    Entry,
    check_field,
)
from journal_api.schemas.entry import EntryResponse, format_timestamp


class TestEntryValidation:

    def test_valid_entry_at_limits(self):
        entry = Entry(title="t" * TITLE_MAX_LENGTH, body="b" * BODY_MAX_LENGTH)
        assert len(entry.title) == 50
        assert len(entry.body) == 5000

    @pytest.mark.parametrize(
        "title, body, bad_field",
        [
            (None, "Hello", "title"),
            ("", "Hello", "title"),
            ("t" * 51, "Hello", "title"),
            ("Day 1", None, "body"),
            ("Day 1", "", "body"),
            ("Day 1", "b" * 5001, "body"),
        ],
    )
    def test_invalid_field_rejected(self, title, body, bad_field):
        with pytest.raises(ValidationError) as exc_info:
            Entry(title=title, body=body)
        assert list(exc_info.value.errors) == [bad_field]
        assert exc_info.value.message.startswith("Entry validation failed")

    def test_both_fields_reported(self):
        with pytest.raises(ValidationError) as exc_info:
            Entry()
        assert set(exc_info.value.errors) == {"title", "body"}
        assert "title is required" in exc_info.value.message
        assert "body is required" in exc_info.value.message

    def test_reassigning_oversized_title_rejected(self):
        entry = Entry(title="Day 1", body="Hello")
        with pytest.raises(ValidationError) as exc_info:
            entry.title = "x" * 51
        assert exc_info.value.field == "title"
        assert entry.title == "Day 1"

    def test_non_string_rejected(self):
        assert check_field("title", 42) == "title must be a string"


class TestEntryTimestamps:

    def test_id_and_timestamps_assigned(self):
        entry = Entry(title="Day 1", body="Hello")
        assert entry.id is not None
        assert entry.created_at.tzinfo is not None
        assert entry.updated_at == entry.created_at

    def test_explicit_created_at_kept(self):
        created = datetime(2024, 9, 9, tzinfo=timezone.utc)
        entry = Entry(title="Day 1", body="Hello", created_at=created)
        assert entry.created_at == created
        assert entry.updated_at == created

    def test_created_at_is_immutable(self):
        entry = Entry(title="Day 1", body="Hello")
        with pytest.raises(ValidationError):
            entry.created_at = entry.created_at - timedelta(days=1)

    def test_touch_refreshes_updated_at_only(self):
        created = datetime.now(timezone.utc) - timedelta(hours=1)
        entry = Entry(title="Day 1", body="Hello", created_at=created)
        entry.touch()
        assert entry.updated_at > created
        assert entry.created_at == created


class TestTimestampFormat:

    def test_aware_utc(self):
        value = datetime(2024, 9, 9, 0, 0, 0, tzinfo=timezone.utc)
        assert format_timestamp(value) == "2024-09-09T00:00:00.000Z"

    def test_naive_treated_as_utc(self):
        assert format_timestamp(datetime(2024, 9, 9, 12, 30)) == "2024-09-09T12:30:00.000Z"

    def test_other_offset_converted(self):
        value = datetime(2024, 9, 9, 2, 0, tzinfo=timezone(timedelta(hours=2)))
        assert format_timestamp(value) == "2024-09-09T00:00:00.000Z"

    def test_response_uses_camel_case_keys(self):
        entry = Entry(title="Day 1", body="Hello")
        data = EntryResponse.model_validate(entry).model_dump(mode="json", by_alias=True)
        assert set(data) == {"id", "title", "body", "createdAt", "updatedAt"}
        assert data["id"] == str(entry.id)
        assert data["createdAt"] == data["updatedAt"]
