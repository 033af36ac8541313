"""
Tests for entry validation and record conversion.
"""

from datetime import date, datetime, time, timezone
from types import SimpleNamespace

import pytest

from schedule_app.domain import EntryFields, EntryValidationError, ScheduleEntry, UserAccount


class TestEntryFields:
    def test_strips_and_normalizes(self):
        fields = EntryFields.from_input(
            {"title": "  Dentist ", "date": date(2024, 3, 15), "time": "09:30:00", "notes": " bring card "}
        )
        assert fields == EntryFields(title="Dentist", date="2024-03-15", time="09:30", notes="bring card")

    def test_optional_fields_default_to_empty(self):
        fields = EntryFields.from_input({"title": "Gym", "date": "2024-03-15"})
        assert fields.time == ""
        assert fields.notes == ""

    def test_accepts_time_objects(self):
        assert EntryFields.from_input({"title": "Gym", "date": "2024-03-15", "time": time(7, 5)}).time == "07:05"

    @pytest.mark.parametrize("title", ["", "   ", None])
    def test_title_is_required(self, title):
        with pytest.raises(EntryValidationError):
            EntryFields.from_input({"title": title, "date": "2024-03-15"})

    @pytest.mark.parametrize("value", ["", None, "15/03/2024", "2024-02-30"])
    def test_date_is_required_and_valid(self, value):
        with pytest.raises(EntryValidationError):
            EntryFields.from_input({"title": "Dentist", "date": value})

    @pytest.mark.parametrize("value", ["9:30", "24:00", "noon", "09:61"])
    def test_rejects_malformed_time(self, value):
        with pytest.raises(EntryValidationError):
            EntryFields.from_input({"title": "Dentist", "date": "2024-03-15", "time": value})

    def test_validation_error_is_a_value_error(self):
        with pytest.raises(ValueError):
            EntryFields.from_input({})


class TestScheduleEntry:
    def test_from_record(self):
        entry = ScheduleEntry.from_record(
            {
                "id": 12,
                "user_id": "user-1",
                "title": "Dentist",
                "date": "2024-03-15",
                "time": None,
                "notes": None,
                "created_at": "2024-03-01T10:00:00Z",
                "updated_at": "",
            }
        )
        assert entry.id == "12"
        assert entry.time == ""
        assert entry.notes == ""
        assert entry.created_at == datetime(2024, 3, 1, 10, 0, tzinfo=timezone.utc)
        assert entry.updated_at is None

    def test_from_record_trims_database_times(self):
        record = {"id": "1", "user_id": "u", "title": "Gym", "date": "2024-03-15", "time": "07:05:00"}
        assert ScheduleEntry.from_record(record).time == "07:05"
        assert ScheduleEntry.from_record({**record, "time": "after lunch"}).time == "after lunch"

    def test_to_record_omits_missing_timestamps(self):
        entry = ScheduleEntry(id="1", user_id="u", title="Gym", date="2024-03-15", time="07:00")
        assert entry.to_record() == {
            "id": "1",
            "user_id": "u",
            "title": "Gym",
            "date": "2024-03-15",
            "time": "07:00",
            "notes": "",
        }

    def test_sort_key_puts_untimed_entries_first(self):
        untimed = ScheduleEntry(id="1", user_id="u", title="a", date="2024-03-15")
        timed = ScheduleEntry(id="2", user_id="u", title="b", date="2024-03-15", time="00:00")
        assert sorted([timed, untimed], key=lambda entry: entry.sort_key) == [untimed, timed]


class TestUserAccount:
    def test_from_user(self):
        account = UserAccount.from_user(SimpleNamespace(id="abc", email="a@example.com"))
        assert account == UserAccount(id="abc", email="a@example.com")

    def test_from_missing_user(self):
        assert UserAccount.from_user(None) is None
        assert UserAccount.from_user(SimpleNamespace(id="", email="x")) is None
