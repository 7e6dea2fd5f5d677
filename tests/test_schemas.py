from datetime import datetime, timedelta, timezone

from schemas import Mood


def test_date_defaults_to_now_utc():
    before = datetime.now(timezone.utc) - timedelta(seconds=1)
    entry = Mood(mood="Happy")
    assert entry.date.tzinfo is not None
    assert before <= entry.date <= datetime.now(timezone.utc)


def test_naive_date_is_taken_as_utc():
    entry = Mood(mood="Sad", date=datetime(2025, 3, 1, 9, 30))
    assert entry.date == datetime(2025, 3, 1, 9, 30, tzinfo=timezone.utc)


def test_offset_date_is_converted_to_utc():
    entry = Mood(mood="Sad", date="2025-03-01T11:30:00+02:00")
    assert entry.date == datetime(2025, 3, 1, 9, 30, tzinfo=timezone.utc)
    assert entry.date.utcoffset() == timedelta(0)


def test_date_is_truncated_to_milliseconds():
    entry = Mood(date=datetime(2025, 3, 1, 9, 30, 0, 123456, tzinfo=timezone.utc))
    assert entry.date.microsecond == 123000


def test_mood_and_note_are_kept_verbatim():
    entry = Mood(mood="  grumpy-ish ", note="")
    assert entry.mood == "  grumpy-ish "
    assert entry.note == ""
    assert entry.model_dump(exclude_none=True).keys() == {"mood", "note", "date"}


def test_missing_note_is_not_dumped():
    assert "note" not in Mood(mood="Neutral").model_dump(exclude_none=True)


def test_numeric_mood_becomes_text():
    entry = Mood(mood=7, note=1.5)
    assert entry.mood == "7"
    assert entry.note == "1.5"
