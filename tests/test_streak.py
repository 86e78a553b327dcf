from __future__ import annotations

from datetime import date
from types import SimpleNamespace

from taskboard.streak import current_streak, next_streak, record_completion

TODAY = date(2024, 3, 10)


def test_first_completion_starts_streak() -> None:
    assert next_streak(0, None, TODAY) == (1, TODAY)


def test_same_day_keeps_streak() -> None:
    assert next_streak(4, TODAY, TODAY) == (4, TODAY)


def test_consecutive_day_increments() -> None:
    assert next_streak(4, date(2024, 3, 9), TODAY) == (5, TODAY)


def test_gap_resets_to_one() -> None:
    assert next_streak(9, date(2024, 3, 7), TODAY) == (1, TODAY)


def test_future_last_completion_resets() -> None:
    assert next_streak(3, date(2024, 3, 12), TODAY) == (1, TODAY)


def test_month_boundary_counts_as_consecutive() -> None:
    assert next_streak(2, date(2024, 2, 29), date(2024, 3, 1)) == (3, date(2024, 3, 1))


def test_current_streak_breaks_after_missed_day() -> None:
    assert current_streak(5, date(2024, 3, 9), TODAY) == 5
    assert current_streak(5, TODAY, TODAY) == 5
    assert current_streak(5, date(2024, 3, 8), TODAY) == 0
    assert current_streak(0, None, TODAY) == 0


def test_record_completion_updates_user() -> None:
    user = SimpleNamespace(streak=2, last_completed_on=date(2024, 3, 9))

    assert record_completion(user, TODAY) == 3
    assert user.last_completed_on == TODAY

    assert record_completion(user, TODAY) == 3
