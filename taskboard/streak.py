from __future__ import annotations

from datetime import date, datetime, timezone
from typing import Optional, Tuple


def utc_today() -> date:
    return datetime.now(timezone.utc).date()


def next_streak(streak: int, last_completed_on: Optional[date], today: date) -> Tuple[int, date]:
    """Return (streak, last_completed_on) after a completion on `today`."""
    if last_completed_on is None:
        return 1, today
    delta_days = (today - last_completed_on).days
    if delta_days == 0:
        return max(streak, 1), today
    if delta_days == 1:
        return streak + 1, today
    return 1, today


def current_streak(streak: int, last_completed_on: Optional[date], today: date) -> int:
    """Streak as shown to the user: a run that missed yesterday is already broken."""
    if last_completed_on is None:
        return 0
    if (today - last_completed_on).days > 1:
        return 0
    return streak


def record_completion(user, today: Optional[date] = None) -> int:
    today = today or utc_today()
    user.streak, user.last_completed_on = next_streak(user.streak or 0, user.last_completed_on, today)
    return user.streak
