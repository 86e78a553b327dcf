from __future__ import annotations

from datetime import datetime
from types import SimpleNamespace

from taskboard.sorting import sort_tasks


def _task(title: str, duration: int = 30, created: int = 1, **props):
    return SimpleNamespace(
        title=title,
        duration=duration,
        created_at=datetime(2024, 1, created),
        properties=[{"name": k, "value": v} for k, v in props.items()],
    )


def _titles(tasks) -> list[str]:
    return [t.title for t in tasks]


def test_sort_by_builtin_fields() -> None:
    tasks = [_task("b", 20, 2), _task("C", 10, 3), _task("a", 30, 1)]

    assert _titles(sort_tasks(tasks, "title")) == ["a", "b", "C"]
    assert _titles(sort_tasks(tasks, "duration", descending=True)) == ["a", "b", "C"]
    assert _titles(sort_tasks(tasks, "created_at")) == ["a", "b", "C"]


def test_sort_by_number_property_is_numeric() -> None:
    tasks = [_task("ten", effort=10), _task("nine", effort=9), _task("hundred", effort=100)]

    assert _titles(sort_tasks(tasks, "effort")) == ["nine", "ten", "hundred"]


def test_missing_values_go_last_in_both_directions() -> None:
    tasks = [_task("none"), _task("blank", due=None), _task("late", due="2024-05-01"), _task("early", due="2024-01-01")]

    assert _titles(sort_tasks(tasks, "due")) == ["early", "late", "none", "blank"]
    assert _titles(sort_tasks(tasks, "due", descending=True)) == ["late", "early", "none", "blank"]


def test_checkbox_and_multi_select_ordering() -> None:
    tasks = [_task("yes", flag=True), _task("no", flag=False)]
    assert _titles(sort_tasks(tasks, "flag")) == ["no", "yes"]

    tagged = [_task("w", tags=["work"]), _task("h", tags=["home", "work"]), _task("empty", tags=[])]
    assert _titles(sort_tasks(tagged, "tags")) == ["h", "w", "empty"]
