from __future__ import annotations

from datetime import datetime
from typing import Any, List, Optional, Sequence, Tuple

BUILTIN_KEYS = ("title", "duration", "created_at")


def _normalize(value: Any) -> Optional[Tuple[int, Any]]:
    # numbers < booleans < text when a property name is reused with different types
    if value is None or value == "" or value == []:
        return None
    if isinstance(value, bool):
        return (1, int(value))
    if isinstance(value, (int, float)):
        return (0, float(value))
    if isinstance(value, datetime):
        return (2, value.isoformat())
    if isinstance(value, list):
        return (2, ", ".join(str(v) for v in value).lower())
    return (2, str(value).lower())


def _property_value(task, name: str) -> Any:
    for prop in task.properties or []:
        if prop.get("name") == name:
            return prop.get("value")
    return None


def sort_key_value(task, key: str) -> Optional[Tuple[int, Any]]:
    if key in BUILTIN_KEYS:
        return _normalize(getattr(task, key))
    return _normalize(_property_value(task, key))


def sort_tasks(tasks: Sequence[Any], key: str, descending: bool = False) -> List[Any]:
    """Sort by a built-in field or a property name. Tasks without the key go last."""
    present, missing = [], []
    for task in tasks:
        (missing if sort_key_value(task, key) is None else present).append(task)
    present.sort(key=lambda t: sort_key_value(t, key), reverse=descending)
    return present + missing
