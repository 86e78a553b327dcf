from __future__ import annotations

from typing import Any, Dict, Iterable, List, Mapping, Optional

PX_PER_MINUTE = 4

SPACING_GAPS = {"compact": 8, "default": 16, "comfortable": 24}

HIGH_CONFIDENCE = 0.75


def card_height(duration: int) -> int:
    return max(int(duration or 0), 0) * PX_PER_MINUTE


def grid_gap(task_spacing: Optional[str]) -> int:
    return SPACING_GAPS.get(task_spacing or "default", SPACING_GAPS["default"])


def visible_properties(properties: Iterable[Mapping[str, Any]], visibility: Optional[Mapping[str, bool]]) -> List[Mapping[str, Any]]:
    """Properties whose name maps to False are hidden; unknown names stay visible."""
    visibility = visibility or {}
    return [p for p in properties or [] if visibility.get(p.get("name"), True)]


def duration_choices(duration: int, confidence: float) -> List[int]:
    """Three quick-pick buttons around a suggestion: tighter spread when the model is confident."""
    step = 5 if confidence > HIGH_CONFIDENCE else 10
    return [max(duration - step, 1), duration, duration + step]


def task_card(task, visibility: Optional[Mapping[str, bool]]) -> Dict[str, Any]:
    return {
        "id": task.id,
        "title": task.title,
        "duration": task.duration,
        "height": card_height(task.duration),
        "properties": visible_properties(task.properties, visibility),
    }


def completed_row(task) -> Dict[str, Any]:
    return {
        "id": task.id,
        "title": task.title,
        "duration": task.duration,
        "completed_at": task.completed_at.isoformat() if task.completed_at else None,
    }
