from __future__ import annotations

from taskboard.layout import card_height, duration_choices, grid_gap, visible_properties


def test_card_height_scales_with_duration() -> None:
    assert card_height(15) == 60
    assert card_height(45) == 180


def test_grid_gap_by_spacing() -> None:
    assert grid_gap("compact") == 8
    assert grid_gap("default") == 16
    assert grid_gap("comfortable") == 24
    assert grid_gap(None) == 16


def test_visible_properties_hides_only_false() -> None:
    props = [{"name": "tags"}, {"name": "due"}, {"name": "effort"}]
    visibility = {"tags": False, "due": True}

    assert [p["name"] for p in visible_properties(props, visibility)] == ["due", "effort"]
    assert visible_properties(props, None) == props


def test_duration_choices_spread_depends_on_confidence() -> None:
    assert duration_choices(45, 0.8) == [40, 45, 50]
    assert duration_choices(45, 0.75) == [35, 45, 55]
    assert duration_choices(5, 0.5) == [1, 5, 15]
