from __future__ import annotations

import math

import pytest

from compass_client.geometry import Rect, Vec2, liang_barsky_intersection, scaled_inset

VIEW = Rect(-100, -100, 200, 200)


def test_exit_point_on_right_edge_of_shrunk_rect() -> None:
    hit = liang_barsky_intersection(Vec2(0, 0), Vec2(300, 0), VIEW, 50)

    assert hit.x == pytest.approx(50.0)
    assert hit.y == pytest.approx(0.0)


def test_diagonal_segment_exits_through_nearest_edge() -> None:
    hit = liang_barsky_intersection(Vec2(0, 0), Vec2(300, 150), VIEW, 50)

    assert hit.x == pytest.approx(50.0)
    assert hit.y == pytest.approx(25.0)


def test_top_edge_wins_when_crossed_first() -> None:
    hit = liang_barsky_intersection(Vec2(0, 0), Vec2(-40, -400), VIEW, 50)

    assert hit.x == pytest.approx(-5.0)
    assert hit.y == pytest.approx(-50.0)


def test_axis_parallel_segment_skips_parallel_edges() -> None:
    hit = liang_barsky_intersection(Vec2(0, 0), Vec2(0, 300), VIEW, 50)

    assert hit.x == 0.0
    assert hit.y == pytest.approx(50.0)


def test_offset_is_scaled_by_ui_scale_and_zoom() -> None:
    assert scaled_inset(50, ui_scale=1.0, zoom_level=2.0) == pytest.approx(25.0)
    hit = liang_barsky_intersection(Vec2(0, 0), Vec2(300, 0), VIEW, 50, ui_scale=1.0, zoom_level=2.0)

    assert hit.x == pytest.approx(75.0)


def test_start_point_inside_margin_clamps_to_start() -> None:
    hit = liang_barsky_intersection(Vec2(70, 0), Vec2(300, 0), VIEW, 50)

    assert hit == Vec2(70.0, 0.0)


@pytest.mark.parametrize("degrees", [0, 17, 45, 90, 133, 180, 225, 270, 301, 359])
def test_exit_point_lies_on_shrunk_boundary(degrees: int) -> None:
    angle = math.radians(degrees)
    far = Vec2(1000 * math.cos(angle), 1000 * math.sin(angle))

    hit = liang_barsky_intersection(Vec2(5, -3), far, VIEW, 50)

    on_vertical = math.isclose(abs(hit.x), 50.0, abs_tol=1e-9)
    on_horizontal = math.isclose(abs(hit.y), 50.0, abs_tol=1e-9)
    assert on_vertical or on_horizontal
    assert -50.0 - 1e-9 <= hit.x <= 50.0 + 1e-9
    assert -50.0 - 1e-9 <= hit.y <= 50.0 + 1e-9


def test_repeated_calls_are_bit_identical() -> None:
    args = (Vec2(3.25, -7.5), Vec2(812.0, 433.0), Rect(-320.0, -180.0, 640.0, 360.0), 40)

    results = {liang_barsky_intersection(*args, ui_scale=1.25, zoom_level=0.75) for _ in range(5)}

    assert len(results) == 1


def test_rect_intersection_excludes_touching_edges() -> None:
    assert VIEW.intersects(Rect(50, 50, 100, 100))
    assert not VIEW.intersects(Rect(100, 0, 10, 10))
    assert not VIEW.intersects(Rect(-120, -120, 20, 20))


def test_rect_helpers() -> None:
    rect = Rect(10, 20, 30, 40)

    assert (rect.right, rect.bottom) == (40, 60)
    assert rect.center == Vec2(25.0, 40.0)
    assert rect.shrink(5) == Rect(15, 25, 20, 30)
    assert rect.contains(Vec2(10, 20))
    assert not rect.contains(Vec2(40, 30))
