"""Tests for boundary tracing."""

from __future__ import annotations

from typing import List, Set

import pytest

from fourcolor.boundary import DIRECTIONS, nearest_neighbour_order, trace_boundary
from fourcolor.generator import MapConfig, generate_map
from fourcolor.regions import build_region_map


def _ring(width: int, height: int) -> Set[tuple]:
    """Cells on the perimeter of a width x height rectangle."""
    return {
        (x, y)
        for x in range(width)
        for y in range(height)
        if x in (0, width - 1) or y in (0, height - 1)
    }


def _expand(path: List[tuple]) -> List[tuple]:
    """Fill in the unit steps between consecutive polyline points."""
    cells = [path[0]]
    for (ax, ay), (bx, by) in zip(path, path[1:]):
        dx, dy = bx - ax, by - ay
        assert dx == 0 or dy == 0 or abs(dx) == abs(dy), "segment is not straight"
        steps = max(abs(dx), abs(dy))
        sx, sy = (dx > 0) - (dx < 0), (dy > 0) - (dy < 0)
        for k in range(1, steps + 1):
            cells.append((ax + sx * k, ay + sy * k))
    return cells


def _neighbours(point: tuple, points: Set[tuple]) -> List[tuple]:
    x, y = point
    return [(x + dx, y + dy) for dx, dy in DIRECTIONS if (x + dx, y + dy) in points]


def _is_simple_loop(points: Set[tuple]) -> bool:
    """True for one connected closed curve where every point has two neighbours."""
    if len(points) < 3 or any(len(_neighbours(p, points)) != 2 for p in points):
        return False
    seen = {min(points)}
    stack = [min(points)]
    while stack:
        for n in _neighbours(stack.pop(), points):
            if n not in seen:
                seen.add(n)
                stack.append(n)
    return seen == points


# Diagonal edges on the left and top, straight on the right.
NOTCHED_LOOP = {(0, 1), (1, 2), (1, 3), (2, 4), (3, 3), (3, 2), (3, 1), (2, 0), (1, 0)}

# Outline of an L with a cut inner corner.
L_LOOP = set(_expand([(0, 0), (0, 5), (5, 5), (5, 3), (3, 3), (2, 2), (2, 0), (0, 0)]))


class TestTraceBoundary:
    def test_empty(self) -> None:
        assert trace_boundary(set()) == []

    def test_single_point(self) -> None:
        assert trace_boundary({(4, 2)}) == [(4, 2)]

    def test_rectangle_collapses_to_corners(self) -> None:
        assert trace_boundary(_ring(4, 3)) == [(0, 0), (0, 2), (3, 2), (3, 0), (1, 0)]

    def test_square(self) -> None:
        assert trace_boundary(_ring(2, 2)) == [(0, 0), (0, 1), (1, 1), (1, 0)]

    def test_diamond(self) -> None:
        diamond = {(1, 0), (0, 1), (2, 1), (1, 2)}
        assert trace_boundary(diamond) == [(0, 1), (1, 2), (2, 1), (1, 0)]

    def test_diagonal_loop_is_walked_to_the_end(self) -> None:
        assert _is_simple_loop(NOTCHED_LOOP)
        assert trace_boundary(NOTCHED_LOOP) == [
            (0, 1), (1, 2), (1, 3), (2, 4), (3, 3), (3, 1), (2, 0), (1, 0),
        ]

    @pytest.mark.parametrize(
        "loop",
        [_ring(4, 3), {(1, 0), (0, 1), (2, 1), (1, 2)}, NOTCHED_LOOP, L_LOOP],
        ids=["rectangle", "diamond", "notched", "l-shape"],
    )
    def test_closed_loop_is_covered_and_closed(self, loop) -> None:
        path = trace_boundary(loop)

        cells = _expand(path)
        assert len(cells) == len(set(cells))
        assert set(cells) == loop

        lx, ly = path[-1]
        assert (path[0][0] - lx, path[0][1] - ly) in DIRECTIONS

    @pytest.mark.parametrize("width, height", [(2, 2), (3, 3), (5, 2), (2, 6), (7, 4), (10, 10)])
    def test_simple_loop_visits_every_point_once(self, width, height) -> None:
        ring = _ring(width, height)
        path = trace_boundary(ring)

        assert path[0] == min(ring)
        assert len(path) == len(set(path))
        assert set(path) <= ring

        cells = _expand(path)
        assert len(cells) == len(set(cells))
        assert set(cells) == ring

    @pytest.mark.parametrize("width, height", [(3, 3), (6, 4)])
    def test_walk_ends_next_to_start(self, width, height) -> None:
        ring = _ring(width, height)
        path = trace_boundary(ring)
        lx, ly = path[-1]
        assert (path[0][0] - lx, path[0][1] - ly) in DIRECTIONS

    def test_disconnected_boundary_is_partial(self) -> None:
        pieces = _ring(3, 3) | {(x + 10, y) for x, y in _ring(3, 3)}
        path = trace_boundary(pieces)
        assert len(path) == len(set(path))
        assert all(x < 10 for x, _ in path)

    def test_region_boundaries_trace_without_repeats(self) -> None:
        rm = build_region_map([(2, 2), (12, 3), (6, 9), (17, 11)], 20, 14)
        for region in rm.regions:
            path = trace_boundary(region.boundary)
            assert path
            assert len(path) == len(set(path))
            assert set(path) <= region.boundary

    @pytest.mark.parametrize("seed", range(30))
    def test_simple_region_boundaries_are_covered(self, seed) -> None:
        rm = generate_map(MapConfig(width=60, height=20, n_regions=10, seed=seed))
        for region in rm.regions:
            if not _is_simple_loop(region.boundary):
                continue
            path = trace_boundary(region.boundary)
            assert set(_expand(path)) == region.boundary



class TestNearestNeighbourOrder:
    def test_empty(self) -> None:
        assert nearest_neighbour_order([]) == []

    def test_line(self) -> None:
        points = [(5, 0), (0, 0), (2, 0), (1, 0)]
        assert nearest_neighbour_order(points) == [(0, 0), (1, 0), (2, 0), (5, 0)]

    def test_float_points(self) -> None:
        points = {(0.5, 0.0), (1.5, 0.0), (0.0, 0.5), (2.0, 0.5)}
        ordered = nearest_neighbour_order(points)
        assert ordered[0] == (0.0, 0.5)
        assert sorted(ordered) == sorted(points)

    def test_ties_prefer_smaller_point(self) -> None:
        assert nearest_neighbour_order([(0, 0), (1, 1), (2, 0)]) == [(0, 0), (1, 1), (2, 0)]
