"""Ordering a region's unordered boundary points into an outline.

Two strategies:

- :func:`trace_boundary` walks the integer lattice in the eight compass
  directions, preferring to keep its heading, and collapses straight
  runs into single segments.
- :func:`nearest_neighbour_order` repeatedly hops to the closest
  unvisited point; it works on any coordinates, including the float
  midpoints of ``"midpoint"`` region maps.

Both are approximations.  A boundary that is not one simple closed
curve (e.g. two pieces left by flood-fill ties) yields a partial or
self-touching outline.
"""

from __future__ import annotations

from typing import Iterable, List, Optional, Set, Tuple

from .models import AnyPoint, Point

# N, NW, W, SW, S, SE, E, NE in screen coordinates (y grows downward).
DIRECTIONS: Tuple[Point, ...] = (
    (0, -1),
    (-1, -1),
    (-1, 0),
    (-1, 1),
    (0, 1),
    (1, 1),
    (1, 0),
    (1, -1),
)


def trace_boundary(boundary: Iterable[Point]) -> List[Point]:
    """Return the points of *boundary* as an ordered polyline.

    The walk starts at the lexicographically smallest point.  At every
    step the eight directions are scanned starting from the current
    heading and the first unvisited neighbour is taken.  The walk ends
    when no unvisited neighbour is left; on a closed loop the last
    point is then a neighbour of the start.

    Whenever a step keeps the previous heading the previously emitted
    point is dropped, so straight runs become single segments.  The
    start point is always kept.
    """
    remaining: Set[Point] = set(boundary)
    if not remaining:
        return []

    start = min(remaining)
    remaining.discard(start)

    path: List[Point] = [start]
    current = start
    heading: Optional[int] = None

    while remaining:
        first = heading or 0
        for turn in range(len(DIRECTIONS)):
            direction = (first + turn) % len(DIRECTIONS)
            dx, dy = DIRECTIONS[direction]
            candidate = (current[0] + dx, current[1] + dy)
            if candidate in remaining:
                break
        else:
            break

        remaining.discard(candidate)
        if direction == heading and len(path) > 1:
            path.pop()
        path.append(candidate)
        current = candidate
        heading = direction

    return path


def nearest_neighbour_order(boundary: Iterable[AnyPoint]) -> List[AnyPoint]:
    """Order *boundary* greedily by Manhattan distance.

    Starts at the smallest point; each next point is the unvisited one
    closest to the last emitted point (ties go to the smaller point).
    """
    remaining = set(boundary)
    if not remaining:
        return []

    current = min(remaining)
    remaining.discard(current)
    ordered: List[AnyPoint] = [current]

    while remaining:
        cx, cy = current
        current = min(
            remaining,
            key=lambda p: (abs(p[0] - cx) + abs(p[1] - cy), p),
        )
        remaining.discard(current)
        ordered.append(current)

    return ordered
