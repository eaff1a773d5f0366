from __future__ import annotations

from enum import IntEnum
from typing import Tuple, Union

Point = Tuple[int, int]
FloatPoint = Tuple[float, float]
AnyPoint = Union[Point, FloatPoint]

# Every colour is possible.
FULL_DOMAIN = 0b1111


class Color(IntEnum):
    """One of the four map colours, valued as its bit in a domain mask."""

    C1 = 1
    C2 = 1 << 1
    C3 = 1 << 2
    C4 = 1 << 3

    @classmethod
    def from_domain(cls, domain: int) -> "Color":
        """Return the colour of a singleton *domain*.

        Anything other than a single set bit is an invariant breach.
        """
        for color in cls:
            if domain == color.value:
                return color
        raise AssertionError(f"Domain {domain:#06b} is not a single colour")


def domain_size(domain: int) -> int:
    """Number of colours still possible in *domain*."""
    return bin(domain & FULL_DOMAIN).count("1")


def domain_colors(domain: int) -> tuple[Color, ...]:
    return tuple(c for c in Color if domain & c.value)
