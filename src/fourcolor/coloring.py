"""Four-colouring of region adjacency graphs.

Search works on *domains*: one 4-bit mask per region holding the
colours still possible for it.  Every search node is propagated to a
fixpoint (a region with a single colour removes it from all its
neighbours) and then either

- discarded, when some domain became empty,
- emitted as a solution, when every domain holds exactly one colour,
- or branched on the region with the fewest remaining colours.

Nodes wait on an explicit stack, so :class:`SolutionIter` can hand out
solutions one at a time and resume where it left off.

Usage
-----
>>> from fourcolor.coloring import color_map, all_colorings
>>> cm = color_map(region_map)
>>> cm.color_of_region(0)
<Color.C1: 1>
>>> for solution in all_colorings(region_map):
...     ...
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Collection, Dict, Iterator, List, Optional, Sequence, Union

from .models import FULL_DOMAIN, Color, domain_size
from .regions import RegionMap

logger = logging.getLogger(__name__)

Graph = Union[RegionMap, Sequence[Collection[int]]]

# Children are pushed in this order so that C1 is popped first.
_BRANCH_ORDER = tuple(reversed(Color))


# ═══════════════════════════════════════════════════════════════════
# Domain storage
# ═══════════════════════════════════════════════════════════════════

class ByteDomains:
    """One domain per byte."""

    def __init__(self, size: int, fill: int = FULL_DOMAIN) -> None:
        self._data = bytearray([fill]) * size

    def get(self, region_id: int) -> int:
        if not 0 <= region_id < len(self._data):
            raise IndexError(region_id)
        return self._data[region_id]

    def set(self, region_id: int, value: int) -> None:
        if not 0 <= region_id < len(self._data):
            raise IndexError(region_id)
        self._data[region_id] = value

    def copy(self) -> "ByteDomains":
        clone = ByteDomains.__new__(ByteDomains)
        clone._data = bytearray(self._data)
        return clone

    def __len__(self) -> int:
        return len(self._data)


class PackedDomains:
    """Two domains per byte: even region ids in the low nibble, odd ids in the high one."""

    def __init__(self, size: int, fill: int = FULL_DOMAIN) -> None:
        self._size = size
        self._data = bytearray([(fill << 4) | fill]) * ((size + 1) // 2)

    def get(self, region_id: int) -> int:
        if not 0 <= region_id < self._size:
            raise IndexError(region_id)
        byte = self._data[region_id >> 1]
        return (byte >> 4) & 0xF if region_id & 1 else byte & 0xF

    def set(self, region_id: int, value: int) -> None:
        if not 0 <= region_id < self._size:
            raise IndexError(region_id)
        i = region_id >> 1
        if region_id & 1:
            self._data[i] = (self._data[i] & 0x0F) | ((value & 0xF) << 4)
        else:
            self._data[i] = (self._data[i] & 0xF0) | (value & 0xF)

    def copy(self) -> "PackedDomains":
        clone = PackedDomains.__new__(PackedDomains)
        clone._size = self._size
        clone._data = bytearray(self._data)
        return clone

    def __len__(self) -> int:
        return self._size


Domains = Union[ByteDomains, PackedDomains]


def _new_domains(size: int, packed: bool) -> Domains:
    return PackedDomains(size) if packed else ByteDomains(size)


# ═══════════════════════════════════════════════════════════════════
# Solutions
# ═══════════════════════════════════════════════════════════════════

class ColorMap:
    """A solved colouring: exactly one colour per region."""

    def __init__(self, domains: Domains) -> None:
        self._domains = domains

    def color_of_region(self, region_id: int) -> Color:
        return Color.from_domain(self._domains.get(region_id))

    def domain(self, region_id: int) -> int:
        """Raw colour mask of *region_id*."""
        return self._domains.get(region_id)

    def colors(self) -> List[Color]:
        return [self.color_of_region(i) for i in range(len(self))]

    def to_dict(self) -> Dict[str, Any]:
        return {"colors": [c.name for c in self.colors()]}

    @classmethod
    def from_dict(cls, payload: Dict[str, Any], *, packed: bool = False) -> "ColorMap":
        names = payload["colors"]
        domains = _new_domains(len(names), packed)
        for i, name in enumerate(names):
            domains.set(i, Color[name].value)
        return cls(domains)

    @classmethod
    def from_colors(cls, colors: Sequence[Color], *, packed: bool = False) -> "ColorMap":
        domains = _new_domains(len(colors), packed)
        for i, color in enumerate(colors):
            domains.set(i, int(color))
        return cls(domains)

    def __len__(self) -> int:
        return len(self._domains)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ColorMap):
            return NotImplemented
        return len(self) == len(other) and all(
            self.domain(i) == other.domain(i) for i in range(len(self))
        )

    def __repr__(self) -> str:
        return f"ColorMap([{', '.join(c.name for c in self.colors())}])"


# ═══════════════════════════════════════════════════════════════════
# Search
# ═══════════════════════════════════════════════════════════════════

@dataclass
class SearchStats:
    """Counters for one search.

    Attributes
    ----------
    nodes : int
        Nodes popped off the stack and propagated.
    branches : int
        Nodes that had to be split on a region.
    dead_ends : int
        Nodes discarded because a domain became empty.
    solutions : int
        Solutions emitted so far.
    """

    nodes: int = 0
    branches: int = 0
    dead_ends: int = 0
    solutions: int = 0


_INFEASIBLE = "infeasible"
_SOLVED = "solved"
_UNDETERMINED = "undetermined"


def _neighbour_lists(graph: Graph) -> List[List[int]]:
    if isinstance(graph, RegionMap):
        return graph.adjacency()
    return [sorted(neigh) for neigh in graph]


def propagate(domains: Domains, neighbours: Sequence[Sequence[int]]) -> str:
    """Tighten *domains* in place until nothing changes.

    Returns ``"infeasible"``, ``"solved"`` or ``"undetermined"``.
    """
    while True:
        stalled = True
        solved = True

        for region_id in range(len(domains)):
            domain = domains.get(region_id)
            if domain == 0:
                return _INFEASIBLE

            if domain_size(domain) != 1:
                solved = False
                continue

            for neigh in neighbours[region_id]:
                old = domains.get(neigh)
                new = old & ~domain
                if new != old:
                    domains.set(neigh, new)
                    stalled = False
                    solved = False

        if stalled:
            return _SOLVED if solved else _UNDETERMINED


def _branch_region(domains: Domains) -> Optional[int]:
    """Region with the fewest colours left, singletons excluded; lowest id on ties."""
    best: Optional[int] = None
    best_size = 0
    for region_id in range(len(domains)):
        size = domain_size(domains.get(region_id))
        if size == 1:
            continue
        if best is None or size < best_size:
            best, best_size = region_id, size
    return best


class SolutionIter:
    """Lazy iterator over every valid four-colouring of a graph.

    Each instance runs its own search from the root; two iterators over
    the same graph share nothing and yield the same sequence.
    """

    def __init__(self, graph: Graph, *, packed: bool = False) -> None:
        self._neighbours = _neighbour_lists(graph)
        self._stack: List[Domains] = [_new_domains(len(self._neighbours), packed)]
        self.stats = SearchStats()

    def __iter__(self) -> Iterator[ColorMap]:
        return self

    def __next__(self) -> ColorMap:
        while self._stack:
            domains = self._stack.pop()
            self.stats.nodes += 1

            state = propagate(domains, self._neighbours)
            if state == _SOLVED:
                self.stats.solutions += 1
                return ColorMap(domains)
            if state == _INFEASIBLE:
                self.stats.dead_ends += 1
                continue

            candidate = _branch_region(domains)
            if candidate is None:
                continue
            self.stats.branches += 1

            options = domains.get(candidate)
            for color in _BRANCH_ORDER:
                if options & color.value:
                    child = domains.copy()
                    child.set(candidate, color.value)
                    self._stack.append(child)

        logger.debug("Search exhausted: %s", self.stats)
        raise StopIteration


def all_colorings(graph: Graph, *, packed: bool = False) -> SolutionIter:
    """Return a fresh lazy iterator over all colourings of *graph*.

    *graph* is a :class:`RegionMap` or a sequence of neighbour
    collections indexed by region id.  *packed* stores two domains per
    byte; results are identical either way.
    """
    return SolutionIter(graph, packed=packed)


def color_map(graph: Graph, *, packed: bool = False) -> Optional[ColorMap]:
    """Return the first colouring of *graph*, or ``None`` if there is none."""
    return next(all_colorings(graph, packed=packed), None)


def count_colorings(graph: Graph, limit: Optional[int] = None) -> int:
    """Count the colourings of *graph*, stopping at *limit* if given."""
    if limit is not None and limit <= 0:
        return 0
    count = 0
    for _ in all_colorings(graph):
        count += 1
        if limit is not None and count >= limit:
            break
    return count
