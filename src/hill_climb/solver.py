import heapq
import math
from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Optional, Set, Tuple

from .parser import MIN_ELEVATION, Coord, TerrainGrid


SELECTIONS = ("heap", "scan")
STRATEGIES = ("reverse", "per_source")


class SearchStatus(str, Enum):
    FOUND = "found"
    NO_PATH = "no_path"


@dataclass
class SearchResult:
    status: SearchStatus
    source: Coord
    target: Coord
    path: Optional[List[Coord]] = None

    @property
    def found(self) -> bool:
        return self.status == SearchStatus.FOUND

    @property
    def steps(self) -> Optional[int]:
        if self.path is None:
            return None
        return len(self.path) - 1

    @classmethod
    def no_path(cls, source: Coord, target: Coord) -> "SearchResult":
        return cls(status=SearchStatus.NO_PATH, source=source, target=target)


class PathSolver:
    """Single-source minimum-step search over a terrain grid.

    Every step costs 1, so this is breadth-first in effect, but it is written as
    a distance relaxation so that non-uniform step costs would slot in. Each
    instance owns its distance, predecessor and frontier state and is meant
    for a single run; the grid itself is only read.

    ``target=None`` explores everything reachable from ``source``; the
    distances are then available through :meth:`distance`.
    """

    def __init__(
        self,
        grid: TerrainGrid,
        source: Coord,
        target: Optional[Coord] = None,
        reverse: bool = False,
        selection: str = "heap",
    ):
        if not grid.in_bounds(source):
            raise ValueError(f"Source {source} is outside the {grid.width}x{grid.height} grid")
        if target is not None and not grid.in_bounds(target):
            raise ValueError(f"Target {target} is outside the {grid.width}x{grid.height} grid")
        if selection not in SELECTIONS:
            raise ValueError(f"Unknown selection mode '{selection}', expected one of {SELECTIONS}")

        self.grid = grid
        self.source = source
        self.target = target
        self.reverse = reverse
        self.selection = selection

        self._distances: Dict[Coord, float] = {coord: math.inf for coord in grid.coords()}
        self._distances[source] = 0
        self._previous: Dict[Coord, Coord] = {}
        self._frontier: Set[Coord] = set(self._distances)
        self._queue: List[Tuple[float, Coord]] = [(0, source)] if selection == "heap" else []
        self._finished = False

    def _pop_heap(self) -> Optional[Coord]:
        # Stale entries are skipped rather than removed on improvement.
        while self._queue:
            dist, coord = heapq.heappop(self._queue)
            if coord in self._frontier and dist == self._distances[coord]:
                return coord
        return None

    def _pop_scan(self) -> Optional[Coord]:
        best = min(self._frontier, key=lambda c: self._distances[c])
        if math.isinf(self._distances[best]):
            return None
        return best

    def _select(self) -> Optional[Coord]:
        """Next coordinate to finalize, or None when nothing reachable is left."""
        if self.selection == "heap":
            return self._pop_heap()
        return self._pop_scan()

    def run(self) -> None:
        if self._finished:
            return
        while self._frontier:
            current = self._select()
            if current is None:
                break
            self._frontier.remove(current)
            if current == self.target:
                break

            candidate = self._distances[current] + 1
            for nxt in self.grid.neighbors(current, reverse=self.reverse):
                if nxt not in self._frontier:
                    continue
                if candidate < self._distances[nxt]:
                    self._distances[nxt] = candidate
                    self._previous[nxt] = current
                    if self.selection == "heap":
                        heapq.heappush(self._queue, (candidate, nxt))
        self._finished = True

    def distance(self, coord: Coord) -> Optional[int]:
        """Best recorded distance to ``coord``, or None if it was never reached."""
        dist = self._distances.get(coord, math.inf)
        return None if math.isinf(dist) else int(dist)

    def distances(self) -> Dict[Coord, int]:
        return {coord: int(d) for coord, d in self._distances.items() if not math.isinf(d)}

    def path_to(self, target: Coord) -> Optional[List[Coord]]:
        """Walk predecessors back from ``target``; None unless the walk ends at the source."""
        path = [target]
        current = target
        while current != self.source:
            prev = self._previous.get(current)
            if prev is None:
                return None
            path.append(prev)
            current = prev
        path.reverse()
        return path

    def find_path(self) -> SearchResult:
        if self.target is None:
            raise ValueError("find_path() needs a target; use run() and distance() to explore")
        self.run()
        path = self.path_to(self.target)
        if path is None:
            return SearchResult.no_path(self.source, self.target)
        return SearchResult(status=SearchStatus.FOUND, source=self.source, target=self.target, path=path)


def shortest_path(
    grid: TerrainGrid,
    source: Optional[Coord] = None,
    target: Optional[Coord] = None,
    selection: str = "heap",
) -> SearchResult:
    """Shortest climb from ``source`` (default: S) to ``target`` (default: E)."""
    source = grid.start() if source is None else source
    target = grid.end() if target is None else target
    return PathSolver(grid, source, target, selection=selection).find_path()


def _best_of_each_source(grid: TerrainGrid, sources: List[Coord], target: Coord, selection: str) -> SearchResult:
    best = SearchResult.no_path(sources[0] if sources else target, target)
    for source in sources:
        result = PathSolver(grid, source, target, selection=selection).find_path()
        if result.found and (not best.found or result.steps < best.steps):
            best = result
    return best


def _best_by_reverse_search(grid: TerrainGrid, sources: List[Coord], target: Coord, selection: str) -> SearchResult:
    solver = PathSolver(grid, target, reverse=True, selection=selection)
    solver.run()

    best_source: Optional[Coord] = None
    best_distance: Optional[int] = None
    for source in sources:
        dist = solver.distance(source)
        if dist is not None and (best_distance is None or dist < best_distance):
            best_source, best_distance = source, dist

    if best_source is None:
        return SearchResult.no_path(sources[0] if sources else target, target)

    # The reversed search walks from the target, so its path runs E -> source.
    path = solver.path_to(best_source)
    if path is None:
        return SearchResult.no_path(best_source, target)
    path.reverse()
    return SearchResult(status=SearchStatus.FOUND, source=best_source, target=target, path=path)


def shortest_from_lowest(
    grid: TerrainGrid,
    strategy: str = "reverse",
    selection: str = "heap",
) -> SearchResult:
    """Shortest climb to E from whichever lowest-elevation cell is closest.

    ``strategy="reverse"`` runs one search backwards from E; ``"per_source"``
    runs a forward search from every lowest cell and keeps the best.
    """
    if strategy not in STRATEGIES:
        raise ValueError(f"Unknown strategy '{strategy}', expected one of {STRATEGIES}")
    target = grid.end()
    sources = grid.at_elevation(MIN_ELEVATION)
    if strategy == "reverse":
        return _best_by_reverse_search(grid, sources, target, selection)
    return _best_of_each_source(grid, sources, target, selection)
