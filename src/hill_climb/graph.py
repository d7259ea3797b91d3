from typing import Dict, List, Set

from .parser import Coord, TerrainGrid


def build_adjacency(grid: TerrainGrid, reverse: bool = False) -> Dict[Coord, List[Coord]]:
    """Directed adjacency for every cell, following the climb rule (or its reverse)."""
    return {coord: list(grid.neighbors(coord, reverse=reverse)) for coord in grid.coords()}


def reachable_from(grid: TerrainGrid, source: Coord, reverse: bool = False) -> Set[Coord]:
    """Coordinates reachable from ``source`` by any sequence of permitted steps."""
    seen: Set[Coord] = {source}
    stack = [source]
    while stack:
        current = stack.pop()
        for nxt in grid.neighbors(current, reverse=reverse):
            if nxt not in seen:
                seen.add(nxt)
                stack.append(nxt)
    return seen
