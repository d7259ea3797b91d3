from typing import Dict, List, Optional, Sequence, Tuple

import pulp

from .graph import build_adjacency, reachable_from
from .parser import MIN_ELEVATION, Coord, TerrainGrid
from .solver import SearchResult, SearchStatus


Edge = Tuple[Coord, Coord]


def _trace_path(sources: Sequence[Coord], target: Coord, chosen: Dict[Coord, Coord]) -> Optional[List[Coord]]:
    start = next((s for s in sources if s in chosen), None)
    if start is None:
        return None
    path = [start]
    while path[-1] != target:
        nxt = chosen.get(path[-1])
        if nxt is None or nxt in path:
            return None
        path.append(nxt)
    return path


def solve_ilp(grid: TerrainGrid, sources: Sequence[Coord], target: Coord) -> SearchResult:
    """Shortest climb from any of ``sources`` to ``target`` as a unit-flow integer program.

    One unit of flow leaves a chosen source and must arrive at the target over
    permitted steps; minimising the number of used edges gives the step count.
    """
    if not sources:
        raise ValueError("At least one source is required.")
    for coord in (*sources, target):
        if not grid.in_bounds(coord):
            raise ValueError(f"{coord} is outside the {grid.width}x{grid.height} grid")

    if target in sources:
        return SearchResult(status=SearchStatus.FOUND, source=target, target=target, path=[target])

    # Only cells that lie on some source -> target route can carry flow.
    forward = set()
    for source in sources:
        forward |= reachable_from(grid, source)
    nodes = forward & reachable_from(grid, target, reverse=True)
    live_sources = [s for s in sources if s in nodes]
    if not live_sources:
        return SearchResult.no_path(sources[0], target)

    adjacency = build_adjacency(grid)
    edges: List[Edge] = [(u, v) for u in nodes for v in adjacency[u] if v in nodes]

    problem = pulp.LpProblem("hill_climb", pulp.LpMinimize)
    flow_vars: Dict[Edge, pulp.LpVariable] = {
        (u, v): pulp.LpVariable(f"x_{u[0]}_{u[1]}__{v[0]}_{v[1]}", lowBound=0, upBound=1, cat="Binary")
        for u, v in edges
    }
    pick_vars: Dict[Coord, pulp.LpVariable] = {
        s: pulp.LpVariable(f"s_{s[0]}_{s[1]}", lowBound=0, upBound=1, cat="Binary") for s in live_sources
    }

    # Objective: number of steps taken.
    problem += pulp.lpSum(flow_vars.values())

    # Exactly one source emits the unit of flow.
    problem += pulp.lpSum(pick_vars.values()) == 1

    in_edges: Dict[Coord, List[Edge]] = {node: [] for node in nodes}
    out_edges: Dict[Coord, List[Edge]] = {node: [] for node in nodes}
    for u, v in edges:
        out_edges[u].append((u, v))
        in_edges[v].append((u, v))

    for node in nodes:
        incoming = pulp.lpSum(flow_vars[edge] for edge in in_edges[node])
        outgoing = pulp.lpSum(flow_vars[edge] for edge in out_edges[node])
        if node == target:
            problem += incoming - outgoing == 1
        elif node in pick_vars:
            problem += outgoing - incoming == pick_vars[node]
        else:
            problem += outgoing - incoming == 0

    solver = pulp.PULP_CBC_CMD(msg=False)
    problem.solve(solver)

    status = pulp.LpStatus.get(problem.status, "Unknown")
    if status != "Optimal":
        return SearchResult.no_path(live_sources[0], target)

    chosen: Dict[Coord, Coord] = {u: v for (u, v), var in flow_vars.items() if var.value() > 0.5}
    picked = [s for s, var in pick_vars.items() if var.value() > 0.5]
    path = _trace_path(picked, target, chosen)
    if path is None:
        return SearchResult.no_path(live_sources[0], target)
    return SearchResult(status=SearchStatus.FOUND, source=path[0], target=target, path=path)


def solve_ilp_shortest_path(grid: TerrainGrid) -> SearchResult:
    return solve_ilp(grid, [grid.start()], grid.end())


def solve_ilp_from_lowest(grid: TerrainGrid) -> SearchResult:
    return solve_ilp(grid, grid.at_elevation(MIN_ELEVATION), grid.end())
