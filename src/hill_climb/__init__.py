"""Shortest-climb solver for elevation grids."""

__all__ = [
    "parser",
    "graph",
    "solver",
    "ilp_solver",
    "viz",
    "cli",
]
