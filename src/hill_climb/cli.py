import argparse
import sys
import time
from typing import Optional, Sequence

from .ilp_solver import solve_ilp_from_lowest, solve_ilp_shortest_path
from .parser import GridError, parse_grid_file
from .solver import shortest_from_lowest, shortest_path
from .viz import display_path, save_path_plot


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Shortest climb across an elevation map.")
    parser.add_argument("--map", dest="map_path", required=True, help="Path to map text file.")
    parser.add_argument(
        "--from-lowest",
        action="store_true",
        help="Start from whichever lowest-elevation cell gives the shortest climb instead of S.",
    )
    parser.add_argument(
        "--strategy",
        choices=["reverse", "per-source"],
        default="reverse",
        help="Multi-source strategy for --from-lowest (default: reverse, one search back from E; ignored by --solver ilp).",
    )
    parser.add_argument(
        "--solver",
        choices=["dijkstra", "ilp"],
        default="dijkstra",
        help="Solver backend to use (default: dijkstra).",
    )
    parser.add_argument(
        "--selection",
        choices=["heap", "scan"],
        default="heap",
        help="How the dijkstra solver picks the next cell (default: heap; ignored by --solver ilp).",
    )
    parser.add_argument("--print-path", action="store_true", help="Print the path coordinates.")
    parser.add_argument("--plot", dest="plot_path", help="Optional path to save rendered path PNG.")
    parser.add_argument("--show", action="store_true", help="Display the visualization in a window.")
    return parser


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    args = list(argv) if argv is not None else sys.argv[1:]
    return _build_parser().parse_args(args)


def main(args: Optional[argparse.Namespace] = None) -> int:
    ns = args or parse_args()
    try:
        grid = parse_grid_file(ns.map_path)
        start_time = time.time()
        if ns.solver == "ilp":
            result = solve_ilp_from_lowest(grid) if ns.from_lowest else solve_ilp_shortest_path(grid)
        elif ns.from_lowest:
            result = shortest_from_lowest(grid, strategy=ns.strategy.replace("-", "_"), selection=ns.selection)
        else:
            result = shortest_path(grid, selection=ns.selection)
        end_time = time.time()
    except GridError as exc:
        print(f"Invalid map {ns.map_path}: {exc}", file=sys.stderr)
        return 1

    print(f"Solved in {end_time - start_time:.2f} seconds.")
    print(f"Status: {result.status.value}")
    if result.found:
        print(f"Source: {result.source}")
        print(f"Steps: {result.steps}")
        if ns.print_path:
            print("Path: " + " -> ".join(f"({x},{y})" for x, y in result.path))

    if ns.plot_path:
        save_path_plot(grid, result, ns.plot_path)
        print(f"Saved plot to {ns.plot_path}")
    if ns.show:
        display_path(grid, result)

    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
