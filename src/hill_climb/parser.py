from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Iterable, Iterator, List, Optional, Tuple

import numpy as np


MIN_ELEVATION = 0
MAX_ELEVATION = 25

Coord = Tuple[int, int]  # (column, row)


class GridError(ValueError):
    """Base class for problems with a terrain map."""


class MalformedInput(GridError):
    pass


class MissingMarker(GridError):
    pass


class CellKind(str, Enum):
    START = "S"
    END = "E"
    ELEVATION = "elevation"


@dataclass(frozen=True)
class Cell:
    kind: CellKind
    level: int = 0

    @property
    def elevation(self) -> int:
        if self.kind == CellKind.START:
            return MIN_ELEVATION
        if self.kind == CellKind.END:
            return MAX_ELEVATION
        return self.level

    def to_char(self) -> str:
        if self.kind == CellKind.ELEVATION:
            return chr(ord("a") + self.level)
        return self.kind.value

    @classmethod
    def from_char(cls, ch: str) -> Optional["Cell"]:
        if ch == CellKind.START.value:
            return cls(CellKind.START)
        if ch == CellKind.END.value:
            return cls(CellKind.END)
        if "a" <= ch <= "z":
            return cls(CellKind.ELEVATION, ord(ch) - ord("a"))
        return None


# Orthogonal moves only.
DELTAS = [(-1, 0), (1, 0), (0, -1), (0, 1)]


@dataclass(frozen=True)
class TerrainGrid:
    width: int
    height: int
    cells: Tuple[Cell, ...]

    def in_bounds(self, coord: Coord) -> bool:
        x, y = coord
        return 0 <= x < self.width and 0 <= y < self.height

    def coord_to_index(self, coord: Coord) -> Optional[int]:
        if not self.in_bounds(coord):
            return None
        x, y = coord
        return y * self.width + x

    def index_to_coord(self, idx: int) -> Coord:
        if not 0 <= idx < len(self.cells):
            raise IndexError(f"Cell index {idx} outside grid of {len(self.cells)} cells")
        return idx % self.width, idx // self.width

    def cell(self, coord: Coord) -> Optional[Cell]:
        idx = self.coord_to_index(coord)
        if idx is None:
            return None
        return self.cells[idx]

    def elevation(self, coord: Coord) -> Optional[int]:
        cell = self.cell(coord)
        return None if cell is None else cell.elevation

    def coords(self) -> Iterator[Coord]:
        for idx in range(len(self.cells)):
            yield self.index_to_coord(idx)

    def tiles(self) -> Iterable[Tuple[Coord, Cell]]:
        for idx, cell in enumerate(self.cells):
            yield self.index_to_coord(idx), cell

    def _find(self, kind: CellKind) -> Coord:
        for idx, cell in enumerate(self.cells):
            if cell.kind == kind:
                return self.index_to_coord(idx)
        raise MissingMarker(f"No '{kind.value}' cell found in map.")

    def start(self) -> Coord:
        return self._find(CellKind.START)

    def end(self) -> Coord:
        return self._find(CellKind.END)

    def at_elevation(self, level: int) -> List[Coord]:
        return [coord for coord, cell in self.tiles() if cell.elevation == level]

    def neighbors(self, coord: Coord, reverse: bool = False) -> Iterator[Coord]:
        """Yield orthogonal neighbours reachable in one step from ``coord``.

        A step may climb at most one level and descend any amount. With
        ``reverse`` the relation is flipped: neighbours from which ``coord``
        can be reached in one step are yielded instead.
        """
        elevation = self.elevation(coord)
        if elevation is None:
            return
        x, y = coord
        for dx, dy in DELTAS:
            other = (x + dx, y + dy)
            other_elevation = self.elevation(other)
            if other_elevation is None:
                continue
            if reverse:
                if other_elevation >= elevation - 1:
                    yield other
            elif other_elevation <= elevation + 1:
                yield other

    def elevations(self) -> np.ndarray:
        values = np.array([cell.elevation for cell in self.cells], dtype=int)
        return values.reshape(self.height, self.width)

    def to_text(self) -> str:
        rows = []
        for y in range(self.height):
            row = self.cells[y * self.width : (y + 1) * self.width]
            rows.append("".join(cell.to_char() for cell in row))
        return "\n".join(rows) + "\n"


def parse_grid(text: str) -> TerrainGrid:
    # Rows end at "\n" only; any other control character is an invalid tile.
    raw_lines = [line[:-1] if line.endswith("\r") else line for line in text.split("\n")]
    while raw_lines and not raw_lines[-1]:
        raw_lines.pop()
    if not raw_lines:
        raise MalformedInput("Map is empty.")

    width = len(raw_lines[0])
    if width == 0:
        raise MalformedInput("Map has an empty first row.")

    cells: List[Cell] = []
    for row_idx, line in enumerate(raw_lines):
        if len(line) != width:
            raise MalformedInput(
                f"Inconsistent row width at line {row_idx}: expected {width}, got {len(line)}"
            )
        for col_idx, ch in enumerate(line):
            cell = Cell.from_char(ch)
            if cell is None:
                raise MalformedInput(f"Unexpected tile '{ch}' at {(col_idx, row_idx)}")
            cells.append(cell)

    return TerrainGrid(width=width, height=len(raw_lines), cells=tuple(cells))


def parse_grid_file(path: Path | str) -> TerrainGrid:
    return parse_grid(Path(path).read_text())
