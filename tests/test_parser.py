from pathlib import Path

import pytest

from hill_climb.parser import (
    CellKind,
    MalformedInput,
    MissingMarker,
    parse_grid,
    parse_grid_file,
)

MAP_ROOT = Path(__file__).resolve().parents[1] / "maps"


def test_parse_example_map():
    grid = parse_grid_file(MAP_ROOT / "example_map.txt")

    assert grid.width == 8
    assert grid.height == 5
    assert grid.start() == (0, 0)
    assert grid.end() == (5, 2)
    assert grid.cell((0, 0)).kind == CellKind.START
    assert grid.elevation((5, 2)) == 25
    assert grid.elevation((3, 0)) == ord("q") - ord("a")


def test_out_of_range_lookups_are_absent():
    grid = parse_grid_file(MAP_ROOT / "example_map.txt")

    assert grid.cell((8, 0)) is None
    assert grid.cell((0, 5)) is None
    assert grid.cell((-1, 0)) is None
    assert grid.elevation((100, 100)) is None
    assert grid.coord_to_index((8, 0)) is None


def test_index_coord_translation():
    grid = parse_grid_file(MAP_ROOT / "example_map.txt")

    assert grid.index_to_coord(0) == (0, 0)
    assert grid.index_to_coord(9) == (1, 1)
    assert grid.index_to_coord(39) == (7, 4)
    for idx in range(grid.width * grid.height):
        assert grid.coord_to_index(grid.index_to_coord(idx)) == idx
    with pytest.raises(IndexError):
        grid.index_to_coord(40)


def test_at_elevation_includes_start():
    grid = parse_grid_file(MAP_ROOT / "example_map.txt")
    lowest = grid.at_elevation(0)

    assert (0, 0) in lowest
    assert len(lowest) == 6
    assert grid.at_elevation(25) == [(5, 2)]


def test_unexpected_character():
    with pytest.raises(MalformedInput, match="Unexpected tile '#'"):
        parse_grid("Sab\na#E\n")


def test_uppercase_elevation_is_rejected():
    with pytest.raises(MalformedInput):
        parse_grid("SAE\n")


@pytest.mark.parametrize("sep", ["\x0b", "\x0c", "\x1c", "\x1d", "\x1e", "\x85", "\u2028", "\u2029", "\r"])
def test_control_characters_are_not_row_breaks(sep: str):
    with pytest.raises(MalformedInput, match="Unexpected tile"):
        parse_grid(f"ab{sep}SE")


def test_crlf_line_endings():
    grid = parse_grid("Sab\r\nabE\r\n")

    assert grid.width == 3
    assert grid.height == 2
    assert grid.end() == (2, 1)


def test_inconsistent_row_width():
    with pytest.raises(MalformedInput, match="Inconsistent row width at line 1"):
        parse_grid("Sabc\nabE\n")


def test_empty_map():
    with pytest.raises(MalformedInput):
        parse_grid("")
    with pytest.raises(MalformedInput):
        parse_grid("\n\n")


def test_malformed_input_is_a_value_error():
    with pytest.raises(ValueError):
        parse_grid("S?E")


def test_missing_markers():
    no_start = parse_grid("abc\nbcE\n")
    with pytest.raises(MissingMarker):
        no_start.start()
    assert no_start.end() == (2, 1)

    no_end = parse_grid("Sbc\n")
    with pytest.raises(MissingMarker):
        no_end.end()


def test_first_marker_in_scan_order_wins():
    grid = parse_grid("aSa\nSEE\n")

    assert grid.start() == (1, 0)
    assert grid.end() == (1, 1)


def test_to_text_round_trips_example():
    text = (MAP_ROOT / "example_map.txt").read_text()

    assert parse_grid(text).to_text() == text


def test_elevations_array():
    grid = parse_grid("Sbc\nazE\n")
    elevations = grid.elevations()

    assert elevations.shape == (2, 3)
    assert elevations.tolist() == [[0, 1, 2], [0, 25, 25]]


def test_neighbors_stay_in_bounds():
    grid = parse_grid_file(MAP_ROOT / "example_map.txt")
    for coord in grid.coords():
        for reverse in (False, True):
            for other in grid.neighbors(coord, reverse=reverse):
                x, y = other
                assert 0 <= x < grid.width
                assert 0 <= y < grid.height


def test_neighbors_respect_climb_rule():
    grid = parse_grid_file(MAP_ROOT / "example_map.txt")
    for coord in grid.coords():
        for other in grid.neighbors(coord):
            assert grid.elevation(other) <= grid.elevation(coord) + 1
            assert abs(other[0] - coord[0]) + abs(other[1] - coord[1]) == 1


def test_neighbors_are_directed():
    grid = parse_grid("az\n")

    # Descending from z is allowed, climbing to it is not.
    assert list(grid.neighbors((0, 0))) == []
    assert list(grid.neighbors((1, 0))) == [(0, 0)]
    assert list(grid.neighbors((0, 0), reverse=True)) == [(1, 0)]
    assert list(grid.neighbors((1, 0), reverse=True)) == []


def test_reverse_neighbors_mirror_forward_edges():
    grid = parse_grid_file(MAP_ROOT / "example_map.txt")
    forward = {(c, n) for c in grid.coords() for n in grid.neighbors(c)}
    backward = {(n, c) for c in grid.coords() for n in grid.neighbors(c, reverse=True)}

    assert forward == backward


def test_neighbors_of_out_of_range_coordinate():
    grid = parse_grid("SE\n")

    assert list(grid.neighbors((5, 5))) == []
