from pathlib import Path

import pytest

from hill_climb.cli import main, parse_args

MAP_ROOT = Path(__file__).resolve().parents[1] / "maps"


def _run(capsys, *argv):
    code = main(parse_args(list(argv)))
    return code, capsys.readouterr()


def test_solve_example(capsys):
    code, out = _run(capsys, "--map", str(MAP_ROOT / "example_map.txt"))

    assert code == 0
    assert "Status: found" in out.out
    assert "Steps: 31" in out.out


@pytest.mark.parametrize("strategy", ["reverse", "per-source"])
def test_solve_from_lowest(capsys, strategy):
    code, out = _run(
        capsys, "--map", str(MAP_ROOT / "example_map.txt"), "--from-lowest", "--strategy", strategy
    )

    assert code == 0
    assert "Steps: 29" in out.out


def test_solve_with_ilp_and_path(capsys):
    code, out = _run(capsys, "--map", str(MAP_ROOT / "ramp_map.txt"), "--solver", "ilp", "--print-path")

    assert code == 0
    assert "Steps: 25" in out.out
    assert "Path: (0,0) -> (1,0) -> (2,0)" in out.out
    assert "(24,0) -> (25,0)\n" in out.out


def test_no_path_is_not_an_error(capsys):
    code, out = _run(capsys, "--map", str(MAP_ROOT / "cliff_map.txt"), "--selection", "scan")

    assert code == 0
    assert "Status: no_path" in out.out
    assert "Steps" not in out.out


def test_invalid_map_reports_error(tmp_path, capsys):
    bad = tmp_path / "bad_map.txt"
    bad.write_text("Sa#\nabE\n")
    code, out = _run(capsys, "--map", str(bad))

    assert code == 1
    assert "Unexpected tile '#'" in out.err


def test_missing_marker_reports_error(tmp_path, capsys):
    bad = tmp_path / "no_end_map.txt"
    bad.write_text("Sab\n")
    code, out = _run(capsys, "--map", str(bad))

    assert code == 1
    assert "No 'E' cell" in out.err


def test_plot_written(tmp_path, capsys):
    plot = tmp_path / "path.png"
    code, out = _run(capsys, "--map", str(MAP_ROOT / "example_map.txt"), "--plot", str(plot))

    assert code == 0
    assert plot.exists()
    assert f"Saved plot to {plot}" in out.out


def test_map_is_required():
    with pytest.raises(SystemExit):
        parse_args([])


def test_help_notes_flags_ignored_by_ilp(capsys):
    with pytest.raises(SystemExit):
        parse_args(["--help"])
    out = " ".join(capsys.readouterr().out.split())

    assert out.count("ignored by --solver ilp") == 2
