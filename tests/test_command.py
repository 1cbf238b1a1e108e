"""Tests for the monpos command line."""

import json

import pytest

from monpos.command import format_positions, get_parser, main, run
from monpos.models import ExitCode, Rect


@pytest.fixture(autouse=True)
def no_color(monkeypatch):
    "Plain output"
    monkeypatch.setenv("NO_COLOR", "1")


def test_parser_defaults():
    args = get_parser().parse_args([])

    assert args.command is None
    assert args.config is None
    assert args.json is False


def test_parser_command():
    args = get_parser().parse_args(["--config", "/tmp/x.toml", "--json", "order"])

    assert args.command == "order"
    assert str(args.config) == "/tmp/x.toml"
    assert args.json is True


def test_layout(configs_dir, capsys):
    assert run("layout", configs_dir / "basic.toml", as_json=False) == ExitCode.SUCCESS

    lines = capsys.readouterr().out.splitlines()
    assert lines == ["A  1920x1080 at (0, 0)", "B  1920x1080 at (1920, 0)"]


def test_layout_json(configs_dir, capsys):
    assert run("layout", configs_dir / "basic.toml", as_json=True) == ExitCode.SUCCESS

    data = json.loads(capsys.readouterr().out)
    assert data["order"] == ["A", "B"]
    assert data["positions"]["B"] == {"x": 1920, "y": 0, "width": 1920, "height": 1080}


def test_order(configs_dir, capsys):
    assert run("order", configs_dir / "complex.toml", as_json=False) == ExitCode.SUCCESS

    assert capsys.readouterr().out.split() == ["eDP-1", "DP-1", "DP-2", "DP-3", "HDMI-A-1"]


def test_check(configs_dir, capsys):
    assert run("check", configs_dir / "basic.toml", as_json=False) == ExitCode.SUCCESS

    assert capsys.readouterr().out.strip() == "OK monitors placed from 'A': A -> B"


def test_check_json_has_no_positions(configs_dir, capsys):
    assert run("check", configs_dir / "basic.toml", as_json=True) == ExitCode.SUCCESS

    assert json.loads(capsys.readouterr().out) == {"order": ["A", "B"]}


def test_config_error(configs_dir, capsys):
    assert run("layout", configs_dir / "unspecified_width.toml", as_json=False) == ExitCode.CONFIG_ERROR

    assert "Missing required field" in capsys.readouterr().err


def test_structural_error(configs_dir, capsys):
    assert run("check", configs_dir / "cycle.toml", as_json=False) == ExitCode.LAYOUT_ERROR

    assert "cycle" in capsys.readouterr().err


def test_overlap_still_prints_positions(configs_dir, capsys):
    assert run("layout", configs_dir / "overlap.toml", as_json=False) == ExitCode.LAYOUT_ERROR

    captured = capsys.readouterr()
    assert len(captured.out.splitlines()) == 5
    assert "OVERLAP between A" in captured.err
    assert "and E" in captured.err


def test_overlap_json(configs_dir, capsys):
    assert run("layout", configs_dir / "overlap.toml", as_json=True) == ExitCode.LAYOUT_ERROR

    data = json.loads(capsys.readouterr().out)
    assert data["overlaps"] == [["A", "E"]]
    assert len(data["positions"]) == 5


def test_main_exit_code(configs_dir, capsys):
    with pytest.raises(SystemExit) as excinfo:
        main(["--config", str(configs_dir / "basic.toml"), "order"])

    assert excinfo.value.code == ExitCode.SUCCESS
    assert capsys.readouterr().out.split() == ["A", "B"]


def test_print_completion(capsys):
    with pytest.raises(SystemExit) as excinfo:
        main(["--print-completion", "bash"])

    assert excinfo.value.code == 0
    assert "monpos" in capsys.readouterr().out


def test_format_positions_alignment():
    text = format_positions({"A": Rect(0, 0, 10, 10), "long-name": Rect(10, 0, 5, 5)})

    assert text.splitlines() == ["A          10x10 at (0, 0)", "long-name  5x5 at (10, 0)"]


@pytest.mark.parametrize("scale", ["nan", "inf", "-inf"])
def test_non_finite_scale_is_a_config_error(tmp_path, capsys, scale):
    config_file = tmp_path / "config.toml"
    config_file.write_text(f"[monitors.A]\nwidth = 1920\nheight = 1080\nscale = {scale}\n", encoding="utf-8")

    with pytest.raises(SystemExit) as excinfo:
        main(["--config", str(config_file), "layout"])

    assert excinfo.value.code == ExitCode.CONFIG_ERROR
    assert "finite" in capsys.readouterr().err


def test_undecodable_file_is_a_config_error(tmp_path, capsys):
    config_file = tmp_path / "config.toml"
    config_file.write_bytes(b"[monitors.A]\nwidth = \xff\xfe\n")

    assert run("layout", config_file, False) == ExitCode.CONFIG_ERROR
    assert "problem reading" in capsys.readouterr().err
