# PROV: MOTIONDIFF.TESTS.CLI.01
# WHY: Ensure the CLI wires file loading, config, exit codes and output formats.

from __future__ import annotations

import json
from pathlib import Path

import pytest
from click.testing import CliRunner

from _events import motion_event
from motion_event_diff import cli


def _write_json(path: Path, obj: object) -> Path:
    path.write_text(json.dumps(obj, indent=2) + "\n", encoding="utf8")
    return path


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


def test_diff_equal_events_exit_zero(tmp_path: Path, runner: CliRunner) -> None:
    a = _write_json(tmp_path / "a.json", motion_event(action=2, pointers=2))
    b = _write_json(tmp_path / "b.json", motion_event(action=2, pointers=2, deviceId=9))
    result = runner.invoke(cli.cli, ["diff", str(a), str(b)])
    assert result.exit_code == 0
    assert "[diff] ok" in result.output


def test_diff_reports_mismatch_exit_one(tmp_path: Path, runner: CliRunner) -> None:
    a = _write_json(tmp_path / "a.json", motion_event(action=0))
    b = _write_json(tmp_path / "b.json", motion_event(action=1))
    result = runner.invoke(cli.cli, ["diff", str(a), str(b)])
    assert result.exit_code == 1
    assert "action (expected: DOWN(0) actual: UP(1))" in result.output


def test_diff_json_format(tmp_path: Path, runner: CliRunner) -> None:
    a = _write_json(tmp_path / "a.json", motion_event(metaState=0))
    b = _write_json(tmp_path / "b.json", motion_event(metaState=2))
    result = runner.invoke(cli.cli, ["diff", str(a), str(b), "--format", "json"])
    assert result.exit_code == 1
    payload = json.loads(result.output)
    assert payload == {
        "entries": ["metaState (expected: 0 actual: 2) "],
        "equal": False,
        "report": "metaState (expected: 0 actual: 2) ",
    }


def test_diff_accepts_yaml_fixture_and_config(tmp_path: Path, runner: CliRunner) -> None:
    a = _write_json(tmp_path / "a.json", motion_event(action=2, x=1.0))
    b = tmp_path / "b.yaml"
    b.write_text(json.dumps(motion_event(action=2, x=1.05)), encoding="utf8")
    cfg = tmp_path / "cfg.yaml"
    cfg.write_text("tolerance: 0.1\n", encoding="utf8")

    assert runner.invoke(cli.cli, ["diff", str(a), str(b)]).exit_code == 1
    result = runner.invoke(cli.cli, ["diff", str(a), str(b), "--config", str(cfg)])
    assert result.exit_code == 0


def test_diff_malformed_event_exit_two(tmp_path: Path, runner: CliRunner) -> None:
    bad = motion_event()
    del bad["pointerCoords"]
    a = _write_json(tmp_path / "a.json", motion_event())
    b = _write_json(tmp_path / "b.json", bad)
    result = runner.invoke(cli.cli, ["diff", str(a), str(b)])
    assert result.exit_code == 2
    assert "[diff:error] E_EVENT_FIELD_MISSING" in result.output


def test_diff_invalid_json_exit_two(tmp_path: Path, runner: CliRunner) -> None:
    a = _write_json(tmp_path / "a.json", motion_event())
    b = tmp_path / "b.json"
    b.write_text("{not: [valid", encoding="utf8")
    result = runner.invoke(cli.cli, ["diff", str(a), str(b)])
    assert result.exit_code == 2
    assert "E_INPUT_INVALID" in result.output


def test_validate_ok_and_errors(tmp_path: Path, runner: CliRunner) -> None:
    ok = _write_json(tmp_path / "ok.json", motion_event(pointers=2))
    result = runner.invoke(cli.cli, ["validate", str(ok)])
    assert result.exit_code == 0
    assert "[validate] ok" in result.output

    bad = _write_json(tmp_path / "bad.json", {"action": "UP"})
    result = runner.invoke(cli.cli, ["validate", str(bad)])
    assert result.exit_code == 2
    assert "event.action must be an integer" in result.output


def test_decode_action(runner: CliRunner) -> None:
    result = runner.invoke(cli.cli, ["decode-action", "0x205"])
    assert result.exit_code == 0
    assert result.output.splitlines() == [
        "action: 517",
        "masked: 5",
        "pointer_idx: 2",
        "name: POINTER_DOWN(517)",
    ]


def test_decode_action_rejects_non_integer(runner: CliRunner) -> None:
    result = runner.invoke(cli.cli, ["decode-action", "down"])
    assert result.exit_code == 2


def test_main_returns_exit_code(tmp_path: Path) -> None:
    a = _write_json(tmp_path / "a.json", motion_event(action=0))
    b = _write_json(tmp_path / "b.json", motion_event(action=1))
    assert cli.main(["diff", str(a), str(b)]) == 1
    assert cli.main(["diff", str(a), str(a)]) == 0


def test_diff_json_exponent_floats_use_tolerance(tmp_path: Path, runner: CliRunner) -> None:
    # json.dumps writes small floats in exponent form (1e-07).
    a = _write_json(tmp_path / "a.json", motion_event(action=2, x=1e-07))
    b = _write_json(tmp_path / "b.json", motion_event(action=2, x=2e-07))
    assert "1e-07" in b.read_text(encoding="utf8")
    result = runner.invoke(cli.cli, ["diff", str(a), str(b)])
    assert result.exit_code == 0
    assert "[diff] ok" in result.output


def test_diff_non_utf8_input_exit_two(tmp_path: Path, runner: CliRunner) -> None:
    a = _write_json(tmp_path / "a.json", motion_event())
    b = tmp_path / "b.json"
    b.write_bytes(b'{"action": "\xff"}')
    result = runner.invoke(cli.cli, ["diff", str(a), str(b)])
    assert result.exit_code == 2
    assert "E_INPUT_INVALID" in result.output


def test_diff_non_utf8_config_exit_two(tmp_path: Path, runner: CliRunner) -> None:
    a = _write_json(tmp_path / "a.json", motion_event())
    cfg = tmp_path / "cfg.yaml"
    cfg.write_bytes(b"tolerance: \xff\n")
    result = runner.invoke(cli.cli, ["diff", str(a), str(a), "--config", str(cfg)])
    assert result.exit_code == 2
    assert "E_CONFIG_INVALID" in result.output


def test_validate_non_utf8_input_exit_two(tmp_path: Path, runner: CliRunner) -> None:
    bad = tmp_path / "bad.json"
    bad.write_bytes(b"\xfe\xff{}")
    result = runner.invoke(cli.cli, ["validate", str(bad)])
    assert result.exit_code == 2
    assert "E_INPUT_INVALID" in result.output
