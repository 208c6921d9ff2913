# PROV: MOTIONDIFF.CLI.01
# WHY: Provide a small CLI to diff captured vs synthesized motion event fixtures and to
# inspect events and action codes while debugging a synthesis pipeline.

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import click
import yaml

from .actions import decode_action
from .config import load_config
from .contract import validate_motion_event
from .errors import ERROR, ConfigError, MalformedEventError, ValidationError, make_error
from .events import build_diff_report

EXIT_EQUAL = 0
EXIT_DIFFERS = 1
EXIT_INVALID = 2


class InputError(click.ClickException):
    exit_code = EXIT_INVALID

    def __init__(self, error: ValidationError) -> None:
        super().__init__(error["message"])
        self.error = error


YAML_SUFFIXES = (".yaml", ".yml")


def _load_event(path: Path) -> Any:
    # PyYAML reads exponent floats like 1e-07 as strings; only .yaml/.yml go through it.
    try:
        text = path.read_text(encoding="utf8")
    except (OSError, UnicodeDecodeError) as e:
        raise InputError(
            make_error(ERROR.INPUT_INVALID, f"{path}: cannot read: {e}", path=str(path))
        ) from e

    if path.suffix.lower() in YAML_SUFFIXES:
        try:
            return yaml.safe_load(text)
        except yaml.YAMLError as e:
            raise InputError(
                make_error(ERROR.INPUT_INVALID, f"{path}: invalid YAML: {e}", path=str(path))
            ) from e

    try:
        return json.loads(text)
    except json.JSONDecodeError as e:
        raise InputError(
            make_error(ERROR.INPUT_INVALID, f"{path}: invalid JSON: {e}", path=str(path))
        ) from e


def _write_error(cmd: str, err: ValidationError) -> None:
    click.echo(f"[{cmd}:error] {err['code']}: {err['message']}", err=True)


@click.group()
@click.version_option(version="0.1.0")
def cli() -> None:
    """Motion event diff - compare original and synthesized input events."""


@cli.command()
@click.argument("original", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.argument("synthesized", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--config", "-c", type=click.Path(exists=True, dir_okay=False, path_type=Path), help="Custom config file")
@click.option(
    "--format",
    "fmt",
    type=click.Choice(["text", "json"]),
    default="text",
    show_default=True,
    help="Output format",
)
@click.pass_context
def diff(ctx: click.Context, original: Path, synthesized: Path, config: Path | None, fmt: str) -> None:
    """Diff two event files.

    Exits 0 when no discrepancy is found, 1 when the events differ and 2 when
    an input or the config is malformed.
    """
    try:
        cfg = load_config(config)
        report = build_diff_report(_load_event(original), _load_event(synthesized), cfg)
    except (ConfigError, InputError, MalformedEventError) as e:
        _write_error("diff", e.error)
        ctx.exit(EXIT_INVALID)

    if fmt == "json":
        payload = {"equal": not report, "report": str(report), "entries": list(report.entries)}
        click.echo(json.dumps(payload, indent=2, sort_keys=True))
    elif report:
        click.echo(str(report))
    else:
        click.echo("[diff] ok")
    ctx.exit(EXIT_DIFFERS if report else EXIT_EQUAL)


@cli.command()
@click.argument("event", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.pass_context
def validate(ctx: click.Context, event: Path) -> None:
    """Check that EVENT has the shape the comparator requires."""
    try:
        obj = _load_event(event)
    except InputError as e:
        _write_error("validate", e.error)
        ctx.exit(EXIT_INVALID)

    errors = validate_motion_event(obj)
    if errors:
        for err in errors:
            click.echo(f"[validate:error] {event}: {err}", err=True)
        ctx.exit(EXIT_INVALID)
    click.echo("[validate] ok")


@cli.command("decode-action")
@click.argument("action")
def decode_action_cmd(action: str) -> None:
    """Decode a packed ACTION code (decimal or 0x-prefixed hex)."""
    try:
        value = int(action, 0)
    except ValueError as e:
        raise click.BadParameter(f"not an integer: {action!r}", param_hint="ACTION") from e

    code = decode_action(value)
    click.echo(f"action: {code.action}")
    click.echo(f"masked: {code.masked}")
    if code.pointer_idx is not None:
        click.echo(f"pointer_idx: {code.pointer_idx}")
    click.echo(f"name: {code.name}")


def main(argv: list[str] | None = None) -> int:
    try:
        rv = cli.main(args=argv, prog_name="motion-event-diff", standalone_mode=False)
    except click.ClickException as e:
        e.show()
        return e.exit_code
    except click.exceptions.Abort:
        return 1
    return int(rv or 0)


if __name__ == "__main__":
    raise SystemExit(main())
