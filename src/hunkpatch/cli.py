"""Command line entry point for applying unified diffs to files."""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Optional

import typer
import yaml

from .config import DEFAULT_CONFIG_NAME, PatchSettings, load_settings
from .errors import ConfigError, PatchError
from .patch import apply_patch

APP_HELP = "Apply unified diff hunks to files, all or nothing."

app = typer.Typer(help=APP_HELP)


def _load_settings_or_exit(config: str) -> PatchSettings:
    try:
        return load_settings(Path(config))
    except ConfigError as error:
        typer.echo(str(error))
        raise typer.Exit(code=1) from error


def _read_diff(diff: str) -> str:
    if diff == "-":
        return sys.stdin.read()
    diff_path = Path(diff)
    if not diff_path.exists():
        raise typer.BadParameter(f"Diff file not found: {diff_path}")
    return diff_path.read_text(encoding="utf-8")


@app.command()
def apply(
    target: str = typer.Argument(..., help="File to patch; a missing file is treated as empty."),
    diff: str = typer.Argument(..., help="Unified diff file, or '-' to read from stdin."),
    output: Optional[str] = typer.Option(
        None,
        "--output",
        "-o",
        help="Write the result here instead of overwriting the target.",
    ),
    check: bool = typer.Option(
        False,
        "--check",
        help="Validate the diff against the target without writing anything.",
    ),
    config: str = typer.Option(
        DEFAULT_CONFIG_NAME,
        "--config",
        "-c",
        help="Path to the hunkpatch configuration file.",
    ),
) -> None:
    """Apply DIFF to TARGET."""
    settings = _load_settings_or_exit(config)
    target_path = Path(target)
    original = target_path.read_text(encoding="utf-8") if target_path.exists() else ""
    diff_text = _read_diff(diff)

    try:
        patched = apply_patch(original, diff_text, settings=settings)
    except PatchError as error:
        typer.echo(f"Patch rejected: {error}")
        raise typer.Exit(code=1) from error

    if check:
        typer.echo(f"Patch applies cleanly to {target_path.as_posix()}.")
        return

    destination = Path(output) if output else target_path
    destination.parent.mkdir(parents=True, exist_ok=True)
    destination.write_text(patched, encoding="utf-8")
    typer.echo(f"Patched {destination.as_posix()}.")


@app.command()
def show_config(
    config: str = typer.Option(
        DEFAULT_CONFIG_NAME,
        "--config",
        "-c",
        help="Path to the hunkpatch configuration file.",
    )
) -> None:
    """Print the effective patch settings."""
    settings = _load_settings_or_exit(config)
    typer.echo(yaml.safe_dump({"patch": settings.model_dump()}, sort_keys=True).rstrip())


def main() -> None:
    app()


if __name__ == "__main__":
    main()
