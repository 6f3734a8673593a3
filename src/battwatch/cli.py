"""Battery monitor CLI application.

This module provides the command-line interface for battwatch, including
the monitor daemon, status reporting, suspend-method selection and
configuration utilities.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Final

import typer
import yaml

from battwatch.common.enums import SequenceOutcome, SuspendMethod
from battwatch.controller import BatteryMonitor
from battwatch.errors import ConfigError, NoBatteryError
from battwatch.presentation.console import ConsolePresenter
from battwatch.settings.store import apply_overrides, create_config_store
from battwatch.settings.user import MonitorSettings

# ── CLI setup ────────────────────────────────────────────────────────────────
app = typer.Typer(help="Battery monitor with forced suspend", add_completion=False)
config_app = typer.Typer(help="Config helpers")
app.add_typer(config_app, name="config")

logger: Final = logging.getLogger(__name__)  # Will be "battwatch.cli"

# Options shared by commands
CONFIG_OPTION = typer.Option(None, "--config", "-c", dir_okay=False, help="Config file")
DEBUG_OPTION = typer.Option(False, "--debug", help="Enable debug logging")
CONSOLE_OPTION = typer.Option(
    False, "--console", help="Print alerts to the terminal instead of the desktop"
)
SELECT_OPTION = typer.Option(None, "--select", help="Make this the primary method")
YES_OPTION = typer.Option(False, "--yes", "-y", help="Do not ask for confirmation")
DST_ARGUMENT = typer.Argument(..., dir_okay=False, help="Config file to write")
PAIRS_ARGUMENT = typer.Argument(
    ..., help="KEY=VALUE pairs, e.g. warning_level=25 force_suspend=0"
)


@app.command()
def run(
    config: Path | None = CONFIG_OPTION,
    console: bool = CONSOLE_OPTION,
    debug: bool = DEBUG_OPTION,
) -> None:
    """Monitor the battery until interrupted."""
    monitor = BatteryMonitor(
        config,
        presenter=ConsolePresenter() if console else None,
        debug=debug,
    )
    try:
        monitor.start()
    except NoBatteryError as exc:
        typer.secho(str(exc), fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1) from exc


@app.command()
def status(config: Path | None = CONFIG_OPTION) -> None:
    """Show the battery level and the active settings."""
    monitor = BatteryMonitor(config, presenter=ConsolePresenter())
    typer.echo(monitor.describe_status())


@app.command("suspend-methods")
def suspend_methods(
    config: Path | None = CONFIG_OPTION,
    select: str | None = SELECT_OPTION,
) -> None:
    """List suspend methods, or choose the primary one."""
    monitor = BatteryMonitor(config, presenter=ConsolePresenter())

    if select is not None:
        try:
            method = SuspendMethod.from_name(select)
        except (KeyError, ValueError) as exc:
            typer.secho(f"Unknown suspend method: {select}", fg=typer.colors.RED, err=True)
            raise typer.Exit(code=2) from exc
        try:
            monitor.select_suspend_method(method)
        except ConfigError as exc:
            typer.secho(str(exc), fg=typer.colors.RED, err=True)
            raise typer.Exit(code=1) from exc

    order = monitor.settings.suspend_method_order
    for method in SuspendMethod:
        marker = "*" if method is order[0] else " "
        typer.echo(f"{marker} {method.value} {method.name.lower():<14} {method.label}")


@app.command("test-suspend")
def test_suspend(
    config: Path | None = CONFIG_OPTION,
    yes: bool = YES_OPTION,
) -> None:
    """Suspend now with the primary method, to check it works."""
    monitor = BatteryMonitor(config, presenter=ConsolePresenter())
    method = monitor.settings.suspend_method
    if not yes:
        typer.confirm(
            f"This will test {method.label}. Your system will suspend immediately! Proceed?",
            abort=True,
        )

    if monitor.test_suspend() is not SequenceOutcome.SUSPENDED:
        typer.secho(f"Suspend method failed: {method.label}", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)


# ───────────────────────── config sub-commands ───────────────────────────────
@config_app.command("validate")
def validate_config(file: Path):
    """Validate a config file."""
    try:
        create_config_store(file).read()
        typer.echo("✅ Config valid")
    except ConfigError as exc:
        typer.secho(str(exc), fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1) from exc


@config_app.command("init")
def init_config(dst: Path = DST_ARGUMENT, force: bool = typer.Option(False, "--force")):
    """Write a config file with the default settings."""
    if dst.exists() and not force:
        typer.secho(f"{dst} already exists (use --force)", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)
    try:
        create_config_store(dst).save(MonitorSettings())
    except ConfigError as exc:
        typer.secho(str(exc), fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1) from exc
    typer.secho(f"Config written to {dst}", fg=typer.colors.GREEN)


@config_app.command("set")
def set_config(pairs: list[str] = PAIRS_ARGUMENT, config: Path | None = CONFIG_OPTION):
    """Change settings and save them to the config file."""
    overrides: dict[str, str] = {}
    for pair in pairs:
        key, sep, value = pair.partition("=")
        if not sep or not key.strip():
            typer.secho(f"Expected KEY=VALUE, got {pair!r}", fg=typer.colors.RED, err=True)
            raise typer.Exit(code=2)
        overrides[key.strip()] = value.strip()

    monitor = BatteryMonitor(config, presenter=ConsolePresenter())
    try:
        monitor.save_settings(apply_overrides(monitor.settings, overrides))
    except ConfigError as exc:
        typer.secho(str(exc), fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1) from exc
    typer.echo(f"Saved to {monitor.store.path}")
    typer.echo("A running monitor picks this up on SIGHUP: pkill -HUP -f 'battwatch run'")


@config_app.command("show")
def show_config(config: Path | None = CONFIG_OPTION):
    """Print the effective settings as YAML."""
    settings = create_config_store(config).load()
    typer.echo(yaml.safe_dump(settings.model_dump(mode="json"), sort_keys=False))


# ───────────────────────── module entrypoint ────────────────────────────────
if __name__ == "__main__":
    try:
        app()
    except KeyboardInterrupt:
        sys.exit(0)
