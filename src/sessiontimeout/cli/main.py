"""CLI entry point for sessiontimeout.

Uses Click to expose the ``sessiontimeout`` command group.  ``run`` drives
a :class:`SessionTimeout` in the foreground until it times out.
"""

from __future__ import annotations

import logging
import sys
import time
from typing import Callable, TypeVar

import click

import sessiontimeout
from sessiontimeout.core.config import SessionConfig
from sessiontimeout.core.session import SessionTimeout, format_remaining
from sessiontimeout.core.timer import InvalidArgumentError

T = TypeVar("T")

_LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
_LOG_DATEFMT = "%Y-%m-%d %H:%M:%S"


def _run(action: Callable[[], T]) -> T:
    """Execute *action*, converting ``InvalidArgumentError`` to a CLI error.

    On ``InvalidArgumentError`` the message is printed to stderr and the
    process exits with code 1.
    """
    try:
        return action()
    except InvalidArgumentError as exc:
        click.echo(str(exc), err=True)
        sys.exit(1)


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format=_LOG_FORMAT,
        datefmt=_LOG_DATEFMT,
    )


@click.group()
@click.version_option(version=sessiontimeout.__version__, prog_name="sessiontimeout")
def cli() -> None:
    """sessiontimeout: a pausable session-timeout countdown."""


@cli.command()
@click.argument("timeout", type=float, envvar="SESSIONTIMEOUT_TIMEOUT")
@click.option(
    "--warning",
    type=float,
    default=60.0,
    show_default=True,
    envvar="SESSIONTIMEOUT_WARNING",
    help="Seconds before expiry at which to warn.",
)
@click.option(
    "--interval",
    type=float,
    default=1.0,
    show_default=True,
    envvar="SESSIONTIMEOUT_INTERVAL",
    help="Seconds between status polls.",
)
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging.")
def run(timeout: float, warning: float, interval: float, verbose: bool) -> None:
    """Run a session that times out after TIMEOUT seconds."""
    _configure_logging(verbose)
    config = _run(
        lambda: SessionConfig(
            timeout_ms=timeout * 1000.0,
            warning_duration_ms=warning * 1000.0,
            poll_interval_ms=interval * 1000.0,
        )
    )
    session = SessionTimeout(
        config,
        on_timeout=lambda: click.echo("Session timed out"),
        on_warning=lambda remaining: click.echo(
            f"Warning: {format_remaining(remaining)} remaining"
        ),
    )
    session.start()
    try:
        while not session.poll().timed_out:
            message, _ = session.status()
            click.echo(message)
            time.sleep(config.poll_interval_ms / 1000.0)
    except KeyboardInterrupt:
        click.echo("Session stopped", err=True)
        sys.exit(130)
    finally:
        session.close()
