"""CLI utility functions and helpers."""

import sys

import click

from .error_handler import get_error_handler

# Global flag for quiet mode
_quiet_mode = False

# Exit codes
EXIT_BLOCKING_ERROR = 1
EXIT_USER_WARNING = 2


def set_quiet_mode(quiet: bool) -> None:
    """Set the global quiet mode flag."""
    global _quiet_mode
    _quiet_mode = quiet


def echo(message: str = "", err: bool = False, **kwargs) -> None:
    """Echo wrapper that respects quiet mode."""
    if _quiet_mode and not err:
        return
    click.echo(message, err=err, **kwargs)


def secho(message: str = "", err: bool = False, **kwargs) -> None:
    """Styled echo wrapper that respects quiet mode."""
    if _quiet_mode and not err:
        return
    click.secho(message, err=err, **kwargs)


def warn(error: Exception, operation: str, item_id: str = None) -> None:
    """Report a recoverable error next to the command that raised it."""
    get_error_handler().handle_error(error, operation=operation, item_id=item_id)
    click.secho(f"Warning: {error}", fg='yellow', err=True)


def fail(error: Exception, operation: str, message: str, item_id: str = None) -> None:
    """Report a blocking error and exit."""
    context = get_error_handler().handle_error(error, operation=operation, item_id=item_id)
    click.secho(f"ERROR: {message}", fg='red', err=True)
    click.echo(str(error), err=True)
    if context.suggestion:
        click.echo(context.suggestion, err=True)
    sys.exit(EXIT_BLOCKING_ERROR)
