"""Status lines written to standard error."""

from __future__ import annotations

import sys


def write_stderr(message: str, *args: object) -> None:
    """Print a printf-style formatted line to standard error."""
    text = message % args if args else message
    print(text, file=sys.stderr)


def write_ok(message: str, *args: object) -> None:
    write_stderr("[   OK] " + message, *args)


def write_not_ok(message: str, *args: object) -> None:
    write_stderr("[NOTOK] " + message, *args)


def write_warn(message: str, *args: object) -> None:
    write_stderr("[ WARN] " + message, *args)