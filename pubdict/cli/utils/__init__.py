"""CLI utility modules."""

from pubdict.cli.utils.async_runner import run_with_backend
from pubdict.cli.utils.console import console, error_console

__all__ = ["run_with_backend", "console", "error_console"]
