"""Rich consoles and message helpers for dictionary query output."""

from rich.console import Console
from rich.theme import Theme

from pubdict.services.dictionary import DictionaryError

dictionary_theme = Theme(
    {
        "warning": "yellow",
        "error": "red bold",
        "status": "red",
        "term": "magenta",
        "dict": "blue",
        "dim": "dim",
    }
)

console = Console(theme=dictionary_theme)

error_console = Console(theme=dictionary_theme, stderr=True)


def format_error(error: DictionaryError) -> str:
    """Markup for a {status, error} failure, status first."""
    return f"[error]Error[/] [status]{error.status}[/]: {error.error}"


def print_error(error: DictionaryError) -> None:
    error_console.print(format_error(error), highlight=False)


def print_empty(what: str) -> None:
    """Report a query that succeeded with no records."""
    console.print(f"[warning]No {what} found[/]")
