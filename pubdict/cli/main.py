"""Main CLI application entry point."""

import sys

import typer

from pubdict.cli.commands import query
from pubdict.config import settings
from pubdict.logging_config import setup_logging

app = typer.Typer(
    name="pubdict",
    help="Query PubDictionaries through the VSM dictionary contract",
    no_args_is_help=True,
    rich_markup_mode="rich",
)


@app.callback()
def startup() -> None:
    """Configure logging on startup."""
    setup_logging(settings, stream=sys.stderr)


app.command(name="info", help="Show dictionary information")(query.info)
app.command(name="entries", help="Show entries by dictionary and/or identifier")(query.entries)
app.command(name="match", help="Show string-match suggestions")(query.match)


if __name__ == "__main__":
    app()
