"""Commands querying dictionaries, entries and matches."""

from collections.abc import Awaitable, Callable, Sequence
from typing import Annotated, TypeVar

import typer
from rich.table import Table

from pubdict.cli.utils.async_runner import run_with_backend
from pubdict.cli.utils.console import console, print_empty, print_error
from pubdict.services.dictionary import DictInfo, DictionaryError, Entry, Match, PubDictionaries

T = TypeVar("T")

IdsOption = Annotated[list[str] | None, typer.Option("--id", help="Fully-qualified identifier")]
DictIdsOption = Annotated[
    list[str] | None, typer.Option("--dict-id", help="Fully-qualified dictionary identifier")
]
PageOption = Annotated[int | None, typer.Option("--page", "-p", min=1)]
PerPageOption = Annotated[int | None, typer.Option("--per-page", "-n", min=1)]


def _run(query: Callable[[PubDictionaries], Awaitable[T]]) -> T:
    try:
        return run_with_backend(query)
    except DictionaryError as e:
        print_error(e)
        raise typer.Exit(1) from None


def _paging(page: int | None, per_page: int | None) -> dict[str, int]:
    options = {}
    if page is not None:
        options["page"] = page
    if per_page is not None:
        options["perPage"] = per_page
    return options


def render_dict_infos(records: Sequence[DictInfo]) -> Table:
    table = Table(title="Dictionaries")
    table.add_column("Name", style="dict")
    table.add_column("ID", style="dim")
    for record in records:
        table.add_row(record.name, record.id)
    return table


def render_entries(records: Sequence[Entry]) -> Table:
    table = Table(title="Entries")
    table.add_column("ID", style="bold")
    table.add_column("Dictionary", style="dict")
    table.add_column("Terms", style="term")
    for record in records:
        table.add_row(record.id, record.dict_id, ", ".join(record.terms))
    return table


def render_matches(records: Sequence[Match]) -> Table:
    table = Table(title="Matches")
    table.add_column("String", style="term")
    table.add_column("Type")
    table.add_column("ID", style="bold")
    table.add_column("Dictionary", style="dict")
    for record in records:
        table.add_row(record.matched_string, record.match_type.value, record.id, record.dict_id)
    return table


def info(
    dict_ids: Annotated[list[str], typer.Argument(help="Fully-qualified dictionary identifiers")],
    page: PageOption = None,
    per_page: PerPageOption = None,
) -> None:
    """Show information about dictionaries."""
    options = {"filter": {"id": dict_ids}, **_paging(page, per_page)}
    records = _run(lambda backend: backend.get_dict_infos(options))
    if not records:
        print_empty("dictionaries")
        return
    console.print(render_dict_infos(records))


def entries(
    ids: IdsOption = None,
    dict_ids: DictIdsOption = None,
    sort: Annotated[str | None, typer.Option(help="dictID, id or str")] = None,
    page: PageOption = None,
    per_page: PerPageOption = None,
    all_results: Annotated[bool, typer.Option("--all", help="Do not page identifier lookups")] = False,
) -> None:
    """Show entries of dictionaries or for identifiers."""
    filt = {key: value for key, value in (("id", ids), ("dictID", dict_ids)) if value}
    options: dict = {"filter": filt, **_paging(page, per_page)}
    if sort:
        options["sort"] = sort
    if all_results:
        options["getAllResults"] = True

    records = _run(lambda backend: backend.get_entries(options))
    if not records:
        print_empty("entries")
        return
    console.print(render_entries(records))


def match(
    search: Annotated[str, typer.Argument(help="String to match")],
    dict_ids: DictIdsOption = None,
    prefer: Annotated[
        list[str] | None, typer.Option("--prefer", help="Preferred dictionary identifier")
    ] = None,
    page: PageOption = None,
    per_page: PerPageOption = None,
) -> None:
    """Show string-match suggestions."""
    options: dict = _paging(page, per_page)
    if dict_ids:
        options["filter"] = {"dictID": dict_ids}
    if prefer:
        options["sort"] = {"dictID": prefer}

    records = _run(lambda backend: backend.get_entry_matches_for_string(search, options))
    if not records:
        print_empty("matches")
        return
    console.print(render_matches(records))
