"""Merge, order and page the partial results of a fan-out."""

from collections.abc import Iterable, Sequence
from typing import TypeVar

from pubdict.config import Settings
from pubdict.services.dictionary.base import Entry, Match, MatchType, QueryOptions
from pubdict.services.dictionary.urls import BackendTarget, TargetGroup

T = TypeVar("T")

_MATCH_TYPE_RANK = {MatchType.PREFIX: 0, MatchType.SUBSTRING: 1}


def concat(partials: Iterable[Sequence[T]]) -> list[T]:
    merged: list[T] = []
    for partial in partials:
        merged.extend(partial)
    return merged


def trim_page(records: Sequence[T], page: int, page_size: int) -> list[T]:
    """Return the records of page ``page`` (1-based), clipped to what exists."""
    start = (page - 1) * page_size
    return list(records[start : start + page_size])


def cap(records: Sequence[T], page_size: int) -> list[T]:
    """Keep the first ``page_size`` records; the backend already paged each call."""
    return list(records[:page_size])


def rearrange_entries(entries: Sequence[Entry]) -> list[Entry]:
    """
    Make entries sharing an identifier contiguous.

    Groups appear in order of first occurrence of their identifier, and keep
    their members' relative order.
    """
    groups: dict[str, list[Entry]] = {}
    for entry in entries:
        groups.setdefault(entry.id, []).append(entry)
    return concat(groups.values())


def sort_entries(entries: Sequence[Entry], sort: str | None = None) -> list[Entry]:
    """Sort entries by 'dictID' (default), 'id' or 'str' (first term)."""
    if sort == "id":
        return sorted(entries, key=lambda e: e.id)
    if sort == "str":
        return sorted(entries, key=lambda e: (e.terms[0] if e.terms else "", e.dict_id, e.id))
    return sorted(entries, key=lambda e: (e.dict_id, e.id))


def trim_entries(entries: Sequence[Entry], options: QueryOptions, settings: Settings) -> list[Entry]:
    """
    Page an entry list.

    Identifier queries slice by page offset, unless all results were asked
    for. Dictionary listings were paged by the backend and are only capped.
    """
    if options.get_all_results:
        return list(entries)
    if options.filter_id:
        return trim_page(entries, options.page_or(settings), options.page_size_or(settings))
    return cap(entries, options.page_size_or(settings))


def remove_duplicate_matches(matches: Iterable[Match]) -> list[Match]:
    """Drop repeated (id, dictID, matched string) triples, keeping the first."""
    seen: set[tuple[str, str, str]] = set()
    unique: list[Match] = []
    for match in matches:
        key = (match.id, match.dict_id, match.matched_string)
        if key not in seen:
            seen.add(key)
            unique.append(match)
    return unique


def sort_matches(matches: Iterable[Match]) -> list[Match]:
    """Sort by match type (prefix first), then matched string, then dictionary."""
    return sorted(
        matches,
        key=lambda m: (_MATCH_TYPE_RANK[m.match_type], m.matched_string, m.dict_id),
    )


def split_groups(
    targets: Sequence[BackendTarget], partials: Sequence[Sequence[T]]
) -> tuple[list[T], list[T]]:
    """Split per-target results into (preferred, rest) by the group of their target."""
    preferred: list[T] = []
    rest: list[T] = []
    for target, partial in zip(targets, partials):
        (preferred if target.group is TargetGroup.PREFERRED else rest).extend(partial)
    return preferred, rest
