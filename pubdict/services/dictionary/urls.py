"""Translate dictionary queries into PubDictionaries request URLs."""

import logging
from collections.abc import Iterable
from dataclasses import dataclass
from enum import Enum
from urllib.parse import quote

from pubdict.config import Settings
from pubdict.services.dictionary.base import QueryOptions
from pubdict.services.dictionary.errors import NotSupportedError

logger = logging.getLogger(__name__)


class EndpointKind(str, Enum):
    """Backend endpoint a target addresses; selects the response mapping."""

    DICT_INFO = "dict_info"
    DICT_ENTRIES = "dict_entries"
    FIND_TERMS = "find_terms"
    COMPLETION = "completion"


class TargetGroup(str, Enum):
    PREFERRED = "preferred"
    REST = "rest"


@dataclass(frozen=True)
class BackendTarget:
    """One backend URL plus what is needed to interpret its response."""

    url: str
    kind: EndpointKind
    dict_name: str | None = None
    group: TargetGroup | None = None


@dataclass(frozen=True)
class MatchPlan:
    """Completion targets, preferred dictionaries first."""

    targets: tuple[BackendTarget, ...]
    preferred_count: int
    rest_count: int

    @property
    def supported(self) -> bool:
        return bool(self.targets)


def encode_component(value: str) -> str:
    """Percent-encode a URL component, escaping everything except -_.~ and alphanumerics."""
    return quote(value, safe="")


def dict_name_from_id(dict_id: str) -> str:
    """Return the dictionary name, i.e. the last path segment of its identifier.

    An identifier ending in a slash names no dictionary and yields ''.
    """
    return dict_id.strip().split("/")[-1]


def unique(values: Iterable[str]) -> list[str]:
    """Drop duplicates, keeping first occurrences in order."""
    return list(dict.fromkeys(values))


def dict_names_from_ids(dict_ids: Iterable[str] | None) -> list[str]:
    """Distinct, non-empty dictionary names of the given identifiers, in order."""
    return unique(name for name in map(dict_name_from_id, dict_ids or []) if name)


def in_namespace(ids: Iterable[str] | None, settings: Settings) -> list[str]:
    """Keep only identifiers that belong to this backend."""
    return [i for i in ids or [] if settings.pubdictionaries_id_uri in i.strip()]


def _with_paging(url: str, separator: str, options: QueryOptions, settings: Settings) -> str:
    return (
        f"{url}{separator}page={options.page_or(settings)}"
        f"&per_page={options.page_size_or(settings)}"
    )


def build_dict_info_targets(options: QueryOptions, settings: Settings) -> list[BackendTarget]:
    """
    Build one target per requested dictionary.

    Returns an empty list when no identifier of this backend was given; there
    is no endpoint listing all dictionaries.
    """
    targets: dict[str, BackendTarget] = {}
    for dict_id in in_namespace(options.filter_id, settings):
        name = dict_name_from_id(dict_id)
        if not name:
            continue
        url = settings.dict_infos_url.replace("$filterDictID", name)
        targets.setdefault(url, BackendTarget(url, EndpointKind.DICT_INFO, name))
    return list(targets.values())


def build_entry_targets(options: QueryOptions, settings: Settings) -> list[BackendTarget]:
    """
    Build the targets answering an entries query.

    Dictionary-only queries get one paged listing per dictionary, in
    alphabetical order of dictionary name. Queries naming identifiers get a
    single find_terms target, restricted to the filtered dictionaries if any.

    Raises:
        NotSupportedError: if neither identifiers nor dictionaries are given
    """
    if not options.filter_id and not options.filter_dict_id:
        raise NotSupportedError()

    dict_names = dict_names_from_ids(options.filter_dict_id)

    if not options.filter_id:
        return [
            BackendTarget(
                _with_paging(
                    settings.dict_entries_url.replace("$filterDictID", name), "?", options, settings
                ),
                EndpointKind.DICT_ENTRIES,
                name,
            )
            for name in sorted(dict_names)
        ]

    url = settings.find_terms_url.replace("$filterDictIDs", ",".join(dict_names)).replace(
        "$filterIDs", encode_component("|".join(options.filter_id))
    )
    return [BackendTarget(url, EndpointKind.FIND_TERMS)]


def split_dicts(
    sort_dict_ids: list[str] | None, filter_dict_ids: list[str] | None
) -> tuple[list[str], list[str]]:
    """
    Split dictionaries into (preferred, rest).

    Preferred ones come from the sort preference, the rest from the filter.
    A filter fully covered by the sort preference makes the preference moot.
    """
    if not sort_dict_ids:
        return [], list(filter_dict_ids or [])
    if not filter_dict_ids:
        return list(sort_dict_ids), []
    if all(d in sort_dict_ids for d in filter_dict_ids):
        return [], list(filter_dict_ids)
    preferred = [d for d in sort_dict_ids if d in filter_dict_ids]
    rest = [d for d in filter_dict_ids if d not in sort_dict_ids]
    return preferred, rest


def build_match_plan(search: str, options: QueryOptions, settings: Settings) -> MatchPlan:
    """
    Build one completion target per dictionary to search.

    Preferred dictionaries are only usable on the first page when nothing
    else is filtered; otherwise the plan is empty, meaning unsupported.
    """
    preferred_ids, rest_ids = split_dicts(
        in_namespace(options.sort_dict_id, settings) or None, options.filter_dict_id
    )
    preferred = dict_names_from_ids(preferred_ids)
    rest = [n for n in dict_names_from_ids(rest_ids) if n not in preferred]

    if preferred and not rest and not options.is_first_page:
        logger.debug("Preferred dictionaries without a filter are only queried on page 1")
        preferred = []

    template = settings.matches_url.replace("$queryString", encode_component(search))
    targets = tuple(
        BackendTarget(
            _with_paging(template.replace("$filterDictID", name), "&", options, settings),
            EndpointKind.COMPLETION,
            name,
            group,
        )
        for names, group in ((preferred, TargetGroup.PREFERRED), (rest, TargetGroup.REST))
        for name in names
    )
    return MatchPlan(targets, len(preferred), len(rest))
