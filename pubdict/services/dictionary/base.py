"""Records, query options and the abstract dictionary contract."""

from abc import ABC, abstractmethod
from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass, replace
from enum import Enum
from typing import Any, TypeVar

from pubdict.config import Settings


class MatchType(str, Enum):
    """How a matched label relates to the search string (prefix sorts first)."""

    PREFIX = "prefix"
    SUBSTRING = "substring"

    @property
    def code(self) -> str:
        """VSM match type code: S for prefix matches, T for other matches."""
        return "S" if self is MatchType.PREFIX else "T"


@dataclass(frozen=True)
class DictInfo:
    """Information about one dictionary."""

    id: str
    name: str

    def to_dict(self) -> dict[str, Any]:
        return {"id": self.id, "name": self.name}


@dataclass(frozen=True)
class Entry:
    """One concept of a dictionary with its synonyms."""

    id: str
    dict_id: str
    description: str
    terms: tuple[str, ...]
    z: Mapping[str, Any] | None = None

    def to_dict(self) -> dict[str, Any]:
        obj: dict[str, Any] = {
            "id": self.id,
            "dictID": self.dict_id,
            "descr": self.description,
            "terms": [{"str": term} for term in self.terms],
        }
        if self.z is not None:
            obj["z"] = dict(self.z)
        return obj


@dataclass(frozen=True)
class Match:
    """A string-match suggestion."""

    id: str
    dict_id: str
    matched_string: str
    description: str
    match_type: MatchType
    terms: tuple[str, ...]
    z: Mapping[str, Any] | None = None

    def to_dict(self) -> dict[str, Any]:
        obj: dict[str, Any] = {
            "id": self.id,
            "dictID": self.dict_id,
            "str": self.matched_string,
            "descr": self.description,
            "type": self.match_type.code,
            "terms": [{"str": term} for term in self.terms],
        }
        if self.z is not None:
            obj["z"] = dict(self.z)
        return obj


Record = DictInfo | Entry | Match
R = TypeVar("R", DictInfo, Entry, Match)


def _string_list(value: Any) -> list[str] | None:
    """Return value if it is a non-empty list of strings, else None."""
    if isinstance(value, (list, tuple)) and value and all(isinstance(v, str) for v in value):
        return list(value)
    return None


def _positive_int(value: Any) -> int | None:
    if isinstance(value, int) and not isinstance(value, bool) and value >= 1:
        return value
    return None


@dataclass
class QueryOptions:
    """Parsed and validated caller options.

    Absent or malformed values are stored as None so that callers can tell
    "not given" from a real value. Page and page size fall back to the
    configured defaults through page_or() / page_size_or().
    """

    filter_id: list[str] | None = None
    filter_dict_id: list[str] | None = None
    sort: str | None = None  # entries: 'dictID' | 'id' | 'str'
    sort_dict_id: list[str] | None = None  # matches: preferred dictionaries
    page: int | None = None
    per_page: int | None = None
    z: Any = None
    get_all_results: bool = False

    @classmethod
    def from_dict(cls, options: Mapping[str, Any] | None) -> "QueryOptions":
        """Build options from the outer contract's options object."""
        options = dict(options or {})
        filt = options.pop("filter", None)
        sort = options.pop("sort", None)

        filter_id = filter_dict_id = None
        if isinstance(filt, Mapping):
            filter_id = _string_list(filt.get("id"))
            filter_dict_id = _string_list(filt.get("dictID"))

        sort_field = sort if sort in ("dictID", "id", "str") else None
        sort_dict_id = _string_list(sort.get("dictID")) if isinstance(sort, Mapping) else None

        return cls(
            filter_id=filter_id,
            filter_dict_id=filter_dict_id,
            sort=sort_field,
            sort_dict_id=sort_dict_id,
            page=_positive_int(options.pop("page", None)),
            per_page=_positive_int(options.pop("perPage", None)),
            z=options.pop("z", None),
            get_all_results=options.pop("getAllResults", False) is True,
        )

    def page_or(self, settings: Settings) -> int:
        return self.page if self.page is not None else settings.default_page

    def page_size_or(self, settings: Settings) -> int:
        return self.per_page if self.per_page is not None else settings.default_page_size

    @property
    def is_first_page(self) -> bool:
        return self.page is None or self.page == 1

    def with_filter_dict_id(self, dict_ids: list[str]) -> "QueryOptions":
        return replace(self, filter_dict_id=dict_ids or None)


def z_prune(records: Iterable[R], z: Any) -> list[R]:
    """Prune the z (extension) property of records.

    `z` absent or True keeps everything; False or an empty list removes z;
    a string or list of strings keeps only those z-properties, dropping z
    entirely when none of them are present.
    """
    records = list(records)
    if z is None or z is True:
        return records
    if isinstance(z, str):
        z = [z]
    keep = list(z) if isinstance(z, (list, tuple)) else []

    pruned: list[R] = []
    for record in records:
        current = getattr(record, "z", None)
        if current is None:
            pruned.append(record)
            continue
        kept = {key: value for key, value in current.items() if key in keep}
        pruned.append(replace(record, z=kept or None))  # type: ignore[type-var]
    return pruned


class DictionaryBackend(ABC):
    """Abstract base class for dictionary query backends."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Return the name of this dictionary backend."""
        ...  # pragma: no cover

    @abstractmethod
    async def get_dict_infos(self, options: Mapping[str, Any] | None = None) -> list[DictInfo]:
        """
        List information about the dictionaries named in ``filter.id``.

        Raises:
            DictionaryError: if the query is unsupported or a backend call fails
        """
        ...  # pragma: no cover

    @abstractmethod
    async def get_entries(self, options: Mapping[str, Any] | None = None) -> list[Entry]:
        """
        Fetch entries by dictionary (``filter.dictID``) and/or identifier (``filter.id``).

        Raises:
            DictionaryError: if the query is unsupported or a backend call fails
        """
        ...  # pragma: no cover

    @abstractmethod
    async def get_entry_matches_for_string(
        self, search: str, options: Mapping[str, Any] | None = None
    ) -> list[Match]:
        """
        Fetch string-match suggestions for ``search``.

        Raises:
            DictionaryError: if the query is unsupported or a backend call fails
        """
        ...  # pragma: no cover


def items(records: Sequence[Record]) -> dict[str, list[dict[str, Any]]]:
    """Wrap records in the contract's ``{"items": [...]}`` result shape."""
    return {"items": [record.to_dict() for record in records]}
