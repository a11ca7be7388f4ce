"""Dictionary query engine backed by the PubDictionaries REST API."""

from pubdict.services.dictionary.base import (
    DictInfo,
    DictionaryBackend,
    Entry,
    Match,
    MatchType,
    QueryOptions,
    items,
    z_prune,
)
from pubdict.services.dictionary.errors import (
    BackendError,
    DictionaryError,
    NotSupportedError,
    UnknownDictionaryError,
)
from pubdict.services.dictionary.pubdictionaries import PubDictionaries
from pubdict.services.dictionary.transport import HttpTransport

__all__ = [
    "BackendError",
    "DictInfo",
    "DictionaryBackend",
    "DictionaryError",
    "Entry",
    "HttpTransport",
    "Match",
    "MatchType",
    "NotSupportedError",
    "PubDictionaries",
    "QueryOptions",
    "UnknownDictionaryError",
    "items",
    "z_prune",
]
