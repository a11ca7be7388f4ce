"""Structured errors reported by dictionary operations."""

from typing import Any

UNKNOWN_DICTIONARY_MARKER = "Unknown dictionary"


class DictionaryError(Exception):
    """Base error carrying an HTTP-like status and a message."""

    def __init__(self, status: int, error: str) -> None:
        super().__init__(error)
        self.status = status
        self.error = error

    def as_dict(self) -> dict[str, Any]:
        return {"status": self.status, "error": self.error}

    def __repr__(self) -> str:
        return f"{type(self).__name__}(status={self.status}, error={self.error!r})"


class NotSupportedError(DictionaryError):
    """The query cannot be expressed against the backend."""

    def __init__(self, error: str = "Not supported") -> None:
        super().__init__(404, error)


class UnknownDictionaryError(DictionaryError):
    """The backend does not know one of the requested dictionaries."""

    def __init__(self, error: str) -> None:
        super().__init__(404, error)


class BackendError(DictionaryError):
    """Transport, status or parse failure of a backend call."""

    @property
    def is_unknown_dictionary(self) -> bool:
        return UNKNOWN_DICTIONARY_MARKER in self.error
