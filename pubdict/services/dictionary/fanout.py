"""Concurrent fan-out of backend calls with first-error-wins reporting."""

import asyncio
import logging
from collections.abc import Awaitable, Callable, Sequence
from typing import Any, Generic, TypeVar

from pubdict.services.dictionary.errors import BackendError, UnknownDictionaryError
from pubdict.services.dictionary.urls import BackendTarget

logger = logging.getLogger(__name__)

T = TypeVar("T")

Fetch = Callable[[str], Awaitable[Any]]


class FanOut(Generic[T]):
    """
    Issue one call per target and join them.

    All calls run to completion; none is cancelled when a sibling fails.
    The first failure to complete is raised once every call has finished,
    and the results of the other calls are dropped. A backend report of an
    unknown dictionary either leaves that target's result empty or becomes
    an UnknownDictionaryError, depending on ``unknown_dictionary_is_empty``;
    callers tolerate it whenever the dictionary is not the only thing asked for.
    """

    def __init__(
        self,
        fetch: Fetch,
        map_response: Callable[[BackendTarget, Any], list[T]],
        unknown_dictionary_is_empty: bool = False,
    ) -> None:
        self.fetch = fetch
        self.map_response = map_response
        self.unknown_dictionary_is_empty = unknown_dictionary_is_empty

    async def _call(self, target: BackendTarget) -> list[T]:
        body = await self.fetch(target.url)
        try:
            return self.map_response(target, body)
        except (KeyError, TypeError, AttributeError) as e:
            raise BackendError(502, f"Unexpected response from {target.url}: {e!r}") from e

    async def _settle(
        self, index: int, target: BackendTarget
    ) -> tuple[int, list[T] | None, Exception | None]:
        try:
            return index, await self._call(target), None
        except Exception as e:
            return index, None, e

    def _resolve_error(self, target: BackendTarget, error: Exception) -> Exception | None:
        """Return the error to report for a failed call, or None to treat it as empty."""
        if isinstance(error, BackendError) and error.is_unknown_dictionary:
            if self.unknown_dictionary_is_empty:
                logger.info(f"Unknown dictionary for {target.url}, no results")
                return None
            return UnknownDictionaryError(error.error)
        return error

    async def run(self, targets: Sequence[BackendTarget]) -> list[list[T]]:
        """
        Run all targets concurrently.

        Returns:
            One record list per target, in target order

        Raises:
            DictionaryError: the first failure that completed
        """
        partials: list[list[T]] = [[] for _ in targets]
        first_error: Exception | None = None

        for settled in asyncio.as_completed(
            [self._settle(i, target) for i, target in enumerate(targets)]
        ):
            index, records, error = await settled
            if error is None:
                if first_error is None and records is not None:
                    partials[index] = records
                continue

            error = self._resolve_error(targets[index], error)
            if error is None:
                continue
            if first_error is None:
                logger.warning(f"Backend call failed for {targets[index].url}: {error}")
                first_error = error
            else:
                logger.debug(f"Dropping later failure for {targets[index].url}: {error}")

        if first_error is not None:
            raise first_error
        return partials

