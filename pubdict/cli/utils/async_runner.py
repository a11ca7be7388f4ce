"""Async runner utilities for CLI commands."""

import asyncio
from collections.abc import Awaitable, Callable
from typing import TypeVar

from pubdict.config import settings
from pubdict.services.dictionary import PubDictionaries

T = TypeVar("T")


def run_with_backend(query: Callable[[PubDictionaries], Awaitable[T]]) -> T:
    """Run a query against a fresh backend from synchronous CLI code, closing it afterwards."""

    async def _run() -> T:
        backend = PubDictionaries(settings)
        try:
            return await query(backend)
        finally:
            await backend.close()

    return asyncio.run(_run())
