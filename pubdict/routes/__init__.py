"""Route handlers for the PubDictionaries adapter."""

from pubdict.routes.dictionary import router as dictionary_router

__all__ = [
    "dictionary_router",
]
