"""FastAPI application entry point."""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from pubdict import __version__
from pubdict.config import settings
from pubdict.logging_config import setup_logging
from pubdict.routes import dictionary_router
from pubdict.services.dictionary import DictionaryError, PubDictionaries

setup_logging()
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan handler."""
    logger.info(f"Starting PubDictionaries adapter for {settings.pubdictionaries_base_url}")
    if not hasattr(app.state, "backend"):
        app.state.backend = PubDictionaries(settings)

    yield

    logger.info("Shutting down PubDictionaries adapter...")
    await app.state.backend.close()


app = FastAPI(
    title="pubdict",
    description="VSM dictionary queries over the PubDictionaries REST API",
    version=__version__,
    lifespan=lifespan,
)


@app.exception_handler(DictionaryError)
async def dictionary_error_handler(request: Request, exc: DictionaryError) -> JSONResponse:
    return JSONResponse(status_code=exc.status, content=exc.as_dict())


app.include_router(dictionary_router)
