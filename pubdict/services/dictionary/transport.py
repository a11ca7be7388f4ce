"""HTTP transport for PubDictionaries requests."""

import json
import logging
from typing import Any

import httpx

from pubdict.config import Settings, settings as default_settings
from pubdict.services.dictionary.errors import BackendError

logger = logging.getLogger(__name__)


def error_from_response(response: httpx.Response) -> BackendError:
    """
    Build a structured error from a non-2xx response.

    JSON bodies provide the status and message where present; anything else
    becomes a synthesized {status, error} pair holding the raw body text.
    """
    try:
        body = response.json()
    except ValueError:
        return BackendError(response.status_code, response.text)

    if not isinstance(body, dict):
        return BackendError(response.status_code, json.dumps(body))

    status = body.get("status")
    if not isinstance(status, int) or not 400 <= status < 600:
        status = response.status_code
    message = body.get("message") or body.get("error") or response.reason_phrase
    return BackendError(status, str(message))


class HttpTransport:
    """Perform GET requests and decode JSON bodies."""

    def __init__(
        self,
        settings: Settings | None = None,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self.settings = settings or default_settings
        self._client = client
        self._owns_client = client is None

    @property
    def client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(
                timeout=self.settings.request_timeout, follow_redirects=True
            )
        return self._client

    async def perform_request(self, url: str) -> Any:
        """
        GET a URL and return its decoded JSON body.

        Raises:
            BackendError: on network failure, non-2xx status or invalid JSON
        """
        if self.settings.log_requests:
            logger.debug(f"URL: {url}")

        try:
            response = await self.client.get(url)
        except httpx.TimeoutException as e:
            logger.warning(f"Timeout requesting {url}")
            raise BackendError(504, f"Request timed out: {e}") from e
        except httpx.HTTPError as e:
            logger.warning(f"Request to {url} failed: {e}")
            raise BackendError(503, f"Request failed: {e}") from e

        if not response.is_success:
            raise error_from_response(response)

        try:
            return response.json()
        except ValueError as e:
            raise BackendError(
                502, f"Invalid JSON response (HTTP {response.status_code}): {e}"
            ) from e

    async def close(self) -> None:
        if self._client is not None and self._owns_client:
            await self._client.aclose()
            self._client = None
