"""aiohttp transport for a catalog agent's HTTP API."""

from __future__ import annotations

from types import TracebackType
from typing import Any

import aiohttp
from loguru import logger
from yarl import URL

from consulcat.core.config import ConsulSettings
from consulcat.core.errors import (
    BadStatus,
    NotFoundError,
    TransportConnectionError,
    TransportError,
    TransportTimeoutError,
)
from consulcat.core.parameters import BlockFor, Consistency
from consulcat.datastructures.type_aliases import DurationSeconds, UrlPath

from .defaults import BLOCKING_JITTER_FRACTION, DEFAULT_USER_AGENT
from .query import encode_query, make_url


class Consul:
    """Connection to one agent.

    The client session is created on first use and closed by ``close`` unless
    it was passed in by the caller. Use as ``async with Consul(...) as consul``.
    """

    def __init__(
        self,
        settings: ConsulSettings | None = None,
        *,
        session: aiohttp.ClientSession | None = None,
    ) -> None:
        self.settings = settings or ConsulSettings()
        self._session = session
        self._owns_session = session is None

    @property
    def default_consistency(self) -> Consistency:
        return self.settings.consistency

    def _request_timeout(self, params: dict[str, Any]) -> DurationSeconds:
        timeout = float(self.settings.timeout)
        block = params.get("block_for")
        if isinstance(block, BlockFor):
            timeout += block.wait * (1 + BLOCKING_JITTER_FRACTION)
        return timeout

    def _get_session(self) -> aiohttp.ClientSession:
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(
                headers={"User-Agent": DEFAULT_USER_AGENT}
            )
            self._owns_session = True
        return self._session

    async def get(self, path: UrlPath, **params: Any) -> bytes:
        """Issue one GET request and return the raw body.

        Args:
            path: Request path, already percent-encoded.
            **params: Query parameters, rendered by ``encode_query``.

        Returns:
            The response body of a 2xx response.

        Raises:
            NotFoundError: On HTTP 404.
            BadStatus: On any other non-2xx status.
            TransportTimeoutError: If the request does not complete in time.
            TransportConnectionError: If the agent cannot be reached.
        """
        query = encode_query(params, datacenter=self.settings.datacenter)
        url = make_url(self.settings.base_url, path, query)
        timeout = aiohttp.ClientTimeout(total=self._request_timeout(params))
        logger.debug("GET {}", url)

        session = self._get_session()
        try:
            async with session.get(
                URL(url, encoded=True), timeout=timeout
            ) as response:
                body = await response.read()
                status = response.status
        except TimeoutError as exc:
            logger.warning("GET {} timed out after {}s", url, timeout.total)
            raise TransportTimeoutError(f"GET {path} timed out") from exc
        except aiohttp.ClientConnectionError as exc:
            logger.warning("GET {} failed: {}", url, exc)
            raise TransportConnectionError(f"GET {path} failed: {exc}") from exc
        except aiohttp.ClientError as exc:
            logger.warning("GET {} failed: {}", url, exc)
            raise TransportError(f"GET {path} failed: {exc}") from exc

        if 200 <= status < 300:
            return body

        message = body.decode("utf-8", errors="replace").strip()
        logger.warning("GET {} returned HTTP {}", url, status)
        if status == 404:
            raise NotFoundError(status, message, path)
        raise BadStatus(status, message, path)

    async def close(self) -> None:
        if self._session is not None and self._owns_session:
            await self._session.close()
        self._session = None

    async def __aenter__(self) -> Consul:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        await self.close()
