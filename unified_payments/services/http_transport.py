"""
HTTP Transport Layer
Issues exactly one HTTP request per call with a bounded per-attempt timeout.

Transports never interpret status codes: any received response is returned
as a RawResponse. Failures that produced no response are translated into
TransportTimeoutError / TransportConnectionError so the retry policy can
recognise them without knowing which HTTP library is underneath.
"""

import asyncio
import json
import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Mapping, Optional, Tuple

import aiohttp
import requests

from unified_payments.exceptions import TransportConnectionError, TransportTimeoutError
from unified_payments.models import HttpMethod, RawResponse
from unified_payments.utils.canonical_encoding import flatten_params, format_scalar

logger = logging.getLogger(__name__)


def encode_query(params: Optional[Mapping[str, Any]]) -> List[Tuple[str, str]]:
    """Flatten params into (key, value) string pairs for a query string"""
    return [(key, format_scalar(value)) for key, value in flatten_params(params or {}).items()]


def decode_body(raw_body: bytes, charset: Optional[str] = None) -> str:
    """Decode a received body; undecodable bytes never hide the status code"""
    try:
        return raw_body.decode(charset or "utf-8", errors="replace")
    except LookupError:
        return raw_body.decode("utf-8", errors="replace")


def encode_json_body(params: Optional[Mapping[str, Any]]) -> Optional[str]:
    if not params:
        return None
    # Decimal amounts are sent as strings
    return json.dumps(dict(params), default=str)


class HttpTransport(ABC):
    """One request in, one RawResponse out"""

    @abstractmethod
    async def send(
        self,
        method: HttpMethod,
        url: str,
        headers: Mapping[str, str],
        params: Optional[Mapping[str, Any]] = None,
        timeout: float = 30,
    ) -> RawResponse:
        pass

    async def close(self) -> None:
        pass


class AiohttpTransport(HttpTransport):
    """Non-blocking transport backed by a pooled aiohttp session"""

    def __init__(
        self,
        max_connections: int = 100,
        max_connections_per_host: int = 30,
        session: Optional[aiohttp.ClientSession] = None,
    ):
        self.max_connections = max_connections
        self.max_connections_per_host = max_connections_per_host
        self._session = session
        self._owns_session = session is None

    def _get_session(self) -> aiohttp.ClientSession:
        if self._session is None or self._session.closed:
            connector = aiohttp.TCPConnector(
                limit=self.max_connections,
                limit_per_host=self.max_connections_per_host,
                ttl_dns_cache=300,
                enable_cleanup_closed=True,
            )
            self._session = aiohttp.ClientSession(connector=connector)
            self._owns_session = True
            logger.debug("🔌 Created aiohttp session for payment gateway transport")
        return self._session

    async def send(
        self,
        method: HttpMethod,
        url: str,
        headers: Mapping[str, str],
        params: Optional[Mapping[str, Any]] = None,
        timeout: float = 30,
    ) -> RawResponse:
        session = self._get_session()
        request_kwargs: Dict[str, Any] = {
            "headers": dict(headers),
            "timeout": aiohttp.ClientTimeout(total=timeout),
        }
        if method.sends_query:
            request_kwargs["params"] = encode_query(params)
        else:
            request_kwargs["data"] = encode_json_body(params)

        try:
            async with session.request(method.value, url, **request_kwargs) as response:
                raw_body = await response.read()
                return RawResponse(
                    status=response.status,
                    body=decode_body(raw_body, response.charset),
                    headers=dict(response.headers),
                )
        # ServerTimeoutError is both a timeout and a connection error; timeout wins
        except asyncio.TimeoutError as e:
            raise TransportTimeoutError(f"{method.value} {url} timed out after {timeout}s", e) from e
        except aiohttp.ClientConnectionError as e:
            raise TransportConnectionError(f"{method.value} {url}: {e}", e) from e

    async def close(self) -> None:
        if self._session is not None and self._owns_session and not self._session.closed:
            await self._session.close()
        self._session = None


class RequestsTransport(HttpTransport):
    """
    Blocking transport backed by requests

    The blocking call runs in a worker thread, so callers see the same
    coroutine interface as AiohttpTransport. A cancelled call stops waiting
    immediately; the worker thread finishes its request in the background.
    """

    def __init__(self, session: Optional[requests.Session] = None):
        self._session = session or requests.Session()

    def _send_blocking(
        self,
        method: HttpMethod,
        url: str,
        headers: Mapping[str, str],
        params: Optional[Mapping[str, Any]],
        timeout: float,
    ) -> RawResponse:
        request_kwargs: Dict[str, Any] = {"headers": dict(headers), "timeout": timeout}
        if method.sends_query:
            request_kwargs["params"] = encode_query(params)
        else:
            request_kwargs["data"] = encode_json_body(params)

        try:
            response = self._session.request(method.value, url, **request_kwargs)
        except requests.Timeout as e:
            raise TransportTimeoutError(f"{method.value} {url} timed out after {timeout}s", e) from e
        except requests.ConnectionError as e:
            raise TransportConnectionError(f"{method.value} {url}: {e}", e) from e

        return RawResponse(
            status=response.status_code,
            body=decode_body(response.content, response.encoding),
            headers=dict(response.headers),
        )

    async def send(
        self,
        method: HttpMethod,
        url: str,
        headers: Mapping[str, str],
        params: Optional[Mapping[str, Any]] = None,
        timeout: float = 30,
    ) -> RawResponse:
        return await asyncio.to_thread(self._send_blocking, method, url, headers, params, timeout)

    async def close(self) -> None:
        self._session.close()
