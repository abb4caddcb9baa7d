# Copyright (c) 2023 Samuel J. McKelvie
#
# MIT License - See LICENSE file accompanying this package.
#

"""
SmartCast HTTP(S) client transport.

Provides an implementation of SmartcastClientTransport over aiohttp.
"""

from __future__ import annotations

import asyncio
import json

import aiohttp

from ..internal_types import *
from ..exceptions import SmartcastError, SmartcastTransportError
from ..constants import AUTH_HEADER, DEFAULT_PORT, DEFAULT_SCHEME
from ..pkg_logging import logger

from .client_transport import SmartcastClientTransport

class HttpSmartcastClientTransport(SmartcastClientTransport):
    """SmartCast HTTP(S) client transport."""

    scheme: str
    host: str
    port: int
    accept_self_signed: bool
    timeout_secs: Optional[float]

    _session: Optional[aiohttp.ClientSession] = None
    _owns_session: bool
    _closed: bool = False

    def __init__(
            self,
            host: str,
            port: int=DEFAULT_PORT,
            *,
            scheme: str=DEFAULT_SCHEME,
            accept_self_signed: bool=True,
            timeout_secs: Optional[float]=None,
            session: Optional[aiohttp.ClientSession]=None,
          ) -> None:
        """Initializes the transport.

        Args:
            host: The resolved hostname or IP address of the device (no scheme or port).
            port: The TCP/IP port of the device.
            scheme: "https" or "http".
            accept_self_signed: If True, TLS certificate validation is disabled for
                requests made by this transport only. The aiohttp session and any
                other connections are not affected.
            timeout_secs: Total timeout for each request, in seconds. If None, the
                aiohttp default is used.
            session: An optional aiohttp ClientSession to use. If provided, it is
                not closed by aclose(). If None, a session is created on first use
                and closed by aclose().
        """
        super().__init__()
        self.scheme = scheme
        self.host = host
        self.port = port
        self.accept_self_signed = accept_self_signed
        self.timeout_secs = timeout_secs
        self._session = session
        self._owns_session = session is None

    @property
    def base_url(self) -> str:
        host = f"[{self.host}]" if ':' in self.host else self.host
        return f"{self.scheme}://{host}:{self.port}"

    def _get_session(self) -> aiohttp.ClientSession:
        if self._closed:
            raise SmartcastError(f"{self}: Transport is closed")
        if self._session is None:
            self._session = aiohttp.ClientSession()
        return self._session

    def _ssl_param(self) -> Optional[bool]:
        # scoped to this transport's requests; None keeps aiohttp's default verification
        if self.scheme == "https" and self.accept_self_signed:
            return False
        return None

    async def request(
            self,
            method: str,
            path: str,
            body: Optional[JsonableDict]=None,
            auth_token: Optional[str]=None,
          ) -> Jsonable:
        method = method.upper()
        url = self.base_url + path
        headers: Dict[str, str] = {}
        if auth_token is not None and auth_token != '':
            headers[AUTH_HEADER] = auth_token
        kwargs: Dict[str, Any] = {}
        if body is not None:
            kwargs['json'] = body
        if self.timeout_secs is not None:
            kwargs['timeout'] = aiohttp.ClientTimeout(total=self.timeout_secs)
        ssl_param = self._ssl_param()
        if ssl_param is not None:
            kwargs['ssl'] = ssl_param

        session = self._get_session()
        logger.debug(f"{self}: {method} {path}")
        try:
            async with session.request(method, url, headers=headers, **kwargs) as resp:
                raw_body = await resp.read()
                status = resp.status
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            raise SmartcastTransportError(f"{method} {url} failed: {e!r}") from e

        logger.debug(f"{self}: {method} {path} -> HTTP {status}")
        if status < 200 or status >= 300:
            raise SmartcastTransportError(
                f"{method} {url} returned HTTP status {status}",
                status=status,
                body=raw_body.decode("utf-8", errors="replace"),
              )
        try:
            # UnicodeDecodeError is a ValueError
            result: Jsonable = json.loads(raw_body.decode("utf-8"))
        except ValueError as e:
            raise SmartcastTransportError(
                f"{method} {url} returned a body that is not JSON",
                status=status,
                body=raw_body.decode("utf-8", errors="replace"),
              ) from e
        return result

    async def aclose(self) -> None:
        if self._closed:
            return
        self._closed = True
        session = self._session
        self._session = None
        if session is not None and self._owns_session:
            logger.debug(f"{self}: Closing aiohttp session")
            await session.close()

    def __str__(self) -> str:
        return f"HttpSmartcastClientTransport({self.base_url})"

    def __repr__(self) -> str:
        return str(self)
