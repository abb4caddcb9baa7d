# Copyright (c) 2023 Samuel J. McKelvie
#
# MIT License - See LICENSE file accompanying this package.
#

"""
SmartCast client abstract transport interface.

Provides a low-level abstract interface for sending a JSON request to a
SmartCast device and receiving the decoded JSON response. Does not provide
pairing, interpretation of the response STATUS, or any higher-level
abstractions such as key commands or settings.

This abstraction allows for the implementation of proxies and test doubles.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from ..internal_types import *

class SmartcastClientTransport(ABC):
    @property
    @abstractmethod
    def base_url(self) -> str:
        """The base URL of the device, e.g., "https://192.168.1.20:9000".

        Must be implemented by subclasses.
        """
        raise NotImplementedError()

    @abstractmethod
    async def request(
            self,
            method: str,
            path: str,
            body: Optional[JsonableDict]=None,
            auth_token: Optional[str]=None,
          ) -> Jsonable:
        """Sends a single request and returns the decoded JSON response body.

        method is "GET" or "PUT". path is relative to base_url. If auth_token
        is a nonempty string, it is sent in the AUTH header.

        Raises SmartcastTransportError if the request could not be completed,
        the device returned a non-2xx status, or the response body is not JSON.
        Never retries.

        Must be implemented by subclasses.
        """
        raise NotImplementedError()

    async def aclose(self) -> None:
        """Releases any resources held by the transport.

        Has no effect if the transport is already closed.

        May be overridden by subclasses. The default implementation does nothing.
        """
        pass

    async def __aenter__(self) -> SmartcastClientTransport:
        """Enters a context that will close the transport on exit."""
        return self

    async def __aexit__(
            self,
            exc_type: Optional[Type[BaseException]],
            exc: Optional[BaseException],
            tb: Optional[TracebackType],
          ) -> None:
        await self.aclose()
