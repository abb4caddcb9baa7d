# Copyright (c) 2023 Samuel J. McKelvie
#
# MIT License - See LICENSE file accompanying this package.
#

"""
SmartCast device discovery interface.

Discovery itself (e.g., SSDP on the local network) is provided by subclasses
of SmartcastDiscoverer; this module only defines the device descriptor and the
callback-driven search contract.
"""

from __future__ import annotations

import asyncio
from abc import ABC, abstractmethod

from .internal_types import *
from .pkg_logging import logger

class DiscoveredDevice:
    """A device found by discovery."""
    ip: str
    name: Optional[str]
    manufacturer: Optional[str]
    model: Optional[str]

    def __init__(
            self,
            ip: str,
            name: Optional[str]=None,
            manufacturer: Optional[str]=None,
            model: Optional[str]=None,
          ):
        self.ip = ip
        self.name = name
        self.manufacturer = manufacturer
        self.model = model

    def to_jsonable(self) -> JsonableDict:
        return {
            "ip": self.ip,
            "name": self.name,
            "manufacturer": self.manufacturer,
            "model": self.model,
          }

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, DiscoveredDevice):
            return NotImplemented
        return self.to_jsonable() == other.to_jsonable()

    def __hash__(self) -> int:
        return hash(self.ip)

    def __str__(self) -> str:
        return f"DiscoveredDevice(ip={self.ip}, name={self.name!r}, model={self.model!r})"

    def __repr__(self) -> str:
        return str(self)

class SmartcastDiscoverer(ABC):
    """Abstract base class for SmartCast device discovery."""

    @abstractmethod
    def search(self) -> AsyncIterator[DiscoveredDevice]:
        """Returns an async iterator that yields devices as they are found.

        The iterator may run indefinitely; discover() bounds it with a timeout.

        Must be implemented by subclasses.
        """
        raise NotImplementedError()

    async def discover(
            self,
            on_found: Callable[[DiscoveredDevice], None],
            on_error: Optional[Callable[[BaseException], None]]=None,
            timeout_secs: Optional[float]=None,
          ) -> None:
        """Runs a search, calling on_found once for each distinct device.

        If timeout_secs is not None, the search stops silently after that many
        seconds. If the search raises and on_error is provided, on_error is
        called with the exception; otherwise the exception propagates.
        """
        seen: Set[str] = set()

        async def run() -> None:
            async for device in self.search():
                if device.ip in seen:
                    continue
                seen.add(device.ip)
                logger.debug(f"{self}: Found {device}")
                on_found(device)

        try:
            if timeout_secs is None:
                await run()
            else:
                try:
                    await asyncio.wait_for(run(), timeout_secs)
                except asyncio.TimeoutError:
                    logger.debug(f"{self}: Search ended after {timeout_secs} seconds")
        except Exception as e:
            if on_error is None:
                raise
            on_error(e)
