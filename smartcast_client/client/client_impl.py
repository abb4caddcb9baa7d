# Copyright (c) 2023 Samuel J. McKelvie
#
# MIT License - See LICENSE file accompanying this package.
#

"""
SmartCast device client.

A SmartcastClient is a session with one device: it owns the transport (and
thereby the endpoint) and the auth token, and exposes the method groups
power, pairing, input, control and settings.
"""

from __future__ import annotations

from ..internal_types import *
from ..constants import REQUEST_MODIFY
from ..pkg_logging import logger
from ..protocol import (
    KeyCommand,
    SmartcastResponse,
    paths,
    settings_write_body,
  )

from .client_transport import SmartcastClientTransport
from .http_client_transport import HttpSmartcastClientTransport
from .client_config import SmartcastClientConfig
from .resolve_host import resolve_smartcast_host
from .pairing import SmartcastPairing
from .method_groups import (
    SmartcastPower,
    SmartcastInput,
    SmartcastControl,
    SmartcastSettings,
  )

class SmartcastClient:
    """SmartCast device client."""

    transport: SmartcastClientTransport
    config: SmartcastClientConfig
    auth_token: str
    """The auth token sent in the AUTH header. Empty until acquired by pairing
       or supplied by the caller."""

    power: SmartcastPower
    pairing: SmartcastPairing
    input: SmartcastInput
    control: SmartcastControl
    settings: SmartcastSettings

    def __init__(
            self,
            transport: SmartcastClientTransport,
            auth_token: Optional[str]=None,
            config: Optional[SmartcastClientConfig]=None,
          ):
        if config is None:
            config = SmartcastClientConfig()
        if auth_token is None:
            auth_token = config.auth_token
        self.transport = transport
        self.config = config
        self.auth_token = auth_token
        self.power = SmartcastPower(self)
        self.pairing = SmartcastPairing(self)
        self.input = SmartcastInput(self)
        self.control = SmartcastControl(self)
        self.settings = SmartcastSettings(self)

    @property
    def base_url(self) -> str:
        return self.transport.base_url

    async def transact(
            self,
            method: str,
            path: str,
            body: Optional[JsonableDict]=None,
            authorized: bool=True,
          ) -> SmartcastResponse:
        """Sends a request and decodes the response.

        If authorized is True, the current auth token (if any) is sent in the
        AUTH header.

        The response STATUS is not interpreted; use is_success or
        require_success() on the result.
        """
        auth_token = self.auth_token if authorized else None
        raw = await self.transport.request(method, path, body=body, auth_token=auth_token)
        response = SmartcastResponse(raw)
        logger.debug(f"{self}: {method} {path} result={response.result!r}")
        return response

    async def send_key_command(self, command: KeyCommand) -> SmartcastResponse:
        """Sends a single key command; the response is passed through uninterpreted."""
        return await self.transact("PUT", paths.KEY_COMMAND, command.to_jsonable())

    async def modify_setting(
            self,
            path: str,
            value: Jsonable=None,
            request: str=REQUEST_MODIFY,
          ) -> SmartcastResponse:
        """Reads the settings item at path, then writes value back with the
           item's HASHVAL.

        Raises SmartcastResultError if the read does not succeed or contains
        no settings item. The write response is returned uninterpreted.
        """
        current = await self.transact("GET", path)
        current.require_success(f"Failed to read setting {path}: result {current.result!r}")
        item = current.first_setting()
        return await self.transact("PUT", path, settings_write_body(item.hashval, value, request))

    async def __aenter__(self) -> SmartcastClient:
        logger.debug(f"{self}: Entering async context manager")
        return self

    async def __aexit__(
            self,
            exc_type: Optional[Type[BaseException]],
            exc_val: Optional[BaseException],
            exc_tb: Optional[TracebackType],
          ) -> None:
        logger.debug(f"{self}: Exiting async context manager, exc={exc_val}")
        await self.aclose()

    @classmethod
    def create(
            cls,
            host: Optional[str]=None,
            auth_token: Optional[str]=None,
            config: Optional[SmartcastClientConfig]=None,
          ) -> Self:
        """Creates a client with an HTTP transport from a host string and/or config.

        No request is sent; the device is not contacted until the first call.
        """
        config = SmartcastClientConfig(
            default_host=host,
            auth_token=auth_token,
            base_config=config,
          )
        scheme, resolved_host, port = resolve_smartcast_host(config.default_host, config.default_port)
        transport = HttpSmartcastClientTransport(
            resolved_host,
            port,
            scheme=scheme,
            accept_self_signed=config.accept_self_signed,
            timeout_secs=config.timeout_secs,
          )
        return cls(transport, config=config)

    def __str__(self) -> str:
        return f"SmartcastClient(transport={self.transport})"

    def __repr__(self) -> str:
        return str(self)

    async def aclose(self) -> None:
        await self.transport.aclose()
