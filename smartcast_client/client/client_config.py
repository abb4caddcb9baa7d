# Copyright (c) 2023 Samuel J. McKelvie
#
# MIT License - See LICENSE file accompanying this package.
#

"""
SmartCast client configuration.

Provides a general config object for a SmartcastClient and its transport.
"""

from __future__ import annotations

import os

from ..internal_types import *
from ..exceptions import SmartcastError
from ..constants import DEFAULT_PORT

class SmartcastClientConfig:
    """SmartCast client configuration."""
    default_host: Optional[str]
    default_port: int
    auth_token: str
    accept_self_signed: bool
    timeout_secs: Optional[float]
    device_name: Optional[str]
    device_id: Optional[str]

    def __init__(
            self,
            default_host: Optional[str]=None,
            auth_token: Optional[str]=None,
            *,
            default_port: Optional[int]=None,
            accept_self_signed: Optional[bool]=None,
            timeout_secs: Optional[float]=None,
            device_name: Optional[str]=None,
            device_id: Optional[str]=None,
            base_config: Optional[SmartcastClientConfig]=None
          ) -> None:
        """Creates a configuration for a SmartCast client.

           Args:
             default_host: The default hostname or IP address of the device.
                   May optionally be prefixed with "https://" or "http://".
                   May be suffixed with ":<port>" to specify a
                   non-default port, which will override the default_port argument.
                   If None, the default host will be taken from the
                     SMARTCAST_HOST environment variable.
             auth_token:
                   The auth token obtained from an earlier pairing. If None, the
                   token will be taken from the SMARTCAST_AUTH_TOKEN
                   environment variable. If an empty string or the
                   environment variable is not found, the client starts
                   unpaired.
             default_port: The default TCP/IP port number to use.
                    If None, the default port will be taken from SMARTCAST_PORT.
                    If that environment variable is not found, the default
                    SmartCast port (9000) will be used.
             accept_self_signed:
                   If True (the default), the device's self-signed TLS
                   certificate is accepted for requests made by this client's
                   transport. Certificate validation for other connections is
                   not affected.
             timeout_secs:
                   Total timeout for each HTTP request, in seconds. If None,
                   the aiohttp default is used.
             device_name:
                   The name this client presents to the device when pairing.
                   If None, a timestamp-based name is generated.
             device_id:
                   The unique id this client presents to the device when pairing.
                   If None, a timestamp-based id is generated.
             base_config:
                     An optional base configuration to use.
        """
        if base_config is None:
            self.init_from_defaults()
        else:
            self.init_from_base_config(base_config)

        if default_host is not None and default_host != '':
            self.default_host = default_host

        if default_port is not None and default_port > 0:
            self.default_port = default_port

        if auth_token is not None:
            self.auth_token = auth_token

        if accept_self_signed is not None:
            self.accept_self_signed = accept_self_signed

        if timeout_secs is not None:
            self.timeout_secs = timeout_secs

        if device_name is not None and device_name != '':
            self.device_name = device_name

        if device_id is not None and device_id != '':
            self.device_id = device_id

    def init_from_defaults(self) -> None:
        """Initializes the configuration from defaults."""
        default_host: Optional[str] = os.environ.get('SMARTCAST_HOST')
        if default_host == '':
            default_host = None
        self.default_host = default_host
        default_port_str = os.environ.get('SMARTCAST_PORT')
        if default_port_str is None or default_port_str == '':
            default_port = DEFAULT_PORT
        else:
            try:
                default_port = int(default_port_str)
            except ValueError as e:
                raise SmartcastError(f"Invalid SMARTCAST_PORT: {default_port_str!r}") from e
        self.default_port = default_port
        auth_token = os.environ.get('SMARTCAST_AUTH_TOKEN')
        if auth_token is None:
            auth_token = ''
        self.auth_token = auth_token
        self.accept_self_signed = True
        self.timeout_secs = None
        self.device_name = None
        self.device_id = None

    def init_from_base_config(self, base_config: SmartcastClientConfig) -> None:
        """Initializes the configuration from a base configuration."""
        self.default_host = base_config.default_host
        self.default_port = base_config.default_port
        self.auth_token = base_config.auth_token
        self.accept_self_signed = base_config.accept_self_signed
        self.timeout_secs = base_config.timeout_secs
        self.device_name = base_config.device_name
        self.device_id = base_config.device_id

    @classmethod
    def from_jsonable(
            cls,
            data: JsonableDict,
            base_config: Optional[SmartcastClientConfig]=None,
          ) -> Self:
        """Creates a configuration from a JSON object (e.g., a parsed config file).

        Recognized keys are "host", "port", "auth_token", "accept_self_signed",
        "timeout_secs", "device_name" and "device_id"; all are optional.
        Missing values are taken from base_config or the environment.
        """
        known = { "host", "port", "auth_token", "accept_self_signed", "timeout_secs", "device_name", "device_id" }
        unknown = sorted(set(data.keys()) - known)
        if len(unknown) > 0:
            raise SmartcastError(f"Unknown SmartCast configuration keys: {', '.join(unknown)}")

        def get_typed(key: str, types: Tuple[type, ...]) -> Any:
            value = data.get(key)
            if value is not None and (not isinstance(value, types) or isinstance(value, bool) and not bool in types):
                raise SmartcastError(f"Invalid value for SmartCast configuration key {key!r}: {value!r}")
            return value

        timeout_secs = get_typed("timeout_secs", (int, float))
        return cls(
            default_host=get_typed("host", (str,)),
            auth_token=get_typed("auth_token", (str,)),
            default_port=get_typed("port", (int,)),
            accept_self_signed=get_typed("accept_self_signed", (bool,)),
            timeout_secs=None if timeout_secs is None else float(timeout_secs),
            device_name=get_typed("device_name", (str,)),
            device_id=get_typed("device_id", (str,)),
            base_config=base_config,
          )

    def to_jsonable(self, include_auth_token: bool=False) -> JsonableDict:
        """Returns a JSON-serializable representation of the configuration.

        The auth token is omitted unless include_auth_token is True.
        """
        result: JsonableDict = {
            "host": self.default_host,
            "port": self.default_port,
            "accept_self_signed": self.accept_self_signed,
            "timeout_secs": self.timeout_secs,
            "device_name": self.device_name,
            "device_id": self.device_id,
          }
        if include_auth_token:
            result["auth_token"] = self.auth_token
        return result

    def __str__(self) -> str:
        return (
            f"SmartcastClientConfig("
            f"default_host={self.default_host}, "
            f"default_port={self.default_port}, "
            f"timeout_secs={self.timeout_secs!r})"
          )

    def __repr__(self) -> str:
        return str(self)
