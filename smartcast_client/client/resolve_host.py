# Copyright (c) 2023 Samuel J. McKelvie
#
# MIT License - See LICENSE file accompanying this package.
#

"""
SmartCast device host resolver.

Provides a method that can resolve host strings and environment variables
into a URL scheme, device hostname and port.
"""

from __future__ import annotations

import os

from ..internal_types import *
from ..exceptions import SmartcastError
from ..constants import DEFAULT_PORT, DEFAULT_SCHEME

SUPPORTED_SCHEMES = ("https", "http")

def resolve_smartcast_host(
        host: Optional[str]=None,
        default_port: Optional[int]=None,
      ) -> Tuple[str, str, int]:
    """Resolves a device host string into a URL scheme, hostname and port.

        Args:
            host: The hostname or IP address of the device.
                    May optionally be prefixed with "https://" (the default)
                    or "http://".
                    May be suffixed with ":<port>" to specify a
                    non-default port, which will override the default_port argument.
                    IPv6 addresses with a port must be enclosed in brackets.
                    If None, the host will be taken from the
                    SMARTCAST_HOST environment variable.
            default_port: The default TCP/IP port number to use. If None, the port
                    will be taken from SMARTCAST_PORT. If that
                    environment variable is not found, the default SmartCast
                    port (9000) will be used.

        Returns:
            A tuple of (scheme: str, hostname: str, port: int).
    """
    if host is None or host == '':
        host = os.environ.get('SMARTCAST_HOST')
        if host is None or host == '':
            raise SmartcastError("No SmartCast device host specified, and SMARTCAST_HOST is not set")

    if default_port is None or default_port <= 0:
        default_port_str = os.environ.get('SMARTCAST_PORT')
        if default_port_str is None or default_port_str == '':
            default_port = DEFAULT_PORT
        else:
            default_port = _parse_port(default_port_str)

    scheme = DEFAULT_SCHEME
    if '://' in host:
        scheme, host = host.split('://', 1)
        scheme = scheme.lower()
        if not scheme in SUPPORTED_SCHEMES:
            raise SmartcastError(f"Unsupported protocol in host specifier: {scheme}://{host}")
    host = host.rstrip('/')

    port: int
    if host.startswith('['):
        # bracketed IPv6 address, with optional port
        end = host.find(']')
        if end < 0:
            raise SmartcastError(f"Invalid IPv6 host specifier: {host}")
        rest = host[end+1:]
        host = host[1:end]
        if rest == '':
            port = default_port
        elif rest.startswith(':'):
            port = _parse_port(rest[1:])
        else:
            raise SmartcastError(f"Invalid IPv6 host specifier: {host}")
    elif host.count(':') == 1:
        host, port_str = host.rsplit(':', 1)
        port = _parse_port(port_str)
    else:
        port = default_port

    if host == '':
        raise SmartcastError("Empty SmartCast device hostname")

    return (scheme, host, port)

def _parse_port(port_str: str) -> int:
    try:
        port = int(port_str)
    except ValueError as e:
        raise SmartcastError(f"Invalid port number: {port_str!r}") from e
    if port <= 0 or port > 65535:
        raise SmartcastError(f"Port number out of range: {port}")
    return port
