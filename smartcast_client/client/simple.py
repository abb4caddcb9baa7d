# Copyright (c) 2023 Samuel J. McKelvie
#
# MIT License - See LICENSE file accompanying this package.
#

"""
SmartCast simple client connection API.
"""

from __future__ import annotations

from ..internal_types import *
from .client_config import SmartcastClientConfig
from .client_impl import SmartcastClient

async def smartcast_connect(
        host: Optional[str]=None,
        auth_token: Optional[str]=None,
        config: Optional[SmartcastClientConfig]=None,
        check_power: bool=False,
      ) -> SmartcastClient:
    """Create a SmartCast client from a configuration.

    Args:
        host: The hostname or IP address of the device.
                May optionally be prefixed with "https://" or "http://".
                May be suffixed with ":<port>" to specify a
                non-default port.
                If None, the host will be taken from the config, or from
                the SMARTCAST_HOST environment variable.
        auth_token:
                The auth token from an earlier pairing. If None, the token
                will be taken from the config.
        config: A SmartcastClientConfig object that specifies
                the default host, port, auth token, etc. to use.
                If None, a default config will be created.
        check_power:
                If True, the device's power mode is queried once (this
                request needs no auth token) so that an unreachable device
                is reported here rather than on first use.
    """
    client = SmartcastClient.create(host=host, auth_token=auth_token, config=config)
    if check_power:
        try:
            await client.power.current_mode()
        except BaseException:
            await client.aclose()
            raise
    return client
