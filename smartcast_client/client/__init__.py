# Copyright (c) 2023 Samuel J. McKelvie
#
# MIT License - See LICENSE file accompanying this package.
#

"""
SmartCast device client.
"""

from .resolve_host import resolve_smartcast_host
from .client_config import SmartcastClientConfig
from .client_transport import SmartcastClientTransport
from .http_client_transport import HttpSmartcastClientTransport
from .pairing import SmartcastPairing, PairingState
from .method_groups import (
    SmartcastPower,
    SmartcastInput,
    SmartcastControl,
    SmartcastSettings,
  )
from .client_impl import SmartcastClient
from .simple import smartcast_connect
