# Copyright (c) 2023 Samuel J. McKelvie
#
# MIT License - See LICENSE file accompanying this package.
#

"""Package smartcast_client provides an asyncio API for controlling
SmartCast TVs and displays via their local HTTP/JSON control API.
"""

from .version import __version__

from .pkg_logging import logger

from .internal_types import Jsonable, JsonableDict

from .exceptions import (
    SmartcastError,
    SmartcastTransportError,
    SmartcastResultError,
    SmartcastErrorKind,
    SmartcastNotImplementedError,
  )

from .constants import DEFAULT_PORT, DEFAULT_SCHEME, AUTH_HEADER

from .client import (
    SmartcastClient,
    SmartcastClientConfig,
    SmartcastClientTransport,
    HttpSmartcastClientTransport,
    SmartcastPairing,
    PairingState,
    resolve_smartcast_host,
    smartcast_connect,
  )

from .protocol import (
    KeyAction,
    KeyCommand,
    KEY_COMMANDS,
    SmartcastResponse,
    SettingsItem,
    InputItem,
    find_input_by_name,
  )

from .discovery import DiscoveredDevice, SmartcastDiscoverer
