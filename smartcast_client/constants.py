# Copyright (c) 2023 Samuel J. McKelvie
#
# MIT License - See LICENSE file accompanying this package.
#

"""Constants used by smartcast_client"""

DEFAULT_PORT = 9000
"""The listen port number used by the device for HTTPS control."""

DEFAULT_SCHEME = "https"
"""The URL scheme used to reach the device. Devices present a self-signed certificate."""

AUTH_HEADER = "AUTH"
"""The name of the HTTP header that carries the auth token. The token is never
   sent as a query parameter."""

DEFAULT_DEVICE_NAME_PREFIX = "python-smartcast-"
"""Prefix of the generated device name and id used for pairing when the caller
   does not provide one. A millisecond timestamp is appended."""

CHALLENGE_TYPE = 1
"""The only pairing challenge type supported by devices (a PIN shown on screen)."""

# Values of STATUS.RESULT in device responses
RESULT_SUCCESS = "SUCCESS"
RESULT_BLOCKED = "BLOCKED"
RESULT_INVALID_PARAMETER = "INVALID_PARAMETER"
RESULT_HASHVAL_ERROR = "HASHVAL_ERROR"
RESULT_REQUIRES_PAIRING = "REQUIRES_PAIRING"
RESULT_PAIRING_DENIED = "PAIRING_DENIED"
RESULT_URI_NOT_FOUND = "URI_NOT_FOUND"

# Values of REQUEST in settings write bodies
REQUEST_MODIFY = "MODIFY"
REQUEST_ACTION = "ACTION"

VOLUME_MIN = 0
VOLUME_MAX = 100
