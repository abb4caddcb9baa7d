# Copyright (c) 2023 Samuel J. McKelvie
#
# MIT License - See LICENSE file accompanying this package.
#

"""
Request bodies for the SmartCast control API.
"""

from __future__ import annotations

from ..internal_types import *
from ..constants import CHALLENGE_TYPE, REQUEST_MODIFY

def pairing_start_body(device_name: str, device_id: str) -> JsonableDict:
    return {
        "DEVICE_NAME": device_name,
        "DEVICE_ID": device_id,
      }

def pairing_pair_body(device_id: str, pin: str, pairing_req_token: Jsonable) -> JsonableDict:
    # PAIRING_REQ_TOKEN is echoed back exactly as the device issued it
    return {
        "DEVICE_ID": device_id,
        "CHALLENGE_TYPE": CHALLENGE_TYPE,
        "RESPONSE_VALUE": pin,
        "PAIRING_REQ_TOKEN": pairing_req_token,
      }

def settings_write_body(
        hashval: int,
        value: Jsonable=None,
        request: str=REQUEST_MODIFY,
      ) -> JsonableDict:
    """Returns the body of a settings MODIFY (or ACTION) request.

    VALUE is omitted when value is None.
    """
    result: JsonableDict = {
        "REQUEST": request,
        "HASHVAL": hashval,
      }
    if value is not None:
        result["VALUE"] = value
    return result
