# Copyright (c) 2023 Samuel J. McKelvie
#
# MIT License - See LICENSE file accompanying this package.
#

"""
SmartCast pairing handshake.

Pairing is a two-step exchange:

    Client: PUT /pairing/start {DEVICE_NAME, DEVICE_ID}
    Device: {STATUS: SUCCESS, ITEM: {PAIRING_REQ_TOKEN}}   (and shows a PIN on screen)
    Client: PUT /pairing/pair {DEVICE_ID, CHALLENGE_TYPE: 1, RESPONSE_VALUE: <pin>, PAIRING_REQ_TOKEN}
    Device: {STATUS: SUCCESS, ITEM: {AUTH_TOKEN}}

The resulting auth token is sent in the AUTH header of all later requests.
Persisting it between sessions is the caller's job; see use_auth_token().

Pairing calls on one client must be serialized by the caller; concurrent
initiate()/pair() calls are not guarded.
"""

from __future__ import annotations

import time
from enum import Enum

from ..internal_types import *
from ..exceptions import (
    SmartcastResultError,
    SmartcastErrorKind,
    SmartcastNotImplementedError,
  )
from ..constants import DEFAULT_DEVICE_NAME_PREFIX, RESULT_BLOCKED
from ..pkg_logging import logger
from ..protocol import (
    SmartcastResponse,
    paths,
    pairing_start_body,
    pairing_pair_body,
  )

if TYPE_CHECKING:
    from .client_impl import SmartcastClient

class PairingState(Enum):
    UNPAIRED = "UNPAIRED"
    AWAITING_PIN = "AWAITING_PIN"
    PAIRED = "PAIRED"

class SmartcastPairing:
    """Pairing handshake of a SmartcastClient."""

    client: SmartcastClient
    device_name: Optional[str] = None
    device_id: Optional[str] = None

    _pairing_req_token: Jsonable = None

    def __init__(self, client: SmartcastClient):
        self.client = client

    @property
    def state(self) -> PairingState:
        if self._pairing_req_token is not None:
            return PairingState.AWAITING_PIN
        if self.client.auth_token != '':
            return PairingState.PAIRED
        return PairingState.UNPAIRED

    async def initiate(
            self,
            device_name: Optional[str]=None,
            device_id: Optional[str]=None,
          ) -> SmartcastResponse:
        """Starts pairing. On success the device displays a PIN, which must be
           passed to pair().

        If device_name or device_id are None, the configured values are used;
        if those are not set either, timestamp-based values are generated.

        Raises SmartcastResultError with kind BLOCKED if the device is already
        displaying a PIN for an earlier pairing request, with kind VALIDATION if
        this client is already awaiting a PIN (call reset() to abandon it), and
        with kind GENERIC if the device otherwise reports failure.
        """
        if self.state == PairingState.AWAITING_PIN:
            raise SmartcastResultError(
                "Pairing is already awaiting a PIN; call pair() or reset() first",
                kind=SmartcastErrorKind.VALIDATION)

        stamp = f"{DEFAULT_DEVICE_NAME_PREFIX}{int(time.time() * 1000)}"
        if device_name is None:
            device_name = self.client.config.device_name or stamp
        if device_id is None:
            device_id = self.client.config.device_id or stamp

        logger.debug(f"{self.client}: Initiating pairing as device {device_name!r} ({device_id!r})")
        response = await self.client.transact(
            "PUT",
            paths.PAIRING_START,
            pairing_start_body(device_name, device_id),
            authorized=False,
          )
        if not response.is_success:
            if response.result == RESULT_BLOCKED:
                raise SmartcastResultError(
                    "Failed to initiate the pairing process because a pairing request has already been initiated. "
                    "Wait for the PIN to clear from the screen before initiating the pairing process again.",
                    kind=SmartcastErrorKind.BLOCKED,
                    payload=response.raw)
            response.require_success(f"Failed to initiate pairing: result {response.result!r}")

        pairing_req_token = response.require_item_field('PAIRING_REQ_TOKEN')
        self.device_name = device_name
        self.device_id = device_id
        self._pairing_req_token = pairing_req_token
        logger.debug(f"{self.client}: Pairing initiated; awaiting PIN")
        return response

    async def pair(self, pin: str) -> SmartcastResponse:
        """Completes pairing with the PIN displayed on the device.

        On success the returned auth token becomes the client's auth token.
        On failure, SmartcastResultError is raised and the client remains
        awaiting a PIN, so pair() may be retried with a corrected PIN.

        Raises SmartcastResultError with kind VALIDATION, without sending
        anything, if initiate() has not succeeded first.
        """
        if self.state != PairingState.AWAITING_PIN:
            raise SmartcastResultError(
                "No pairing is in progress; call initiate() first",
                kind=SmartcastErrorKind.VALIDATION)
        assert self.device_id is not None

        response = await self.client.transact(
            "PUT",
            paths.PAIRING_PAIR,
            pairing_pair_body(self.device_id, str(pin), self._pairing_req_token),
            authorized=False,
          )
        response.require_success(f"Pairing failed: result {response.result!r}")
        auth_token = response.require_item_str('AUTH_TOKEN')
        self._pairing_req_token = None
        self.client.auth_token = auth_token
        logger.debug(f"{self.client}: Pairing complete")
        return response

    def use_auth_token(self, auth_token: str) -> None:
        """Uses an auth token obtained previously (e.g., persisted from an
           earlier session), bypassing the handshake.

        Any pending pairing request is abandoned.
        """
        self._pairing_req_token = None
        self.client.auth_token = auth_token

    def reset(self) -> None:
        """Abandons a pending pairing request locally, so that initiate() may be
           called again. The stored auth token is not affected."""
        if self._pairing_req_token is not None:
            logger.debug(f"{self.client}: Abandoning pending pairing request")
        self._pairing_req_token = None

    async def cancel(self, ip: Optional[str]=None) -> SmartcastResponse:
        """Cancels a pairing request with a device. Not implemented."""
        raise SmartcastNotImplementedError("Cancelling a pairing request is not implemented")

    def __str__(self) -> str:
        return f"SmartcastPairing(state={self.state.value})"

    def __repr__(self) -> str:
        return str(self)
