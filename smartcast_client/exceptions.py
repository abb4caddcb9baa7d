#
# Copyright (c) 2023 Samuel J. McKelvie
#
# MIT License - See LICENSE file accompanying this package.
#

"""Exceptions defined by this package"""

from __future__ import annotations

from enum import Enum

from .internal_types import *

class SmartcastError(Exception):
  """Base class for all error exceptions defined by this package."""
  pass

class SmartcastTransportError(SmartcastError):
  """The HTTP request could not be completed, or the device answered with a
     non-2xx status or a body that is not JSON.

     The underlying exception, if any, is available as __cause__.
  """
  status: Optional[int]
  """The HTTP status returned by the device, or None if no response was received."""

  body: Optional[str]
  """The raw response body, if a response was received."""

  def __init__(self, msg: str, status: Optional[int]=None, body: Optional[str]=None) -> None:
    super().__init__(msg)
    self.status = status
    self.body = body

class SmartcastErrorKind(Enum):
  """Discriminant for SmartcastResultError."""
  BLOCKED = "BLOCKED"
  """A pairing request is already displayed on the device screen."""

  NOT_FOUND = "NOT_FOUND"
  """A named input or setting does not exist on the device."""

  VALIDATION = "VALIDATION"
  """The request was rejected locally before anything was sent to the device."""

  GENERIC = "GENERIC"
  """The device answered, but did not report success."""

class SmartcastResultError(SmartcastError):
  """A request was rejected, either by the device (with a non-SUCCESS
     STATUS.RESULT) or locally before it was sent.

     The raw device payload, if there is one, is available as payload.
  """
  kind: SmartcastErrorKind
  payload: Optional[Jsonable]

  def __init__(
        self,
        msg: str,
        kind: SmartcastErrorKind=SmartcastErrorKind.GENERIC,
        payload: Optional[Jsonable]=None,
      ) -> None:
    super().__init__(msg)
    self.kind = kind
    self.payload = payload

  @property
  def result(self) -> Optional[str]:
    """The STATUS.RESULT string of the payload, if there is one"""
    if isinstance(self.payload, dict):
      status = self.payload.get('STATUS')
      if isinstance(status, dict):
        result = status.get('RESULT')
        if isinstance(result, str):
          return result
    return None

class SmartcastNotImplementedError(SmartcastError, NotImplementedError):
  """The requested operation is not implemented by this package."""
  pass
