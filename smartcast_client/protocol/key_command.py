# Copyright (c) 2023 Samuel J. McKelvie
#
# MIT License - See LICENSE file accompanying this package.
#

"""
SmartCast remote-control key commands.

A key command addresses a category of remote-control functions (the codeset)
and a specific function within it (the code). The device accepts a list of
key commands in a single request; this package always sends exactly one.
"""

from __future__ import annotations

from enum import Enum

from ..internal_types import *
from ..exceptions import SmartcastResultError, SmartcastErrorKind

class KeyAction(str, Enum):
    KEYPRESS = "KEYPRESS"
    KEYDOWN = "KEYDOWN"
    KEYUP = "KEYUP"

KEY_COMMANDS: Dict[str, Tuple[int, int]] = {
    "volume.down": (5, 0),
    "volume.up": (5, 1),
    "volume.unmute": (5, 2),
    "volume.mute": (5, 3),
    "volume.toggle_mute": (5, 4),
    "input.cycle": (7, 1),
    "channel.down": (8, 0),
    "channel.up": (8, 1),
    "channel.previous": (8, 2),
    "power.off": (11, 0),
    "power.on": (11, 1),
    "power.toggle": (11, 2),
    "media.seek_forward": (2, 0),
    "media.seek_back": (2, 1),
    "media.pause": (2, 2),
    "media.play": (2, 3),
    "media.cc": (4, 4),
    "menu": (4, 8),
    "info": (4, 6),
    "smartcast": (4, 3),
  }
"""Named key commands, mapped to (codeset, code)."""

class KeyCommand:
    """A single key command sent to a SmartCast device"""
    codeset: int
    code: int
    action: KeyAction

    def __init__(
            self,
            codeset: int,
            code: int,
            action: Optional[Union[KeyAction, str]]=None,
          ):
        if action is None:
            action = KeyAction.KEYPRESS
        elif not isinstance(action, KeyAction):
            try:
                action = KeyAction(action)
            except ValueError as e:
                raise SmartcastResultError(
                    f"Invalid key action {action!r}", kind=SmartcastErrorKind.VALIDATION) from e
        self.codeset = codeset
        self.code = code
        self.action = action

    @classmethod
    def create_from_name(
            cls,
            name: str,
            action: Optional[Union[KeyAction, str]]=None,
          ) -> Self:
        """Creates a KeyCommand from a name in KEY_COMMANDS"""
        codes = KEY_COMMANDS.get(name)
        if codes is None:
            raise SmartcastResultError(f"Unknown key command name: {name}", kind=SmartcastErrorKind.VALIDATION)
        codeset, code = codes
        return cls(codeset, code, action=action)

    def to_jsonable(self) -> JsonableDict:
        """Returns the request body for the key_command endpoint"""
        return {
            "KEYLIST": [
                {
                    "CODESET": self.codeset,
                    "CODE": self.code,
                    "ACTION": self.action.value,
                  }
              ]
          }

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, KeyCommand):
            return NotImplemented
        return (self.codeset, self.code, self.action) == (other.codeset, other.code, other.action)

    def __hash__(self) -> int:
        return hash((self.codeset, self.code, self.action))

    def __str__(self) -> str:
        return f"KeyCommand(codeset={self.codeset}, code={self.code}, action={self.action.value})"

    def __repr__(self) -> str:
        return str(self)
