# Copyright (c) 2023 Samuel J. McKelvie
#
# MIT License - See LICENSE file accompanying this package.
#

"""
Low-level protocol definitions for SmartCast devices: endpoint paths,
request bodies, key commands and decoded responses.
"""

from . import paths

from .key_command import (
    KeyAction,
    KeyCommand,
    KEY_COMMANDS,
  )

from .response import (
    SmartcastResponse,
    SettingsItem,
    InputItem,
    find_input_by_name,
  )

from .requests import (
    pairing_start_body,
    pairing_pair_body,
    settings_write_body,
  )
