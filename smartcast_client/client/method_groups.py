# Copyright (c) 2023 Samuel J. McKelvie
#
# MIT License - See LICENSE file accompanying this package.
#

"""
SmartCast client method groups.

Each group holds a reference to the SmartcastClient that owns the endpoint and
credentials; the groups themselves are stateless.
"""

from __future__ import annotations

import asyncio
import math

from ..internal_types import *
from ..exceptions import SmartcastResultError, SmartcastErrorKind
from ..constants import VOLUME_MIN, VOLUME_MAX, REQUEST_MODIFY, REQUEST_ACTION
from ..pkg_logging import logger
from ..protocol import (
    KeyAction,
    KeyCommand,
    SmartcastResponse,
    find_input_by_name,
    paths,
    settings_write_body,
  )

if TYPE_CHECKING:
    from .client_impl import SmartcastClient

class SmartcastMethodGroup:
    client: SmartcastClient

    def __init__(self, client: SmartcastClient):
        self.client = client

    def __str__(self) -> str:
        return f"{self.__class__.__name__}({self.client})"

    def __repr__(self) -> str:
        return str(self)

class SmartcastPower(SmartcastMethodGroup):
    async def current_mode(self) -> SmartcastResponse:
        """Gets the current power mode. ITEMS[0].VALUE is 1 when the device is on."""
        return await self.client.transact("GET", paths.POWER_MODE, authorized=False)

class SmartcastInput(SmartcastMethodGroup):
    async def list(self) -> SmartcastResponse:
        """Gets the list of inputs. Use input_items() on the response for decoded entries."""
        return await self.client.transact("GET", paths.INPUT_LIST)

    async def current(self) -> SmartcastResponse:
        return await self.client.transact("GET", paths.CURRENT_INPUT)

    async def set(self, name: str) -> SmartcastResponse:
        """Switches to the input with the given internal or display name.

        The name is matched case-insensitively, internal names first.

        Raises SmartcastResultError with kind VALIDATION if name is not a
        string, NOT_FOUND if there is no such input, or GENERIC (with payload
        {"list": ..., "current": ...}) if either lookup fails.
        """
        if not isinstance(name, str):
            raise SmartcastResultError("input name must be a string", kind=SmartcastErrorKind.VALIDATION)
        input_list, current_input = await asyncio.gather(self.list(), self.current())
        if not input_list.is_success or not current_input.is_success:
            raise SmartcastResultError(
                f"Failed to read inputs: list result {input_list.result!r}, current result {current_input.result!r}",
                payload={ "list": input_list.raw, "current": current_input.raw })

        input_name = find_input_by_name(name, input_list.input_items())
        if input_name is None:
            raise SmartcastResultError(
                f"Input: {name} not found", kind=SmartcastErrorKind.NOT_FOUND, payload=input_list.raw)

        hashval = current_input.first_setting().hashval
        logger.debug(f"{self.client}: Setting input {name!r} -> {input_name!r}")
        return await self.client.transact(
            "PUT",
            paths.CURRENT_INPUT,
            settings_write_body(hashval, input_name, REQUEST_MODIFY),
          )

class SmartcastKeyGroup(SmartcastMethodGroup):
    async def send_key(self, name: str, action: Optional[Union[KeyAction, str]]=None) -> SmartcastResponse:
        """Sends a key command by name (see KEY_COMMANDS)."""
        command = KeyCommand.create_from_name(name, action=action)
        return await self.client.send_key_command(command)

class SmartcastVolumeControl(SmartcastKeyGroup):
    async def down(self) -> SmartcastResponse:
        return await self.send_key("volume.down")

    async def up(self) -> SmartcastResponse:
        return await self.send_key("volume.up")

    async def unmute(self) -> SmartcastResponse:
        return await self.send_key("volume.unmute")

    async def mute(self) -> SmartcastResponse:
        return await self.send_key("volume.mute")

    async def toggle_mute(self) -> SmartcastResponse:
        return await self.send_key("volume.toggle_mute")

    async def get(self) -> SmartcastResponse:
        return await self.client.transact("GET", paths.VOLUME_READ)

    async def get_mute_state(self) -> SmartcastResponse:
        return await self.client.transact("GET", paths.MUTE)

    async def set(self, value: Union[int, float]) -> SmartcastResponse:
        """Sets the volume to a value between 0 and 100 inclusive.

        The value is validated before anything is sent to the device, and
        rounded to an integer (halves round up).
        """
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise SmartcastResultError("value must be a number", kind=SmartcastErrorKind.VALIDATION)
        if not (VOLUME_MIN <= value <= VOLUME_MAX):
            raise SmartcastResultError(
                f"value is out of range, please enter a number between {VOLUME_MIN} to {VOLUME_MAX} inclusive",
                kind=SmartcastErrorKind.VALIDATION)

        audio_settings = await self.client.settings.audio.get()
        audio_settings.require_success(f"Failed to read audio settings: result {audio_settings.result!r}")
        volume = audio_settings.find_setting('volume')
        if volume is None:
            raise SmartcastResultError(
                "no volume setting found", kind=SmartcastErrorKind.NOT_FOUND, payload=audio_settings.raw)

        return await self.client.transact(
            "PUT",
            paths.VOLUME_WRITE,
            settings_write_body(volume.hashval, int(math.floor(value + 0.5)), REQUEST_MODIFY),
          )

class SmartcastChannelControl(SmartcastKeyGroup):
    async def down(self) -> SmartcastResponse:
        return await self.send_key("channel.down")

    async def up(self) -> SmartcastResponse:
        return await self.send_key("channel.up")

    async def previous(self) -> SmartcastResponse:
        return await self.send_key("channel.previous")

class SmartcastInputControl(SmartcastKeyGroup):
    async def cycle(self) -> SmartcastResponse:
        return await self.send_key("input.cycle")

class SmartcastPowerControl(SmartcastKeyGroup):
    async def off(self) -> SmartcastResponse:
        return await self.send_key("power.off")

    async def on(self) -> SmartcastResponse:
        return await self.send_key("power.on")

    async def toggle(self) -> SmartcastResponse:
        return await self.send_key("power.toggle")

class SmartcastSeekControl(SmartcastKeyGroup):
    async def forward(self) -> SmartcastResponse:
        return await self.send_key("media.seek_forward")

    async def back(self) -> SmartcastResponse:
        return await self.send_key("media.seek_back")

class SmartcastMediaControl(SmartcastKeyGroup):
    seek: SmartcastSeekControl

    def __init__(self, client: SmartcastClient):
        super().__init__(client)
        self.seek = SmartcastSeekControl(client)

    async def play(self) -> SmartcastResponse:
        return await self.send_key("media.play")

    async def pause(self) -> SmartcastResponse:
        return await self.send_key("media.pause")

    async def cc(self) -> SmartcastResponse:
        return await self.send_key("media.cc")

class SmartcastControl(SmartcastKeyGroup):
    """Remote-control emulation. Every method sends one key command."""
    volume: SmartcastVolumeControl
    channel: SmartcastChannelControl
    input: SmartcastInputControl
    power: SmartcastPowerControl
    media: SmartcastMediaControl

    def __init__(self, client: SmartcastClient):
        super().__init__(client)
        self.volume = SmartcastVolumeControl(client)
        self.channel = SmartcastChannelControl(client)
        self.input = SmartcastInputControl(client)
        self.power = SmartcastPowerControl(client)
        self.media = SmartcastMediaControl(client)

    async def key_command(
            self,
            codeset: int,
            code: int,
            action: Optional[Union[KeyAction, str]]=None,
          ) -> SmartcastResponse:
        """Sends an arbitrary key command. action defaults to KEYPRESS."""
        return await self.client.send_key_command(KeyCommand(codeset, code, action=action))

    async def menu(self) -> SmartcastResponse:
        return await self.send_key("menu")

    async def info(self) -> SmartcastResponse:
        return await self.send_key("info")

    async def smartcast(self) -> SmartcastResponse:
        """Opens the SmartCast home screen"""
        return await self.send_key("smartcast")

class SmartcastAudioSettings(SmartcastMethodGroup):
    async def get(self) -> SmartcastResponse:
        """Gets all audio settings items (volume, mute, balance, ...)."""
        return await self.client.transact("GET", paths.AUDIO_SETTINGS)

class SmartcastTimerSetting(SmartcastMethodGroup):
    path: str

    def __init__(self, client: SmartcastClient, path: str):
        super().__init__(client)
        self.path = path

    async def get(self) -> SmartcastResponse:
        return await self.client.transact("GET", self.path)

    async def set(self, value: str) -> SmartcastResponse:
        """Sets the timer to one of the values the device lists for it (e.g., "30 Minutes")."""
        return await self.client.modify_setting(self.path, value)

class SmartcastBlankScreen(SmartcastMethodGroup):
    async def get(self) -> SmartcastResponse:
        return await self.client.transact("GET", paths.BLANK_SCREEN)

    async def execute(self) -> SmartcastResponse:
        """Blanks the screen while audio continues to play"""
        return await self.client.modify_setting(paths.BLANK_SCREEN, request=REQUEST_ACTION)

class SmartcastTimers(SmartcastMethodGroup):
    sleep_timer: SmartcastTimerSetting
    auto_power_off_timer: SmartcastTimerSetting
    blank_screen: SmartcastBlankScreen

    def __init__(self, client: SmartcastClient):
        super().__init__(client)
        self.sleep_timer = SmartcastTimerSetting(client, paths.SLEEP_TIMER)
        self.auto_power_off_timer = SmartcastTimerSetting(client, paths.AUTO_POWER_OFF_TIMER)
        self.blank_screen = SmartcastBlankScreen(client)

    async def get(self) -> SmartcastResponse:
        return await self.client.transact("GET", paths.TIMERS)

class SmartcastSettings(SmartcastMethodGroup):
    audio: SmartcastAudioSettings
    timers: SmartcastTimers

    def __init__(self, client: SmartcastClient):
        super().__init__(client)
        self.audio = SmartcastAudioSettings(client)
        self.timers = SmartcastTimers(client)
