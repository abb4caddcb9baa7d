# Copyright (c) 2023 Samuel J. McKelvie
#
# MIT License - See LICENSE file accompanying this package.
#

"""
SmartCast device emulator.

Provides a simple emulation of a SmartCast device's HTTP control API, served
over plain HTTP with aiohttp.web. Supports pairing with a fixed PIN, AUTH
checking, HASHVAL-stamped settings and a log of received requests and key
commands.
"""

from __future__ import annotations

import asyncio
import json
import secrets

from aiohttp import web

from ..internal_types import *
from ..pkg_logging import logger
from ..constants import (
    AUTH_HEADER,
    CHALLENGE_TYPE,
    REQUEST_ACTION,
    REQUEST_MODIFY,
    RESULT_BLOCKED,
    RESULT_HASHVAL_ERROR,
    RESULT_INVALID_PARAMETER,
    RESULT_PAIRING_DENIED,
    RESULT_REQUIRES_PAIRING,
    RESULT_SUCCESS,
    RESULT_URI_NOT_FOUND,
    VOLUME_MAX,
    VOLUME_MIN,
  )
from ..exceptions import SmartcastError
from ..protocol import KEY_COMMANDS, paths

DEFAULT_INPUTS: List[Tuple[str, str]] = [
    ("CAST", "CAST"),
    ("HDMI-1", "Blu-ray"),
    ("HDMI-2", "HDMI-2"),
    ("COMP", "COMP"),
    ("TV", "TV"),
  ]
"""Default (internal name, display name) pairs of the emulated inputs."""

SLEEP_TIMER_VALUES = ["Off", "30 Minutes", "60 Minutes", "90 Minutes", "120 Minutes", "180 Minutes"]
AUTO_POWER_OFF_VALUES = ["Off", "10 Minutes"]

_KEY_NAMES: Dict[Tuple[int, int], str] = { v: k for k, v in KEY_COMMANDS.items() }

class EmulatorRequest:
    """A request received by the emulator"""
    method: str
    path: str
    body: Jsonable
    auth_token: Optional[str]

    def __init__(self, method: str, path: str, body: Jsonable, auth_token: Optional[str]):
        self.method = method
        self.path = path
        self.body = body
        self.auth_token = auth_token

    def __str__(self) -> str:
        return f"EmulatorRequest({self.method} {self.path}, body={self.body!r})"

    def __repr__(self) -> str:
        return str(self)

class SmartcastEmulator(AsyncContextManager['SmartcastEmulator']):
    pin: str
    bind_addr: str
    port: int
    auth_tokens: Set[str]
    requests: List[EmulatorRequest]
    key_commands: List[Tuple[int, int, str]]
    power_on: bool
    current_input: str
    inputs: List[Tuple[str, str]]
    settings: Dict[str, JsonableDict]
    pending_pairing: Optional[Tuple[str, int]] = None
    """(device_id, pairing_req_token) of the pairing request awaiting a PIN"""

    next_hashval: int = 1000
    runner: Optional[web.AppRunner] = None

    def __init__(
            self,
            pin: str = "1234",
            bind_addr: Optional[str] = None,
            port: int = 0,
            auth_tokens: Optional[Iterable[str]] = None,
            inputs: Optional[List[Tuple[str, str]]] = None,
            volume: int = 20,
          ):
        self.pin = pin
        self.bind_addr = '127.0.0.1' if bind_addr is None else bind_addr
        self.port = port
        self.auth_tokens = set() if auth_tokens is None else set(auth_tokens)
        self.requests = []
        self.key_commands = []
        self.power_on = True
        self.inputs = list(DEFAULT_INPUTS) if inputs is None else list(inputs)
        if len(self.inputs) == 0:
            raise SmartcastError("Emulator requires at least one input")
        self.current_input = self.inputs[0][0]
        self.settings = {}
        self._add_setting("volume", "Volume", "T_VALUE_V1", volume)
        self._add_setting("mute", "Mute", "T_LIST_X_V1", "Off")
        self._add_setting("current_input", "Current Input", "T_STRING_V1", self.current_input)
        self._add_setting("sleep_timer", "Sleep Timer", "T_LIST_V1", "Off")
        self._add_setting("auto_power_off_timer", "Auto Power Off", "T_LIST_V1", "Off")
        self._add_setting("blank_screen", "Blank Screen", "T_MENU_X_V1", "Blank Screen")

    def alloc_hashval(self) -> int:
        result = self.next_hashval
        self.next_hashval += 1
        return result

    def _add_setting(self, cname: str, name: str, type_name: str, value: Jsonable) -> None:
        self.settings[cname] = {
            "CNAME": cname,
            "NAME": name,
            "TYPE": type_name,
            "VALUE": value,
            "HASHVAL": self.alloc_hashval(),
          }

    def set_setting_value(self, cname: str, value: Jsonable) -> None:
        """Changes a setting value and stamps it with a new HASHVAL"""
        item = self.settings[cname]
        item["VALUE"] = value
        item["HASHVAL"] = self.alloc_hashval()

    @property
    def volume(self) -> int:
        value = self.settings["volume"]["VALUE"]
        assert isinstance(value, int)
        return value

    @property
    def muted(self) -> bool:
        return self.settings["mute"]["VALUE"] == "On"

    @property
    def host_string(self) -> str:
        """A host string that SmartcastClient.create() resolves to this emulator"""
        return f"http://{self.bind_addr}:{self.port}"

    def requests_to(self, path: str, method: Optional[str]=None) -> List[EmulatorRequest]:
        return [ r for r in self.requests if r.path == path and (method is None or r.method == method) ]

    # ---- response helpers

    @staticmethod
    def status(result: str, detail: Optional[str]=None) -> JsonableDict:
        return { "STATUS": { "RESULT": result, "DETAIL": result.capitalize() if detail is None else detail } }

    def success(self, **fields: Jsonable) -> JsonableDict:
        result = self.status(RESULT_SUCCESS)
        result.update(fields)
        return result

    def items_response(self, *cnames: str) -> JsonableDict:
        return self.success(ITEMS=[ dict(self.settings[c]) for c in cnames ])

    def modify(
            self,
            cname: str,
            body: Jsonable,
            validate: Optional[Callable[[Jsonable], bool]]=None,
          ) -> JsonableDict:
        if not isinstance(body, dict) or body.get("REQUEST") != REQUEST_MODIFY:
            return self.status(RESULT_INVALID_PARAMETER)
        item = self.settings[cname]
        if body.get("HASHVAL") != item["HASHVAL"]:
            return self.status(RESULT_HASHVAL_ERROR)
        value = body.get("VALUE")
        if validate is not None and not validate(value):
            return self.status(RESULT_INVALID_PARAMETER)
        self.set_setting_value(cname, value)
        return self.success()

    # ---- endpoint handlers

    def handle_power_mode(self, body: Jsonable) -> JsonableDict:
        return self.success(ITEMS=[
            { "CNAME": "power_mode", "NAME": "Power Mode", "TYPE": "T_VALUE_V1", "VALUE": 1 if self.power_on else 0 }
          ])

    def handle_pairing_start(self, body: Jsonable) -> JsonableDict:
        if self.pending_pairing is not None:
            return self.status(RESULT_BLOCKED)
        if not isinstance(body, dict) or not isinstance(body.get("DEVICE_ID"), str):
            return self.status(RESULT_INVALID_PARAMETER)
        device_id = body["DEVICE_ID"]
        assert isinstance(device_id, str)
        token = secrets.randbelow(1000000) + 1
        self.pending_pairing = (device_id, token)
        logger.debug(f"{self}: Pairing started by {device_id!r}; PIN is {self.pin}")
        return self.success(ITEM={ "PAIRING_REQ_TOKEN": token, "CHALLENGE_TYPE": CHALLENGE_TYPE })

    def handle_pairing_pair(self, body: Jsonable) -> JsonableDict:
        if self.pending_pairing is None or not isinstance(body, dict):
            return self.status(RESULT_INVALID_PARAMETER)
        device_id, token = self.pending_pairing
        if (body.get("DEVICE_ID") != device_id or
                body.get("PAIRING_REQ_TOKEN") != token or
                body.get("CHALLENGE_TYPE") != CHALLENGE_TYPE):
            return self.status(RESULT_INVALID_PARAMETER)
        if body.get("RESPONSE_VALUE") != self.pin:
            return self.status(RESULT_PAIRING_DENIED)
        auth_token = secrets.token_hex(8)
        self.auth_tokens.add(auth_token)
        self.pending_pairing = None
        logger.debug(f"{self}: Pairing completed by {device_id!r}")
        return self.success(ITEM={ "AUTH_TOKEN": auth_token })

    def handle_key_command(self, body: Jsonable) -> JsonableDict:
        keylist = body.get("KEYLIST") if isinstance(body, dict) else None
        if not isinstance(keylist, list) or len(keylist) == 0:
            return self.status(RESULT_INVALID_PARAMETER)
        for key in keylist:
            if not isinstance(key, dict):
                return self.status(RESULT_INVALID_PARAMETER)
            codeset, code, action = key.get("CODESET"), key.get("CODE"), key.get("ACTION")
            if not isinstance(codeset, int) or not isinstance(code, int) or not isinstance(action, str):
                return self.status(RESULT_INVALID_PARAMETER)
            self.key_commands.append((codeset, code, action))
            if action != "KEYUP":
                self.apply_key(_KEY_NAMES.get((codeset, code)))
        return self.success()

    def apply_key(self, name: Optional[str]) -> None:
        """Applies the side effects of a key press to the emulated state"""
        if name == "power.on":
            self.power_on = True
        elif name == "power.off":
            self.power_on = False
        elif name == "power.toggle":
            self.power_on = not self.power_on
        elif name == "volume.up":
            self.set_setting_value("volume", min(VOLUME_MAX, self.volume + 1))
        elif name == "volume.down":
            self.set_setting_value("volume", max(VOLUME_MIN, self.volume - 1))
        elif name == "volume.mute":
            self.set_setting_value("mute", "On")
        elif name == "volume.unmute":
            self.set_setting_value("mute", "Off")
        elif name == "volume.toggle_mute":
            self.set_setting_value("mute", "Off" if self.muted else "On")
        elif name == "input.cycle":
            names = [ n for n, _ in self.inputs ]
            index = names.index(self.current_input) if self.current_input in names else -1
            self.select_input(names[(index + 1) % len(names)])

    def select_input(self, name: str) -> None:
        self.current_input = name
        self.set_setting_value("current_input", name)

    def handle_input_list(self, body: Jsonable) -> JsonableDict:
        items: List[Jsonable] = []
        for name, display_name in self.inputs:
            items.append({
                "CNAME": name.lower(),
                "NAME": name,
                "TYPE": "T_DEVICE_V1",
                "VALUE": { "NAME": display_name, "METADATA": "" },
                "HASHVAL": self.settings["current_input"]["HASHVAL"],
              })
        return self.success(ITEMS=items)

    def handle_current_input_put(self, body: Jsonable) -> JsonableDict:
        names = [ n for n, _ in self.inputs ]
        result = self.modify("current_input", body, lambda v: v in names)
        value = self.settings["current_input"]["VALUE"]
        assert isinstance(value, str)
        self.current_input = value
        return result

    def handle_volume_put(self, body: Jsonable) -> JsonableDict:
        return self.modify(
            "volume",
            body,
            lambda v: isinstance(v, int) and not isinstance(v, bool) and VOLUME_MIN <= v <= VOLUME_MAX)

    def handle_timers(self, body: Jsonable) -> JsonableDict:
        return self.items_response("sleep_timer", "auto_power_off_timer", "blank_screen")

    def handle_blank_screen_put(self, body: Jsonable) -> JsonableDict:
        item = self.settings["blank_screen"]
        if not isinstance(body, dict) or body.get("REQUEST") != REQUEST_ACTION:
            return self.status(RESULT_INVALID_PARAMETER)
        if body.get("HASHVAL") != item["HASHVAL"]:
            return self.status(RESULT_HASHVAL_ERROR)
        logger.debug(f"{self}: Screen blanked")
        return self.success()

    def routes(self) -> Dict[Tuple[str, str], Callable[[Jsonable], JsonableDict]]:
        return {
            ("GET", paths.POWER_MODE): self.handle_power_mode,
            ("PUT", paths.PAIRING_START): self.handle_pairing_start,
            ("PUT", paths.PAIRING_PAIR): self.handle_pairing_pair,
            ("PUT", paths.KEY_COMMAND): self.handle_key_command,
            ("GET", paths.INPUT_LIST): self.handle_input_list,
            ("GET", paths.CURRENT_INPUT): lambda body: self.items_response("current_input"),
            ("PUT", paths.CURRENT_INPUT): self.handle_current_input_put,
            ("GET", paths.VOLUME_READ): lambda body: self.items_response("volume"),
            ("PUT", paths.VOLUME_WRITE): self.handle_volume_put,
            ("GET", paths.MUTE): lambda body: self.items_response("mute"),
            ("GET", paths.AUDIO_SETTINGS): lambda body: self.items_response("volume", "mute"),
            ("GET", paths.TIMERS): self.handle_timers,
            ("GET", paths.SLEEP_TIMER): lambda body: self.items_response("sleep_timer"),
            ("PUT", paths.SLEEP_TIMER): lambda body: self.modify(
                "sleep_timer", body, lambda v: v in SLEEP_TIMER_VALUES),
            ("GET", paths.AUTO_POWER_OFF_TIMER): lambda body: self.items_response("auto_power_off_timer"),
            ("PUT", paths.AUTO_POWER_OFF_TIMER): lambda body: self.modify(
                "auto_power_off_timer", body, lambda v: v in AUTO_POWER_OFF_VALUES),
            ("GET", paths.BLANK_SCREEN): lambda body: self.items_response("blank_screen"),
            ("PUT", paths.BLANK_SCREEN): self.handle_blank_screen_put,
          }

    async def handle_request(self, request: web.Request) -> web.Response:
        """Handle a single HTTP request, and return a JSON response."""
        body: Jsonable = None
        if request.can_read_body:
            text = await request.text()
            if text != '':
                try:
                    body = json.loads(text)
                except ValueError:
                    return web.json_response(self.status(RESULT_INVALID_PARAMETER), status=400)
        auth_token = request.headers.get(AUTH_HEADER)
        path = request.path
        self.requests.append(EmulatorRequest(request.method, path, body, auth_token))
        logger.debug(f"{self}: {request.method} {path}")

        handler = self.routes().get((request.method, path))
        if handler is None:
            return web.json_response(self.status(RESULT_URI_NOT_FOUND))
        if not path in paths.UNAUTHENTICATED_PATHS and not auth_token in self.auth_tokens:
            return web.json_response(self.status(RESULT_REQUIRES_PAIRING))
        return web.json_response(handler(body))

    def create_app(self) -> web.Application:
        app = web.Application()
        app.router.add_route('*', '/{tail:.*}', self.handle_request)
        return app

    async def start(self) -> None:
        """Starts serving. If port is 0, an ephemeral port is chosen and stored in self.port."""
        if self.runner is not None:
            raise SmartcastError(f"{self}: Emulator already started")
        runner = web.AppRunner(self.create_app())
        await runner.setup()
        try:
            site = web.TCPSite(runner, self.bind_addr, self.port)
            await site.start()
        except BaseException:
            await runner.cleanup()
            raise
        self.runner = runner
        if self.port == 0:
            self.port = runner.addresses[0][1]
        logger.info(f"{self}: Serving")

    async def aclose(self) -> None:
        runner = self.runner
        self.runner = None
        if runner is not None:
            await runner.cleanup()

    async def serve_forever(self) -> None:
        await self.start()
        try:
            await asyncio.Event().wait()
        finally:
            await self.aclose()

    async def __aenter__(self) -> SmartcastEmulator:
        await self.start()
        return self

    async def __aexit__(
            self,
            exc_type: Optional[Type[BaseException]],
            exc: Optional[BaseException],
            tb: Optional[TracebackType],
          ) -> None:
        await self.aclose()

    def __str__(self) -> str:
        return f"SmartcastEmulator({self.bind_addr}:{self.port})"

    def __repr__(self) -> str:
        return str(self)
