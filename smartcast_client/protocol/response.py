# Copyright (c) 2023 Samuel J. McKelvie
#
# MIT License - See LICENSE file accompanying this package.
#

"""
Decoded SmartCast device responses.

Every response from the device is a JSON object of the general form:

    {
      "STATUS": { "RESULT": "SUCCESS", "DETAIL": "Success" },
      "ITEMS": [ { "CNAME": "volume", "NAME": "Volume", "VALUE": 17, "HASHVAL": 3412, ... }, ... ],
      "ITEM": { ... },
      "HASHLIST": [ ... ],
      ...
    }

Fields not needed by this package are preserved untouched in the raw data.
Fields that are needed are validated when they are accessed.
"""

from __future__ import annotations

from ..internal_types import *
from ..exceptions import SmartcastResultError, SmartcastErrorKind
from ..constants import RESULT_SUCCESS

class SettingsItem:
    """A single settings item (e.g., volume, current input, sleep timer).

    hashval is the optimistic-concurrency stamp that must be echoed back
    unchanged when modifying the item.
    """
    raw: JsonableDict
    cname: Optional[str]
    name: Optional[str]
    type: Optional[str]
    value: Jsonable
    hashval: int

    def __init__(self, raw: JsonableDict):
        hashval = raw.get('HASHVAL')
        if not isinstance(hashval, int) or isinstance(hashval, bool):
            raise SmartcastResultError(f"Settings item has no valid HASHVAL: {raw}", payload=raw)
        self.raw = raw
        self.hashval = hashval
        self.cname = _opt_str(raw.get('CNAME'))
        self.name = _opt_str(raw.get('NAME'))
        self.type = _opt_str(raw.get('TYPE'))
        self.value = raw.get('VALUE')

    def __str__(self) -> str:
        return f"SettingsItem(cname={self.cname!r}, name={self.name!r}, value={self.value!r}, hashval={self.hashval})"

    def __repr__(self) -> str:
        return str(self)

class InputItem:
    """An entry in the device's input list.

    name is the internal input name required by the current_input modify
    request; display_name is the name assigned by the user, if any.
    """
    raw: JsonableDict
    name: str
    display_name: Optional[str]

    def __init__(self, raw: JsonableDict):
        name = raw.get('NAME')
        if not isinstance(name, str):
            raise SmartcastResultError(f"Input item has no NAME: {raw}", payload=raw)
        value = raw.get('VALUE')
        display_name: Optional[str] = None
        if isinstance(value, dict):
            display_name = _opt_str(value.get('NAME'))
        elif isinstance(value, str):
            display_name = value
        self.raw = raw
        self.name = name
        self.display_name = display_name

    def __str__(self) -> str:
        return f"InputItem(name={self.name!r}, display_name={self.display_name!r})"

    def __repr__(self) -> str:
        return str(self)

def find_input_by_name(name: str, inputs: Iterable[InputItem]) -> Optional[str]:
    """Finds an input by internal name or display name, case-insensitively.

    A match on the internal name takes priority over a match on any display name.

    Returns the internal name of the matched input, or None if there is no match.
    """
    inputs = list(inputs)
    folded = name.casefold()
    for item in inputs:
        if item.name.casefold() == folded:
            return item.name
    for item in inputs:
        if item.display_name is not None and item.display_name.casefold() == folded:
            return item.name
    return None

class SmartcastResponse:
    """A decoded JSON response from a SmartCast device"""
    raw: JsonableDict

    def __init__(self, raw: Jsonable):
        if not isinstance(raw, dict):
            raise SmartcastResultError(f"Device response is not a JSON object: {raw!r}", payload=raw)
        self.raw = raw

    @property
    def status(self) -> JsonableDict:
        status = self.raw.get('STATUS')
        return status if isinstance(status, dict) else {}

    @property
    def result(self) -> Optional[str]:
        """The STATUS.RESULT string, or None if missing"""
        return _opt_str(self.status.get('RESULT'))

    @property
    def detail(self) -> Optional[str]:
        """The STATUS.DETAIL string, or None if missing"""
        return _opt_str(self.status.get('DETAIL'))

    @property
    def is_success(self) -> bool:
        return self.result == RESULT_SUCCESS

    @property
    def items(self) -> List[JsonableDict]:
        """The ITEMS list. Entries that are not JSON objects are skipped."""
        items = self.raw.get('ITEMS')
        if not isinstance(items, list):
            return []
        return [x for x in items if isinstance(x, dict)]

    @property
    def item(self) -> Optional[JsonableDict]:
        """The ITEM object, or None if missing"""
        item = self.raw.get('ITEM')
        return item if isinstance(item, dict) else None

    def require_success(self, msg: Optional[str]=None) -> Self:
        """Raises SmartcastResultError if STATUS.RESULT is not SUCCESS. Returns self."""
        if not self.is_success:
            if msg is None:
                msg = f"Device request failed with result {self.result!r}"
            raise SmartcastResultError(msg, kind=SmartcastErrorKind.GENERIC, payload=self.raw)
        return self

    def require_item_field(self, field_name: str) -> Jsonable:
        """Returns a required field of ITEM, raising SmartcastResultError if
           it is missing or null."""
        item = self.item
        value = None if item is None else item.get(field_name)
        if value is None:
            raise SmartcastResultError(f"Device response has no ITEM.{field_name}", payload=self.raw)
        return value

    def require_item_str(self, field_name: str) -> str:
        """Returns a required string field of ITEM, raising SmartcastResultError if
           it is missing."""
        value = self.require_item_field(field_name)
        if not isinstance(value, str):
            raise SmartcastResultError(f"Device response ITEM.{field_name} is not a string", payload=self.raw)
        return value

    def settings_items(self) -> List[SettingsItem]:
        return [SettingsItem(x) for x in self.items]

    def first_setting(self) -> SettingsItem:
        """Returns the first settings item, raising SmartcastResultError if there is none"""
        items = self.items
        if len(items) == 0:
            raise SmartcastResultError("Device response contains no settings items", payload=self.raw)
        return SettingsItem(items[0])

    def find_setting(self, cname: str) -> Optional[SettingsItem]:
        """Returns the settings item with the given CNAME, or None"""
        for x in self.items:
            if x.get('CNAME') == cname:
                return SettingsItem(x)
        return None

    def input_items(self) -> List[InputItem]:
        return [InputItem(x) for x in self.items]

    def __str__(self) -> str:
        return f"SmartcastResponse(result={self.result!r}, items={len(self.items)})"

    def __repr__(self) -> str:
        return str(self)

def _opt_str(value: Jsonable) -> Optional[str]:
    return value if isinstance(value, str) else None
