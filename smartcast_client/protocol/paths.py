# Copyright (c) 2023 Samuel J. McKelvie
#
# MIT License - See LICENSE file accompanying this package.
#

"""
URL paths of the SmartCast control API endpoints used by this package.

All paths are relative to the device base URL (e.g., "https://192.168.1.20:9000").
"""

POWER_MODE = "/state/device/power_mode"

PAIRING_START = "/pairing/start"
PAIRING_PAIR = "/pairing/pair"

KEY_COMMAND = "/key_command/"

INPUT_LIST = "/menu_native/dynamic/audio_settings/input"
CURRENT_INPUT = "/menu_native/dynamic/audio_settings/input/current_input"

VOLUME_READ = "/menu_native/dynamic/audio_settings/audio/volume"
VOLUME_WRITE = "/menu_native/dynamic/tv_settings/audio/volume"
MUTE = "/menu_native/dynamic/tv_settings/audio/mute"

AUDIO_SETTINGS = "/menu_native/dynamic/tv_settings/audio"

TIMERS = "/menu_native/dynamic/tv_settings/timers"
SLEEP_TIMER = "/menu_native/dynamic/tv_settings/timers/sleep_timer"
AUTO_POWER_OFF_TIMER = "/menu_native/dynamic/tv_settings/timers/auto_power_off_timer"
BLANK_SCREEN = "/menu_native/dynamic/tv_settings/timers/blank_screen"

UNAUTHENTICATED_PATHS = (POWER_MODE, PAIRING_START, PAIRING_PAIR)
"""Paths the device serves without an AUTH header."""
