# Copyright (c) 2023 Samuel J. McKelvie
#
# MIT License - See LICENSE file accompanying this package.
#

"""
SmartCast device emulator.

Provides a simple emulation of a SmartCast device's HTTP control API.
"""

from .emulator_impl import SmartcastEmulator, EmulatorRequest, DEFAULT_INPUTS
