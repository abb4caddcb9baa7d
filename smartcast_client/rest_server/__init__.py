# Copyright (c) 2023 Samuel J. McKelvie
#
# MIT License - See LICENSE file accompanying this package.
#

"""
A REST FastAPI server that controls a SmartCast device.
"""
from .app import smartcast_api, get_smartcast_client, get_smartcast_config, get_raw_config, load_raw_config
