#!/usr/bin/env python3

# Copyright (c) 2023 Samuel J. McKelvie
#
# MIT License - See LICENSE file accompanying this package.
#

"""
A REST FastAPI server that controls a SmartCast device.

Run with, e.g.:

    SMARTCAST_HOST=192.168.1.20 SMARTCAST_AUTH_TOKEN=Zm9vYmFy uvicorn smartcast_client.rest_server:smartcast_api
"""

from __future__ import annotations

import os
import json
import time

from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from .logger import logger
from ..internal_types import *
from .. import (
    SmartcastClient,
    SmartcastClientConfig,
    SmartcastError,
    smartcast_connect,
  )

from .api import router as api_router, smartcast_error_status, smartcast_error_body

def load_raw_config() -> JsonableDict:
    """Loads the JSON config file named by SMARTCAST_CONFIG, or ./smartcast_config.json
       if it exists. Returns an empty config if there is no config file."""
    config_file = os.environ.get("SMARTCAST_CONFIG", None)
    if config_file is None:
        if os.path.exists("smartcast_config.json"):
            config_file = "smartcast_config.json"
    if config_file is None:
        return {}
    with open(config_file, "r") as f:
        raw_config = json.load(f)
    if not isinstance(raw_config, dict):
        raise SmartcastError(f"SmartCast config file {config_file} does not contain a JSON object")
    return raw_config

@asynccontextmanager
async def fastapi_lifetime(app: FastAPI) -> AsyncIterator[None]:
    """
    A context manager that initializes and cleans up for FastAPI.
    """
    smartcast_client: Optional[SmartcastClient] = None
    try:
        logger.info("SmartCast REST server starting up--initializing...")
        raw_config = load_raw_config()
        app.state.raw_config = raw_config
        smartcast_config = SmartcastClientConfig.from_jsonable(raw_config)
        app.state.smartcast_config = smartcast_config
        app.state.launch_time = time.monotonic()
        smartcast_client = await smartcast_connect(config=smartcast_config)
        app.state.smartcast_client = smartcast_client
        logger.info(f"Serving API for device at {smartcast_client}...")

        logger.info("SmartCast REST server initialization done; starting server...")
        yield
    finally:
        logger.info("SmartCast REST server shutting down--cleaning up...")
        if smartcast_client is not None:
            await smartcast_client.aclose()

smartcast_api = FastAPI(lifespan=fastapi_lifetime)
smartcast_api.include_router(api_router)

@smartcast_api.exception_handler(SmartcastError)
async def smartcast_error_handler(request: Request, exc: SmartcastError) -> JSONResponse:
    logger.debug(f"{request.method} {request.url.path} failed: {exc}")
    return JSONResponse(status_code=smartcast_error_status(exc), content=smartcast_error_body(exc))

def get_smartcast_client() -> SmartcastClient:
    return smartcast_api.state.smartcast_client

def get_smartcast_config() -> SmartcastClientConfig:
    return smartcast_api.state.smartcast_config

def get_raw_config() -> JsonableDict:
    return smartcast_api.state.raw_config
