#!/usr/bin/env python3

# Copyright (c) 2023 Samuel J. McKelvie
#
# MIT License - See LICENSE file accompanying this package.
#

"""
REST API routes for the SmartCast REST server.
"""

from __future__ import annotations

from fastapi import APIRouter, Request

from ..internal_types import *
from ..exceptions import (
    SmartcastError,
    SmartcastErrorKind,
    SmartcastNotImplementedError,
    SmartcastResultError,
    SmartcastTransportError,
  )
from ..client import SmartcastClient

router = APIRouter()

def smartcast_error_status(e: SmartcastError) -> int:
    """Returns the HTTP status code used to report a SmartcastError"""
    if isinstance(e, SmartcastResultError):
        if e.kind == SmartcastErrorKind.NOT_FOUND:
            return 404
        if e.kind == SmartcastErrorKind.VALIDATION:
            return 400
        if e.kind == SmartcastErrorKind.BLOCKED:
            return 409
        return 502
    if isinstance(e, SmartcastNotImplementedError):
        return 501
    if isinstance(e, SmartcastTransportError):
        return 504 if e.status is None else 502
    return 500

def smartcast_error_body(e: SmartcastError) -> JsonableDict:
    result: JsonableDict = { "detail": str(e), "error": e.__class__.__name__ }
    if isinstance(e, SmartcastResultError):
        result["kind"] = e.kind.value
        result["payload"] = e.payload
    return result

def _client(request: Request) -> SmartcastClient:
    return request.app.state.smartcast_client

@router.get("/power")
async def get_power(request: Request):
    response = await _client(request).power.current_mode()
    return response.raw

@router.get("/volume")
async def get_volume(request: Request):
    response = await _client(request).control.volume.get()
    return response.raw

@router.put("/volume/{value}")
async def set_volume(request: Request, value: float):
    response = await _client(request).control.volume.set(value)
    return response.raw

@router.get("/inputs")
async def get_inputs(request: Request):
    response = await _client(request).input.list()
    response.require_success()
    return {
        "inputs": [ { "name": x.name, "display_name": x.display_name } for x in response.input_items() ]
      }

@router.get("/input")
async def get_input(request: Request):
    response = await _client(request).input.current()
    return response.raw

@router.put("/input/{name}")
async def set_input(request: Request, name: str):
    response = await _client(request).input.set(name)
    return response.raw

@router.post("/key/{name}")
async def send_key(request: Request, name: str):
    response = await _client(request).control.send_key(name)
    return response.raw

@router.get("/config")
async def get_config(request: Request):
    return _client(request).config.to_jsonable()
