#!/usr/bin/env python
"""Interpret a response body as a JSON object or array."""

from __future__ import annotations

import json
from typing import NoReturn

from adconnect.core.types import JsonDecodeError, SuccessList, SuccessMap
from adconnect.utils.config import JSON_ERROR_CODE, JSON_ERROR_MESSAGE
from adconnect.utils.loguru_setup import logger

__all__ = [
    "parse_json_data",
]


def _reject_constant(name: str) -> NoReturn:
    raise ValueError(f"{name} is not valid JSON")


def parse_json_data(data: bytes) -> SuccessMap | SuccessList | JsonDecodeError:
    """Decode ``data`` as JSON.

    Any top-level value is parsed, but only an object or an array counts as
    success. Bare scalars, malformed syntax, ``NaN``/``Infinity`` and bodies
    that are not valid Unicode all give ``JsonDecodeError`` with code 501.

    Args:
        data: Response body

    Returns:
        SuccessMap for an object, SuccessList for an array, JsonDecodeError otherwise
    """
    try:
        obj = json.loads(data, parse_constant=_reject_constant)
    except (ValueError, TypeError) as e:
        # JSONDecodeError and UnicodeDecodeError are both ValueError subclasses
        logger.warning(f"Failed to parse JSON response: {e}")
        return JsonDecodeError(code=JSON_ERROR_CODE, message=JSON_ERROR_MESSAGE, cause=e)

    if isinstance(obj, dict):
        return SuccessMap(obj)
    if isinstance(obj, list):
        return SuccessList(obj)

    logger.warning(f"JSON response root is a {type(obj).__name__}, expected an object or array")
    return JsonDecodeError(
        code=JSON_ERROR_CODE,
        message=JSON_ERROR_MESSAGE,
        cause=TypeError(f"unexpected JSON root type {type(obj).__name__}"),
    )
