"""Shared helpers for Sailhouse SDK tests."""
import json
from typing import Any

import httpx

BASE_URL = "https://api.sailhouse.test"
TOKEN = "test-token"


def request_json(request: httpx.Request) -> Any:
    """Decode the JSON body of a recorded request."""
    return json.loads(request.content.decode("utf-8"))


def json_response(status_code: int, payload: Any = None) -> httpx.Response:
    """Build a JSON response, or an empty one when ``payload`` is None."""
    if payload is None:
        return httpx.Response(status_code)
    return httpx.Response(status_code, json=payload)
