"""
Pytest configuration for Sailhouse SDK tests.

Most tests talk to a real ``SailhouseClient`` whose ``httpx.AsyncClient`` is
backed by ``httpx.MockTransport``; every request is recorded so tests can
assert on call order, headers and bodies.
"""
from typing import Callable, List

import httpx
import pytest

from sailhouse import SailhouseClient

from helpers import BASE_URL, TOKEN

Handler = Callable[[httpx.Request], httpx.Response]


@pytest.fixture
def sent() -> List[httpx.Request]:
    """Requests seen by the mock transport, in order."""
    return []


@pytest.fixture
def make_client(sent) -> Callable[[Handler], SailhouseClient]:
    """Build a client whose requests are answered by ``handler`` and recorded."""

    def _make(handler: Handler) -> SailhouseClient:
        def _record(request: httpx.Request) -> httpx.Response:
            sent.append(request)
            return handler(request)

        http_client = httpx.AsyncClient(transport=httpx.MockTransport(_record))
        return SailhouseClient(token=TOKEN, base_url=BASE_URL, http_client=http_client)

    return _make
