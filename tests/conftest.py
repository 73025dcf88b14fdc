import json
import sys
from pathlib import Path
from typing import Callable, Dict, List

import httpx
import pytest


ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

from quota_segment.config import QuotaSettings
from quota_segment.diagnostics import disable_diagnostics


USAGE_URL = "https://co.yes.vg/api/v1/user/usage/daily"
BALANCE_URL = "https://co.yes.vg/api/v1/user/balance"

BALANCE_BODY = {
    "balance": 20.0,
    "pay_as_you_go_balance": 20.0,
    "subscription_balance": 30.0,
    "total_balance": 50.0,
    "weekly_limit": 100.0,
    "weekly_spent_balance": 12.0,
}


Handler = Callable[[httpx.Request], httpx.Response]


class RecordingTransport(httpx.MockTransport):
    """MockTransport that keeps every request it served, in order."""

    def __init__(self, routes: Dict[str, Handler]):
        self.requests: List[httpx.Request] = []
        super().__init__(self._dispatch)
        self._routes = routes

    def _dispatch(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        url = str(request.url)
        handler = self._routes.get(url)
        if handler is None:
            raise httpx.ConnectError(f"no route to {url}", request=request)
        return handler(request)

    @property
    def urls(self) -> List[str]:
        return [str(request.url) for request in self.requests]


def json_response(body, status_code: int = 200) -> Handler:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(status_code, content=json.dumps(body).encode("utf-8"))

    return handler


def raise_error(exc_type) -> Handler:
    def handler(request: httpx.Request) -> httpx.Response:
        raise exc_type("boom", request=request)

    return handler


@pytest.fixture(autouse=True)
def _reset_diagnostics():
    yield
    disable_diagnostics()


@pytest.fixture
def claude_dir(tmp_path: Path) -> Path:
    path = tmp_path / ".claude"
    path.mkdir()
    return path


@pytest.fixture
def make_settings(claude_dir: Path):
    def factory(environ=None, **overrides) -> QuotaSettings:
        return QuotaSettings(environ=dict(environ or {}), claude_dir=claude_dir, **overrides)

    return factory


@pytest.fixture
def make_client():
    clients: List[httpx.Client] = []

    def factory(routes: Dict[str, Handler]):
        transport = RecordingTransport(routes)
        client = httpx.Client(transport=transport)
        clients.append(client)
        return client, transport

    yield factory
    for client in clients:
        client.close()
