"""
Shared fixtures for gbx-cli tests
"""

from typing import Callable, List, Optional

import httpx
import pytest
from rich.console import Console

from gbxcli.cli import AppContext
from gbxcli.core.api import GlobalBlackboxClient
from gbxcli.core.config import APIConfig, ConfigStore
from gbxcli.core.models import Config, Plan, PlanName
from gbxcli.ui.formatting import RichFormatter

BASE_URL = "https://api.globalblackbox.test"
API_KEY = "gbx_live_0123456789abcdef"


class FakeService:
    """Stands in for the remote service and records every request it sees"""

    def __init__(self):
        self.requests: List[httpx.Request] = []
        self.handler: Callable[[httpx.Request], httpx.Response] = lambda request: httpx.Response(200, json={})

    def respond_with(self, handler: Callable[[httpx.Request], httpx.Response]):
        self.handler = handler

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self.handler(request)

    @property
    def calls(self) -> int:
        return len(self.requests)

    @property
    def last_request(self) -> httpx.Request:
        return self.requests[-1]


@pytest.fixture
def settings(tmp_path):
    return APIConfig(
        base_url=BASE_URL,
        timeout=5.0,
        config_dir=tmp_path / ".gbx",
        log_level="CRITICAL",
    )


@pytest.fixture
def store(settings):
    return ConfigStore(settings.config_dir)


@pytest.fixture
def service():
    return FakeService()


@pytest.fixture
def make_client(settings, service):
    clients = []

    def factory(api_key: Optional[str] = None) -> GlobalBlackboxClient:
        client = GlobalBlackboxClient(settings, api_key=api_key, transport=httpx.MockTransport(service))
        clients.append(client)
        return client

    yield factory

    for client in clients:
        client.close()


@pytest.fixture
def app(settings, store, make_client):
    formatter = RichFormatter(
        console=Console(width=200),
        err_console=Console(stderr=True, width=200),
    )
    return AppContext(settings=settings, store=store, formatter=formatter, client_factory=make_client)


@pytest.fixture
def saved_config(store):
    config = Config(
        api_key=API_KEY,
        account_id="acc_42",
        plan=Plan(name=PlanName.SINGLE_REGION, region="london.europe"),
        target_count=10,
    )
    store.save(config)
    return config
