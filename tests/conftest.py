"""Shared fixtures for the weather dashboard client tests."""

from datetime import datetime, timezone
from typing import Callable, List

import httpx
import pytest

from weather_dashboard.client.api import AuthenticatedWeatherDashboardAPI, WeatherDashboardAPI
from weather_dashboard.mock.main import create_app
from weather_dashboard.mock.weather_data import build_current, build_forecast

BASE_URL = "http://testserver/api"
IDP_URL = "https://idp.example.com/authorize"
FIXED_NOW = datetime(2024, 6, 1, 12, 0, tzinfo=timezone.utc)


class RecordingTransport(httpx.MockTransport):
    """MockTransport that keeps every request it served."""

    def __init__(self, handler: Callable[[httpx.Request], httpx.Response]):
        self.requests: List[httpx.Request] = []

        def record(request: httpx.Request) -> httpx.Response:
            self.requests.append(request)
            return handler(request)

        super().__init__(record)


def error_body(code: int, message: str, details: str = None) -> dict:
    error = {"code": code, "message": message}
    if details is not None:
        error["details"] = details
    return {"error": error}


@pytest.fixture
def current_payload() -> dict:
    return build_current("Paris", FIXED_NOW).model_dump()


@pytest.fixture
def forecast_payload() -> dict:
    return build_forecast("Paris", 3, False, FIXED_NOW).model_dump(exclude_none=True)


@pytest.fixture
def profile_payload() -> dict:
    return {
        "userId": "u1",
        "name": "Alice",
        "isAuthenticated": True,
        "tempUnit": "fahrenheit",
        "windUnit": "knots",
        "defaultLocation": "Paris",
    }


@pytest.fixture
async def make_api():
    """Build a client over a RecordingTransport; returns (client, transport)."""
    clients = []

    def factory(handler, authenticated: bool = False, **kwargs):
        transport = RecordingTransport(handler)
        cls = AuthenticatedWeatherDashboardAPI if authenticated else WeatherDashboardAPI
        client = cls(base_url=BASE_URL, transport=transport, **kwargs)
        clients.append(client)
        return client, transport

    yield factory

    for client in clients:
        await client.aclose()


@pytest.fixture
def backend_app():
    return create_app(oidc_authorization_url=IDP_URL)


@pytest.fixture
async def backend_api(backend_app):
    async with WeatherDashboardAPI(base_url=BASE_URL, transport=httpx.ASGITransport(app=backend_app)) as client:
        yield client


@pytest.fixture
async def backend_auth_api(backend_app):
    async with AuthenticatedWeatherDashboardAPI(
        base_url=BASE_URL, transport=httpx.ASGITransport(app=backend_app)
    ) as client:
        yield client


@pytest.fixture
async def raw_backend(backend_app):
    """Plain httpx client against the mock backend, for wire-level checks."""
    async with httpx.AsyncClient(base_url=BASE_URL, transport=httpx.ASGITransport(app=backend_app)) as client:
        yield client
