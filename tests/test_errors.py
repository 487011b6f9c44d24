import asyncio
import time

import httpx
import pytest

from weather_dashboard.client.api import WeatherDashboardAPI
from weather_dashboard.client.errors import WeatherDashboardError

from conftest import error_body


@pytest.mark.parametrize("status_code", [400, 401, 404, 429, 500, 503])
async def test_structured_error_is_normalized(make_api, status_code):
    api, _ = make_api(lambda request: httpx.Response(
        status_code, json=error_body(1006, "No matching location found.")
    ))

    with pytest.raises(WeatherDashboardError) as exc_info:
        await api.get_current_weather("Atlantis")

    error = exc_info.value
    assert str(error) == "No matching location found. (Code: 1006)"
    assert error.code == 1006
    assert error.message == "No matching location found."
    assert error.status_code == status_code
    assert error.__cause__ is None


async def test_structured_error_keeps_details(make_api):
    api, _ = make_api(lambda request: httpx.Response(
        400, json=error_body(400, "Invalid profile data", details="tempUnit must be celsius or fahrenheit")
    ))

    with pytest.raises(WeatherDashboardError) as exc_info:
        await api.update_profile({"name": "Alice"})

    assert exc_info.value.details == "tempUnit must be celsius or fahrenheit"
    assert str(exc_info.value) == "Invalid profile data (Code: 400)"


@pytest.mark.parametrize("response", [
    httpx.Response(502, text="Bad Gateway"),
    httpx.Response(500, json={"detail": "Internal Server Error"}),
    httpx.Response(404, json={"error": "not found"}),
    httpx.Response(400, json=[1, 2, 3]),
])
async def test_unstructured_error_propagates_unchanged(make_api, response):
    api, _ = make_api(lambda request: response)

    with pytest.raises(httpx.HTTPStatusError) as exc_info:
        await api.get_profile()

    assert exc_info.value.response.status_code == response.status_code
    assert "(Code:" not in str(exc_info.value)


async def test_timeout_propagates_as_transport_error(make_api):
    def handler(request):
        raise httpx.ReadTimeout("timed out", request=request)

    api, _ = make_api(handler)

    with pytest.raises(httpx.TimeoutException):
        await api.get_forecast({"location": "Paris", "days": 3})


async def test_connection_error_propagates(make_api):
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    api, _ = make_api(handler)

    with pytest.raises(httpx.ConnectError, match="connection refused"):
        await api.get_profile()


def test_error_message_format():
    error = WeatherDashboardError("Too many requests. Please try again later.", 429)
    assert str(error) == "Too many requests. Please try again later. (Code: 429)"
    assert error.details is None


@pytest.fixture
async def trickling_server():
    """Socket server that sends a profile body one byte every 0.1 s."""
    body = b'{"userId": "u1", "name": "Alice"}'

    async def handle(reader, writer):
        try:
            await reader.readuntil(b"\r\n\r\n")
            writer.write(
                b"HTTP/1.1 200 OK\r\n"
                b"Content-Type: application/json\r\n"
                b"Content-Length: " + str(len(body)).encode() + b"\r\n\r\n"
            )
            await writer.drain()
            for i in range(len(body)):
                writer.write(body[i:i + 1])
                await writer.drain()
                await asyncio.sleep(0.1)
        except (ConnectionError, asyncio.IncompleteReadError):
            pass
        finally:
            writer.close()

    server = await asyncio.start_server(handle, "127.0.0.1", 0)
    port = server.sockets[0].getsockname()[1]
    yield f"http://127.0.0.1:{port}/api"
    server.close()
    await server.wait_closed()


async def test_timeout_bounds_the_whole_call(trickling_server):
    async with WeatherDashboardAPI(base_url=trickling_server, timeout=0.5) as api:
        started = time.monotonic()
        with pytest.raises(httpx.TimeoutException):
            await api.get_profile()
        elapsed = time.monotonic() - started

    assert elapsed < 2.0
