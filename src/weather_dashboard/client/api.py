"""Async HTTP client for the weather dashboard API."""

import asyncio
import logging
from typing import Any, Dict, Mapping, Optional, Union

import httpx

from weather_dashboard.config import (
    API_BASE_URL, CONTENT_TYPE, REQUEST_TIMEOUT_SECONDS
)
from weather_dashboard.client.auth import (
    DelegatedSignOn, LegacyCredentials, LoginMethod, LoginRedirect,
    resolve_login_method
)
from weather_dashboard.client.errors import raise_for_error
from weather_dashboard.client.models import (
    AuthRedirect, ForecastRequest, ForecastResponse, LoginRequest,
    LoginResponse, ProfileUpdate, UserProfile, WeatherResponse
)

logger = logging.getLogger(__name__)

ProfilePayload = Union[UserProfile, ProfileUpdate, Mapping[str, Any]]


class WeatherDashboardAPI:
    """Async client for the weather dashboard backend.

    Every method issues exactly one request. Failed responses carrying an
    {"error": {...}} body raise WeatherDashboardError; any other failure
    propagates as the original httpx exception.
    """

    with_credentials = False
    profile_update_method = "PUT"

    def __init__(
        self,
        base_url: str = API_BASE_URL,
        timeout: float = REQUEST_TIMEOUT_SECONDS,
        transport: Optional[httpx.AsyncBaseTransport] = None
    ):
        """Initialize the dashboard client.

        Args:
            base_url: Base URL of the dashboard API, including the /api path
            timeout: Total time allowed per call, in seconds
            transport: Optional httpx transport, e.g. a mock for tests
        """
        self.base_url = base_url
        self.timeout = timeout
        self.client = httpx.AsyncClient(
            base_url=base_url,
            headers={"Content-Type": CONTENT_TYPE},
            timeout=timeout,
            transport=transport
        )

    async def _request(self, method: str, path: str, **kwargs) -> httpx.Response:
        logger.info(f"{method} {path}")
        request = self.client.build_request(method, path, **kwargs)
        try:
            # httpx timeouts apply per read; this bounds the whole call
            response = await asyncio.wait_for(self.client.send(request), timeout=self.timeout)
        except asyncio.TimeoutError as e:
            logger.error(f"Request to dashboard API timed out after {self.timeout}s: {method} {path}")
            raise httpx.TimeoutException(
                f"Request exceeded {self.timeout}s", request=request
            ) from e
        except httpx.RequestError as e:
            logger.error(f"Request error to dashboard API: {e}")
            raise
        finally:
            if not self.with_credentials:
                self.client.cookies.clear()

        raise_for_error(response)
        return response

    # Profile management
    async def get_profile(self) -> UserProfile:
        """Fetch the current user's profile."""
        response = await self._request("GET", "/profile")
        return UserProfile.model_validate(response.json())

    async def update_profile(self, profile: ProfilePayload) -> UserProfile:
        """Save a full or partial profile.

        Args:
            profile: UserProfile, ProfileUpdate or a dict of wire or attribute names

        Returns:
            The profile as stored by the backend
        """
        if not isinstance(profile, (UserProfile, ProfileUpdate)):
            profile = ProfileUpdate.model_validate(dict(profile))

        response = await self._request(
            self.profile_update_method, "/profile", json=profile.to_wire()
        )
        return UserProfile.model_validate(response.json())

    # Weather data
    async def get_current_weather(self, location: str, include_aqi: bool = False) -> WeatherResponse:
        """Fetch current conditions for a location.

        Raises:
            ValueError: If location is empty
            WeatherDashboardError: If the backend rejects the request
        """
        if not location:
            raise ValueError("location must be a non-empty string")

        response = await self._request(
            "GET", "/weather/current",
            params={"location": location, "include_aqi": include_aqi}
        )
        return WeatherResponse.model_validate(response.json())

    async def get_forecast(self, request: Union[ForecastRequest, Mapping[str, Any]]) -> ForecastResponse:
        """Fetch a multi-day forecast. Unset include_* flags are sent as false."""
        if not isinstance(request, ForecastRequest):
            request = ForecastRequest.model_validate(dict(request))

        response = await self._request("GET", "/weather/forecast", params=request.to_params())
        forecast = ForecastResponse.model_validate(response.json())
        logger.info(f"Received forecast with {len(forecast.forecast.forecastday)} days for {request.location}")
        return forecast

    async def aclose(self):
        """Close the async HTTP client."""
        await self.client.aclose()

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.aclose()


class AuthenticatedWeatherDashboardAPI(WeatherDashboardAPI):
    """Dashboard client that keeps the session cookie and can log in and out."""

    with_credentials = True
    profile_update_method = "POST"

    def __init__(
        self,
        base_url: str = API_BASE_URL,
        timeout: float = REQUEST_TIMEOUT_SECONDS,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        cookies: Optional[Dict[str, str]] = None
    ):
        """Initialize the authenticated client.

        Args:
            base_url: Base URL of the dashboard API, including the /api path
            timeout: Request timeout in seconds
            transport: Optional httpx transport, e.g. a mock for tests
            cookies: Initial cookies, e.g. an existing session_id
        """
        super().__init__(base_url=base_url, timeout=timeout, transport=transport)
        if cookies:
            self.client.cookies.update(cookies)

    async def login(
        self,
        method: Union[LoginMethod, LoginRequest, Mapping[str, Any], None] = None,
        use_legacy: bool = False
    ) -> Union[LoginResponse, LoginRedirect]:
        """Log in with legacy credentials or start delegated sign-on.

        Args:
            method: LegacyCredentials or DelegatedSignOn; a plain payload is
                resolved with resolve_login_method
            use_legacy: Force legacy login for a plain payload

        Returns:
            LoginResponse for legacy login, LoginRedirect for delegated sign-on
        """
        if not isinstance(method, (LegacyCredentials, DelegatedSignOn)):
            method = resolve_login_method(method, use_legacy=use_legacy)

        if isinstance(method, LegacyCredentials):
            response = await self._request("POST", "/login", json=method.to_wire())
            return LoginResponse.model_validate(response.json())

        return await self._start_delegated_sign_on()

    async def _start_delegated_sign_on(self) -> LoginRedirect:
        try:
            response = await self._request("GET", "/auth/login")
            redirect = AuthRedirect.model_validate(response.json())
        except Exception as e:
            logger.error(f"Delegated sign-on failed before redirect: {e}")
            raise

        logger.info("Delegated sign-on started, redirect required")
        return LoginRedirect(redirect_url=redirect.redirect_url)

    async def logout(self) -> None:
        """End the current session."""
        await self._request("POST", "/logout")
