"""API endpoints of the mock dashboard backend."""

import logging
import secrets
from datetime import datetime, timezone
from typing import Dict, Optional
from urllib.parse import urlencode

from fastapi import APIRouter, Body, Cookie, Query, Request, Response

from weather_dashboard.config import (
    DEFAULT_LOCATION, DEFAULT_USER_ID, DEFAULT_USER_NAME,
    FORECAST_MAX_DAYS, FORECAST_MIN_DAYS, SESSION_COOKIE_NAME
)
from weather_dashboard.client.models import (
    AuthRedirect, ForecastResponse, LoginResponse, UserProfile,
    WeatherResponse
)
from weather_dashboard.mock.weather_data import build_current, build_forecast

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["dashboard"])

# Only these wire fields are editable; userId and isAuthenticated belong to the session.
# Unknown unit values fall back to the first unit listed.
TEMP_UNITS = ("celsius", "fahrenheit")
WIND_UNITS = ("kmh", "knots", "ms")


def profile_changes(payload: dict) -> dict:
    """Map a profile body to model field updates, ignoring non-string values."""
    changes = {}
    if isinstance(payload.get("name"), str):
        changes["name"] = payload["name"]
    if isinstance(payload.get("tempUnit"), str):
        unit = payload["tempUnit"]
        changes["temp_unit"] = unit if unit in TEMP_UNITS else TEMP_UNITS[0]
    if isinstance(payload.get("windUnit"), str):
        unit = payload["windUnit"]
        changes["wind_unit"] = unit if unit in WIND_UNITS else WIND_UNITS[0]
    if isinstance(payload.get("defaultLocation"), str):
        changes["default_location"] = payload["defaultLocation"]
    return changes


class DashboardError(Exception):
    """Rendered as {"error": {"code": status_code, "message": message}}."""

    def __init__(self, status_code: int, message: str):
        super().__init__(message)
        self.status_code = status_code
        self.message = message


class DashboardState:
    """In-memory sessions and profiles of one mock backend instance."""

    def __init__(self, oidc_authorization_url: str = ""):
        self.oidc_authorization_url = oidc_authorization_url
        self.guest_profile = UserProfile(
            user_id=DEFAULT_USER_ID,
            name=DEFAULT_USER_NAME,
            is_authenticated=False,
            temp_unit="celsius",
            wind_unit="kmh",
            default_location=DEFAULT_LOCATION
        )
        self.sessions: Dict[str, str] = {}
        self.profiles: Dict[str, UserProfile] = {}

    def create_session(self, user_id: str, name: str) -> str:
        session_id = secrets.token_hex(32)
        self.sessions[session_id] = user_id
        if user_id not in self.profiles:
            self.profiles[user_id] = self.guest_profile.model_copy(
                update={"user_id": user_id, "name": name, "is_authenticated": True}
            )
        return session_id

    def destroy_session(self, session_id: Optional[str]) -> None:
        if session_id:
            self.sessions.pop(session_id, None)

    def current_profile(self, session_id: Optional[str]) -> UserProfile:
        user_id = self.sessions.get(session_id) if session_id else None
        if user_id is None:
            return self.guest_profile
        return self.profiles[user_id]

    def save_profile(self, session_id: Optional[str], profile: UserProfile) -> None:
        user_id = self.sessions.get(session_id) if session_id else None
        if user_id is None:
            self.guest_profile = profile
        else:
            self.profiles[user_id] = profile


def get_state(request: Request) -> DashboardState:
    return request.app.state.dashboard


@router.get("/profile", response_model=UserProfile, response_model_by_alias=True)
async def get_profile(
    request: Request,
    session_id: Optional[str] = Cookie(None, alias=SESSION_COOKIE_NAME)
) -> UserProfile:
    return get_state(request).current_profile(session_id)


@router.api_route("/profile", methods=["PUT", "POST"], response_model=UserProfile, response_model_by_alias=True)
async def update_profile(
    request: Request,
    payload: dict = Body(...),
    session_id: Optional[str] = Cookie(None, alias=SESSION_COOKIE_NAME)
) -> UserProfile:
    """Apply a partial profile update and return the stored profile."""
    state = get_state(request)
    changes = profile_changes(payload)
    profile = state.current_profile(session_id).model_copy(update=changes)
    state.save_profile(session_id, profile)
    logger.info(f"Updated profile of '{profile.user_id}': {sorted(changes)}")
    return profile


@router.post("/login", response_model=LoginResponse, response_model_by_alias=True)
async def login(request: Request, response: Response, payload: dict = Body(...)) -> LoginResponse:
    """Legacy credential login, kept for backwards compatibility."""
    user_id = payload.get("userId")
    name = payload.get("name")
    if not isinstance(user_id, str) or not isinstance(name, str):
        raise DashboardError(400, "Missing userId or name")

    session_id = get_state(request).create_session(user_id, name)
    response.set_cookie(SESSION_COOKIE_NAME, session_id, path="/", httponly=True, samesite="lax")
    logger.info(f"Legacy login for '{user_id}'")
    return LoginResponse(success=True, user_id=user_id, name=name, session_id=session_id)


@router.get("/auth/login", response_model=AuthRedirect, response_model_by_alias=True)
async def auth_login(request: Request) -> AuthRedirect:
    """Hand out the identity provider URL for delegated sign-on."""
    state = get_state(request)
    if not state.oidc_authorization_url:
        raise DashboardError(501, "OIDC authentication not configured")

    query = urlencode({"response_type": "code", "state": secrets.token_urlsafe(48)})
    return AuthRedirect(redirect_url=f"{state.oidc_authorization_url}?{query}")


@router.post("/logout")
async def logout(
    request: Request,
    response: Response,
    session_id: Optional[str] = Cookie(None, alias=SESSION_COOKIE_NAME)
) -> dict:
    get_state(request).destroy_session(session_id)
    response.delete_cookie(SESSION_COOKIE_NAME, path="/", httponly=True)
    return {"success": True}


@router.get("/weather/current", response_model=WeatherResponse)
async def get_current_weather(
    location: Optional[str] = Query(None, description="Location name"),
    include_aqi: bool = Query(False)
) -> WeatherResponse:
    if not location:
        raise DashboardError(400, "Missing 'location' parameter")
    return build_current(location, datetime.now(timezone.utc))


@router.get("/weather/forecast", response_model=ForecastResponse, response_model_exclude_none=True)
async def get_forecast(
    location: Optional[str] = Query(None, description="Location name"),
    days: Optional[str] = Query(None, description=f"Number of days ({FORECAST_MIN_DAYS}-{FORECAST_MAX_DAYS})"),
    include_aqi: bool = Query(False),
    include_alerts: bool = Query(False),
    include_hourly: bool = Query(False)
) -> ForecastResponse:
    if not location or days is None:
        raise DashboardError(400, "Missing 'location' or 'days' parameter")

    try:
        day_count = int(days)
    except ValueError:
        day_count = 0

    if not FORECAST_MIN_DAYS <= day_count <= FORECAST_MAX_DAYS:
        raise DashboardError(
            400, f"Invalid days parameter (must be {FORECAST_MIN_DAYS}-{FORECAST_MAX_DAYS})"
        )

    return build_forecast(location, day_count, include_hourly, datetime.now(timezone.utc))
