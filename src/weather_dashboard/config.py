"""Configuration settings for the weather dashboard client."""

import os
from typing import Final
from dotenv import load_dotenv

load_dotenv()

# API Configuration
DASHBOARD_URL: str = os.getenv("DASHBOARD_URL", "http://localhost:3001")
API_BASE_PATH: str = os.getenv("API_BASE_PATH", "/api")
API_BASE_URL: str = DASHBOARD_URL.rstrip("/") + "/" + API_BASE_PATH.strip("/")

REQUEST_TIMEOUT_SECONDS: Final[float] = 30.0
CONTENT_TYPE: Final[str] = "application/json; charset=utf-8"
SESSION_COOKIE_NAME: Final[str] = "session_id"

# Mock backend server configuration
HOST: str = os.getenv("HOST", "0.0.0.0")
PORT: int = int(os.getenv("PORT", "3001"))
DEBUG: bool = os.getenv("DEBUG", "false").lower() == "true"

# Empty disables delegated sign-on on the mock backend
OIDC_AUTHORIZATION_URL: str = os.getenv("OIDC_AUTHORIZATION_URL", "")

FORECAST_MIN_DAYS: Final[int] = 1
FORECAST_MAX_DAYS: Final[int] = 14

# Guest profile served when no session is present
DEFAULT_USER_ID: str = os.getenv("DEFAULT_USER_ID", "guest")
DEFAULT_USER_NAME: str = os.getenv("DEFAULT_USER_NAME", "Guest")
DEFAULT_LOCATION: str = os.getenv("DEFAULT_LOCATION", "London")
