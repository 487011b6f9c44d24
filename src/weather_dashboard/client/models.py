"""Data models for the weather dashboard API."""

from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

TemperatureUnit = Literal["celsius", "fahrenheit"]
WindUnit = Literal["kmh", "knots", "ms"]


class WireModel(BaseModel):
    """Base for models whose wire names are camelCase."""
    model_config = ConfigDict(populate_by_name=True)

    def to_wire(self) -> dict:
        """Serialize using wire names, leaving out unset fields."""
        return self.model_dump(by_alias=True, exclude_unset=True)


class UserProfile(WireModel):
    """A user's saved dashboard preferences."""
    user_id: str = Field(..., alias="userId", description="User identifier")
    name: str = Field(..., description="Display name")
    is_authenticated: bool = Field(False, alias="isAuthenticated", description="Whether a session backs this profile")
    temp_unit: TemperatureUnit = Field("celsius", alias="tempUnit", description="Temperature unit")
    wind_unit: WindUnit = Field("kmh", alias="windUnit", description="Wind speed unit")
    default_location: str = Field("", alias="defaultLocation", description="Location shown on start")

    def to_wire(self) -> dict:
        # A full profile is always sent whole
        return self.model_dump(by_alias=True)


class ProfileUpdate(WireModel):
    """Partial profile; only the fields that are set get sent."""
    user_id: Optional[str] = Field(None, alias="userId")
    name: Optional[str] = None
    is_authenticated: Optional[bool] = Field(None, alias="isAuthenticated")
    temp_unit: Optional[TemperatureUnit] = Field(None, alias="tempUnit")
    wind_unit: Optional[WindUnit] = Field(None, alias="windUnit")
    default_location: Optional[str] = Field(None, alias="defaultLocation")


class LoginRequest(WireModel):
    """Legacy credential login payload."""
    user_id: str = Field(..., alias="userId")
    name: str


class LoginResponse(WireModel):
    """Legacy credential login result. session_id is only meaningful on success."""
    success: bool
    user_id: str = Field("", alias="userId")
    name: str = ""
    session_id: str = Field("", alias="sessionId")


class AuthRedirect(WireModel):
    """Body of GET /auth/login."""
    redirect_url: str = Field(..., alias="redirectUrl", description="Identity provider authorization URL")


class WeatherCondition(BaseModel):
    text: str
    icon: str
    code: int


class Location(BaseModel):
    """Location the weather data refers to."""
    name: str
    region: str
    country: str
    lat: float = Field(..., ge=-90, le=90, description="Latitude in decimal degrees")
    lon: float = Field(..., ge=-180, le=180, description="Longitude in decimal degrees")
    tz_id: str = Field(..., description="Timezone identifier")
    localtime_epoch: int
    localtime: str


class CurrentWeather(BaseModel):
    """Current conditions, every measurement in metric and imperial units."""
    last_updated_epoch: int
    last_updated: str
    temp_c: float
    temp_f: float
    is_day: int
    condition: WeatherCondition
    wind_mph: float
    wind_kph: float
    wind_degree: int
    wind_dir: str
    pressure_mb: float
    pressure_in: float
    precip_mm: float
    precip_in: float
    humidity: int
    cloud: int
    feelslike_c: float
    feelslike_f: float
    vis_km: float
    vis_miles: float
    uv: float
    gust_mph: float
    gust_kph: float


class WeatherResponse(BaseModel):
    """Current weather response model."""
    location: Location
    current: CurrentWeather


class Astronomy(BaseModel):
    sunrise: str
    sunset: str
    moonrise: str
    moonset: str
    moon_phase: str
    moon_illumination: float


class ForecastDay(BaseModel):
    """Daily aggregates of a forecast day."""
    maxtemp_c: float
    maxtemp_f: float
    mintemp_c: float
    mintemp_f: float
    avgtemp_c: float
    avgtemp_f: float
    maxwind_mph: float
    maxwind_kph: float
    totalprecip_mm: float
    totalprecip_in: float
    avghumidity: float
    daily_will_it_rain: int
    daily_chance_of_rain: int
    uv: float
    condition: WeatherCondition


class ForecastHour(BaseModel):
    time_epoch: int
    time: str
    temp_c: float
    temp_f: float
    is_day: int
    condition: WeatherCondition
    wind_mph: float
    wind_kph: float
    wind_degree: int
    wind_dir: str
    humidity: int
    cloud: int
    precip_mm: float
    chance_of_rain: int


class ForecastDaily(BaseModel):
    """One forecast day; hours are present only when hourly data was requested."""
    date: str = Field(..., description="Date in YYYY-MM-DD format")
    date_epoch: int
    day: ForecastDay
    astro: Astronomy
    hour: Optional[List[ForecastHour]] = None


class Forecast(BaseModel):
    forecastday: List[ForecastDaily] = Field(..., description="Days in ascending date order")


class ForecastResponse(BaseModel):
    """Multi-day forecast response model."""
    location: Location
    forecast: Forecast


class ForecastRequest(BaseModel):
    """Query parameters for a forecast. days is bounded by the server, not here."""
    location: str = Field(..., min_length=1)
    days: int
    include_aqi: bool = False
    include_alerts: bool = False
    include_hourly: bool = False

    def to_params(self) -> dict:
        return {
            "location": self.location,
            "days": self.days,
            "include_aqi": self.include_aqi,
            "include_alerts": self.include_alerts,
            "include_hourly": self.include_hourly,
        }


class ApiError(BaseModel):
    """Structured failure payload."""
    code: int
    message: str
    details: Optional[str] = None


class ErrorResponse(BaseModel):
    """Error body returned by the backend on any failure."""
    error: ApiError
