import pytest
from pydantic import ValidationError

from weather_dashboard.client.models import (
    ErrorResponse, ForecastRequest, ProfileUpdate, UserProfile
)


def test_profile_accepts_wire_and_attribute_names(profile_payload):
    from_wire = UserProfile.model_validate(profile_payload)
    from_attrs = UserProfile(
        user_id="u1",
        name="Alice",
        is_authenticated=True,
        temp_unit="fahrenheit",
        wind_unit="knots",
        default_location="Paris"
    )

    assert from_wire == from_attrs
    assert from_attrs.to_wire() == profile_payload


@pytest.mark.parametrize("field, value", [
    ("tempUnit", "kelvin"),
    ("windUnit", "mph"),
])
def test_profile_rejects_unknown_units(profile_payload, field, value):
    with pytest.raises(ValidationError):
        UserProfile.model_validate({**profile_payload, field: value})


def test_profile_update_serializes_set_fields_only():
    assert ProfileUpdate(name="Bob", wind_unit="ms").to_wire() == {"name": "Bob", "windUnit": "ms"}
    assert ProfileUpdate().to_wire() == {}


def test_forecast_request_defaults():
    request = ForecastRequest(location="Paris", days=3)

    assert request.to_params() == {
        "location": "Paris",
        "days": 3,
        "include_aqi": False,
        "include_alerts": False,
        "include_hourly": False,
    }


def test_forecast_request_does_not_bound_days():
    assert ForecastRequest(location="Paris", days=30).days == 30


def test_forecast_request_requires_location():
    with pytest.raises(ValidationError):
        ForecastRequest(location="", days=3)


def test_error_response_details_optional():
    body = ErrorResponse.model_validate({"error": {"code": 404, "message": "API endpoint not found"}})

    assert body.error.code == 404
    assert body.error.details is None
