"""Login method variants and legacy payload resolution."""

from typing import Any, Mapping, Optional, Union

from pydantic import BaseModel, Field

from weather_dashboard.client.models import LoginRequest, WireModel


class LegacyCredentials(WireModel):
    """Direct credential login against POST /login."""
    user_id: Optional[str] = Field(None, alias="userId")
    name: Optional[str] = None

    def to_wire(self) -> dict:
        return self.model_dump(by_alias=True, exclude_none=True)


class DelegatedSignOn(BaseModel):
    """Sign-on delegated to the identity provider behind GET /auth/login."""


class LoginRedirect(BaseModel):
    """Outcome of delegated sign-on: the caller must navigate to redirect_url.

    The session is established later, when the identity provider sends the
    browser back to the dashboard.
    """
    redirect_url: str


LoginMethod = Union[LegacyCredentials, DelegatedSignOn]


def resolve_login_method(
    payload: Union[LoginRequest, Mapping[str, Any], None],
    use_legacy: bool = False
) -> LoginMethod:
    """Pick the login method for an untagged payload.

    Legacy credentials are used when explicitly requested or when the payload
    carries both a user identifier and a name; anything else goes through
    delegated sign-on.
    """
    if isinstance(payload, LoginRequest):
        payload = payload.to_wire()
    payload = dict(payload or {})

    user_id = payload.get("userId", payload.get("user_id"))
    name = payload.get("name")

    if use_legacy or (user_id and name):
        return LegacyCredentials(user_id=user_id, name=name)
    return DelegatedSignOn()
