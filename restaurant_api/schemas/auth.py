"""Authentication-related request schemas."""

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from restaurant_api.models.user import OWNER_ROLE_CODE, ROLE_CODES


def _normalize_email(value: str) -> str:
    email = value.strip().lower()
    local, _, domain = email.partition("@")
    if not local or "." not in domain:
        raise ValueError("Invalid email")
    return email


class RegisterRequest(BaseModel):
    """Payload for user registration."""

    email: str
    password: str = Field(min_length=6, max_length=128)
    name: str | None = None

    @field_validator("email")
    @classmethod
    def check_email(cls, value: str) -> str:
        return _normalize_email(value)


class LoginRequest(BaseModel):
    """Payload for user login."""

    email: str
    password: str

    @field_validator("email")
    @classmethod
    def strip_email(cls, value: str) -> str:
        return value.strip().lower()


class RoleUpgradeRequest(BaseModel):
    """Role change payload; code ``1`` makes the user owner of ``restaurantId``."""

    user_role: int = Field(alias="userRole")
    restaurant_id: int | None = Field(default=None, alias="restaurantId")

    model_config = ConfigDict(populate_by_name=True)

    @field_validator("user_role")
    @classmethod
    def known_role(cls, value: int) -> int:
        if value not in ROLE_CODES:
            raise ValueError(f"userRole must be one of {sorted(ROLE_CODES)}")
        return value

    @model_validator(mode="after")
    def owner_needs_restaurant(self) -> "RoleUpgradeRequest":
        if self.user_role == OWNER_ROLE_CODE and self.restaurant_id is None:
            raise ValueError("restaurantId is required when upgrading to owner")
        return self

    @property
    def is_owner_upgrade(self) -> bool:
        return self.user_role == OWNER_ROLE_CODE
