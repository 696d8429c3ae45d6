"""User response schemas."""

from pydantic import BaseModel, ConfigDict


class UserRead(BaseModel):
    """Public view of a user; the password hash is never serialized."""

    id: int
    email: str
    name: str | None = None
    role: str
    restaurant_id: int | None = None

    model_config = ConfigDict(from_attributes=True)
