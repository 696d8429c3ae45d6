"""Restaurant and address schemas."""

from pydantic import BaseModel, ConfigDict, Field


class AddressCreate(BaseModel):
    street: str = Field(min_length=1, max_length=255)
    city: str = Field(min_length=1, max_length=128)
    region: str | None = None
    postal_code: str | None = None


class AddressUpdate(BaseModel):
    street: str | None = Field(default=None, min_length=1, max_length=255)
    city: str | None = Field(default=None, min_length=1, max_length=128)
    region: str | None = None
    postal_code: str | None = None


class AddressRead(AddressCreate):
    id: int

    model_config = ConfigDict(from_attributes=True)


class RestaurantCreate(BaseModel):
    """Payload for creating a restaurant together with its address."""

    name: str = Field(min_length=1, max_length=255)
    email: str = Field(min_length=3, max_length=255)
    phone: str | None = None
    address: AddressCreate


class RestaurantUpdate(BaseModel):
    """Partial update; only provided fields are applied."""

    name: str | None = Field(default=None, min_length=1, max_length=255)
    email: str | None = Field(default=None, min_length=3, max_length=255)
    phone: str | None = None
    address: AddressUpdate | None = None


class RestaurantRead(BaseModel):
    id: int
    name: str
    email: str
    phone: str | None = None
    owner_id: int | None = None
    address: AddressRead

    model_config = ConfigDict(from_attributes=True)
