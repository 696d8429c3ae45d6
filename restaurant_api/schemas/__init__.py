"""Schema exports."""

from restaurant_api.schemas.auth import LoginRequest, RegisterRequest, RoleUpgradeRequest
from restaurant_api.schemas.restaurant import (
    AddressCreate,
    AddressRead,
    AddressUpdate,
    RestaurantCreate,
    RestaurantRead,
    RestaurantUpdate,
)
from restaurant_api.schemas.user import UserRead

__all__ = [
    "LoginRequest",
    "RegisterRequest",
    "RoleUpgradeRequest",
    "AddressCreate",
    "AddressRead",
    "AddressUpdate",
    "RestaurantCreate",
    "RestaurantRead",
    "RestaurantUpdate",
    "UserRead",
]
