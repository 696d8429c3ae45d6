"""Application models package."""

from restaurant_api.models.restaurant import Address, Restaurant
from restaurant_api.models.user import User

__all__ = ["User", "Restaurant", "Address"]
