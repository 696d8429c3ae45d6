"""Restaurant CRUD with duplicate detection and owner checks."""

from __future__ import annotations

import logging

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, joinedload

from restaurant_api.core.errors import (
    NotAuthorizedError,
    RestaurantAlreadyExistsError,
    RestaurantNotFoundError,
)
from restaurant_api.models.restaurant import Address, Restaurant
from restaurant_api.models.user import User
from restaurant_api.schemas.restaurant import RestaurantCreate, RestaurantRead, RestaurantUpdate

logger = logging.getLogger(__name__)
REQUIRED_FIELDS = {"name", "email", "street", "city"}


def list_restaurants(db: Session, skip: int = 0, limit: int = 100) -> list[Restaurant]:
    return list(
        db.scalars(
            select(Restaurant)
            .options(joinedload(Restaurant.address))
            .order_by(Restaurant.id.asc())
            .offset(skip)
            .limit(limit)
        ).all()
    )


def get_restaurant(db: Session, restaurant_id: int) -> Restaurant:
    restaurant = db.get(Restaurant, restaurant_id)
    if restaurant is None:
        raise RestaurantNotFoundError(restaurant_id)
    return restaurant


def _street_taken(db: Session, street: str, exclude_id: int | None = None) -> bool:
    query = select(Address.id).where(Address.street == street)
    if exclude_id is not None:
        query = query.where(Address.id != exclude_id)
    return db.scalar(query.limit(1)) is not None


def _email_taken(db: Session, email: str, exclude_id: int | None = None) -> bool:
    query = select(Restaurant.id).where(Restaurant.email == email)
    if exclude_id is not None:
        query = query.where(Restaurant.id != exclude_id)
    return db.scalar(query.limit(1)) is not None


def ensure_can_modify(user: User, restaurant: Restaurant) -> None:
    """Owned restaurants can only be changed by their owner."""
    if restaurant.owner_id is not None and restaurant.owner_id != user.id:
        raise NotAuthorizedError()


def create_restaurant(db: Session, payload: RestaurantCreate) -> Restaurant:
    """Create the address and the restaurant in one transaction."""
    if _street_taken(db, payload.address.street):
        raise RestaurantAlreadyExistsError(payload.address.street, "address")
    if _email_taken(db, payload.email):
        raise RestaurantAlreadyExistsError(payload.email, "email")

    try:
        address = Address(**payload.address.model_dump())
        db.add(address)
        db.flush()
        restaurant = Restaurant(
            name=payload.name,
            email=payload.email,
            phone=payload.phone,
            address=address,
        )
        db.add(restaurant)
        db.commit()
    except IntegrityError as exc:
        db.rollback()
        raise RestaurantAlreadyExistsError(payload.email, "email or address") from exc
    db.refresh(restaurant)
    logger.info("[RESTAURANT] Created restaurant_id=%s", restaurant.id)
    return restaurant


def _drop_required_nulls(changes: dict) -> dict:
    return {field: value for field, value in changes.items() if value is not None or field not in REQUIRED_FIELDS}


def update_restaurant(db: Session, actor: User, restaurant_id: int, payload: RestaurantUpdate) -> Restaurant:
    """Apply provided fields, including nested address fields."""
    restaurant = get_restaurant(db, restaurant_id)
    ensure_can_modify(actor, restaurant)

    changes = _drop_required_nulls(payload.model_dump(exclude_unset=True, exclude={"address"}))
    address_changes = (
        _drop_required_nulls(payload.address.model_dump(exclude_unset=True)) if payload.address is not None else {}
    )

    new_email = changes.get("email")
    if new_email is not None and _email_taken(db, new_email, exclude_id=restaurant.id):
        raise RestaurantAlreadyExistsError(new_email, "email")
    new_street = address_changes.get("street")
    if new_street is not None and _street_taken(db, new_street, exclude_id=restaurant.address_id):
        raise RestaurantAlreadyExistsError(new_street, "address")

    for field, value in changes.items():
        setattr(restaurant, field, value)
    for field, value in address_changes.items():
        setattr(restaurant.address, field, value)

    try:
        db.commit()
    except IntegrityError as exc:
        db.rollback()
        raise RestaurantAlreadyExistsError(new_email or new_street or "", "email or address") from exc
    db.refresh(restaurant)
    return restaurant


def delete_restaurant(db: Session, actor: User, restaurant_id: int) -> RestaurantRead:
    """Delete a restaurant and its address; returns a snapshot of the deleted row.

    A former owner goes back to the regular role in the same transaction.
    """
    restaurant = get_restaurant(db, restaurant_id)
    ensure_can_modify(actor, restaurant)
    snapshot = RestaurantRead.model_validate(restaurant)
    if restaurant.owner is not None:
        restaurant.owner.role = "REGULAR"
    db.delete(restaurant)
    db.commit()
    logger.info("[RESTAURANT] Deleted restaurant_id=%s", restaurant_id)
    return snapshot
