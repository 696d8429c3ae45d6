"""Registration, login and role-upgrade flows."""

from __future__ import annotations

import logging

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from restaurant_api.core.errors import (
    EmailAlreadyRegisteredError,
    InternalError,
    NotAuthorizedError,
    RestaurantAlreadyOwnedError,
    RestaurantNotFoundError,
    WrongCredentialsError,
)
from restaurant_api.core.security import TokenData, TokenService, get_password_hash, verify_password
from restaurant_api.models.restaurant import Restaurant
from restaurant_api.models.user import User, role_from_code
from restaurant_api.schemas.auth import RegisterRequest, RoleUpgradeRequest
from restaurant_api.services.user_service import create_user, get_user_by_email

logger = logging.getLogger(__name__)


def register(db: Session, tokens: TokenService, payload: RegisterRequest) -> tuple[User, TokenData]:
    """Create a regular user and issue its first token."""
    if get_user_by_email(db=db, email=payload.email) is not None:
        raise EmailAlreadyRegisteredError()
    try:
        user = create_user(
            db=db,
            email=payload.email,
            hashed_password=get_password_hash(payload.password),
            name=payload.name,
        )
    except IntegrityError as exc:
        db.rollback()
        raise EmailAlreadyRegisteredError() from exc
    logger.info("[AUTH] Registered user_id=%s", user.id)
    return user, tokens.issue(user.id)


def login(db: Session, tokens: TokenService, email: str, password: str) -> tuple[User, TokenData]:
    """Check credentials; unknown email and wrong password fail the same way."""
    user = get_user_by_email(db=db, email=email)
    if user is None or not verify_password(password, user.password_hash):
        logger.info("[AUTH] Failed login attempt")
        raise WrongCredentialsError()
    return user, tokens.issue(user.id)


def upgrade_role(
    db: Session,
    actor: User,
    user_id: int,
    payload: RoleUpgradeRequest,
) -> tuple[User, Restaurant | None]:
    """Change a user's role; code ``1`` also assigns them as restaurant owner.

    Only the user themself may change their role. User and restaurant are
    committed together, so a missing or foreign-owned restaurant leaves the
    user unchanged.
    """
    if actor.id != user_id:
        raise NotAuthorizedError()

    user = actor

    restaurant: Restaurant | None = None
    if payload.is_owner_upgrade:
        restaurant = db.get(Restaurant, payload.restaurant_id)
        if restaurant is None:
            raise RestaurantNotFoundError(payload.restaurant_id)
        if restaurant.owner_id is not None and restaurant.owner_id != user.id:
            raise RestaurantAlreadyOwnedError()

    try:
        if restaurant is not None:
            previous = user.restaurant
            if previous is not None and previous.id != restaurant.id:
                previous.owner = None
                db.flush()
            restaurant.owner = user
        user.role = role_from_code(payload.user_role)
        db.commit()
    except SQLAlchemyError as exc:
        db.rollback()
        logger.exception("[AUTH] Role upgrade failed for user_id=%s", user_id)
        raise InternalError("Could not update role") from exc

    db.refresh(user)
    if restaurant is not None:
        db.refresh(restaurant)
    logger.info("[AUTH] user_id=%s role set to %s", user.id, user.role)
    return user, restaurant
