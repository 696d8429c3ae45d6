"""Request dependencies: settings, token service and the authenticated user."""

import logging

from fastapi import Depends, Request
from sqlalchemy.orm import Session

from restaurant_api.core.config import Settings
from restaurant_api.core.errors import (
    AuthenticationTokenMissingError,
    InvalidTokenError,
    WrongAuthenticationTokenError,
)
from restaurant_api.core.security import AUTH_COOKIE_NAME, TokenService
from restaurant_api.db.session import get_db
from restaurant_api.models.user import User
from restaurant_api.services.user_service import get_user_by_id

logger = logging.getLogger(__name__)


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_token_service(request: Request) -> TokenService:
    return request.app.state.token_service


def get_current_user(
    request: Request,
    db: Session = Depends(get_db),
    tokens: TokenService = Depends(get_token_service),
) -> User:
    """Resolve the authenticated user from the ``Authorization`` cookie."""
    token = request.cookies.get(AUTH_COOKIE_NAME)
    if not token:
        raise AuthenticationTokenMissingError()

    try:
        user_id = tokens.verify(token)
    except InvalidTokenError as exc:
        logger.info("[AUTH] Rejected token: %s", exc)
        raise WrongAuthenticationTokenError() from exc

    user = get_user_by_id(db=db, user_id=user_id)
    if user is None:
        raise WrongAuthenticationTokenError()
    return user
