"""Authentication endpoints (cookie JWT)."""

from typing import Any

from fastapi import APIRouter, Depends, Response
from sqlalchemy.orm import Session

from restaurant_api.api.deps import get_current_user, get_settings, get_token_service
from restaurant_api.core.config import Settings
from restaurant_api.core.security import TokenService, clear_auth_cookie, set_auth_cookie
from restaurant_api.db.session import get_db
from restaurant_api.models.user import User
from restaurant_api.schemas.auth import LoginRequest, RegisterRequest, RoleUpgradeRequest
from restaurant_api.schemas.restaurant import RestaurantRead
from restaurant_api.schemas.user import UserRead
from restaurant_api.services import auth_service

router: APIRouter = APIRouter()


@router.post("/register", response_model=UserRead)
def register(
    payload: RegisterRequest,
    response: Response,
    db: Session = Depends(get_db),
    tokens: TokenService = Depends(get_token_service),
    settings: Settings = Depends(get_settings),
) -> UserRead:
    user, token_data = auth_service.register(db, tokens, payload)
    set_auth_cookie(response, token_data, secure=settings.cookie_secure)
    return UserRead.model_validate(user)


@router.post("/login", response_model=UserRead)
def login(
    payload: LoginRequest,
    response: Response,
    db: Session = Depends(get_db),
    tokens: TokenService = Depends(get_token_service),
    settings: Settings = Depends(get_settings),
) -> UserRead:
    user, token_data = auth_service.login(db, tokens, payload.email, payload.password)
    set_auth_cookie(response, token_data, secure=settings.cookie_secure)
    return UserRead.model_validate(user)


@router.post("/logout")
def logout(response: Response) -> dict[str, bool]:
    """Clear the session cookie; succeeds whether or not anyone is logged in."""
    clear_auth_cookie(response)
    return {"ok": True}


@router.get("/me", response_model=UserRead)
def me(current_user: User = Depends(get_current_user)) -> UserRead:
    return UserRead.model_validate(current_user)


@router.patch("/roleRequest/{user_id}", response_model=None)
def upgrade_role(
    user_id: int,
    payload: RoleUpgradeRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> dict[str, Any]:
    """Change the caller's role; the response includes the restaurant only for owner upgrades."""
    user, restaurant = auth_service.upgrade_role(db, current_user, user_id, payload)
    body: dict[str, Any] = {"user": UserRead.model_validate(user).model_dump()}
    if restaurant is not None:
        body["restaurant"] = RestaurantRead.model_validate(restaurant).model_dump()
    return body
