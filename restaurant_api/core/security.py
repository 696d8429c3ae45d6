"""Security utilities for password hashing, JWT tokens and the auth cookie."""

from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Any

from fastapi import Response
from jose import JWTError, jwt
from passlib.context import CryptContext

from restaurant_api.core.errors import InvalidTokenError

AUTH_COOKIE_NAME = "Authorization"
TOKEN_EXPIRES_IN_SECONDS = 60 * 60

pwd_context: CryptContext = CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")


def get_password_hash(password: str) -> str:
    """Hash a plaintext password."""
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a plaintext password against its hash."""
    return pwd_context.verify(plain_password, hashed_password)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class TokenData:
    token: str
    expires_in: int


class TokenService:
    """Issue and verify signed, time-limited tokens carrying a user id.

    The secret comes from the settings the app was built with; there is no
    rotation and no revocation list, a token is valid until it expires.
    """

    def __init__(
        self,
        secret_key: str,
        algorithm: str = "HS256",
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self._secret_key = secret_key
        self._algorithm = algorithm
        self._clock = clock

    def issue(self, user_id: int) -> TokenData:
        """Create a signed token for ``user_id`` valid for one hour."""
        expire: datetime = self._clock() + timedelta(seconds=TOKEN_EXPIRES_IN_SECONDS)
        to_encode: dict[str, Any] = {"sub": str(user_id), "exp": expire}
        token = jwt.encode(to_encode, self._secret_key, algorithm=self._algorithm)
        return TokenData(token=token, expires_in=TOKEN_EXPIRES_IN_SECONDS)

    def verify(self, token: str) -> int:
        """Return the user id stored in ``token``.

        Raises:
            InvalidTokenError: signature mismatch, expired or malformed token.
        """
        try:
            payload: dict[str, Any] = jwt.decode(
                token,
                self._secret_key,
                algorithms=[self._algorithm],
            )
        except JWTError as exc:
            raise InvalidTokenError(str(exc)) from exc

        subject = payload.get("sub")
        try:
            return int(subject)
        except (TypeError, ValueError) as exc:
            raise InvalidTokenError("Token subject is not a user id") from exc


def set_auth_cookie(response: Response, token_data: TokenData, secure: bool = False) -> None:
    """Attach the HttpOnly session cookie carrying ``token_data``."""
    response.set_cookie(
        key=AUTH_COOKIE_NAME,
        value=token_data.token,
        max_age=token_data.expires_in,
        httponly=True,
        secure=secure,
        path="/",
    )


def clear_auth_cookie(response: Response) -> None:
    """Expire the session cookie immediately."""
    response.delete_cookie(key=AUTH_COOKIE_NAME, path="/", httponly=True)
