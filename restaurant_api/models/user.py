"""User ORM model and role helpers."""

from datetime import datetime, timezone

from sqlalchemy import DateTime, Enum, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from restaurant_api.db.base import Base

USER_ROLES = ("REGULAR", "OWNER")
ROLE_CODES: dict[int, str] = {0: "REGULAR", 1: "OWNER"}
OWNER_ROLE_CODE = 1


def role_from_code(code: int) -> str:
    """Translate a wire role code into a stored role name."""
    try:
        return ROLE_CODES[code]
    except KeyError as exc:
        raise ValueError(f"Invalid role code: {code}") from exc


class User(Base):
    """Account that logs in with email and password."""

    __tablename__ = "users"

    id: Mapped[int] = mapped_column(primary_key=True)
    email: Mapped[str] = mapped_column(String(255), nullable=False, unique=True, index=True)
    name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)
    role: Mapped[str] = mapped_column(Enum(*USER_ROLES, name="user_role"), nullable=False, default="REGULAR")
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

    restaurant: Mapped["Restaurant | None"] = relationship(back_populates="owner", uselist=False)

    @property
    def restaurant_id(self) -> int | None:
        return self.restaurant.id if self.restaurant is not None else None
