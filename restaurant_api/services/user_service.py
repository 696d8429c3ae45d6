"""User service operations."""

from sqlalchemy import select
from sqlalchemy.orm import Session

from restaurant_api.models.user import User


def get_user_by_email(db: Session, email: str) -> User | None:
    return db.scalar(select(User).where(User.email == email).limit(1))


def get_user_by_id(db: Session, user_id: int) -> User | None:
    return db.get(User, user_id)


def create_user(
    db: Session,
    email: str,
    hashed_password: str,
    name: str | None = None,
    role: str = "REGULAR",
) -> User:
    user = User(email=email, password_hash=hashed_password, name=name, role=role)
    db.add(user)
    db.commit()
    db.refresh(user)
    return user
