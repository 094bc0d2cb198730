"""Use case for creating users from administrative scripts."""

from sqlalchemy.orm import Session

from life_agent.domain.entities import User
from life_agent.infrastructure.repositories import UserRepository
from life_agent.infrastructure.security import get_password_hash


def create_user(
    session: Session,
    *,
    name: str,
    email: str,
    password: str,
    is_active: bool = True,
) -> User:
    """Create a new user ensuring unique email addresses."""

    repository = UserRepository(session)

    if not email or "@" not in email:
        raise ValueError("A valid email address is required")
    if repository.get_by_email(email):
        raise ValueError("Email address is already registered")
    if len(password) < 8:
        raise ValueError("Password must be at least 8 characters long")

    user = User(
        id=None,
        name=name,
        email=email,
        password=get_password_hash(password),
        is_active=is_active,
    )
    return repository.create(user)
