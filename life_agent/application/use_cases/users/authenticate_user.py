"""Use case for authenticating a user."""

from enum import Enum, auto

from sqlalchemy.orm import Session

from life_agent.infrastructure.repositories import UserRepository
from life_agent.infrastructure.security import verify_password
from life_agent.utils import now_in_timezone


class AuthenticationStatus(Enum):
    """Possible outcomes when attempting to authenticate a user."""

    SUCCESS = auto()
    INVALID_CREDENTIALS = auto()
    INACTIVE = auto()


def authenticate_user(session: Session, email: str, password: str):
    """Return the authentication result along with the user when possible."""

    repository = UserRepository(session)
    user = repository.get_by_email(email)

    if not user:
        return None, AuthenticationStatus.INVALID_CREDENTIALS

    if not verify_password(password, user.password):
        return None, AuthenticationStatus.INVALID_CREDENTIALS

    if not user.is_active:
        return user, AuthenticationStatus.INACTIVE

    repository.record_login(user.id, now_in_timezone())
    return user, AuthenticationStatus.SUCCESS
