"""FastAPI dependency utilities."""

from secrets import compare_digest

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy.orm import Session

from life_agent.application.use_cases.notifications import NotificationDispatcher
from life_agent.config import Settings
from life_agent.domain.entities import User
from life_agent.infrastructure.database import get_db
from life_agent.infrastructure.repositories import (
    NotificationRepository,
    PushSubscriptionRepository,
    UserRepository,
)
from life_agent.infrastructure.security import decode_access_token, password_signature

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="auth/token")


def _credentials_error(detail: str = "Invalid credentials") -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


def get_settings_from_app(request: Request) -> Settings:
    return request.app.state.settings


def resolve_current_user(token: str, db: Session, settings: Settings) -> User:
    """Resolve the authenticated user for the provided token."""

    try:
        payload = decode_access_token(token, settings=settings)
    except ValueError as exc:
        raise _credentials_error() from exc

    email = payload.get("sub")
    signature_claim = payload.get("pwd_sig")
    if not isinstance(email, str) or not isinstance(signature_claim, str):
        raise _credentials_error()

    user = UserRepository(db).get_by_email(email)
    if user is None:
        raise _credentials_error("User not found")
    if not compare_digest(signature_claim, password_signature(user)):
        raise _credentials_error()
    return user


def get_current_user(
    token: str = Depends(oauth2_scheme),
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings_from_app),
) -> User:
    """Return the authenticated user from the provided token."""

    return resolve_current_user(token, db, settings)


def get_current_active_user(current_user: User = Depends(get_current_user)) -> User:
    """Ensure the authenticated user is active."""

    if not current_user.is_active:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Inactive user",
        )
    return current_user


def get_dispatcher(
    request: Request,
    db: Session = Depends(get_db),
) -> NotificationDispatcher:
    """Build a dispatcher wired to this request's session and the app's channels."""

    state = request.app.state
    return NotificationDispatcher(
        notifications=NotificationRepository(db),
        subscriptions=PushSubscriptionRepository(db),
        publisher=state.realtime_publisher,
        transport=state.push_transport,
        settings=state.settings,
        on_endpoint_gone=getattr(state, "on_endpoint_gone", None),
    )


def require_cron_secret(
    request: Request,
    settings: Settings = Depends(get_settings_from_app),
) -> None:
    """Reject cron calls without the configured bearer secret."""

    if not settings.cron_secret:
        return
    expected = f"Bearer {settings.cron_secret}"
    provided = request.headers.get("Authorization", "")
    if not compare_digest(provided.encode(), expected.encode()):
        raise _credentials_error("Invalid cron secret")
