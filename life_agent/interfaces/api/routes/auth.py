"""Endpoint that exchanges credentials for a bearer token."""

import logging

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.security import OAuth2PasswordRequestForm
from sqlalchemy.orm import Session

from life_agent.application.use_cases.users import AuthenticationStatus, authenticate_user
from life_agent.config import Settings
from life_agent.infrastructure.database import get_db
from life_agent.infrastructure.security import create_user_access_token
from life_agent.interfaces.api.dependencies import get_settings_from_app
from life_agent.interfaces.api.schemas import Token

router = APIRouter(prefix="/auth", tags=["auth"])
logger = logging.getLogger(__name__)


# OAuth2PasswordRequestForm carries the email in ``username``.
@router.post("/token", response_model=Token)
def login_for_access_token(
    form_data: OAuth2PasswordRequestForm = Depends(),
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings_from_app),
):
    """Authenticate the user by email and return a JWT."""

    user, auth_status = authenticate_user(db, form_data.username, form_data.password)

    if auth_status is AuthenticationStatus.INVALID_CREDENTIALS:
        logger.info("Rejected login for %s", form_data.username)
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Incorrect email or password",
            headers={"WWW-Authenticate": "Bearer"},
        )

    if auth_status is AuthenticationStatus.INACTIVE:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Inactive user",
            headers={"WWW-Authenticate": "Bearer"},
        )

    access_token = create_user_access_token(user, settings=settings)
    return {"access_token": access_token, "token_type": "bearer"}
