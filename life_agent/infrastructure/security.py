"""Security helpers for hashing and token generation."""

from datetime import datetime, timedelta, timezone
from hashlib import sha256

from jose import JWTError, jwt
from passlib.context import CryptContext

from life_agent.config import Settings
from life_agent.domain.entities import User

_ALGORITHM = "HS256"

pwd_context = CryptContext(
    schemes=["pbkdf2_sha256"],
    deprecated="auto",
    pbkdf2_sha256__rounds=310_000,
)


def get_password_hash(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    return pwd_context.verify(plain_password, hashed_password)


def password_signature(user: User) -> str:
    """Fingerprint of the stored hash; changing the password revokes older tokens."""

    return sha256(f"{user.password}:{int(user.is_active)}".encode()).hexdigest()


def create_access_token(
    data: dict, *, settings: Settings, expires_delta: timedelta | None = None
) -> str:
    expire = datetime.now(timezone.utc) + (
        expires_delta or timedelta(minutes=settings.access_token_expire_minutes)
    )
    return jwt.encode({**data, "exp": expire}, settings.secret_key, algorithm=_ALGORITHM)


def create_user_access_token(user: User, *, settings: Settings) -> str:
    return create_access_token(
        {"sub": user.email, "pwd_sig": password_signature(user)}, settings=settings
    )


def decode_access_token(token: str, *, settings: Settings) -> dict:
    try:
        return jwt.decode(token, settings.secret_key, algorithms=[_ALGORITHM])
    except JWTError as exc:
        raise ValueError("Could not validate credentials") from exc
