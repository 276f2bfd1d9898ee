from datetime import datetime, timedelta, timezone
from typing import Optional, Dict, Any
from jose import JWTError, jwt
import bcrypt
import secrets

from personalbook.core.config import settings
from personalbook.core.exceptions import InvalidTokenError

SECRET_ID_MIN = 100000
SECRET_ID_MAX = 999999


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify password against a bcrypt hash (constant-time)"""
    if not hashed_password:
        return False
    # Bcrypt has a 72 byte limit - truncate password if necessary
    password_bytes = plain_password.encode('utf-8')[:72]
    try:
        return bcrypt.checkpw(password_bytes, hashed_password.encode('utf-8'))
    except ValueError:
        # Stored value is not a bcrypt hash
        return False


def get_password_hash(password: str) -> str:
    """Hash password with configurable rounds (BCRYPT_ROUNDS in .env)"""
    password_bytes = password.encode('utf-8')[:72]
    hashed = bcrypt.hashpw(password_bytes, bcrypt.gensalt(rounds=settings.BCRYPT_ROUNDS))
    return hashed.decode('utf-8')


def create_access_token(data: Dict[str, Any], expires_delta: Optional[timedelta] = None) -> str:
    """
    Create JWT access token.

    Tokens carry no exp claim unless expires_delta is given or
    ACCESS_TOKEN_EXPIRE_MINUTES is configured.
    """
    to_encode = data.copy()
    now = datetime.now(timezone.utc)

    if expires_delta is None and settings.ACCESS_TOKEN_EXPIRE_MINUTES:
        expires_delta = timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
    if expires_delta is not None:
        to_encode["exp"] = now + expires_delta

    to_encode.update({"iat": now, "type": "access"})
    return jwt.encode(to_encode, settings.JWT_SECRET_KEY, algorithm=settings.JWT_ALGORITHM)


def decode_token(token: str) -> Dict[str, Any]:
    """Decode JWT token, raising InvalidTokenError on a bad signature or expiry"""
    try:
        return jwt.decode(token, settings.JWT_SECRET_KEY, algorithms=[settings.JWT_ALGORITHM])
    except JWTError:
        raise InvalidTokenError()


def generate_secret_id() -> str:
    """Generate a 6-digit numeric secret id, uniform over [100000, 999999]"""
    return str(SECRET_ID_MIN + secrets.randbelow(SECRET_ID_MAX - SECRET_ID_MIN + 1))


def generate_public_link_key() -> str:
    """Generate an unguessable public link key"""
    return secrets.token_urlsafe(24)
