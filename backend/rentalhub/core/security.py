# rentalhub/core/security.py

from datetime import timedelta
from typing import Any, Dict

from jose import jwt, JWTError
from passlib.context import CryptContext

from rentalhub.core.clock import utcnow
from rentalhub.core.config import settings

# --------------------------------------
# Password hashing config
# --------------------------------------
# Accounts are created by the seed script only; login lives in the auth service.
pwd_context = CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")


def get_password_hash(password: str) -> str:
    return pwd_context.hash(password)


# --------------------------------------
# Token helpers
# --------------------------------------

def create_access_token(data: Dict[str, Any]) -> str:
    """
    Mint an access token in the format the auth service issues.
    Used by the seed script and tests; this service never logs anyone in.
    """
    to_encode = data.copy()
    now = utcnow()
    to_encode.update(
        {
            "iat": now,
            "exp": now + timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES),
            "type": "access",
        }
    )
    return jwt.encode(to_encode, settings.JWT_SECRET_KEY, algorithm=settings.JWT_ALGORITHM)


def verify_access_token(token: str) -> Dict[str, Any]:
    """
    Decode and validate an *access* token.
    Used by get_current_principal.
    """
    payload = jwt.decode(
        token,
        settings.JWT_SECRET_KEY,
        algorithms=[settings.JWT_ALGORITHM],
    )

    if payload.get("type") != "access":
        raise JWTError("Invalid token type")

    if "user_id" not in payload:
        raise JWTError("Missing user_id in token")

    return payload
