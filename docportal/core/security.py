"""
Security Helpers Module

Password generation, credential verification and JWT handling. Client passwords
are stored and compared in plaintext; verification goes through a
CredentialVerifier so a hashing verifier can replace it without touching callers.
"""
import secrets
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

from jose import jwt

from docportal.core.config import settings

PASSWORD_ALPHABET = "abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ0123456789!@#"
PASSWORD_LENGTH = 10


def generate_password(length: int = PASSWORD_LENGTH) -> str:
    """Generate a random client password from PASSWORD_ALPHABET."""
    return "".join(secrets.choice(PASSWORD_ALPHABET) for _ in range(length))


class CredentialVerifier:
    """Compares a supplied password against the stored credential."""

    def verify(self, supplied: str, stored: Optional[str]) -> bool:
        raise NotImplementedError


class PlaintextCredentialVerifier(CredentialVerifier):
    """
    Plain equality check against the stored password.

    Passwords are not hashed or salted. This is a known weakness of the
    current credential model.
    """

    def verify(self, supplied: str, stored: Optional[str]) -> bool:
        if stored is None or supplied is None:
            return False
        return secrets.compare_digest(supplied.encode("utf-8"), stored.encode("utf-8"))


def create_access_token(
    subject: str, role: str, expires_delta: Optional[timedelta] = None
) -> str:
    """
    Create a signed JWT carrying the session identity.

    Args:
        subject: "admin" for the administrator, otherwise the client id
        role: UserRole value of the session
        expires_delta: Token lifetime; defaults to ACCESS_TOKEN_EXPIRE_MINUTES
    """
    if expires_delta is None:
        expires_delta = timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
    expire = datetime.now(timezone.utc) + expires_delta
    to_encode = {"exp": expire, "sub": str(subject), "role": role}
    return jwt.encode(to_encode, settings.SECRET_KEY, algorithm=settings.ALGORITHM)


def decode_access_token(token: str) -> Dict[str, Any]:
    """Decode and validate a token. Raises jose.JWTError when invalid or expired."""
    return jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM])
