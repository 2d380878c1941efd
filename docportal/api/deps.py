"""
API Dependencies Module

This module provides FastAPI dependency functions for the stores, the document
analyzer and the session checks. The session token is accepted either as a
bearer token (API clients) or as the HTTP-only access_token cookie (browsers).
"""
from functools import lru_cache
from typing import Optional
from fastapi import Depends, HTTPException, Request, status
from fastapi.security import OAuth2PasswordBearer
from jose import JWTError
from pydantic import ValidationError
from sqlmodel import Session

from docportal.core.config import settings
from docportal.core.security import decode_access_token
from docportal.db.session import get_db
from docportal.models.user import UserRole
from docportal.schemas.auth import TokenData
from docportal.services.analyzer import DocumentAnalyzer, GeminiDocumentAnalyzer
from docportal.services.auth_gate import AuthGate, AuthSession
from docportal.services.credential_store import ClientStore
from docportal.services.document_store import DocumentStore

# auto_error=False allows us to check cookies as a fallback
reusable_oauth2 = OAuth2PasswordBearer(
    tokenUrl=f"{settings.API_V1_STR}/auth/login",
    auto_error=False
)


def get_client_store(db: Session = Depends(get_db)) -> ClientStore:
    return ClientStore(db)


def get_document_store(db: Session = Depends(get_db)) -> DocumentStore:
    return DocumentStore(db)


def get_auth_gate(clients: ClientStore = Depends(get_client_store)) -> AuthGate:
    return AuthGate(
        clients,
        admin_username=settings.ADMIN_USERNAME,
        admin_password=settings.ADMIN_PASSWORD,
    )


@lru_cache()
def get_analyzer() -> DocumentAnalyzer:
    return GeminiDocumentAnalyzer(
        api_key=settings.GEMINI_API_KEY or "",
        model=settings.GEMINI_MODEL,
        base_url=settings.GEMINI_BASE_URL,
        timeout_s=settings.GEMINI_TIMEOUT_S,
    )


def get_current_session(
    request: Request,
    clients: ClientStore = Depends(get_client_store),
    token: Optional[str] = Depends(reusable_oauth2),
) -> AuthSession:
    """
    Dependency that rebuilds the authenticated session from its token.

    Raises:
        HTTPException 401: If no valid token is provided, or the client it
            names no longer exists
    """
    # Try Authorization header first, then fall back to cookie
    if not token:
        token = request.cookies.get("access_token")
        # Cookie format is "Bearer <token>", so we need to extract the token
        if token and token.startswith("Bearer "):
            token = token.replace("Bearer ", "", 1)

    if not token:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Bearer"},
        )

    try:
        payload = decode_access_token(token)
        token_data = TokenData(sub=payload.get("sub"), role=payload.get("role"))
    except (JWTError, ValidationError):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Could not validate credentials",
            headers={"WWW-Authenticate": "Bearer"},
        )

    if token_data.role == UserRole.ADMIN:
        return AuthSession(role=UserRole.ADMIN)

    # Client sessions end when the client record is deleted
    if not clients.get(token_data.sub):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Client no longer exists",
        )
    return AuthSession(role=UserRole.CLIENT, client_id=token_data.sub)


def get_current_admin(
    session: AuthSession = Depends(get_current_session),
) -> AuthSession:
    """
    Dependency that requires the administrator session.
    """
    if not session.is_admin:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="The user doesn't have enough privileges"
        )
    return session
