"""
Authentication Endpoints Module

Login, logout and session introspection. A successful login returns a JWT
bearer token and also sets it as an HTTP-only cookie for browser clients.
"""
from fastapi import APIRouter, Depends, HTTPException, status, Response
from fastapi.security import OAuth2PasswordRequestForm
from docportal.api import deps
from docportal.core.config import settings
from docportal.core.errors import AuthenticationError
from docportal.core.security import create_access_token
from docportal.schemas.auth import SessionRead, Token
from docportal.services.auth_gate import AuthGate, AuthSession
from docportal.services.credential_store import ClientStore

router = APIRouter()


@router.post("/login", response_model=Token)
def login(
    response: Response,
    form_data: OAuth2PasswordRequestForm = Depends(),
    gate: AuthGate = Depends(deps.get_auth_gate),
):
    """
    Authenticate the administrator or a client and issue an access token.

    The username field takes either the admin username or a client name
    (case-insensitive).

    Raises:
        HTTPException 401: For any rejected attempt, with the same message
            whether the user is unknown or the password is wrong
    """
    try:
        session = gate.login(form_data.username, form_data.password)
    except AuthenticationError as exc:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=exc.message,
            headers={"WWW-Authenticate": "Bearer"},
        )

    access_token = create_access_token(subject=session.subject, role=session.role.value)

    # httponly=True prevents JavaScript access to the cookie
    # samesite="lax" provides CSRF protection while allowing normal navigation
    response.set_cookie(
        key="access_token",
        value=f"Bearer {access_token}",
        httponly=True,
        max_age=settings.ACCESS_TOKEN_EXPIRE_MINUTES * 60,
        samesite="lax"
    )

    return Token(
        access_token=access_token,
        token_type="bearer",
        role=session.role,
        client_id=session.client_id,
    )


@router.post("/logout")
def logout(response: Response):
    """
    Log out by clearing the authentication cookie.

    API clients can simply discard their token.
    """
    response.delete_cookie("access_token")
    return {"status": "success", "detail": "Logged out"}


@router.get("/me", response_model=SessionRead)
def read_session(
    session: AuthSession = Depends(deps.get_current_session),
    clients: ClientStore = Depends(deps.get_client_store),
):
    """
    Describe the current session.
    """
    if session.is_admin:
        display_name = "Administrador"
    else:
        display_name = clients.get(session.client_id).name
    return SessionRead(role=session.role, client_id=session.client_id, display_name=display_name)
