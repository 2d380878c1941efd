from pydantic import BaseModel
from typing import Optional
from docportal.models.user import UserRole


class Token(BaseModel):
    access_token: str
    token_type: str
    role: UserRole
    client_id: Optional[str] = None


class TokenData(BaseModel):
    sub: str
    role: UserRole


class SessionRead(BaseModel):
    role: UserRole
    client_id: Optional[str] = None
    display_name: str
