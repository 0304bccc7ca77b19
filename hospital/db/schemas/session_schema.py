# hospital/db/schemas/session_schema.py
from typing import Optional
from .base_schema import CamelModel


class AuthUserResponse(CamelModel):
    uid: str
    email: Optional[str] = None
    display_name: Optional[str] = None


class SessionState(CamelModel):
    current_user: Optional[AuthUserResponse] = None
    is_loading: bool
    is_admin: bool


__all__ = ["AuthUserResponse", "SessionState"]
