# hospital/auth/identity.py
"""
Sign-in state for a caller.

The external auth provider signs a JWT for every signed-in user. The
IdentityProvider verifies those tokens; it is opened in the application
lifespan and closed at shutdown. Each request gets its own
IdentitySession, fed by the provider and injected into the views that
need it.

Admin rights come from a custom claim on the token (`admin: true` by
default), never from anything the client sends alongside it.
"""

from dataclasses import dataclass, field
from typing import Any, Callable, Optional

from jose import JWTError, jwt

from common import AuthConfig, get_app_logger
from common.api_error import AuthenticationError, PermissionDeniedError
from hospital.db.schemas import AuthUserResponse, SessionState

logger = get_app_logger(__name__)


@dataclass(frozen=True)
class AuthUser:
    uid: str
    email: Optional[str] = None
    display_name: Optional[str] = None
    claims: dict[str, Any] = field(default_factory=dict)


SessionListener = Callable[["IdentitySession"], None]


class IdentityProvider:
    def __init__(self, config: AuthConfig):
        self.config = config
        self._open = False

    def start(self) -> None:
        self._open = True
        logger.info("Identity provider started", algorithm=self.config.jwt_algorithm)

    def close(self) -> None:
        self._open = False
        logger.info("Identity provider closed")

    @property
    def is_open(self) -> bool:
        return self._open

    def resolve(self, token: Optional[str]) -> Optional[AuthUser]:
        """Verified user for `token`, or None when absent, expired or forged."""
        if not self._open:
            raise RuntimeError("IdentityProvider used outside the application lifespan")
        if not token:
            return None

        try:
            claims = jwt.decode(
                token,
                self.config.jwt_secret.get_secret_value(),
                algorithms=[self.config.jwt_algorithm],
                options={"verify_aud": False},
            )
        except JWTError as e:
            logger.warning("Rejected auth token", error=str(e))
            return None

        uid = claims.get("sub") or claims.get("uid")
        if not uid:
            logger.warning("Auth token without subject")
            return None

        return AuthUser(
            uid=str(uid),
            email=claims.get("email"),
            display_name=claims.get("name"),
            claims=claims,
        )

    def is_admin(self, user: Optional[AuthUser]) -> bool:
        return user is not None and user.claims.get(self.config.admin_claim) is True


class IdentitySession:
    """
    Observable {current_user, is_loading, is_admin} for one caller.

    is_loading stays True until the first auth state notification.
    """

    def __init__(self, provider: IdentityProvider):
        self._provider = provider
        self._listeners: list[SessionListener] = []
        self.current_user: Optional[AuthUser] = None
        self.is_loading = True
        self.is_admin = False

    def subscribe(self, listener: SessionListener) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def on_auth_state_changed(self, user: Optional[AuthUser]) -> None:
        self.current_user = user
        self.is_admin = self._provider.is_admin(user)
        self.is_loading = False
        for listener in list(self._listeners):
            listener(self)

    def sign_in_with_token(self, token: Optional[str]) -> None:
        self.on_auth_state_changed(self._provider.resolve(token))

    def sign_out(self) -> None:
        self.on_auth_state_changed(None)

    def require_user(self) -> AuthUser:
        if self.current_user is None:
            raise AuthenticationError()
        return self.current_user

    def require_admin(self) -> AuthUser:
        user = self.require_user()
        if not self.is_admin:
            raise PermissionDeniedError()
        return user

    def snapshot(self) -> SessionState:
        user = self.current_user
        return SessionState(
            current_user=(
                AuthUserResponse(uid=user.uid, email=user.email, display_name=user.display_name)
                if user is not None
                else None
            ),
            is_loading=self.is_loading,
            is_admin=self.is_admin,
        )


__all__ = ["AuthUser", "IdentityProvider", "IdentitySession"]
