from typing import Optional
import logging

from reelwave.schemas.auth import UserLogin, UserResponse

logger = logging.getLogger(__name__)


class AuthService:
    """
    Stub login: any non-empty email/password pair is accepted.
    The signed-in user lives in memory only.
    """

    def __init__(self):
        self.user: Optional[UserResponse] = None

    @property
    def is_logged_in(self) -> bool:
        return self.user is not None

    def login(self, credentials: UserLogin) -> Optional[UserResponse]:
        if not credentials.email or not credentials.password:
            logger.warning("Login failed: email and password are required")
            return None

        self.user = UserResponse(
            id="1",
            name=credentials.email.split("@")[0] or "User",
            email=credentials.email,
        )
        logger.info(f"User {self.user.name} logged in")
        return self.user

    def logout(self) -> None:
        self.user = None
