from enum import Enum
from typing import Optional


class AuthErrorKind(str, Enum):
    invalid = "invalid"
    deactivated = "deactivated"
    expired = "expired"
    no_session = "no_session"
    session_invalid = "session_invalid"
    store_unavailable = "store_unavailable"


INVALID_LOGIN_MESSAGE = "Invalid username or secret code for this game"

# invalid and store_unavailable share one message so a caller cannot tell
# which lookup field was wrong or whether the store failed
AUTH_ERROR_MESSAGES = {
    AuthErrorKind.invalid: INVALID_LOGIN_MESSAGE,
    AuthErrorKind.store_unavailable: INVALID_LOGIN_MESSAGE,
    AuthErrorKind.deactivated: "Account is deactivated. Contact admin.",
    AuthErrorKind.expired: "Account has expired. Contact admin.",
    AuthErrorKind.no_session: "No session for this game. Please login.",
    AuthErrorKind.session_invalid: "Session invalid. Please login again.",
}


class AuthError(Exception):
    """Recoverable failure of the credential gate."""

    def __init__(self, kind: AuthErrorKind, detail: str = "", game_type: Optional[str] = None):
        self.kind = kind
        # set when the failure invalidated the stored marker of this game
        self.game_type = game_type
        self.message = AUTH_ERROR_MESSAGES[kind]
        # detail is for logs only and is never shown to the caller
        self.detail = detail
        super().__init__(self.message)
