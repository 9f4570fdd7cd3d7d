from datetime import datetime, timezone
from typing import Optional

from fair_verifier.authentication.auth_errors import AuthErrorKind
from fair_verifier.models.schema_models import CredentialSchema


def as_utc(value: datetime) -> datetime:
    """Read naive timestamps (SQLite drops the offset) as UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def is_expired(expires_at: Optional[datetime], now: datetime) -> bool:
    """A credential stays valid only while expires_at is strictly in the future."""
    if expires_at is None:
        return False
    return as_utc(expires_at) <= as_utc(now)


def check_credential(
    credential: Optional[CredentialSchema], now: datetime
) -> Optional[AuthErrorKind]:
    """Apply the login policy to a looked-up credential.

    Rules are evaluated in order and the first match wins.

    Args:
        credential (Optional[CredentialSchema]): Result of the lookup, None when nothing matched
        now (datetime): Time of the check

    Returns:
        Optional[AuthErrorKind]: None when the credential authorizes access
    """
    if credential is None:
        return AuthErrorKind.invalid
    if not credential.is_active:
        return AuthErrorKind.deactivated
    if is_expired(credential.expires_at, now):
        return AuthErrorKind.expired
    return None
