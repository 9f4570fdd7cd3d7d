import logging
from typing import Dict, Optional
from urllib.parse import quote, unquote
from uuid import UUID

from fastapi import Request, Response

from fair_verifier.load_secrets import session_cookie_max_age
from fair_verifier.models.dc_models import GameTypeModel, SessionMarkerModel


def credential_id_key(game_type: GameTypeModel) -> str:
    return f"{GameTypeModel(game_type).value}_credential_id"


def username_key(game_type: GameTypeModel) -> str:
    return f"{GameTypeModel(game_type).value}_username"


def parse_marker(credential_id: Optional[str], username: Optional[str]) -> Optional[SessionMarkerModel]:
    """Build a marker from the two stored values, None if either half is missing or unreadable"""
    if not credential_id or not username:
        return None
    try:
        return SessionMarkerModel(credential_id=UUID(credential_id), username=username)
    except ValueError:
        logging.warning(f"Discarding unreadable credential id: {credential_id!r}")
        return None


class SessionStore:
    """Device-local storage holding one session marker per game type."""

    def get(self, game_type: GameTypeModel) -> Optional[SessionMarkerModel]:
        raise NotImplementedError

    def set(self, game_type: GameTypeModel, marker: SessionMarkerModel) -> None:
        raise NotImplementedError

    def clear(self, game_type: GameTypeModel) -> None:
        raise NotImplementedError


class InMemorySessionStore(SessionStore):
    def __init__(self):
        self.values: Dict[str, str] = {}

    def get(self, game_type: GameTypeModel) -> Optional[SessionMarkerModel]:
        return parse_marker(
            self.values.get(credential_id_key(game_type)),
            self.values.get(username_key(game_type)),
        )

    def set(self, game_type: GameTypeModel, marker: SessionMarkerModel) -> None:
        self.values[credential_id_key(game_type)] = str(marker.credential_id)
        self.values[username_key(game_type)] = marker.username

    def clear(self, game_type: GameTypeModel) -> None:
        self.values.pop(credential_id_key(game_type), None)
        self.values.pop(username_key(game_type), None)


class CookieSessionStore(SessionStore):
    """Keeps the markers in browser cookies.

    Reads come from the incoming request, writes go to the outgoing response.
    A value set or cleared during this request is visible to later reads.
    Values are stored percent-encoded, cookie headers carry latin-1 only.
    """

    def __init__(self, request: Request, response: Response):
        self.request = request
        self.response = response
        self.pending: Dict[str, Optional[str]] = {}

    def _read(self, key: str) -> Optional[str]:
        if key in self.pending:
            return self.pending[key]
        value = self.request.cookies.get(key)
        if value is None:
            return None
        return unquote(value)

    def get(self, game_type: GameTypeModel) -> Optional[SessionMarkerModel]:
        return parse_marker(
            self._read(credential_id_key(game_type)),
            self._read(username_key(game_type)),
        )

    def set(self, game_type: GameTypeModel, marker: SessionMarkerModel) -> None:
        for key, value in (
            (credential_id_key(game_type), str(marker.credential_id)),
            (username_key(game_type), marker.username),
        ):
            self.pending[key] = value
            self.response.set_cookie(
                key,
                quote(value, safe=""),
                max_age=session_cookie_max_age,
                httponly=True,
                samesite="lax",
            )

    def clear(self, game_type: GameTypeModel) -> None:
        for key in (credential_id_key(game_type), username_key(game_type)):
            self.pending[key] = None
            self.response.delete_cookie(key)
