import logging
from datetime import datetime, timezone
from typing import Callable

from sqlalchemy.ext.asyncio import async_sessionmaker

from fair_verifier.authentication.auth_errors import AuthError, AuthErrorKind
from fair_verifier.authentication.credential_crud import ReadCredential
from fair_verifier.domain.credential_rules import check_credential
from fair_verifier.models.dc_models import GameTypeModel, SessionMarkerModel
from fair_verifier.models.schema_models import CredentialSchema
from fair_verifier.session_store import SessionStore

read_credential = ReadCredential()


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class CredentialGate:
    """Authorizes use of a game's verification tool.

    The marker kept in the session store is only a hint of who logged in. It is
    checked against the credential table again on every protected visit, so a
    deactivated or expired credential loses access on the next visit.
    """

    def __init__(
        self,
        Session: async_sessionmaker,
        store: SessionStore,
        now: Callable[[], datetime] = utc_now,
    ):
        self.Session: async_sessionmaker = Session
        self.store: SessionStore = store
        self.now = now

    async def login(
        self, username: str, secret_code: str, game_type: GameTypeModel
    ) -> SessionMarkerModel:
        """Check the login triple and store a session marker for the game

        Args:
            username (str): Username issued by the admin
            secret_code (str): Secret code issued by the admin
            game_type (GameTypeModel): Game whose tool is requested

        Raises:
            AuthError: invalid, store_unavailable, deactivated or expired

        Returns:
            SessionMarkerModel: The marker written to the session store
        """
        game_type = GameTypeModel(game_type)
        try:
            async with self.Session() as session:
                credential = await read_credential.read_credential_by_login(
                    username, secret_code, game_type, session
                )
        except AuthError as e:
            logging.error(f"Login lookup failed for {username} ({game_type.value}): {e.detail}")
            raise

        failure = check_credential(credential, self.now())
        if failure is not None:
            logging.info(f"Login rejected for {username} ({game_type.value}): {failure.value}")
            raise AuthError(failure)

        marker = SessionMarkerModel(credential_id=credential.id, username=credential.username)
        self.store.set(game_type, marker)
        logging.info(f"Login accepted for {username} ({game_type.value})")
        return marker

    async def verify_session(self, game_type: GameTypeModel) -> CredentialSchema:
        """Re-validate the stored marker against the credential table

        Raises:
            AuthError: no_session when nothing is stored, session_invalid otherwise.
                The stored marker is cleared before session_invalid is raised.

        Returns:
            CredentialSchema: The credential the marker points to
        """
        game_type = GameTypeModel(game_type)
        marker = self.store.get(game_type)
        if marker is None:
            raise AuthError(AuthErrorKind.no_session)

        try:
            async with self.Session() as session:
                credential = await read_credential.read_credential_by_id(
                    marker.credential_id, game_type, session
                )
            failure = check_credential(credential, self.now())
        except AuthError as e:
            failure = e.kind

        if failure is not None:
            self.store.clear(game_type)
            logging.info(
                f"Session for {marker.username} ({game_type.value}) invalidated: {failure.value}"
            )
            raise AuthError(AuthErrorKind.session_invalid, failure.value, game_type.value)
        return credential

    def logout(self, game_type: GameTypeModel) -> None:
        """Forget the marker of one game, markers of other games are kept"""
        self.store.clear(GameTypeModel(game_type))
        logging.info(f"Logged out of {GameTypeModel(game_type).value}")
