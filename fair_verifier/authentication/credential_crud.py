import logging
from datetime import datetime
from typing import Optional
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from fair_verifier.authentication.auth_errors import AuthError, AuthErrorKind
from fair_verifier.domain.credential_rules import as_utc
from fair_verifier.models.dc_models import GameTypeModel
from fair_verifier.models.schema_models import CredentialSchema
from fair_verifier.models.schemas import GameCredential


class CreateCredential:
    @staticmethod
    async def create_credential(
        username: str,
        secret_code: str,
        game_type: GameTypeModel,
        session: AsyncSession,
        is_active: bool = True,
        expires_at: Optional[datetime] = None,
    ) -> CredentialSchema:
        """Create a credential for one game

        Args:
            username (str): Name shown to the player
            secret_code (str): Code handed out by the admin
            game_type (GameTypeModel): Game the credential unlocks
            is_active (bool, optional): Defaults to True.
            expires_at (Optional[datetime], optional): None never expires. Defaults to None.

        Returns:
            CredentialSchema: The stored credential
        """
        async with session:
            try:
                new_credential = GameCredential(
                    username=username,
                    secret_code=secret_code,
                    game_type=GameTypeModel(game_type).value,
                    is_active=is_active,
                    expires_at=as_utc(expires_at) if expires_at is not None else None,
                )
                session.add(new_credential)
                await session.commit()
                await session.refresh(new_credential)
                return CredentialSchema.model_validate(new_credential)
            except Exception as e:
                logging.error(f"Error creating credential: {e}")
                raise AuthError(AuthErrorKind.store_unavailable, str(e)) from e


class ReadCredential:
    @staticmethod
    async def read_credential_by_login(
        username: str, secret_code: str, game_type: GameTypeModel, session: AsyncSession
    ) -> Optional[CredentialSchema]:
        """Look up the credential matching all three login fields

        Raises:
            AuthError: store_unavailable when the query itself fails, the store
                cannot be reached, or more than one credential matches

        Returns:
            Optional[CredentialSchema]: None when nothing matched
        """
        async with session:
            try:
                stmt = select(GameCredential).where(
                    GameCredential.username == username,
                    GameCredential.secret_code == secret_code,
                    GameCredential.game_type == GameTypeModel(game_type).value,
                )
                result = await session.execute(stmt)
                result = result.scalar_one_or_none()
            except Exception as e:
                logging.error(f"Error reading credential for login: {e!r}")
                raise AuthError(AuthErrorKind.store_unavailable, str(e)) from e
        if result is None:
            return None
        return CredentialSchema.model_validate(result)

    @staticmethod
    async def read_credential_by_id(
        credential_id: UUID, game_type: GameTypeModel, session: AsyncSession
    ) -> Optional[CredentialSchema]:
        """Re-fetch a credential for session validation

        Args:
            credential_id (UUID): Id stored in the session marker
            game_type (GameTypeModel): Game the marker belongs to

        Returns:
            Optional[CredentialSchema]: None when no credential has this id for this game
        """
        async with session:
            try:
                stmt = select(GameCredential).where(
                    GameCredential.id == credential_id,
                    GameCredential.game_type == GameTypeModel(game_type).value,
                )
                result = await session.execute(stmt)
                result = result.scalar_one_or_none()
            except Exception as e:
                logging.error(f"Error reading credential {credential_id}: {e!r}")
                raise AuthError(AuthErrorKind.store_unavailable, str(e)) from e
        if result is None:
            return None
        return CredentialSchema.model_validate(result)


class UpdateCredential:
    @staticmethod
    async def set_active(credential_id: UUID, is_active: bool, session: AsyncSession) -> bool:
        """Activate or deactivate a credential

        Returns:
            bool: False if the credential does not exist
        """
        async with session:
            try:
                stmt = select(GameCredential).where(GameCredential.id == credential_id)
                result = await session.execute(stmt)
                result = result.scalars().first()
                if result is None:
                    return False
                result.is_active = is_active
                await session.commit()
                return True
            except Exception as e:
                logging.error(f"Failed to update is_active of {credential_id}: {e}")
                raise AuthError(AuthErrorKind.store_unavailable, str(e)) from e

    @staticmethod
    async def set_expires_at(
        credential_id: UUID, expires_at: Optional[datetime], session: AsyncSession
    ) -> bool:
        """Change the expiry of a credential, None removes it

        Returns:
            bool: False if the credential does not exist
        """
        async with session:
            try:
                stmt = select(GameCredential).where(GameCredential.id == credential_id)
                result = await session.execute(stmt)
                result = result.scalars().first()
                if result is None:
                    return False
                result.expires_at = as_utc(expires_at) if expires_at is not None else None
                await session.commit()
                return True
            except Exception as e:
                logging.error(f"Failed to update expires_at of {credential_id}: {e}")
                raise AuthError(AuthErrorKind.store_unavailable, str(e)) from e
