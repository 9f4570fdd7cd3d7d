import secrets

from fastapi import Depends, HTTPException, Request, Response, status
from fastapi.responses import JSONResponse
from fastapi.security import HTTPBasic, HTTPBasicCredentials
from redis.asyncio import Redis
from sqlalchemy.ext.asyncio import async_sessionmaker

from fair_verifier.authentication.auth_errors import AuthError, AuthErrorKind
from fair_verifier.authentication.credential_gate import CredentialGate
from fair_verifier.db import Session
from fair_verifier.load_secrets import admin_password, admin_username, redis_host, redis_port
from fair_verifier.models.dc_models import GameTypeModel
from fair_verifier.session_store import CookieSessionStore, credential_id_key, username_key

redis = Redis(host=redis_host, port=redis_port, decode_responses=True, health_check_interval=30)
security = HTTPBasic()


def get_session_factory() -> async_sessionmaker:
    return Session


def get_redis() -> Redis:
    return redis


def get_gate(
    request: Request,
    response: Response,
    Session: async_sessionmaker = Depends(get_session_factory),
) -> CredentialGate:
    return CredentialGate(Session, CookieSessionStore(request, response))


def require_session(game_type: GameTypeModel):
    """Dependency that re-validates the session of one game before the endpoint runs"""

    async def verified_credential(gate: CredentialGate = Depends(get_gate)):
        return await gate.verify_session(game_type)

    return verified_credential


def check_admin(credentials: HTTPBasicCredentials = Depends(security)) -> str:
    configured = admin_username is not None and admin_password is not None
    username = secrets.compare_digest(credentials.username, admin_username or "")
    password = secrets.compare_digest(credentials.password, admin_password or "")
    if not (configured and username and password):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid username or password",
            headers={"WWW-Authenticate": "Basic"},
        )
    return credentials.username


async def auth_error_handler(request: Request, exc: AuthError) -> JSONResponse:
    """Turn a gate failure into a 401, clearing the cookies of an invalidated session"""
    response = JSONResponse(
        status_code=status.HTTP_401_UNAUTHORIZED,
        content={"detail": exc.message, "kind": public_kind(exc.kind)},
        headers={"WWW-Authenticate": "Basic"},
    )
    if exc.game_type is not None:
        response.delete_cookie(credential_id_key(exc.game_type))
        response.delete_cookie(username_key(exc.game_type))
    return response


def public_kind(kind: AuthErrorKind) -> str:
    # a failing store is reported to the caller the same way as a wrong login
    if kind == AuthErrorKind.store_unavailable:
        return AuthErrorKind.invalid.value
    return kind.value
