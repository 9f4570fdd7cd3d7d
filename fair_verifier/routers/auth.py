from fastapi import APIRouter, Depends

from fair_verifier.authentication.credential_gate import CredentialGate
from fair_verifier.models.dc_models import (
    GAME_ROUTES,
    CredentialModel,
    GameTypeModel,
    LoginModel,
    LoginResponseModel,
)
from fair_verifier.routers.dependencies import get_gate

auth_router = APIRouter(prefix="/auth")


class AuthAPI:
    @staticmethod
    @auth_router.post("/login", response_model=LoginResponseModel)
    async def login(login: LoginModel, gate: CredentialGate = Depends(get_gate)):
        marker = await gate.login(login.username, login.secret_code, login.game_type)
        return LoginResponseModel(
            credential_id=marker.credential_id,
            username=marker.username,
            game_type=login.game_type,
            route=GAME_ROUTES[login.game_type],
        )

    @staticmethod
    @auth_router.get("/{game_type}/session", response_model=CredentialModel)
    async def verify_session(game_type: GameTypeModel, gate: CredentialGate = Depends(get_gate)):
        credential = await gate.verify_session(game_type)
        return CredentialModel.model_validate(credential.model_dump())

    @staticmethod
    @auth_router.post("/{game_type}/logout")
    async def logout(game_type: GameTypeModel, gate: CredentialGate = Depends(get_gate)):
        gate.logout(game_type)
        return {"game_type": game_type, "logged_out": True}
