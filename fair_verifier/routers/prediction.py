from fastapi import APIRouter, Depends, Query

from fair_verifier.domain.prediction_panel import PredictionPanel
from fair_verifier.models.dc_models import GameTypeModel, PredictionModel
from fair_verifier.models.schema_models import CredentialSchema
from fair_verifier.routers.dependencies import require_session

prediction_router = APIRouter(prefix="/color_prediction")


class PredictionAPI:
    @staticmethod
    @prediction_router.get("/predict", response_model=PredictionModel)
    async def predict(
        client_seed: str = "",
        server_seed: str = "",
        nonce: int = Query(default=0, ge=0),
        credential: CredentialSchema = Depends(require_session(GameTypeModel.color_prediction)),
    ):
        return PredictionPanel(client_seed, server_seed, nonce).to_prediction()
