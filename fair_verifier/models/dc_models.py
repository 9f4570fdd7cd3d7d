from pydantic import BaseModel, Field
from enum import Enum
from uuid import UUID
from typing import Optional
from datetime import datetime


class GameTypeModel(str, Enum):
    mines = "mines"
    aviator = "aviator"
    color_prediction = "color_prediction"


class ColorModel(str, Enum):
    red = "Red"
    green = "Green"
    red_violet = "Red/Violet"
    green_violet = "Green/Violet"


GAME_ROUTES = {
    GameTypeModel.mines: "/mines",
    GameTypeModel.aviator: "/aviator",
    GameTypeModel.color_prediction: "/color-prediction",
}


class LoginModel(BaseModel):
    username: str
    secret_code: str
    game_type: GameTypeModel


class SessionMarkerModel(BaseModel):
    """Device-local marker written after a successful login."""
    credential_id: UUID
    username: str


class LoginResponseModel(BaseModel):
    credential_id: UUID
    username: str
    game_type: GameTypeModel
    route: str


class CredentialModel(BaseModel):
    """Credential as returned to the caller, without the secret code."""
    id: UUID
    username: str
    game_type: GameTypeModel
    is_active: bool
    expires_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class OutcomeModel(BaseModel):
    number: int = Field(ge=0, le=9)
    color: ColorModel


class PredictionModel(BaseModel):
    status: str  # "awaiting_input" or "ready"
    number: Optional[int] = None
    color: Optional[ColorModel] = None
    combined_seed: Optional[str] = None
    digest: Optional[str] = None


class AdminContactModel(BaseModel):
    whatsapp_number: str


class AdminContactResponseModel(BaseModel):
    whatsapp_number: Optional[str] = None
    whatsapp_link: Optional[str] = None
