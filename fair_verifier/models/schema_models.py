from pydantic import BaseModel
from typing import Optional
from uuid import UUID
from datetime import datetime

from fair_verifier.models.dc_models import GameTypeModel


class CredentialSchema(BaseModel):
    id: UUID
    username: str
    secret_code: str
    game_type: GameTypeModel
    is_active: bool
    expires_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class AdminContactSchema(BaseModel):
    whatsapp_number: str
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True
