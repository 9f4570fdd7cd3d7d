from sqlalchemy.orm import DeclarativeBase
from sqlalchemy.schema import Column
from sqlalchemy.types import Boolean, DateTime, Integer, String, Uuid
from uuid6 import uuid7
from datetime import datetime, timezone


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class Base(DeclarativeBase):
    pass


class GameCredential(Base):
    __tablename__ = "game_credentials"
    id = Column(Uuid, primary_key=True, default=uuid7)
    username = Column(String, nullable=False, index=True)
    secret_code = Column(String, nullable=False)
    game_type = Column(String, nullable=False, index=True)  # mines, aviator or color_prediction
    is_active = Column(Boolean, nullable=False, default=True)
    expires_at = Column(DateTime(timezone=True), nullable=True)  # None never expires
    created_at = Column(DateTime(timezone=True), default=utc_now)


class AdminContact(Base):
    __tablename__ = "admin_contact"
    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    whatsapp_number = Column(String, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=utc_now, onupdate=utc_now)
