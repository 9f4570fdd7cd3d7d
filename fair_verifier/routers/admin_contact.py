import logging

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.responses import StreamingResponse
from redis.asyncio import Redis
from sqlalchemy.ext.asyncio import async_sessionmaker

from fair_verifier.admin_contact_crud import ReadAdminContact, UpdateAdminContact, whatsapp_link
from fair_verifier.admin_contact_subscriber import AdminContactSubscriber
from fair_verifier.load_secrets import admin_contact_channel
from fair_verifier.models.dc_models import AdminContactModel, AdminContactResponseModel
from fair_verifier.routers.dependencies import check_admin, get_redis, get_session_factory

admin_contact_router = APIRouter(prefix="/admin_contact")
read_admin_contact = ReadAdminContact()
update_admin_contact = UpdateAdminContact()


class AdminContactAPI:
    @staticmethod
    @admin_contact_router.get("", response_model=AdminContactResponseModel)
    async def get_admin_contact(Session: async_sessionmaker = Depends(get_session_factory)):
        async with Session() as session:
            contact = await read_admin_contact.read_admin_contact(session)
        if contact is None:
            return AdminContactResponseModel()
        return AdminContactResponseModel(
            whatsapp_number=contact.whatsapp_number,
            whatsapp_link=whatsapp_link(contact.whatsapp_number),
        )

    @staticmethod
    @admin_contact_router.get("/stream")
    async def stream_admin_contact(
        Session: async_sessionmaker = Depends(get_session_factory),
        redis: Redis = Depends(get_redis),
    ):
        subscriber = AdminContactSubscriber(Session)
        return StreamingResponse(
            subscriber.event_generator(admin_contact_channel, redis),
            media_type="text/event-stream",
        )

    @staticmethod
    @admin_contact_router.put("", response_model=AdminContactResponseModel)
    async def put_admin_contact(
        contact: AdminContactModel,
        admin: str = Depends(check_admin),
        Session: async_sessionmaker = Depends(get_session_factory),
        redis: Redis = Depends(get_redis),
    ):
        logging.info(f"Admin contact changed by {admin}")
        async with Session() as session:
            stored = await update_admin_contact.update_admin_contact(
                contact.whatsapp_number, session, redis
            )
        if stored is None:
            raise HTTPException(
                status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
                detail="Admin contact could not be saved",
            )
        return AdminContactResponseModel(
            whatsapp_number=stored.whatsapp_number,
            whatsapp_link=whatsapp_link(stored.whatsapp_number),
        )
