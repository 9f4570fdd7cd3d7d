import json
import logging
from typing import Optional

from redis.asyncio import Redis
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from fair_verifier.load_secrets import admin_contact_channel
from fair_verifier.models.schema_models import AdminContactSchema
from fair_verifier.models.schemas import AdminContact


def build_update_payload(whatsapp_number: str) -> str:
    """Message published on the live channel after the contact row changes"""
    return json.dumps(
        {
            "event": "UPDATE",
            "schema": "public",
            "table": AdminContact.__tablename__,
            "new": {"whatsapp_number": whatsapp_number},
        }
    )


def whatsapp_link(whatsapp_number: Optional[str]) -> Optional[str]:
    if not whatsapp_number:
        return None
    return f"https://wa.me/{whatsapp_number}"


class ReadAdminContact:
    @staticmethod
    async def read_admin_contact(session: AsyncSession) -> Optional[AdminContactSchema]:
        """Read the single admin contact row

        Returns:
            Optional[AdminContactSchema]: None if no contact was configured or the read failed
        """
        async with session:
            try:
                stmt = select(AdminContact).order_by(AdminContact.id)
                result = await session.execute(stmt)
                result = result.scalars().first()
                if result is None:
                    return None
                return AdminContactSchema.model_validate(result)
            except Exception as e:
                logging.error(f"Error reading admin contact: {e}")
                return None


class UpdateAdminContact:
    @staticmethod
    async def update_admin_contact(
        whatsapp_number: str,
        session: AsyncSession,
        redis: Optional[Redis] = None,
        channel: str = admin_contact_channel,
    ) -> Optional[AdminContactSchema]:
        """Store the admin contact and notify live subscribers

        Args:
            whatsapp_number (str): New number, digits with country code
            redis (Optional[Redis], optional): Publisher for the live feed. Defaults to None.
            channel (str, optional): Channel the subscribers listen on.

        Returns:
            Optional[AdminContactSchema]: The stored contact, None if it could not be saved.
                A failed publish is logged and the stored contact is still returned.
        """
        async with session:
            try:
                stmt = select(AdminContact).order_by(AdminContact.id)
                result = await session.execute(stmt)
                contact = result.scalars().first()
                if contact is None:
                    contact = AdminContact(whatsapp_number=whatsapp_number)
                    session.add(contact)
                else:
                    contact.whatsapp_number = whatsapp_number
                await session.commit()
                await session.refresh(contact)
                contact_data = AdminContactSchema.model_validate(contact)
            except Exception as e:
                logging.error(f"Failed to update admin contact: {e!r}")
                return None

        if redis is not None:
            try:
                receivers = await redis.publish(channel, build_update_payload(whatsapp_number))
                logging.info(f"Published admin contact update to {receivers} subscriber(s)")
            except Exception as e:
                logging.error(f"Admin contact saved but the live update was not published: {e!r}")
        return contact_data
