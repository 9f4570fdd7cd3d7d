import json
import logging
from typing import AsyncGenerator, Optional

from redis.asyncio import Redis
from sqlalchemy.ext.asyncio import async_sessionmaker

from fair_verifier.admin_contact_crud import ReadAdminContact, whatsapp_link
from fair_verifier.models.dc_models import AdminContactResponseModel
from fair_verifier.models.schemas import AdminContact

HEART_BEAT = 15

read_admin_contact = ReadAdminContact()


class AdminContactSubscriber:
    """Streams the admin contact to one page as Server-Sent Events."""

    def __init__(self, Session: async_sessionmaker, heart_beat: Optional[float] = HEART_BEAT):
        self.Session: async_sessionmaker = Session
        self.heart_beat = heart_beat
        self.current_number: Optional[str] = None

    def apply_payload(self, data: str) -> bool:
        """Overwrite the current number with the one carried by an update message

        Args:
            data (str): JSON message published on the contact channel

        Returns:
            bool: True if the message was an admin contact update
        """
        try:
            payload = json.loads(data)
            if payload.get("event") != "UPDATE" or payload.get("table") != AdminContact.__tablename__:
                return False
            whatsapp_number = payload["new"]["whatsapp_number"]
        except (ValueError, KeyError, TypeError, AttributeError) as e:
            logging.warning(f"Ignoring malformed contact update {data!r}: {e}")
            return False
        self.current_number = whatsapp_number
        return True

    def to_sse(self) -> str:
        contact = AdminContactResponseModel(
            whatsapp_number=self.current_number,
            whatsapp_link=whatsapp_link(self.current_number),
        )
        return f"event: contact\ndata: {json.dumps(contact.model_dump())}\n\n"

    async def event_generator(self, channel: str, redis: Redis) -> AsyncGenerator[str, None]:
        """Event generator to handle SSE events.

        The first event carries the stored contact, each later event the value
        from the latest update. Closing the generator releases the subscription.

        Args:
            channel (str): Channel the contact updates are published on.
            redis (Redis): Redis connection object.
        """
        pubsub = redis.pubsub()
        # subscribe before the initial read so an update in between is not lost
        await pubsub.subscribe(channel)
        try:
            async with self.Session() as session:
                contact = await read_admin_contact.read_admin_contact(session)
            if contact is not None and self.current_number is None:
                self.current_number = contact.whatsapp_number
            yield self.to_sse()

            while True:
                msg = await pubsub.get_message(
                    ignore_subscribe_messages=True, timeout=self.heart_beat
                )
                if msg is None:
                    yield ": heartbeat\n\n"
                    continue
                if msg["type"] == "message" and self.apply_payload(msg["data"]):
                    logging.debug(f"Admin contact updated: {self.current_number}")
                    yield self.to_sse()

        finally:
            logging.info("Unsubscribing from channel")
            if pubsub:
                await pubsub.unsubscribe(channel)
                await pubsub.close()
