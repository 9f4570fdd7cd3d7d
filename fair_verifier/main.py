import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from fair_verifier.authentication.auth_errors import AuthError
from fair_verifier.db import create_tables
from fair_verifier.routers.admin_contact import admin_contact_router
from fair_verifier.routers.auth import auth_router
from fair_verifier.routers.dependencies import auth_error_handler, redis
from fair_verifier.routers.prediction import prediction_router

logging.basicConfig(level=logging.INFO)


@asynccontextmanager
async def lifespan(app):
    """Create the tables if needed.
    This function is called to start the server.
    """
    await create_tables()
    try:
        yield
    finally:
        await redis.aclose()
        logging.info("Stop Server")


app = FastAPI(lifespan=lifespan)
app.add_exception_handler(AuthError, auth_error_handler)
app.include_router(auth_router)
app.include_router(admin_contact_router)
app.include_router(prediction_router)
