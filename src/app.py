"""
User CRUD API Server
Core functionality: create, list, read, update and delete User records in MongoDB
"""

import asyncio
import logging
from contextlib import asynccontextmanager, suppress
from typing import Optional
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from config.settings import (
    ALLOWED_ORIGINS,
    API_DESCRIPTION,
    API_TITLE,
    API_VERSION,
    LOG_LEVEL,
    MONGODB_DATABASE,
    MONGODB_URI,
    MONGODB_USERS_COLLECTION,
    PUBLIC_URL,
)
from database.connection import MongoConnection
from database.user_store import MongoUserStore, UserStore
from api.routes import health, users
from utils.error_handling import setup_error_handling

# Configure logging
logging.basicConfig(level=LOG_LEVEL)
logger = logging.getLogger(__name__)

OPENAPI_VERSION = "3.0.3"

@asynccontextmanager
async def mongo_lifespan(app: FastAPI):
    """
    Open the MongoDB connection for the lifetime of the app.
    The ping runs in the background so an unreachable server never delays startup.
    """
    connection = MongoConnection(MONGODB_URI, MONGODB_DATABASE)
    connection.open()
    ping_task = asyncio.create_task(connection.ping())
    app.state.user_store = MongoUserStore(connection, MONGODB_USERS_COLLECTION)
    try:
        yield
    finally:
        ping_task.cancel()
        with suppress(asyncio.CancelledError):
            await ping_task
        await connection.close()

@asynccontextmanager
async def injected_store_lifespan(app: FastAPI):
    """The store was supplied by the caller, which also owns its lifecycle"""
    yield

def create_app(user_store: Optional[UserStore] = None) -> FastAPI:
    """
    Build the FastAPI application.

    Args:
        user_store: Store to serve requests from. When omitted, a MongoDB
            backed store is created on startup and closed on shutdown.
    """
    app = FastAPI(
        title=API_TITLE,
        description=API_DESCRIPTION,
        version=API_VERSION,
        servers=[{"url": PUBLIC_URL}],
        docs_url="/api-docs",
        openapi_url="/api-docs/openapi.json",
        redoc_url=None,
        lifespan=mongo_lifespan if user_store is None else injected_store_lifespan
    )
    app.openapi_version = OPENAPI_VERSION

    if user_store is not None:
        app.state.user_store = user_store

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=ALLOWED_ORIGINS,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["*"],
    )

    # Request logging and centralized error handling
    setup_error_handling(app)

    # Include API routes
    app.include_router(health.router, tags=["Health"])
    app.include_router(users.router, tags=["Users"])

    return app

# FastAPI app instance is exported for use by uvicorn
# Server startup is handled by main.py at the project root
app = create_app()
