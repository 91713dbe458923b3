"""
FastAPI application entry point for the Drive Gateway.
"""
import os
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from api.routes.drive_router import drive_router
from api.routes.health_router import health_router
from config import get_settings
from core.handlers import register_exception_handlers
from core.utils.helpers import get_local_ip
from core.utils.logger import setup_logger

logger = setup_logger(__name__)
settings = get_settings()


@asynccontextmanager
async def lifespan(app: FastAPI):
    try:
        os.makedirs(settings.upload_dir, exist_ok=True)
    except OSError as e:
        logger.error(f"Failed to create uploads directory: {str(e)}")

    logger.info("Server running:")
    logger.info(f"- Local:   http://localhost:{settings.port}")
    logger.info(f"- Network: http://{get_local_ip()}:{settings.port}")
    yield
    logger.info("Shutting down Drive Gateway")


app = FastAPI(
    title="Drive Gateway",
    description="Google Drive upload, delete and sharing proxy with an operation log",
    version="0.1.0",
    lifespan=lifespan
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Register global exception handlers
register_exception_handlers(app)

# Include routers
app.include_router(drive_router)
app.include_router(health_router)


if __name__ == "__main__":
    uvicorn.run("main:app", host=settings.host, port=settings.port)
