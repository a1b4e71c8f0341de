# mindmate backend api
# fastapi app with async mongodb: six crud resources plus mood reports

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse

from mindmate.config import settings
from mindmate.resources import RESOURCES
from mindmate.services.db import db
from mindmate.routers import reports
from mindmate.routers.crud import build_crud_router

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

HEALTH_MESSAGE = "MindMate Backend is fully running with all CRUD + Analytics APIs!"


@asynccontextmanager
async def lifespan(app: FastAPI):
    """startup: connect to mongodb and register collections. shutdown: close connection."""
    logger.info("Starting MindMate backend...")
    await db.connect()
    await db.register_resources(RESOURCES)
    logger.info("MindMate backend ready")
    yield
    logger.info("Shutting down MindMate backend...")
    await db.close()


app = FastAPI(
    title="MindMate API",
    description="Backend API for the MindMate wellbeing app — moods, journals, affirmations, breathing, quotes, chat and mood reports",
    version="0.1.0",
    lifespan=lifespan,
)

# cors — allow frontend
app.add_middleware(
    CORSMiddleware,
    allow_origins=[settings.FRONTEND_URL, "http://localhost:3000"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# register routers
for resource in RESOURCES:
    app.include_router(build_crud_router(resource))
app.include_router(reports.router)


@app.get("/", response_class=PlainTextResponse)
async def health_check():
    """basic health check endpoint"""
    return HEALTH_MESSAGE


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host=settings.HOST, port=settings.PORT)
