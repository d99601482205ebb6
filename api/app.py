import logging
import os
from contextlib import asynccontextmanager
from typing import Optional
from fastapi import FastAPI
from fastapi.staticfiles import StaticFiles
from api.core import settings
from api.core import database
from api.core.errors import ApiError, api_error_handler
from fastapi.middleware.cors import CORSMiddleware

# Import routes
from api.routes import skills

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)


@asynccontextmanager
async def lifespan(app: FastAPI):
    await database.init_db()
    yield
    await database.close_db()


def mount_client(app: FastAPI, client_dir: Optional[str]):
    """Serve the built single-page client from "/", or an API banner when there is none."""
    if client_dir and os.path.isdir(client_dir):
        app.mount("/", StaticFiles(directory=client_dir, html=True), name="client")
        return

    @app.get("/")
    async def root():
        return {"message": "Skill Graph API"}


app = FastAPI(title="Skill Graph API", version="0.1.0", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
    expose_headers=["Duration-ms", "Neo4j"],
)

app.add_exception_handler(ApiError, api_error_handler)

# Include routers
app.include_router(skills.router)


@app.get("/health")
async def health_check():
    return {"status": "healthy"}


# Registered last so API routes take precedence over the client mount
mount_client(app, settings.CLIENT_DIR)
