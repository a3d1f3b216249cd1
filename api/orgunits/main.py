"""FastAPI application entry point."""
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from orgunits.api import organizations
from orgunits.core.config import settings
from orgunits.core.database import init_db

logger = logging.getLogger(__name__)


def configure_logging() -> None:
    """Configure root logging from settings."""
    logging.basicConfig(
        level=settings.LOG_LEVEL.upper(),
        format="%(asctime)s [%(name)s] %(levelname)s: %(message)s",
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    if settings.CREATE_TABLES_ON_STARTUP:
        logger.info("Creating organization tables")
        init_db()
    yield


configure_logging()

app = FastAPI(title="Organization Hierarchy API", version="1.0.0", lifespan=lifespan)

# CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.get_cors_origins(),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Routes
app.include_router(organizations.router, prefix="/organizations", tags=["organizations"])


@app.get("/")
def read_root():
    return {"message": "Organization Hierarchy API"}


def run_server():
    """Serve the API with uvicorn on API_HOST:API_PORT."""
    import uvicorn

    uvicorn.run(app, host=settings.API_HOST, port=settings.API_PORT)


if __name__ == "__main__":
    run_server()
