import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from sqlmodel import Session

from docportal.api.v1.api import api_router
from docportal.core.config import settings
from docportal.core.logging import setup_logging
from docportal.db.session import engine, init_db
from docportal.services.credential_store import ClientStore

logger = logging.getLogger(__name__)

DEMO_CLIENTS = ["Construcciones S.A.", "Talleres Mecánicos Paco"]


def seed_demo_clients(bind=None) -> None:
    with Session(bind or engine) as session:
        store = ClientStore(session)
        for name in DEMO_CLIENTS:
            store.create(name)


@asynccontextmanager
async def lifespan(app: FastAPI):
    setup_logging()
    init_db()
    if settings.SEED_DEMO_CLIENTS:
        seed_demo_clients()
    logger.info("%s %s started", settings.PROJECT_NAME, settings.VERSION)
    yield


app = FastAPI(
    title=settings.PROJECT_NAME,
    version=settings.VERSION,
    openapi_url=f"{settings.API_V1_STR}/openapi.json",
    lifespan=lifespan,
)

# Set up CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # In production, specify actual origins
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(api_router, prefix=settings.API_V1_STR)
