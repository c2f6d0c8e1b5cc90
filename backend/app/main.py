from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from backend.app.api.config import auto_create_tables, cors_origins
from backend.app.api.routes.core import router as core_router
from backend.app.api.routes.contracts import router as contracts_router
from backend.app.api.routes.webhook import router as webhook_router
from backend.app.api.routes.analytics import router as analytics_router
from backend.app.db import init_db


@asynccontextmanager
async def lifespan(_app: FastAPI):
    # local/dev convenience; real deployments run the alembic migrations
    if auto_create_tables():
        init_db()
    yield


app = FastAPI(title="Arven Contracts API", version="0.1.0", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=cors_origins(),
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(core_router)
app.include_router(contracts_router)
app.include_router(webhook_router)
app.include_router(analytics_router)
