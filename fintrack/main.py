# fintrack/main.py
from __future__ import annotations

from contextlib import asynccontextmanager

from fastapi import FastAPI

from fintrack.config import get_settings
from fintrack.db import create_db_and_tables
from fintrack.errors import install_error_handlers
from fintrack.observability import RequestLogMiddleware, configure_logging
from fintrack.routers.auth import router as auth_router
from fintrack.routers.budget import router as budget_router
from fintrack.routers.export import router as export_router
from fintrack.routers.profile import router as profile_router
from fintrack.routers.system import router as system_router
from fintrack.routers.transactions import router as transactions_router
from fintrack.sessions import InMemorySessionStore

settings = get_settings()
configure_logging(settings.log_level)


@asynccontextmanager
async def lifespan(app: FastAPI):
    if settings.create_tables:
        create_db_and_tables()
    yield


app = FastAPI(title="Finance Tracker", version="0.1.0", lifespan=lifespan)

# Shared state read by dependencies and middleware (swap in tests)
app.state.settings = settings
app.state.session_store = InMemorySessionStore(max_age=settings.session_max_age)

app.add_middleware(RequestLogMiddleware)
install_error_handlers(app)

# Routers
app.include_router(system_router)
app.include_router(auth_router)
app.include_router(profile_router)
app.include_router(transactions_router)
app.include_router(budget_router)
app.include_router(export_router)
