"""
Integration test fixtures.

Builds the real routers and dependency graph on a bare FastAPI app whose
lifespan injects settings and a GeoIP stub; repositories are replaced with
AsyncMocks through dependency_overrides so no MongoDB is needed.
"""

import os
from contextlib import asynccontextmanager
from datetime import datetime, timedelta, timezone
from unittest.mock import AsyncMock

import jwt
import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

os.environ.setdefault("MONGODB_URI", "mongodb://localhost:27017/")

from config import AppSettings, JWTSettings  # noqa: E402
from dependencies import (  # noqa: E402
    get_click_repository,
    get_geoip,
    get_link_repository,
)
from errors import register_error_handlers  # noqa: E402
from infrastructure.geoip import UNKNOWN_LOCATION  # noqa: E402
from routes.analytics_routes import router as analytics_router  # noqa: E402
from routes.click_routes import router as click_router  # noqa: E402

JWT_SECRET = "integration-secret-0123456789abcdef"


@pytest.fixture
def settings():
    return AppSettings(jwt=JWTSettings(jwt_secret=JWT_SECRET, jwt_private_key="", jwt_public_key=""))


@pytest.fixture
def link_repo():
    return AsyncMock()


@pytest.fixture
def click_repo():
    return AsyncMock()


@pytest.fixture
def geoip():
    stub = AsyncMock()
    stub.locate.return_value = UNKNOWN_LOCATION
    return stub


@pytest.fixture
def client(settings, link_repo, click_repo, geoip):
    @asynccontextmanager
    async def lifespan(app: FastAPI):
        app.state.settings = settings
        app.state.geoip = geoip
        yield

    app = FastAPI(lifespan=lifespan)
    register_error_handlers(app)
    app.include_router(analytics_router)
    app.include_router(click_router)
    app.dependency_overrides[get_link_repository] = lambda: link_repo
    app.dependency_overrides[get_click_repository] = lambda: click_repo
    app.dependency_overrides[get_geoip] = lambda: geoip

    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def auth_header(settings, owner_id):
    now = datetime.now(timezone.utc)
    token = jwt.encode(
        {
            "iss": settings.jwt.jwt_issuer,
            "aud": settings.jwt.jwt_audience,
            "sub": str(owner_id),
            "iat": int(now.timestamp()),
            "exp": int((now + timedelta(minutes=5)).timestamp()),
        },
        JWT_SECRET,
        algorithm="HS256",
    )
    return {"Authorization": f"Bearer {token}"}
