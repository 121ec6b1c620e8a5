"""Shared fixtures: an app wired to a mocked gateway, plus settings helpers."""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

# app.main builds a module-level app at import time
os.environ.setdefault("DATA_BACKEND", "remote")
os.environ.setdefault("SUPABASE_URL", "http://fleet.test")
os.environ.setdefault("SUPABASE_ANON_KEY", "anon-test-key")
os.environ.setdefault("LOG_TO_FILE", "false")

import pytest
from unittest.mock import AsyncMock
from fastapi import Depends
from fastapi.testclient import TestClient

from app.auth.bearer import require_bearer
from app.config import Settings
from app.dependencies import get_gateway
from app.main import create_app
from app.services.fleet_gateway import FleetGateway

AUTH = {"Authorization": "Bearer test-token"}


def make_settings(**overrides) -> Settings:
    values = {
        "DATA_BACKEND": "remote",
        "SUPABASE_URL": "http://fleet.test",
        "SUPABASE_ANON_KEY": "anon-test-key",
        "LOG_TO_FILE": False,
    }
    values.update(overrides)
    return Settings(_env_file=None, **values)


def make_gateway(role="MANAGER", user_id="user-1") -> AsyncMock:
    gateway = AsyncMock(spec=FleetGateway)
    gateway.get_user_id.return_value = user_id
    gateway.get_profile_role.return_value = role
    return gateway


def app_with_gateway(gateway):
    app = create_app(make_settings())

    # keep the bearer check, skip building a real client
    async def _override(token: str = Depends(require_bearer)):
        return gateway

    app.dependency_overrides[get_gateway] = _override
    return app


@pytest.fixture
def gateway():
    return make_gateway()


@pytest.fixture
def client(gateway):
    return TestClient(app_with_gateway(gateway))
