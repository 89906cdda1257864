"""Fixtures for route tests: the app with the backend client replaced."""

from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock

import pytest
from fastapi.testclient import TestClient

from tradedesk.web.app import app as tradedesk_app
from tradedesk.web.dependencies import get_client


@pytest.fixture
def backend(sample_jobs, sample_customers, sample_inventory):
    """Stand-in PersistenceClient serving the sample records."""
    client = MagicMock()
    client.list_work_orders = AsyncMock(return_value=sample_jobs)
    client.list_customers = AsyncMock(return_value=sample_customers)
    client.list_team_members = AsyncMock(return_value=[])
    client.list_inventory = AsyncMock(return_value=sample_inventory)
    client.create_work_order = AsyncMock()
    return client


@pytest.fixture
def app(backend):
    tradedesk_app.dependency_overrides[get_client] = lambda: backend
    yield tradedesk_app
    tradedesk_app.dependency_overrides.clear()


@pytest.fixture
def client(app):
    return TestClient(app)


@pytest.fixture
def admin_headers():
    return {
        "Authorization": "Token abc123",
        "X-User-Id": "7",
        "X-User-Role": "admin",
        "X-Primary-Trade": "hvac",
    }
