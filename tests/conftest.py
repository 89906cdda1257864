"""Pytest configuration and fixtures for TradeDesk tests.

Provides sample backend records, sessions and a fresh config per test.
"""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal

import pytest

from tradedesk.config import reset_config
from tradedesk.models import (
    Business,
    BusinessType,
    ChecklistItem,
    Customer,
    InventoryItem,
    Job,
    JobStatus,
    Priority,
    PropertyType,
    TradeType,
    User,
    UserRole,
)
from tradedesk.session import SessionContext


@pytest.fixture(autouse=True)
def fresh_config(monkeypatch):
    """Development defaults, re-read from the environment for every test."""
    for var in (
        "ENVIRONMENT",
        "DEFAULT_TRADE",
        "TAX_RATE_PERCENT",
        "TRADEDESK_API_URL",
        "TRADEDESK_API_TOKEN",
        "TRADEDESK_API_TIMEOUT",
        "JSON_LOGS",
    ):
        monkeypatch.delenv(var, raising=False)
    reset_config()
    yield
    reset_config()


@pytest.fixture
def admin_user() -> User:
    return User(id="7", name="Dana Reeves", email="dana@example.com", role=UserRole.ADMIN)


@pytest.fixture
def technician_user() -> User:
    return User(id="12", name="Mike Johnson", role=UserRole.TECHNICIAN)


@pytest.fixture
def hvac_business() -> Business:
    return Business(
        id="b1",
        name="Bluff City Heating & Air",
        primary_trade=TradeType.HVAC,
        secondary_trades=[TradeType.ELECTRICAL],
        business_type=BusinessType.TEAM,
        setup_complete=True,
    )


@pytest.fixture
def admin_session(admin_user: User, hvac_business: Business) -> SessionContext:
    return SessionContext(user=admin_user, business=hvac_business, token="abc123")


@pytest.fixture
def technician_session(technician_user: User, hvac_business: Business) -> SessionContext:
    return SessionContext(user=technician_user, business=hvac_business, token="tech-token")


@pytest.fixture
def sample_customers() -> list[Customer]:
    return [
        Customer(
            id="c1",
            name="Johnson Family",
            email="johnson@example.com",
            address="1234 Poplar Ave, Memphis, TN",
            tags=["repeat", "vip"],
            total_revenue=Decimal("2450.00"),
            job_count=6,
            property_type=PropertyType.RESIDENTIAL,
        ),
        Customer(
            id="c2",
            name="Midtown Office Park",
            email="facilities@midtown.example.com",
            address="88 Union Ave, Memphis, TN",
            tags=["commercial"],
            total_revenue=Decimal("8900.50"),
            job_count=14,
            property_type=PropertyType.COMMERCIAL,
        ),
        Customer(
            id="c3",
            name="Harbor Town HOA",
            email="board@harbortown.example.com",
            address="410 Island Dr, Memphis, TN",
            tags=[],
            total_revenue=Decimal("1200.00"),
            job_count=2,
            property_type=PropertyType.HOA,
        ),
    ]


@pytest.fixture
def sample_jobs() -> list[Job]:
    return [
        Job(
            id="j1",
            customer_id="c1",
            assigned_user_id="12",
            scheduled_time=datetime(2024, 6, 10, 9, 0),
            status=JobStatus.CONFIRMED,
            priority=Priority.HIGH,
            location="1234 Poplar Ave",
            job_type="Maintenance",
            description="Seasonal AC tune-up",
            checklist=[
                ChecklistItem(id="c1", text="Check air filters", completed=True),
                ChecklistItem(id="c2", text="Clean condenser coils", completed=False),
            ],
        ),
        Job(
            id="j2",
            customer_id="c2",
            assigned_user_id="14",
            scheduled_time=datetime(2024, 6, 10, 13, 30),
            status=JobStatus.IN_PROGRESS,
            priority=Priority.URGENT,
            job_type="Repair",
            description="Rooftop unit not cooling",
        ),
        Job(
            id="j3",
            customer_id="c3",
            assigned_user_id="12",
            scheduled_time=datetime(2024, 6, 12, 8, 0),
            status=JobStatus.COMPLETED,
            priority=Priority.LOW,
            job_type="Filter Change",
            description="Clubhouse filters",
        ),
        Job(
            id="j4",
            customer_id="c1",
            scheduled_time=datetime(2024, 6, 17, 10, 0),
            status=JobStatus.PENDING,
            priority=Priority.MEDIUM,
            job_type="Installation",
            description="Replace upstairs thermostat",
        ),
    ]


@pytest.fixture
def sample_inventory() -> list[InventoryItem]:
    return [
        InventoryItem(
            id="i1",
            name="16x25x1 Pleated Filter",
            category="Filters",
            sku="FLT-16251",
            stock_level=20,
            reorder_threshold=20,
            cost_per_unit=Decimal("6.50"),
            supplier="Johnstone Supply",
            trade_specific=True,
        ),
        InventoryItem(
            id="i2",
            name="R-410A 25lb Cylinder",
            category="Refrigerants",
            sku="REF-410A-25",
            stock_level=29,
            reorder_threshold=20,
            cost_per_unit=Decimal("189.00"),
            supplier="Ferguson HVAC",
            trade_specific=True,
        ),
        InventoryItem(
            id="i3",
            name="Shop Towels",
            category="Tools",
            sku="GEN-TWL",
            stock_level=41,
            reorder_threshold=20,
            cost_per_unit=Decimal("1.25"),
            supplier="Grainger",
            trade_specific=False,
        ),
    ]
