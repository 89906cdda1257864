"""TradeDesk web route modules.

Each module exports a ``router`` (APIRouter instance) that
tradedesk.web.app includes. Shared dependencies live in
tradedesk.web.dependencies, shared request/response models in
tradedesk.web.models.
"""

from tradedesk.web.routes import (
    customers,
    dashboard,
    estimates,
    health,
    inventory,
    jobs,
    trades,
)

__all__ = [
    "customers",
    "dashboard",
    "estimates",
    "health",
    "inventory",
    "jobs",
    "trades",
]
