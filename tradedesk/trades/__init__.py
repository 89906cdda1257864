"""Trade registry package."""

from tradedesk.trades.registry import (
    all_trades,
    backend_name,
    checklist_from_template,
    from_backend_name,
    lookup,
    lookup_or_default,
)

__all__ = [
    "all_trades",
    "backend_name",
    "checklist_from_template",
    "from_backend_name",
    "lookup",
    "lookup_or_default",
]
