"""Derived status classifiers.

Pure mappings from a record's numeric/state fields to a display tier, a
label and a colour token. No hidden state: the same input always gives the
same answer.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from tradedesk.models import ChecklistItem, InventoryItem, JobStatus, Priority, PropertyType

DEFAULT_COLOR = "bg-gray-100 text-gray-800"


class StockStatus(str, Enum):
    """Inventory stock tiers."""

    GOOD = "good"
    WARNING = "warning"
    LOW = "low"


@dataclass(frozen=True)
class Badge:
    """Display classification of a record field."""

    tier: str
    label: str
    color: str


JOB_STATUS_LABELS: dict[JobStatus, str] = {
    JobStatus.PENDING: "Pending",
    JobStatus.CONFIRMED: "Confirmed",
    JobStatus.EN_ROUTE: "En Route",
    JobStatus.IN_PROGRESS: "In Progress",
    JobStatus.COMPLETED: "Completed",
    JobStatus.CANCELLED: "Cancelled",
}

JOB_STATUS_COLORS: dict[JobStatus, str] = {
    JobStatus.PENDING: "bg-yellow-100 text-yellow-800",
    JobStatus.CONFIRMED: "bg-green-100 text-green-800",
    JobStatus.EN_ROUTE: "bg-blue-100 text-blue-800",
    JobStatus.IN_PROGRESS: "bg-purple-100 text-purple-800",
    JobStatus.COMPLETED: "bg-gray-100 text-gray-800",
    JobStatus.CANCELLED: "bg-red-100 text-red-800",
}

PRIORITY_COLORS: dict[Priority, str] = {
    Priority.LOW: "bg-gray-100 text-gray-600",
    Priority.MEDIUM: "bg-blue-100 text-blue-600",
    Priority.HIGH: "bg-orange-100 text-orange-600",
    Priority.URGENT: "bg-red-100 text-red-600",
}

PROPERTY_TYPE_COLORS: dict[PropertyType, str] = {
    PropertyType.RESIDENTIAL: "bg-green-100 text-green-800",
    PropertyType.COMMERCIAL: "bg-blue-100 text-blue-800",
    PropertyType.HOA: "bg-purple-100 text-purple-800",
    PropertyType.RENTAL: "bg-orange-100 text-orange-800",
}

STOCK_LABELS: dict[StockStatus, str] = {
    StockStatus.LOW: "Low Stock",
    StockStatus.WARNING: "Running Low",
    StockStatus.GOOD: "In Stock",
}

STOCK_COLORS: dict[StockStatus, str] = {
    StockStatus.LOW: "bg-red-500",
    StockStatus.WARNING: "bg-yellow-500",
    StockStatus.GOOD: "bg-green-500",
}

# Technician mobile view: the button shown for a job in each state
NEXT_ACTIONS: dict[JobStatus, str] = {
    JobStatus.PENDING: "Start Job",
    JobStatus.CONFIRMED: "Start Job",
    JobStatus.EN_ROUTE: "Arrive at Site",
    JobStatus.IN_PROGRESS: "Complete Job",
    JobStatus.COMPLETED: "View Details",
}


def classify_stock(stock_level: int, reorder_threshold: int) -> StockStatus:
    """Classify a stock level against its reorder threshold.

    ``low`` when stock_level <= threshold, ``warning`` when
    stock_level <= 1.5 * threshold, ``good`` otherwise. Both bounds are
    inclusive, so a level equal to the threshold is ``low``.
    """
    if stock_level <= reorder_threshold:
        return StockStatus.LOW
    # 2s <= 3t is s <= 1.5t without float rounding
    if stock_level * 2 <= reorder_threshold * 3:
        return StockStatus.WARNING
    return StockStatus.GOOD


def stock_status(item: InventoryItem) -> StockStatus:
    return classify_stock(item.stock_level, item.reorder_threshold)


def stock_badge(item: InventoryItem) -> Badge:
    status = stock_status(item)
    return Badge(tier=status.value, label=STOCK_LABELS[status], color=STOCK_COLORS[status])


def status_badge(status: JobStatus | str) -> Badge:
    """Label and colour for a job status (backend spellings accepted)."""
    status = JobStatus.parse(status)
    return Badge(
        tier=status.value,
        label=JOB_STATUS_LABELS[status],
        color=JOB_STATUS_COLORS[status],
    )


def priority_badge(priority: Priority | str) -> Badge:
    priority = Priority(priority)
    return Badge(
        tier=priority.value,
        label=priority.value.capitalize(),
        color=PRIORITY_COLORS[priority],
    )


def property_type_color(property_type: Optional[PropertyType | str]) -> str:
    if property_type is None:
        return DEFAULT_COLOR
    try:
        return PROPERTY_TYPE_COLORS[PropertyType(property_type)]
    except ValueError:
        return DEFAULT_COLOR


def next_action(status: JobStatus | str) -> str:
    return NEXT_ACTIONS.get(JobStatus.parse(status), "View Job")


def checklist_progress(checklist: Iterable[ChecklistItem]) -> tuple[int, int]:
    """(completed, total) for a job checklist."""
    items = list(checklist)
    return sum(1 for item in items if item.completed), len(items)
