"""Record filters for jobs, customers and inventory.

Every filter is a conjunction of independent predicates: a case-insensitive
substring search over a fixed set of string fields plus equality checks.
Output keeps input order, "all" matches everything, and an empty input gives
an empty list. Applying the same criteria twice changes nothing.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import Any, Optional, TypeVar, Union

from tradedesk.classification.status import StockStatus, stock_status
from tradedesk.models import Customer, InventoryItem, Job, JobStatus, Priority, PropertyType

ALL = "all"

T = TypeVar("T")


def _matches_text(term: str, *fields: Optional[str]) -> bool:
    needle = term.strip().lower()
    if not needle:
        return True
    return any(needle in field.lower() for field in fields if field)


@dataclass(frozen=True)
class JobCriteria:
    """Search over job type, description and customer name; status/priority equality."""

    search: str = ""
    status: Union[JobStatus, str] = ALL
    priority: Union[Priority, str] = ALL

    def __post_init__(self) -> None:
        if self.status != ALL:
            object.__setattr__(self, "status", JobStatus.parse(self.status))
        if self.priority != ALL:
            object.__setattr__(self, "priority", Priority(self.priority))

    def matches(self, job: Job, customer_names: Optional[Mapping[str, str]] = None) -> bool:
        customer_name = job.customer_name
        if customer_name is None and customer_names:
            customer_name = customer_names.get(job.customer_id)
        return (
            _matches_text(self.search, job.job_type, job.description, customer_name)
            and (self.status == ALL or job.status == self.status)
            and (self.priority == ALL or job.priority == self.priority)
        )


@dataclass(frozen=True)
class CustomerCriteria:
    """Search over name, email, address and tags; property type equality."""

    search: str = ""
    property_type: Union[PropertyType, str] = ALL

    def __post_init__(self) -> None:
        if self.property_type != ALL:
            object.__setattr__(self, "property_type", PropertyType(self.property_type))

    def matches(self, customer: Customer) -> bool:
        return (
            _matches_text(self.search, customer.name, customer.email, customer.address, *customer.tags)
            and (self.property_type == ALL or customer.property_type == self.property_type)
        )


@dataclass(frozen=True)
class InventoryCriteria:
    """Search over name, SKU and supplier; category equality; tri-state trade flag.

    ``trade_specific`` is None for any, True for trade-specific stock only and
    False for general stock only.
    """

    search: str = ""
    category: str = ALL
    trade_specific: Optional[bool] = None
    stock: Union[StockStatus, str] = ALL

    def __post_init__(self) -> None:
        if self.stock != ALL:
            object.__setattr__(self, "stock", StockStatus(self.stock))

    def matches(self, item: InventoryItem) -> bool:
        return (
            _matches_text(self.search, item.name, item.sku, item.supplier)
            and (self.category == ALL or item.category == self.category)
            and (self.trade_specific is None or item.trade_specific == self.trade_specific)
            and (self.stock == ALL or stock_status(item) == self.stock)
        )


def filter_records(records: Iterable[T], criteria: Any, **context: Any) -> list[T]:
    """Stable filter: the records for which ``criteria.matches`` holds."""
    return [record for record in records if criteria.matches(record, **context)]


def filter_jobs(
    jobs: Iterable[Job],
    criteria: Optional[JobCriteria] = None,
    customers: Optional[Iterable[Customer]] = None,
) -> list[Job]:
    """Filter jobs; ``customers`` resolves customer names for the text search."""
    criteria = criteria or JobCriteria()
    names = {c.id: c.name for c in customers} if customers is not None else None
    return filter_records(jobs, criteria, customer_names=names)


def filter_customers(
    customers: Iterable[Customer], criteria: Optional[CustomerCriteria] = None
) -> list[Customer]:
    return filter_records(customers, criteria or CustomerCriteria())


def filter_inventory(
    items: Iterable[InventoryItem], criteria: Optional[InventoryCriteria] = None
) -> list[InventoryItem]:
    return filter_records(items, criteria or InventoryCriteria())


def distinct_categories(items: Iterable[InventoryItem]) -> list[str]:
    """Categories present in ``items``, in first-seen order."""
    return list(dict.fromkeys(item.category for item in items))


def low_stock_items(items: Iterable[InventoryItem]) -> list[InventoryItem]:
    """Items at or below their reorder threshold."""
    return [item for item in items if stock_status(item) is StockStatus.LOW]


def jobs_assigned_to(jobs: Iterable[Job], user_id: str) -> list[Job]:
    return [job for job in jobs if job.assigned_user_id == user_id]
