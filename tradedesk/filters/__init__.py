"""Record filters."""

from tradedesk.filters.records import (
    ALL,
    CustomerCriteria,
    InventoryCriteria,
    JobCriteria,
    filter_customers,
    filter_inventory,
    filter_jobs,
    filter_records,
)

__all__ = [
    "ALL",
    "CustomerCriteria",
    "InventoryCriteria",
    "JobCriteria",
    "filter_customers",
    "filter_inventory",
    "filter_jobs",
    "filter_records",
]
