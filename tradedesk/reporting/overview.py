"""Dashboard overview and report metrics.

Aggregates job, customer and inventory snapshots fetched from the backend
into the numbers shown on the dashboard and the reports tab.
"""

from __future__ import annotations

from collections import Counter
from collections.abc import Iterable
from dataclasses import dataclass, field
from datetime import date, datetime, timezone
from decimal import Decimal
from typing import Optional

from tradedesk.filters.records import low_stock_items
from tradedesk.models import Customer, InventoryItem, Job, JobStatus, Priority, to_cents
from tradedesk.scheduling.calendar import jobs_for_day


@dataclass
class DashboardOverview:
    """Headline numbers for the dashboard overview tab."""

    trade: str
    today_jobs: list[Job]
    urgent_jobs: list[Job]
    low_stock_items: list[InventoryItem]
    total_revenue: Decimal
    active_customers: int
    open_jobs: int  # anything not completed
    computed_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def low_stock_count(self) -> int:
        return len(self.low_stock_items)


@dataclass
class ReportMetrics:
    """Business totals for the reports tab."""

    total_jobs: int
    completed_jobs: int
    total_revenue: Decimal
    average_job_value: Decimal  # revenue per job, 0 with no jobs
    jobs_by_status: dict[str, int]
    jobs_by_type: dict[str, int]
    top_customers: list[Customer]
    low_stock_count: int
    inventory_value: Decimal
    inventory_items: int
    customer_count: int

    @property
    def completion_rate(self) -> float:
        """Completed jobs as a percentage of all jobs."""
        if not self.total_jobs:
            return 0.0
        return round(self.completed_jobs / self.total_jobs * 100, 1)


def _revenue(customers: Iterable[Customer]) -> Decimal:
    return to_cents(sum((c.total_revenue for c in customers), Decimal("0")))


def compute_overview(
    trade: str,
    jobs: Iterable[Job],
    customers: Iterable[Customer],
    inventory: Iterable[InventoryItem],
    today: Optional[date] = None,
) -> DashboardOverview:
    jobs = list(jobs)
    customers = list(customers)
    return DashboardOverview(
        trade=trade,
        today_jobs=jobs_for_day(jobs, today or date.today()),
        urgent_jobs=[job for job in jobs if job.priority is Priority.URGENT],
        low_stock_items=low_stock_items(inventory),
        total_revenue=_revenue(customers),
        active_customers=len(customers),
        open_jobs=sum(1 for job in jobs if job.status is not JobStatus.COMPLETED),
    )


def compute_report_metrics(
    jobs: Iterable[Job],
    customers: Iterable[Customer],
    inventory: Iterable[InventoryItem],
    top_n: int = 5,
) -> ReportMetrics:
    """Totals, breakdowns by status and job type, and top customers by revenue."""
    jobs = list(jobs)
    customers = list(customers)
    inventory = list(inventory)

    total_revenue = _revenue(customers)
    average = to_cents(total_revenue / len(jobs)) if jobs else Decimal("0.00")

    # Ties keep input order (sorted is stable)
    top = sorted(customers, key=lambda c: c.total_revenue, reverse=True)[:top_n]

    return ReportMetrics(
        total_jobs=len(jobs),
        completed_jobs=sum(1 for job in jobs if job.status is JobStatus.COMPLETED),
        total_revenue=total_revenue,
        average_job_value=average,
        jobs_by_status=dict(Counter(job.status.value for job in jobs)),
        jobs_by_type=dict(Counter(job.job_type for job in jobs)),
        top_customers=top,
        low_stock_count=len(low_stock_items(inventory)),
        inventory_value=to_cents(sum((item.total_value for item in inventory), Decimal("0"))),
        inventory_items=len(inventory),
        customer_count=len(customers),
    )
