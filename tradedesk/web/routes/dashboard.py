"""Dashboard, schedule and report routes.

Routes:
- GET /dashboard/overview  - Headline numbers for the overview tab
- GET /dashboard/reports   - Report metrics
- GET /dashboard/schedule  - Jobs per day for one week (Monday first)
- GET /dashboard/today     - A technician's jobs for today
"""

from __future__ import annotations

import asyncio
from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, Query

from tradedesk.integration.api_client import PersistenceClient
from tradedesk.reporting.overview import compute_overview, compute_report_metrics
from tradedesk.scheduling.calendar import shift_week, technician_jobs_today, week_schedule
from tradedesk.session import SessionContext
from tradedesk.web.dependencies import get_client, get_session_context
from tradedesk.web.models import JobView

router = APIRouter(prefix="/dashboard", tags=["dashboard"])


async def _snapshot(client: PersistenceClient):
    return await asyncio.gather(
        client.list_work_orders(), client.list_customers(), client.list_inventory()
    )


@router.get("/overview")
async def dashboard_overview(
    today: Optional[date] = None,
    session: SessionContext = Depends(get_session_context),
    client: PersistenceClient = Depends(get_client),
):
    jobs, customers, inventory = await _snapshot(client)
    overview = compute_overview(session.primary_trade.name, jobs, customers, inventory, today)
    return {
        "trade": overview.trade,
        "today_jobs": [JobView.from_job(job) for job in overview.today_jobs],
        "urgent_jobs": len(overview.urgent_jobs),
        "low_stock_count": overview.low_stock_count,
        "total_revenue": str(overview.total_revenue),
        "active_customers": overview.active_customers,
        "open_jobs": overview.open_jobs,
        "computed_at": overview.computed_at.isoformat(),
    }


@router.get("/reports")
async def dashboard_reports(
    top: int = Query(default=5, ge=1, le=50),
    client: PersistenceClient = Depends(get_client),
):
    jobs, customers, inventory = await _snapshot(client)
    metrics = compute_report_metrics(jobs, customers, inventory, top_n=top)
    return {
        "total_jobs": metrics.total_jobs,
        "completed_jobs": metrics.completed_jobs,
        "completion_rate": metrics.completion_rate,
        "total_revenue": str(metrics.total_revenue),
        "average_job_value": str(metrics.average_job_value),
        "jobs_by_status": metrics.jobs_by_status,
        "jobs_by_type": metrics.jobs_by_type,
        "top_customers": [
            {"id": c.id, "name": c.name, "total_revenue": str(c.total_revenue)}
            for c in metrics.top_customers
        ],
        "low_stock_count": metrics.low_stock_count,
        "inventory_value": str(metrics.inventory_value),
        "inventory_items": metrics.inventory_items,
        "customer_count": metrics.customer_count,
    }


@router.get("/schedule")
async def weekly_schedule(
    day: Optional[date] = None,
    weeks: int = 0,
    client: PersistenceClient = Depends(get_client),
):
    """Week containing ``day`` (default today), shifted by ``weeks``."""
    anchor = shift_week(day or date.today(), weeks)
    schedule = week_schedule(await client.list_work_orders(), anchor)
    return {
        d.isoformat(): [JobView.from_job(job) for job in day_jobs]
        for d, day_jobs in schedule.items()
    }


@router.get("/today", response_model=list[JobView])
async def technician_today(
    user_id: Optional[str] = None,
    today: Optional[date] = None,
    session: SessionContext = Depends(get_session_context),
    client: PersistenceClient = Depends(get_client),
):
    """Today's jobs for ``user_id``, or for the requesting user."""
    target = user_id or (session.user.id if session.user else None)
    if target is None:
        return []
    jobs = await client.list_work_orders()
    return [JobView.from_job(job) for job in technician_jobs_today(jobs, target, today)]
