"""Job and work-order routes.

Routes:
- GET  /jobs         - Filtered, classified jobs from the backend
- POST /work-orders  - Validate a work-order form and forward it to the backend
"""

from __future__ import annotations

import asyncio
from typing import Optional

import structlog
from fastapi import APIRouter, Depends, Query, status

from tradedesk.errors import ValidationError
from tradedesk.filters.records import ALL, JobCriteria, filter_jobs, jobs_assigned_to
from tradedesk.forms.work_orders import WorkOrderForm
from tradedesk.integration.api_client import PersistenceClient
from tradedesk.models import JobStatus, Priority
from tradedesk.session import SessionContext
from tradedesk.web.dependencies import get_client, get_session_context
from tradedesk.web.models import JobView, WorkOrderRequest

logger = structlog.get_logger(__name__)

router = APIRouter(tags=["jobs"])


@router.get("/jobs", response_model=list[JobView])
async def list_jobs(
    search: str = "",
    status_filter: str = Query(default=ALL, alias="status"),
    priority: str = ALL,
    assigned_to: Optional[str] = None,
    client: PersistenceClient = Depends(get_client),
):
    """Jobs matching the search, status and priority filters.

    The search also matches customer names, so customers are fetched
    alongside the work orders.
    """
    errors = {}
    if status_filter != ALL:
        try:
            JobStatus.parse(status_filter)
        except ValueError:
            errors["status"] = f"Unknown status '{status_filter}'"
    if priority != ALL and priority not in {p.value for p in Priority}:
        errors["priority"] = f"Unknown priority '{priority}'"
    if errors:
        raise ValidationError(errors)
    criteria = JobCriteria(search=search, status=status_filter, priority=priority)

    jobs, customers = await asyncio.gather(client.list_work_orders(), client.list_customers())
    if assigned_to:
        jobs = jobs_assigned_to(jobs, assigned_to)
    return [JobView.from_job(job) for job in filter_jobs(jobs, criteria, customers)]


@router.post("/work-orders", status_code=status.HTTP_201_CREATED, response_model=JobView)
async def create_work_order(
    body: WorkOrderRequest,
    session: SessionContext = Depends(get_session_context),
    client: PersistenceClient = Depends(get_client),
):
    form = WorkOrderForm(session, client)
    form.update(body.model_dump())
    job = await form.submit()
    logger.info("work_order_created", job_id=job.id)
    return JobView.from_job(job)
