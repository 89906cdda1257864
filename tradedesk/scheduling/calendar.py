"""Schedule views: Monday-first weeks, per-day job lists, technician "today"."""

from __future__ import annotations

from collections.abc import Iterable
from datetime import date, datetime, timedelta
from typing import Optional

from tradedesk.filters.records import jobs_assigned_to
from tradedesk.models import Job, JobStatus


def _as_date(day: date | datetime) -> date:
    return day.date() if isinstance(day, datetime) else day


def week_start(day: date | datetime) -> date:
    """Monday of the week containing ``day``."""
    day = _as_date(day)
    return day - timedelta(days=day.weekday())


def week_days(day: date | datetime) -> list[date]:
    """The seven days (Monday to Sunday) of the week containing ``day``."""
    start = week_start(day)
    return [start + timedelta(days=i) for i in range(7)]


def shift_week(day: date | datetime, weeks: int) -> date:
    """Monday ``weeks`` weeks before (negative) or after ``day``'s week."""
    return week_start(day) + timedelta(weeks=weeks)


def jobs_for_day(jobs: Iterable[Job], day: date | datetime) -> list[Job]:
    """Jobs scheduled on ``day``, earliest first.

    Compares calendar dates of ``scheduled_time`` as stored; aware
    datetimes are not converted to a local zone.
    """
    target = _as_date(day)
    return sorted(
        (job for job in jobs if job.scheduled_time.date() == target),
        key=lambda job: job.scheduled_time,
    )


def week_schedule(jobs: Iterable[Job], day: date | datetime) -> dict[date, list[Job]]:
    """Jobs grouped by day for the week containing ``day``."""
    jobs = list(jobs)
    return {d: jobs_for_day(jobs, d) for d in week_days(day)}


def technician_jobs_today(
    jobs: Iterable[Job], user_id: str, today: Optional[date] = None
) -> list[Job]:
    """A technician's jobs scheduled for today."""
    return jobs_for_day(jobs_assigned_to(jobs, user_id), today or date.today())


def completed_count(jobs: Iterable[Job]) -> int:
    return sum(1 for job in jobs if job.status is JobStatus.COMPLETED)
