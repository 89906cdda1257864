"""Work-order form.

Holds the raw string inputs of the create-work-order form, converts them to
the backend payload and submits through the persistence client. The busy
flag is per form instance: a second submit while the first is pending is
rejected, not queued.
"""

from __future__ import annotations

from collections.abc import Mapping
from datetime import datetime
from decimal import Decimal, InvalidOperation
from typing import Any, Optional, Protocol

import structlog

from tradedesk.errors import AccessDenied, SubmissionFailure, SubmissionInProgress, ValidationError
from tradedesk.forms.assembler import parse_whole_number
from tradedesk.models import Job, JobStatus, Priority, WorkOrderPayload
from tradedesk.session import SessionContext

logger = structlog.get_logger(__name__)

EMPTY_FORM: dict[str, Any] = {
    "customer_id": "",
    "job_type": "",
    "description": "",
    "status": JobStatus.PENDING.value,
    "priority": Priority.LOW.value,
    "tags": "",
    "scheduled_for": "",
    "assigned_to": "",
    "progress_current": "",
    "progress_total": "",
    "amount": "",
    "address": "",
}


class WorkOrderGateway(Protocol):
    async def create_work_order(self, payload: WorkOrderPayload) -> Job: ...


def _text(value: Any) -> str:
    return "" if value is None else str(value).strip()


def split_tags(raw: Any) -> list[str]:
    """Comma-separated tags, trimmed, blanks dropped."""
    if isinstance(raw, (list, tuple)):
        return [t for t in (_text(v) for v in raw) if t]
    return [t.strip() for t in _text(raw).split(",") if t.strip()]


class WorkOrderForm:
    """Create-work-order form bound to a session and a backend gateway.

    Args:
        session: Signed-in user and business; supplies ``owner`` and
            ``primary_trade``
        gateway: Anything with an async ``create_work_order(payload)``
    """

    def __init__(self, session: SessionContext, gateway: WorkOrderGateway):
        self.session = session
        self.gateway = gateway
        self.values: dict[str, Any] = dict(EMPTY_FORM)
        self.errors: dict[str, str] = {}
        self.last_error: Optional[str] = None
        self.busy = False

    def set(self, field: str, value: Any) -> None:
        if field not in EMPTY_FORM:
            raise KeyError(f"Unknown work order field '{field}'")
        self.values[field] = value
        self.errors.pop(field, None)

    def update(self, values: Mapping[str, Any] | None = None, **kwargs: Any) -> None:
        """Set several fields; unknown keys are ignored."""
        for field, value in {**(values or {}), **kwargs}.items():
            if field in EMPTY_FORM:
                self.set(field, value)

    def reset(self) -> None:
        self.values = dict(EMPTY_FORM)
        self.errors = {}
        self.last_error = None

    def build_payload(self) -> WorkOrderPayload:
        """Validate the current inputs and convert them to a payload.

        Raises:
            AccessDenied: If the session user is not an admin or solo operator
            ValidationError: If any field is missing or malformed
        """
        user = self.session.user
        if user is None or not self.session.can_manage_work_orders:
            raise AccessDenied("You do not have access to Work Orders.")

        v = self.values
        errors: dict[str, str] = {}

        customer = None
        if not _text(v["customer_id"]):
            errors["customer_id"] = "Customer is required"
        else:
            try:
                customer = int(_text(v["customer_id"]))
            except ValueError:
                errors["customer_id"] = "Customer must be a numeric id"

        job_type = _text(v["job_type"])
        if not job_type:
            errors["job_type"] = "Job type is required"
        description = _text(v["description"])
        if not description:
            errors["description"] = "Description is required"

        status = JobStatus.PENDING
        try:
            status = JobStatus.parse(v["status"] or JobStatus.PENDING)
        except ValueError:
            errors["status"] = f"Unknown status '{v['status']}'"

        priority = Priority.LOW
        try:
            priority = Priority(_text(v["priority"]).lower() or Priority.LOW)
        except ValueError:
            errors["priority"] = f"Unknown priority '{v['priority']}'"

        scheduled_for = None
        if isinstance(v["scheduled_for"], datetime):
            scheduled_for = v["scheduled_for"]
        elif not _text(v["scheduled_for"]):
            errors["scheduled_for"] = "Scheduled time is required"
        else:
            try:
                scheduled_for = datetime.fromisoformat(_text(v["scheduled_for"]))
            except ValueError:
                errors["scheduled_for"] = "Scheduled time must be an ISO date and time"

        assigned_to = None
        if not _text(v["assigned_to"]):
            errors["assigned_to"] = "Assignee is required"
        else:
            try:
                assigned_to = int(_text(v["assigned_to"]))
            except ValueError:
                errors["assigned_to"] = "Assignee must be a numeric id"

        progress: dict[str, int] = {}
        for field in ("progress_current", "progress_total"):
            if not _text(v[field]):
                progress[field] = 0
                continue
            try:
                progress[field] = parse_whole_number(v[field])
            except ValueError as e:
                errors[field] = f"Progress {e}"
        if (
            "progress_current" not in errors
            and "progress_total" not in errors
            and progress["progress_total"]
            and progress["progress_current"] > progress["progress_total"]
        ):
            errors["progress_current"] = "Progress cannot exceed the total"

        amount = Decimal("0")
        if _text(v["amount"]):
            try:
                amount = Decimal(_text(v["amount"]))
                if not amount.is_finite() or amount < 0:
                    raise InvalidOperation
            except InvalidOperation:
                errors["amount"] = "Amount must be a non-negative number"

        address = _text(v["address"])
        if not address:
            errors["address"] = "Address is required"

        owner = None
        try:
            owner = int(user.id)
        except ValueError:
            errors["owner"] = f"User id '{user.id}' is not numeric"

        if errors:
            self.errors = errors
            raise ValidationError(errors)

        return WorkOrderPayload(
            customer=customer,
            job_type=job_type,
            description=description,
            status=status,
            priority=priority,
            tags=split_tags(v["tags"]),
            scheduled_for=scheduled_for,
            assigned_to=assigned_to,
            progress_current=progress["progress_current"],
            progress_total=progress["progress_total"],
            amount=amount,
            address=address,
            primary_trade=self.session.primary_trade.id.value,
            owner=owner,
        )

    async def submit(self) -> Job:
        """Validate and send the work order.

        On success the form is reset. On SubmissionFailure the inputs are
        kept so the user can retry.

        Raises:
            SubmissionInProgress: If a submit from this form is still pending
            AccessDenied: If the session user may not create work orders
            ValidationError: If the inputs are invalid; nothing is sent
            SubmissionFailure: If the backend rejected the request
        """
        if self.busy:
            raise SubmissionInProgress("A work order submission is already in progress")

        payload = self.build_payload()
        self.busy = True
        self.last_error = None
        try:
            job = await self.gateway.create_work_order(payload)
        except SubmissionFailure as e:
            self.last_error = e.detail
            logger.warning("work_order_form_submit_failed", detail=e.detail)
            raise
        finally:
            self.busy = False

        self.reset()
        return job
