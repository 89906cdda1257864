"""Shared Pydantic models for the TradeDesk web API.

Request bodies and the classified views returned by the routes.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Any, Optional, Union

from pydantic import BaseModel, Field

from tradedesk.classification.status import (
    checklist_progress,
    next_action,
    priority_badge,
    property_type_color,
    status_badge,
    stock_badge,
)
from tradedesk.forms.fields import FieldDescriptor
from tradedesk.models import Customer, InventoryItem, Job, TradeConfig

# ============================================================================
# Trades
# ============================================================================


class TradeSummary(BaseModel):
    id: str
    name: str
    icon: str
    color: str
    default_job_duration: int
    job_types: list[str]

    @classmethod
    def from_config(cls, config: TradeConfig) -> TradeSummary:
        return cls(
            id=config.id.value,
            name=config.name,
            icon=config.icon,
            color=config.color,
            default_job_duration=config.default_job_duration,
            job_types=list(config.job_types),
        )


class FieldOut(BaseModel):
    key: str
    label: str
    kind: str
    options: list[str] = Field(default_factory=list)
    placeholder: str = ""

    @classmethod
    def from_descriptor(cls, descriptor: FieldDescriptor) -> FieldOut:
        return cls(
            key=descriptor.key,
            label=descriptor.label,
            kind=descriptor.kind.value,
            options=list(descriptor.options),
            placeholder=descriptor.placeholder,
        )


class AssembleRequest(BaseModel):
    """Body of POST /trades/{trade_id}/jobs/assemble."""

    job_type: str = ""
    description: str = ""
    estimated_duration: Optional[Union[int, str]] = None
    priority: Optional[str] = None
    trade_fields: dict[str, Any] = Field(default_factory=dict)


# ============================================================================
# Work orders & estimates
# ============================================================================


class WorkOrderRequest(BaseModel):
    """Raw work-order form inputs, as the form would post them."""

    customer_id: Union[int, str] = ""
    job_type: str = ""
    description: str = ""
    status: str = "pending"
    priority: str = "low"
    tags: Union[str, list[str]] = ""
    scheduled_for: str = ""
    assigned_to: Union[int, str, None] = ""
    progress_current: Union[int, str] = ""
    progress_total: Union[int, str] = ""
    amount: Union[Decimal, str] = ""
    address: str = ""


class EstimateLineRequest(BaseModel):
    """Either a free line (description + price) or a trade quick item."""

    quick_item_id: Optional[str] = None
    description: str = ""
    quantity: Decimal = Decimal("1")
    unit_price: Decimal = Decimal("0")
    category: Optional[str] = "Labor"


class EstimateRequest(BaseModel):
    trade: str
    job_id: Optional[str] = None
    lines: list[EstimateLineRequest] = Field(default_factory=list)
    discount: Decimal = Decimal("0")
    tax_rate_percent: Optional[Decimal] = None


# ============================================================================
# Classified record views
# ============================================================================


class JobView(BaseModel):
    job: Job
    status_label: str
    status_color: str
    priority_color: str
    next_action: str
    checklist_done: int
    checklist_total: int

    @classmethod
    def from_job(cls, job: Job) -> JobView:
        status = status_badge(job.status)
        done, total = checklist_progress(job.checklist)
        return cls(
            job=job,
            status_label=status.label,
            status_color=status.color,
            priority_color=priority_badge(job.priority).color,
            next_action=next_action(job.status),
            checklist_done=done,
            checklist_total=total,
        )


class CustomerView(BaseModel):
    customer: Customer
    property_type_color: str

    @classmethod
    def from_customer(cls, customer: Customer) -> CustomerView:
        return cls(customer=customer, property_type_color=property_type_color(customer.property_type))


class InventoryView(BaseModel):
    item: InventoryItem
    stock_status: str
    stock_label: str
    stock_color: str

    @classmethod
    def from_item(cls, item: InventoryItem) -> InventoryView:
        badge = stock_badge(item)
        return cls(item=item, stock_status=badge.tier, stock_label=badge.label, stock_color=badge.color)
