"""Estimate builder.

Money is Decimal throughout and rounded half-up to cents at each line and
at each total:

    subtotal = sum(line.total)
    tax      = (subtotal - discount) * tax_rate / 100
    total    = subtotal - discount + tax
"""

from __future__ import annotations

import uuid
from datetime import date, datetime, timedelta, timezone
from decimal import Decimal
from typing import Any, Optional

import structlog
from pydantic import ValidationError as PydanticValidationError

from tradedesk.config import get_config
from tradedesk.errors import ValidationError
from tradedesk.models import Estimate, Invoice, InvoiceStatus, LineItem, TradeType, to_cents
from tradedesk.trades.registry import lookup

logger = structlog.get_logger(__name__)


def _line_item(data: dict[str, Any]) -> LineItem:
    try:
        return LineItem.model_validate(data)
    except PydanticValidationError as e:
        raise ValidationError(
            {".".join(str(p) for p in err["loc"]): err["msg"] for err in e.errors()}
        ) from e


class EstimateDraft:
    """Mutable estimate under construction for one trade."""

    def __init__(
        self,
        trade: TradeType | str,
        tax_rate_percent: Optional[Decimal] = None,
        discount: Decimal = Decimal("0"),
        job_id: Optional[str] = None,
    ):
        self.trade = lookup(trade)
        billing = get_config().billing
        self.tax_rate_percent = Decimal(
            billing.tax_rate_percent if tax_rate_percent is None else tax_rate_percent
        )
        if self.tax_rate_percent < 0:
            raise ValidationError({"tax_rate_percent": "Tax rate must be non-negative"})
        self.discount = Decimal("0")
        self.set_discount(discount)
        self.job_id = job_id
        self._items: list[LineItem] = []
        self._next_id = 1

    @property
    def line_items(self) -> tuple[LineItem, ...]:
        return tuple(self._items)

    def _new_id(self) -> str:
        # Never reuses an id after a removal
        item_id = str(self._next_id)
        self._next_id += 1
        return item_id

    def _index(self, item_id: str) -> int:
        for index, item in enumerate(self._items):
            if item.id == item_id:
                return index
        raise KeyError(f"No line item '{item_id}'")

    def add_line_item(
        self,
        description: str = "",
        quantity: Decimal | int | str = 1,
        unit_price: Decimal | int | str = 0,
        category: Optional[str] = "Labor",
    ) -> LineItem:
        item = _line_item(
            {
                "id": self._new_id(),
                "description": description,
                "quantity": quantity,
                "unit_price": unit_price,
                "category": category,
            }
        )
        self._items.append(item)
        return item

    def add_quick_item(self, quick_item_id: str, quantity: Decimal | int | str = 1) -> LineItem:
        """Add one of the trade's preset line items at its default price."""
        quick = self.trade.quick_line_item(quick_item_id)
        if quick is None:
            raise ValidationError(
                {"quick_item": f"Unknown quick item '{quick_item_id}' for {self.trade.name}"}
            )
        return self.add_line_item(
            description=quick.description,
            quantity=quantity,
            unit_price=quick.default_price,
            category=quick.category,
        )

    def update_line_item(self, item_id: str, **changes: Any) -> LineItem:
        """Replace fields of a line item.

        Raises:
            KeyError: If there is no line item ``item_id``
            ValidationError: If a changed value is invalid; the item is unchanged
        """
        index = self._index(item_id)
        changes.pop("id", None)
        current = self._items[index].model_dump(exclude={"total"})
        updated = _line_item({**current, **changes})
        self._items[index] = updated
        return updated

    def remove_line_item(self, item_id: str) -> None:
        del self._items[self._index(item_id)]

    def set_discount(self, discount: Decimal | int | str) -> None:
        value = Decimal(discount)
        if value < 0:
            raise ValidationError({"discount": "Discount must be non-negative"})
        self.discount = to_cents(value)

    @property
    def subtotal(self) -> Decimal:
        return to_cents(sum((item.total for item in self._items), Decimal("0")))

    @property
    def tax(self) -> Decimal:
        return to_cents((self.subtotal - self.discount) * self.tax_rate_percent / 100)

    @property
    def total(self) -> Decimal:
        return to_cents(self.subtotal - self.discount + self.tax)

    def build(self, estimate_id: Optional[str] = None) -> Estimate:
        """Freeze the draft into an Estimate.

        Raises:
            ValidationError: If there are no line items, a line has no
                description or the discount exceeds the subtotal
        """
        errors: dict[str, str] = {}
        if not self._items:
            errors["line_items"] = "At least one line item is required"
        for item in self._items:
            if not item.description.strip():
                errors[f"line_items.{item.id}.description"] = "Description is required"
        if self.discount > self.subtotal:
            errors["discount"] = "Discount cannot exceed the subtotal"
        if errors:
            raise ValidationError(errors)

        valid_days = get_config().billing.estimate_valid_days
        estimate = Estimate(
            id=estimate_id or uuid.uuid4().hex,
            job_id=self.job_id,
            trade=self.trade.id,
            line_items=list(self._items),
            subtotal=self.subtotal,
            tax=self.tax,
            discount=self.discount,
            total=self.total,
            expires_at=datetime.now(timezone.utc) + timedelta(days=valid_days),
        )
        logger.info(
            "estimate_built",
            estimate_id=estimate.id,
            trade=self.trade.id.value,
            lines=len(self._items),
            total=str(estimate.total),
        )
        return estimate


def invoice_from_estimate(
    estimate: Estimate,
    job_id: Optional[str] = None,
    due_in_days: int = 30,
    today: Optional[date] = None,
) -> Invoice:
    """Draft invoice carrying over an estimate's lines and amounts."""
    job = job_id or estimate.job_id
    if not job:
        raise ValidationError({"job_id": "An invoice must reference a job"})
    issued = today or date.today()
    return Invoice(
        id=uuid.uuid4().hex,
        job_id=job,
        estimate_id=estimate.id,
        line_items=list(estimate.line_items),
        subtotal=estimate.subtotal,
        tax=estimate.tax,
        discount=estimate.discount,
        total=estimate.total,
        due_date=issued + timedelta(days=due_in_days),
        status=InvoiceStatus.DRAFT,
    )
