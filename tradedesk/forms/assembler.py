"""Job form assembly.

Folds the universal job fields and the trade-specific extras a user typed
into one validated JobSubmission. Universal fields (job type, description)
are required; trade extras are optional and only ever layered on top of a
valid base.
"""

from __future__ import annotations

from collections.abc import Mapping
from decimal import Decimal, InvalidOperation
from typing import Any, Optional

import structlog
from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError
from pydantic.alias_generators import to_camel

from tradedesk.errors import ValidationError
from tradedesk.forms.fields import FieldDescriptor, FieldKind, fields_for
from tradedesk.models import TRADE_DATA_MODELS, Priority, TradeData, TradeType
from tradedesk.trades.registry import lookup

logger = structlog.get_logger(__name__)


class JobSubmission(BaseModel):
    """Validated result of the trade-specific job form."""

    trade: TradeType
    job_type: str
    description: str
    estimated_duration: int
    priority: Priority
    trade_data: TradeData

    def to_payload(self) -> dict[str, Any]:
        """Flat universal fields plus the nested trade-specific bag."""
        return {
            "trade": self.trade.value,
            "job_type": self.job_type,
            "description": self.description,
            "estimated_duration": self.estimated_duration,
            "priority": self.priority.value,
            "trade_specific_data": self.trade_data.model_dump(
                mode="json", exclude={"trade"}, exclude_none=True
            ),
        }


def _is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def parse_whole_number(value: Any) -> int:
    """Parse a form value as a non-negative whole number.

    Raises:
        ValueError: If the value is not a whole number or is negative
    """
    if isinstance(value, bool):
        raise ValueError("must be a whole number")
    if isinstance(value, int):
        number = value
    else:
        try:
            parsed = Decimal(str(value).strip())
        except InvalidOperation:
            raise ValueError("must be a whole number")
        if parsed != parsed.to_integral_value():
            raise ValueError("must be a whole number")
        number = int(parsed)
    if number < 0:
        raise ValueError("must not be negative")
    return number


def _coerce_field(descriptor: FieldDescriptor, raw: Any) -> Any:
    if descriptor.kind is FieldKind.NUMBER:
        return parse_whole_number(raw)
    if descriptor.kind is FieldKind.SELECT:
        if descriptor.is_yes_no and isinstance(raw, bool):
            return raw
        value = str(raw).strip()
        if value not in descriptor.options:
            raise ValueError(f"must be one of: {', '.join(descriptor.options)}")
        # pydantic reads "yes"/"no" as booleans
        return value
    return str(raw).strip()


def _trade_value(trade_fields: Mapping[str, Any], key: str) -> Any:
    if key in trade_fields:
        return trade_fields[key]
    return trade_fields.get(to_camel(key))


def assemble(
    trade_id: TradeType | str,
    base_fields: Mapping[str, Any],
    trade_fields: Optional[Mapping[str, Any]] = None,
) -> JobSubmission:
    """Build a job submission for ``trade_id``.

    Args:
        trade_id: Trade whose descriptors define the extra fields
        base_fields: ``job_type``, ``description`` and optionally
            ``estimated_duration`` (minutes) and ``priority``
        trade_fields: Raw values keyed by descriptor key (camelCase keys
            from older clients are also read); blanks are dropped and
            unknown keys ignored

    Raises:
        UnknownTrade: If ``trade_id`` is not a known trade
        ValidationError: If a required field is empty or a value does not
            fit its field
    """
    config = lookup(trade_id)
    trade_fields = trade_fields or {}
    errors: dict[str, str] = {}

    job_type = "" if base_fields.get("job_type") is None else str(base_fields["job_type"]).strip()
    if not job_type:
        errors["job_type"] = "Job type is required"

    description = (
        "" if base_fields.get("description") is None else str(base_fields["description"]).strip()
    )
    if not description:
        errors["description"] = "Description is required"

    duration = config.default_job_duration
    raw_duration = base_fields.get("estimated_duration")
    if not _is_blank(raw_duration):
        try:
            duration = parse_whole_number(raw_duration)
            if duration == 0:
                raise ValueError("must be greater than zero")
        except ValueError as e:
            errors["estimated_duration"] = f"Estimated duration {e}"

    priority = Priority.MEDIUM
    raw_priority = base_fields.get("priority")
    if not _is_blank(raw_priority):
        try:
            priority = Priority(str(raw_priority).strip().lower())
        except ValueError:
            errors["priority"] = f"Priority must be one of: {', '.join(p.value for p in Priority)}"

    descriptors = fields_for(config.id)
    collected: dict[str, Any] = {}
    for descriptor in descriptors:
        raw = _trade_value(trade_fields, descriptor.key)
        if _is_blank(raw):
            continue
        try:
            collected[descriptor.key] = _coerce_field(descriptor, raw)
        except ValueError as e:
            errors[descriptor.key] = f"{descriptor.label} {e}"

    known = {d.key for d in descriptors} | {to_camel(d.key) for d in descriptors}
    ignored = sorted(k for k in trade_fields if k not in known)
    if ignored:
        logger.debug("trade_fields_ignored", trade=config.id.value, keys=ignored)

    if errors:
        logger.info("job_form_rejected", trade=config.id.value, fields=sorted(errors))
        raise ValidationError(errors)

    try:
        trade_data = TRADE_DATA_MODELS[config.id].model_validate(collected)
    except PydanticValidationError as e:
        raise ValidationError(
            {".".join(str(p) for p in err["loc"]): err["msg"] for err in e.errors()}
        ) from e

    return JobSubmission(
        trade=config.id,
        job_type=job_type,
        description=description,
        estimated_duration=duration,
        priority=priority,
        trade_data=trade_data,
    )
