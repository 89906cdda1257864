"""Trade-specific job form fields.

One ordered descriptor tuple per trade. Keys match the fields of that
trade's TradeData variant in tradedesk.models, so an assembled bag always
validates against the variant.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from tradedesk.models import TradeType
from tradedesk.trades.registry import lookup

YES_NO = ("yes", "no")


class FieldKind(str, Enum):
    NUMBER = "number"
    SELECT = "select"
    TEXT = "text"


@dataclass(frozen=True)
class FieldDescriptor:
    key: str
    label: str
    kind: FieldKind
    options: tuple[str, ...] = ()
    placeholder: str = ""

    @property
    def is_yes_no(self) -> bool:
        return self.kind is FieldKind.SELECT and self.options == YES_NO


def _number(key: str, label: str, placeholder: str = "") -> FieldDescriptor:
    return FieldDescriptor(key, label, FieldKind.NUMBER, placeholder=placeholder)


def _select(key: str, label: str, *options: str) -> FieldDescriptor:
    return FieldDescriptor(key, label, FieldKind.SELECT, options=options)


def _text(key: str, label: str, placeholder: str = "") -> FieldDescriptor:
    return FieldDescriptor(key, label, FieldKind.TEXT, placeholder=placeholder)


TRADE_FIELDS: dict[TradeType, tuple[FieldDescriptor, ...]] = {
    TradeType.HVAC: (
        _number("system_age", "System Age (years)"),
        _number("seer_rating", "SEER Rating"),
        _select("refrigerant_type", "Refrigerant Type", "R-410A", "R-22", "R-134A"),
        _text("unit_number", "Unit Number", "e.g., Unit 1, Main Floor"),
    ),
    TradeType.ELECTRICAL: (
        _select("panel_type", "Panel Type", "Main Panel", "Sub Panel", "Fuse Box"),
        _select("amperage", "Amperage", "100A", "200A", "400A"),
        _text("circuit_number", "Circuit Number", "e.g., Circuit 12"),
        _select("permit_required", "Permit Required", *YES_NO),
    ),
    TradeType.PLUMBING: (
        _select("pipe_material", "Pipe Material", "PVC", "Copper", "PEX", "Cast Iron"),
        _select("pipe_size", "Pipe Size", "1/2 inch", "3/4 inch", "1 inch", "1.5 inch"),
        _number("water_pressure", "Water Pressure (PSI)", "e.g., 45"),
        _select("fixture_type", "Fixture Type", "Toilet", "Sink", "Shower", "Water Heater"),
    ),
    TradeType.LOCKSMITH: (
        _select("lock_type", "Lock Type", "Deadbolt", "Knob Lock", "Smart Lock", "Padlock"),
        _text("brand_model", "Brand/Model", "e.g., Schlage B60N"),
        _number("key_count", "Key Count", "Number of keys needed"),
        _select("security_level", "Security Level", "Standard", "High Security", "Commercial Grade"),
    ),
    TradeType.GENERAL_CONTRACTOR: (
        _select(
            "project_phase",
            "Project Phase",
            "Planning",
            "Framing",
            "Electrical/Plumbing",
            "Drywall",
            "Finishing",
        ),
        _number("square_footage", "Square Footage", "e.g., 1200"),
        _select("permits_required", "Permits Required", *YES_NO),
        _text("subcontractors", "Subcontractors Needed", "e.g., Electrician, Plumber"),
    ),
}


def fields_for(trade_id: TradeType | str) -> tuple[FieldDescriptor, ...]:
    """Ordered trade-specific field descriptors.

    Raises:
        UnknownTrade: If ``trade_id`` is not a known trade
    """
    return TRADE_FIELDS[lookup(trade_id).id]
