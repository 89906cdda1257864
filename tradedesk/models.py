"""TradeDesk Pydantic models for type-safe data validation.

Records mirror the backend schema. Inbound data may use the backend's
snake_case names or the camelCase names of older exports; both validate.
"""

from __future__ import annotations

from datetime import date, datetime
from decimal import ROUND_HALF_UP, Decimal
from enum import Enum
from typing import Annotated, Any, Literal, Optional, Union

from pydantic import (
    AliasChoices,
    AliasGenerator,
    BaseModel,
    ConfigDict,
    Field,
    computed_field,
    field_validator,
    model_validator,
)
from pydantic.alias_generators import to_camel

CENTS = Decimal("0.01")


def to_cents(value: Decimal) -> Decimal:
    """Round a money amount half-up to whole cents."""
    return Decimal(value).quantize(CENTS, rounding=ROUND_HALF_UP)


class TradeType(str, Enum):
    """Trades a business can operate in."""

    HVAC = "hvac"
    ELECTRICAL = "electrical"
    PLUMBING = "plumbing"
    LOCKSMITH = "locksmith"
    GENERAL_CONTRACTOR = "general-contractor"


class JobStatus(str, Enum):
    """Work order lifecycle states."""

    PENDING = "pending"
    CONFIRMED = "confirmed"
    EN_ROUTE = "en-route"
    IN_PROGRESS = "in-progress"
    COMPLETED = "completed"
    CANCELLED = "cancelled"

    @classmethod
    def parse(cls, value: Any) -> JobStatus:
        """Accept the backend's underscore spelling (en_route) as well."""
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            return cls(value.strip().lower().replace("_", "-"))
        return cls(value)


class Priority(str, Enum):
    """Work order priority."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    URGENT = "urgent"


class PropertyType(str, Enum):
    RESIDENTIAL = "residential"
    COMMERCIAL = "commercial"
    HOA = "hoa"
    RENTAL = "rental"


class UserRole(str, Enum):
    ADMIN = "admin"
    TECHNICIAN = "technician"
    CUSTOMER = "customer"
    SOLO = "solo"


class BusinessType(str, Enum):
    SOLO = "solo"
    TEAM = "team"


class InvoiceStatus(str, Enum):
    DRAFT = "draft"
    SENT = "sent"
    PAID = "paid"
    OVERDUE = "overdue"
    CANCELLED = "cancelled"


class Record(BaseModel):
    """Base for backend records: accepts snake_case and camelCase keys."""

    model_config = ConfigDict(
        alias_generator=AliasGenerator(validation_alias=to_camel),
        populate_by_name=True,
        coerce_numbers_to_str=True,
        extra="ignore",
    )


# ============================================================================
# Trade configuration
# ============================================================================


class ChecklistTemplate(BaseModel):
    """Named, ordered list of sub-tasks a job of this kind goes through."""

    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    items: tuple[str, ...]


class QuickLineItem(BaseModel):
    """Preset estimate line (service call, common part) offered per trade."""

    model_config = ConfigDict(frozen=True)

    id: str
    description: str
    category: str
    default_price: Decimal
    unit: str

    @field_validator("default_price")
    @classmethod
    def validate_default_price(cls, v: Decimal) -> Decimal:
        if v < 0:
            raise ValueError("default_price must be non-negative")
        return v


class TradeConfig(BaseModel):
    """Everything that varies by trade: vocabulary, defaults, templates."""

    model_config = ConfigDict(frozen=True)

    id: TradeType
    name: str
    icon: str
    color: str
    backend_name: str
    default_job_duration: int = Field(gt=0)  # minutes
    job_types: tuple[str, ...] = Field(min_length=1)
    inventory_categories: tuple[str, ...] = ()
    checklist_templates: tuple[ChecklistTemplate, ...] = ()
    quick_line_items: tuple[QuickLineItem, ...] = ()

    def checklist_template(self, template_id: str) -> ChecklistTemplate | None:
        return next((t for t in self.checklist_templates if t.id == template_id), None)

    def quick_line_item(self, item_id: str) -> QuickLineItem | None:
        return next((q for q in self.quick_line_items if q.id == item_id), None)


# ============================================================================
# Trade-specific job data (tagged union keyed by trade)
# ============================================================================


class _TradeDataBase(Record):
    pass


class HvacData(_TradeDataBase):
    trade: Literal["hvac"] = "hvac"
    system_age: Optional[int] = Field(default=None, ge=0)  # years
    seer_rating: Optional[int] = Field(default=None, ge=0)
    refrigerant_type: Optional[Literal["R-410A", "R-22", "R-134A"]] = None
    unit_number: Optional[str] = None


class ElectricalData(_TradeDataBase):
    trade: Literal["electrical"] = "electrical"
    panel_type: Optional[Literal["Main Panel", "Sub Panel", "Fuse Box"]] = None
    amperage: Optional[Literal["100A", "200A", "400A"]] = None
    circuit_number: Optional[str] = None
    permit_required: Optional[bool] = None


class PlumbingData(_TradeDataBase):
    trade: Literal["plumbing"] = "plumbing"
    pipe_material: Optional[Literal["PVC", "Copper", "PEX", "Cast Iron"]] = None
    pipe_size: Optional[Literal["1/2 inch", "3/4 inch", "1 inch", "1.5 inch"]] = None
    water_pressure: Optional[int] = Field(default=None, ge=0)  # PSI
    fixture_type: Optional[Literal["Toilet", "Sink", "Shower", "Water Heater"]] = None


class LocksmithData(_TradeDataBase):
    trade: Literal["locksmith"] = "locksmith"
    lock_type: Optional[Literal["Deadbolt", "Knob Lock", "Smart Lock", "Padlock"]] = None
    brand_model: Optional[str] = None
    key_count: Optional[int] = Field(default=None, ge=0)
    security_level: Optional[Literal["Standard", "High Security", "Commercial Grade"]] = None


class GeneralContractorData(_TradeDataBase):
    trade: Literal["general-contractor"] = "general-contractor"
    project_phase: Optional[
        Literal["Planning", "Framing", "Electrical/Plumbing", "Drywall", "Finishing"]
    ] = None
    square_footage: Optional[int] = Field(default=None, ge=0)
    permits_required: Optional[bool] = None
    subcontractors: Optional[str] = None


TradeData = Annotated[
    Union[HvacData, ElectricalData, PlumbingData, LocksmithData, GeneralContractorData],
    Field(discriminator="trade"),
]

TRADE_DATA_MODELS: dict[TradeType, type[_TradeDataBase]] = {
    TradeType.HVAC: HvacData,
    TradeType.ELECTRICAL: ElectricalData,
    TradeType.PLUMBING: PlumbingData,
    TradeType.LOCKSMITH: LocksmithData,
    TradeType.GENERAL_CONTRACTOR: GeneralContractorData,
}


# ============================================================================
# Business records
# ============================================================================


class ChecklistItem(Record):
    id: str
    text: str
    completed: bool = False


class User(Record):
    """Team member or account holder."""

    id: str
    name: str
    email: str = ""
    role: UserRole = UserRole.TECHNICIAN
    phone: str = Field(default="", validation_alias=AliasChoices("phone", "phone_number"))
    business_id: str = ""

    @model_validator(mode="before")
    @classmethod
    def join_name_parts(cls, data: Any) -> Any:
        # Backend team members carry first_name/last_name instead of name
        if isinstance(data, dict) and not data.get("name"):
            parts = [data.get("first_name") or "", data.get("last_name") or ""]
            joined = " ".join(p for p in parts if p).strip()
            if joined:
                data = {**data, "name": joined}
        return data


class Business(Record):
    id: str
    name: str
    primary_trade: TradeType
    secondary_trades: list[TradeType] = Field(default_factory=list)
    business_type: BusinessType = BusinessType.SOLO
    address: str = ""
    timezone: str = "America/Chicago"
    service_area_zipcodes: list[str] = Field(default_factory=list)
    phone: str = ""
    email: str = ""
    certifications: list[str] = Field(default_factory=list)
    setup_complete: bool = False


class Customer(Record):
    id: str
    business_id: str = ""
    name: str
    phone: str = ""
    email: str = ""
    address: str = ""
    tags: list[str] = Field(default_factory=list)
    notes: str = ""
    total_revenue: Decimal = Decimal("0")
    last_contact: Optional[date] = None
    job_count: int = Field(default=0, ge=0)
    property_type: Optional[PropertyType] = None

    @field_validator("tags", mode="before")
    @classmethod
    def split_tags(cls, v: Any) -> Any:
        # Create forms submit tags as one comma-separated string
        if isinstance(v, str):
            return [t.strip() for t in v.split(",") if t.strip()]
        return v


class Job(Record):
    """Schedulable unit of service work (a work order)."""

    id: str
    business_id: str = ""
    customer_id: str = Field(validation_alias=AliasChoices("customer_id", "customerId", "customer"))
    assigned_user_id: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("assigned_user_id", "assignedUserId", "assigned_to"),
    )
    scheduled_time: datetime = Field(
        validation_alias=AliasChoices("scheduled_time", "scheduledTime", "scheduled_for")
    )
    estimated_duration: int = Field(default=120, gt=0)  # minutes
    status: JobStatus = JobStatus.PENDING
    priority: Priority = Priority.MEDIUM
    location: str = Field(default="", validation_alias=AliasChoices("location", "address"))
    job_type: str
    description: str = ""
    checklist: list[ChecklistItem] = Field(default_factory=list)
    notes: str = ""
    photos: list[str] = Field(default_factory=list)
    trade_data: Optional[TradeData] = Field(
        default=None,
        validation_alias=AliasChoices("trade_data", "tradeSpecificData", "trade_specific_data"),
    )
    customer_name: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @field_validator("status", mode="before")
    @classmethod
    def normalize_status(cls, v: Any) -> Any:
        return JobStatus.parse(v) if isinstance(v, str) else v

    @field_validator("priority", mode="before")
    @classmethod
    def normalize_priority(cls, v: Any) -> Any:
        return v.strip().lower() if isinstance(v, str) else v


class InventoryItem(Record):
    id: str
    business_id: str = ""
    name: str
    category: str
    sku: str
    stock_level: int = Field(ge=0)
    reorder_threshold: int = Field(
        ge=0,
        validation_alias=AliasChoices("reorder_threshold", "reorderThreshold", "reorder_at"),
    )
    cost_per_unit: Decimal = Decimal("0")
    supplier: str = ""
    trade_specific: bool = False
    last_updated: Optional[datetime] = Field(
        default=None,
        validation_alias=AliasChoices("last_updated", "lastUpdated", "updated_at"),
    )

    @computed_field  # type: ignore[prop-decorator]
    @property
    def total_value(self) -> Decimal:
        return to_cents(self.cost_per_unit * self.stock_level)


# ============================================================================
# Estimates & invoices
# ============================================================================


class LineItem(Record):
    id: str
    description: str
    quantity: Decimal = Decimal("1")
    unit_price: Decimal = Decimal("0")
    category: Optional[str] = None

    @field_validator("quantity", "unit_price")
    @classmethod
    def validate_non_negative(cls, v: Decimal) -> Decimal:
        if v < 0:
            raise ValueError("must be non-negative")
        return v

    @computed_field  # type: ignore[prop-decorator]
    @property
    def total(self) -> Decimal:
        return to_cents(self.quantity * self.unit_price)


class Estimate(Record):
    id: str
    job_id: Optional[str] = None
    trade: TradeType
    line_items: list[LineItem] = Field(default_factory=list)
    subtotal: Decimal
    tax: Decimal
    discount: Decimal = Decimal("0")
    total: Decimal
    approved: bool = False
    sent_at: Optional[datetime] = None
    approved_at: Optional[datetime] = None
    expires_at: Optional[datetime] = None


class Invoice(Record):
    id: str
    job_id: str
    estimate_id: Optional[str] = None
    line_items: list[LineItem] = Field(default_factory=list)
    subtotal: Decimal
    tax: Decimal
    discount: Decimal = Decimal("0")
    total: Decimal
    paid_amount: Decimal = Decimal("0")
    due_date: date
    status: InvoiceStatus = InvoiceStatus.DRAFT
    created_at: Optional[datetime] = None

    @property
    def balance_due(self) -> Decimal:
        return to_cents(self.total - self.paid_amount)


# ============================================================================
# Outbound payloads
# ============================================================================


class WorkOrderPayload(BaseModel):
    """Body of the backend's create-work-order request."""

    customer: int
    job_type: str
    description: str
    status: JobStatus = JobStatus.PENDING
    priority: Priority = Priority.LOW
    tags: list[str] = Field(default_factory=list)
    scheduled_for: datetime
    assigned_to: int
    progress_current: int = Field(default=0, ge=0)
    progress_total: int = Field(default=0, ge=0)
    amount: Decimal = Decimal("0")
    address: str = Field(min_length=1)
    primary_trade: str
    owner: int

    def to_wire(self) -> dict[str, Any]:
        """JSON-ready dict (ISO datetimes, decimals as strings)."""
        return self.model_dump(mode="json")
