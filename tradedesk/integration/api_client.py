"""Persistence backend client.

Async REST client for the backend that owns jobs, customers, team members
and inventory. Every request carries ``Authorization: Token <token>``.
Reads that fail raise CollaboratorError; a rejected create raises
SubmissionFailure. Nothing is retried.
"""

from __future__ import annotations

from typing import Any, Optional, TypeVar

import httpx
import structlog
from pydantic import BaseModel, TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from tradedesk.config import get_config
from tradedesk.errors import CollaboratorError, SubmissionFailure, UnknownTrade
from tradedesk.models import (
    Customer,
    InventoryItem,
    Job,
    TradeData,
    TradeType,
    User,
    WorkOrderPayload,
)
from tradedesk.session import SessionContext
from tradedesk.trades.registry import from_backend_name

logger = structlog.get_logger(__name__)

WORK_ORDERS_PATH = "/users/work-orders/"
CUSTOMERS_PATH = "/users/customers/"
TEAM_PATH = "/users/team/"
INVENTORY_PATH = "/users/inventory/"

TRADE_DATA_KEYS = ("trade_data", "trade_specific_data", "tradeSpecificData")

M = TypeVar("M", bound=BaseModel)

_TRADE_DATA = TypeAdapter(TradeData)


def _records(body: Any) -> list[Any]:
    # List endpoints answer either a bare list or a paginated {"results": [...]}
    if isinstance(body, list):
        return body
    if isinstance(body, dict) and isinstance(body.get("results"), list):
        return body["results"]
    raise CollaboratorError("Unexpected response shape from backend")


def tag_trade_data(raw: dict[str, Any], default_trade: TradeType) -> dict[str, Any]:
    """Add the ``trade`` tag to an untagged trade-specific bag.

    The backend stores the bag without a tag; the job's ``primary_trade``
    (backend or plain name) decides the variant, falling back to
    ``default_trade``. Empty bags are dropped.
    """
    for key in TRADE_DATA_KEYS:
        bag = raw.get(key)
        if bag is None:
            continue
        if not isinstance(bag, dict) or not bag:
            return {k: v for k, v in raw.items() if k != key}
        if "trade" in bag:
            return raw
        trade = default_trade
        if raw.get("primary_trade"):
            try:
                trade = from_backend_name(str(raw["primary_trade"]))
            except UnknownTrade:
                logger.warning("unknown_job_trade", primary_trade=raw["primary_trade"])
        return {**raw, key: {**bag, "trade": trade.value}}
    return raw


def drop_invalid_trade_data(raw: dict[str, Any]) -> dict[str, Any]:
    """Remove a tagged trade-specific bag that does not validate.

    A value outside a select's options drops the bag, not the job. The
    rejected fields are logged.
    """
    for key in TRADE_DATA_KEYS:
        bag = raw.get(key)
        if not isinstance(bag, dict):
            continue
        try:
            _TRADE_DATA.validate_python(bag)
        except PydanticValidationError as e:
            logger.warning(
                "trade_data_dropped",
                record_id=raw.get("id"),
                trade=bag.get("trade"),
                fields=sorted({".".join(str(p) for p in err["loc"][1:]) or "trade" for err in e.errors()}),
            )
            return {k: v for k, v in raw.items() if k != key}
    return raw


class PersistenceClient:
    """Client for the persistence backend's REST API."""

    def __init__(
        self,
        base_url: str | None = None,
        token: str | None = None,
        timeout: float | None = None,
        default_trade: TradeType | str | None = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        config = get_config()
        self.base_url = (base_url or config.api.base_url).rstrip("/")
        self.token = token if token is not None else config.api.token
        self.default_trade = TradeType(default_trade or config.default_trade)

        headers = {"Content-Type": "application/json", "Accept": "application/json"}
        if self.token:
            headers["Authorization"] = f"Token {self.token}"

        self.client = httpx.AsyncClient(
            base_url=self.base_url,
            timeout=timeout if timeout is not None else config.api.timeout_seconds,
            headers=headers,
            transport=transport,
        )

    @classmethod
    def for_session(cls, session: SessionContext, **kwargs: Any) -> PersistenceClient:
        """Client authenticated as the session's user, defaulting to its primary trade."""
        kwargs.setdefault("token", session.token)
        kwargs.setdefault("default_trade", session.primary_trade.id)
        return cls(**kwargs)

    async def aclose(self) -> None:
        await self.client.aclose()

    async def __aenter__(self) -> PersistenceClient:
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()

    async def _get(self, path: str) -> list[Any]:
        try:
            response = await self.client.get(path)
        except httpx.HTTPError as e:
            logger.error("collaborator_request_failed", path=path, error=str(e))
            raise CollaboratorError(f"Request to {path} failed: {e}") from e

        if response.is_error:
            logger.error(
                "collaborator_request_failed",
                path=path,
                status_code=response.status_code,
                response=response.text[:500],
            )
            raise CollaboratorError(
                f"Backend returned {response.status_code} for {path}",
                status_code=response.status_code,
            )

        try:
            return _records(response.json())
        except ValueError as e:
            raise CollaboratorError(f"Invalid JSON from {path}") from e

    def _parse(self, model: type[M], records: list[Any], path: str) -> list[M]:
        parsed: list[M] = []
        for raw in records:
            try:
                parsed.append(model.model_validate(raw))
            except PydanticValidationError as e:
                logger.warning(
                    "collaborator_record_skipped",
                    path=path,
                    record_id=raw.get("id") if isinstance(raw, dict) else None,
                    errors=e.error_count(),
                )
        return parsed

    def _parse_jobs(self, records: list[Any], path: str) -> list[Job]:
        tagged = [
            drop_invalid_trade_data(tag_trade_data(raw, self.default_trade))
            if isinstance(raw, dict)
            else raw
            for raw in records
        ]
        return self._parse(Job, tagged, path)

    async def list_work_orders(self) -> list[Job]:
        jobs = self._parse_jobs(await self._get(WORK_ORDERS_PATH), WORK_ORDERS_PATH)
        logger.debug("work_orders_fetched", count=len(jobs))
        return jobs

    async def list_customers(self) -> list[Customer]:
        return self._parse(Customer, await self._get(CUSTOMERS_PATH), CUSTOMERS_PATH)

    async def list_team_members(self) -> list[User]:
        return self._parse(User, await self._get(TEAM_PATH), TEAM_PATH)

    async def list_inventory(self) -> list[InventoryItem]:
        return self._parse(InventoryItem, await self._get(INVENTORY_PATH), INVENTORY_PATH)

    async def create_work_order(self, payload: WorkOrderPayload) -> Job:
        """Create a work order and return the stored job.

        Raises:
            SubmissionFailure: On a transport error, a non-2xx response or a
                response body that is not a job
        """
        try:
            response = await self.client.post(WORK_ORDERS_PATH, json=payload.to_wire())
        except httpx.HTTPError as e:
            logger.error("work_order_submit_failed", error=str(e))
            raise SubmissionFailure(str(e) or type(e).__name__) from e

        if response.is_error:
            logger.error(
                "work_order_submit_failed",
                status_code=response.status_code,
                response=response.text[:500],
            )
            raise SubmissionFailure(
                response.text or response.reason_phrase, status_code=response.status_code
            )

        try:
            body = response.json()
            if not isinstance(body, dict):
                raise ValueError("expected a JSON object")
            job = Job.model_validate(
                drop_invalid_trade_data(tag_trade_data(body, self.default_trade))
            )
        except (ValueError, PydanticValidationError) as e:
            raise SubmissionFailure(
                f"Unreadable work order in response: {e}", status_code=response.status_code
            ) from e

        logger.info("work_order_submitted", job_id=job.id, customer=payload.customer)
        return job
