"""Shared dependencies for TradeDesk web routes.

Dependencies are injected using FastAPI's Depends() system. Tests replace
them through ``app.dependency_overrides``.

Usage:
    from fastapi import Depends
    from tradedesk.web.dependencies import get_client

    @router.get("/jobs")
    async def jobs(client: PersistenceClient = Depends(get_client)):
        return await client.list_work_orders()
"""

from __future__ import annotations

from collections.abc import AsyncIterator
from typing import Optional

from fastapi import Depends, Header

from tradedesk.config import get_config
from tradedesk.integration.api_client import PersistenceClient
from tradedesk.models import Business, User, UserRole
from tradedesk.session import SessionContext
from tradedesk.trades.registry import lookup_or_default


def _token(authorization: Optional[str]) -> Optional[str]:
    if not authorization:
        return None
    scheme, _, value = authorization.partition(" ")
    if scheme.lower() == "token" and value.strip():
        return value.strip()
    return None


def get_session_context(
    authorization: Optional[str] = Header(default=None),
    x_user_id: Optional[str] = Header(default=None),
    x_user_role: Optional[str] = Header(default=None),
    x_primary_trade: Optional[str] = Header(default=None),
) -> SessionContext:
    """Session for the current request.

    Identity is asserted by the calling front end: ``Authorization: Token``
    is forwarded to the backend, ``X-User-Id`` / ``X-User-Role`` name the
    user (a missing or unknown role is a technician) and
    ``X-Primary-Trade`` the business's trade (unknown trades fall back to
    DEFAULT_TRADE).
    """
    token = _token(authorization) or get_config().api.token
    trade = lookup_or_default(x_primary_trade)

    user = None
    if x_user_id:
        try:
            role = UserRole((x_user_role or UserRole.TECHNICIAN.value).lower())
        except ValueError:
            role = UserRole.TECHNICIAN
        user = User(id=x_user_id, name="", role=role)

    business = Business(id="", name="", primary_trade=trade.id, setup_complete=True)
    return SessionContext(user=user, business=business, token=token)


async def get_client(
    session: SessionContext = Depends(get_session_context),
) -> AsyncIterator[PersistenceClient]:
    """Backend client authenticated as the request's session; closed after the response."""
    client = PersistenceClient.for_session(session)
    try:
        yield client
    finally:
        await client.aclose()
