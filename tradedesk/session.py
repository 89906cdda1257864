"""Explicit session context.

The signed-in user, their business and the backend token travel together in
a SessionContext that is passed to whatever needs them. Nothing reads a
module-level "current user".
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Optional

from tradedesk.models import Business, TradeConfig, TradeType, User, UserRole
from tradedesk.trades.registry import lookup_or_default


@dataclass(frozen=True)
class SessionContext:
    user: Optional[User] = None
    business: Optional[Business] = None
    token: Optional[str] = None

    @property
    def is_authenticated(self) -> bool:
        return self.user is not None and self.token is not None

    @property
    def primary_trade(self) -> TradeConfig:
        """Business's primary trade, or the configured default trade."""
        return lookup_or_default(self.business.primary_trade if self.business else None)

    @property
    def secondary_trades(self) -> tuple[TradeType, ...]:
        return tuple(self.business.secondary_trades) if self.business else ()

    @property
    def setup_complete(self) -> bool:
        return bool(self.business and self.business.setup_complete)

    @property
    def can_manage_work_orders(self) -> bool:
        return self.user is not None and self.user.role in (UserRole.ADMIN, UserRole.SOLO)

    def with_user(self, user: User, token: str) -> SessionContext:
        return replace(self, user=user, token=token)

    def with_business(self, business: Business) -> SessionContext:
        return replace(self, business=business)
