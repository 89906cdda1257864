"""Trade-setup wizard.

Three steps: pick exactly one primary trade, toggle any secondary trades,
pick the business type. Completing emits
``(primary_trade, secondary_trades, business_type)``.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import Any

import structlog

from tradedesk.errors import WizardError
from tradedesk.models import BusinessType, TradeType
from tradedesk.trades.registry import backend_name, lookup

logger = structlog.get_logger(__name__)


class WizardStep(IntEnum):
    PRIMARY_TRADE = 1
    SECONDARY_TRADES = 2
    BUSINESS_TYPE = 3


@dataclass(frozen=True)
class WizardResult:
    primary_trade: TradeType
    secondary_trades: tuple[TradeType, ...]
    business_type: BusinessType

    def as_tuple(self) -> tuple[TradeType, tuple[TradeType, ...], BusinessType]:
        return self.primary_trade, self.secondary_trades, self.business_type

    def registration_payload(self, **account: Any) -> dict[str, Any]:
        """Backend sign-up body: account fields plus trades in backend naming.

        ``business_type`` goes out as ``solo_business`` / ``team_business``.
        """
        return {
            **account,
            "primary_trade": backend_name(self.primary_trade),
            "secondary_trades": [backend_name(t) for t in self.secondary_trades],
            "business_type": f"{self.business_type.value}_business",
        }


class TradeSetupWizard:
    """Step-by-step trade selection for a new business."""

    def __init__(self) -> None:
        self.step = WizardStep.PRIMARY_TRADE
        self.primary_trade: TradeType | None = None
        self._secondary: list[TradeType] = []
        self.business_type = BusinessType.SOLO

    @property
    def secondary_trades(self) -> tuple[TradeType, ...]:
        return tuple(self._secondary)

    def _require_step(self, step: WizardStep, action: str) -> None:
        if self.step is not step:
            raise WizardError(f"Cannot {action} on step {self.step.value} ({self.step.name.lower()})")

    def select_primary(self, trade: TradeType | str) -> None:
        """Choose the primary trade (step 1); replaces any earlier choice."""
        self._require_step(WizardStep.PRIMARY_TRADE, "select a primary trade")
        self.primary_trade = lookup(trade).id
        if self.primary_trade in self._secondary:
            self._secondary.remove(self.primary_trade)

    def toggle_secondary(self, trade: TradeType | str) -> None:
        """Add or remove a secondary trade (step 2). The primary trade is ignored."""
        self._require_step(WizardStep.SECONDARY_TRADES, "toggle secondary trades")
        trade_id = lookup(trade).id
        if trade_id == self.primary_trade:
            return
        if trade_id in self._secondary:
            self._secondary.remove(trade_id)
        else:
            self._secondary.append(trade_id)

    def skip_secondary(self) -> None:
        """Clear secondary trades and move on to the business type."""
        self._require_step(WizardStep.SECONDARY_TRADES, "skip secondary trades")
        self._secondary.clear()
        self.step = WizardStep.BUSINESS_TYPE

    def select_business_type(self, business_type: BusinessType | str) -> None:
        self._require_step(WizardStep.BUSINESS_TYPE, "select a business type")
        self.business_type = BusinessType(business_type)

    def advance(self) -> WizardStep:
        if self.step is WizardStep.PRIMARY_TRADE and self.primary_trade is None:
            raise WizardError("Select a primary trade before continuing")
        if self.step is WizardStep.BUSINESS_TYPE:
            raise WizardError("Already on the last step; call complete()")
        self.step = WizardStep(self.step + 1)
        return self.step

    def back(self) -> WizardStep:
        if self.step is not WizardStep.PRIMARY_TRADE:
            self.step = WizardStep(self.step - 1)
        return self.step

    def complete(self) -> WizardResult:
        """Finish the wizard.

        Raises:
            WizardError: If no primary trade was chosen or the last step
                has not been reached
        """
        if self.primary_trade is None:
            raise WizardError("A primary trade is required")
        self._require_step(WizardStep.BUSINESS_TYPE, "complete the wizard")
        result = WizardResult(
            primary_trade=self.primary_trade,
            secondary_trades=self.secondary_trades,
            business_type=self.business_type,
        )
        logger.info(
            "trade_setup_completed",
            primary_trade=result.primary_trade.value,
            secondary_trades=[t.value for t in result.secondary_trades],
            business_type=result.business_type.value,
        )
        return result
