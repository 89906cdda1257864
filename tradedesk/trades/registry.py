"""YAML-backed trade registry for TradeDesk.

Maps each trade identifier to its TradeConfig: display metadata, job-type
vocabulary, default job duration, inventory categories, checklist templates
and quick line items. The table is parsed once at import from trades.yaml
into frozen models; nothing mutates it afterwards, so every lookup for the
same identifier returns the same object.
"""

from __future__ import annotations

from collections.abc import Mapping
from pathlib import Path
from types import MappingProxyType
from typing import Any, Optional

import structlog
import yaml
from pydantic import ValidationError as PydanticValidationError

from tradedesk.config import get_config
from tradedesk.errors import TradeDeskError, UnknownTrade
from tradedesk.models import ChecklistItem, ChecklistTemplate, TradeConfig, TradeType

logger = structlog.get_logger(__name__)

TRADES_PATH = Path(__file__).parent / "trades.yaml"


class ConfigurationError(TradeDeskError):
    """Trade configuration file is invalid or missing."""

    pass


def load_trade_configs(path: Path = TRADES_PATH) -> dict[TradeType, TradeConfig]:
    """Parse and validate trades.yaml.

    Args:
        path: YAML file with a top-level ``trades`` list

    Returns:
        Trade configs keyed by TradeType, in file order

    Raises:
        ConfigurationError: If the file is missing, malformed, has duplicate
            or invalid entries, or does not cover every TradeType
    """
    if not path.exists():
        raise ConfigurationError(f"Trade config not found: {path}")

    try:
        with path.open(encoding="utf-8") as f:
            raw = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Invalid YAML in {path}: {e}")

    entries = raw.get("trades") or []
    if not entries:
        raise ConfigurationError("No trades defined in configuration")

    configs: dict[TradeType, TradeConfig] = {}
    for entry in entries:
        try:
            config = TradeConfig.model_validate(entry)
        except PydanticValidationError as e:
            raise ConfigurationError(f"Invalid trade entry {entry.get('id')!r}: {e}") from e
        if config.id in configs:
            raise ConfigurationError(f"Duplicate trade entry '{config.id.value}'")
        configs[config.id] = config

    missing = [t.value for t in TradeType if t not in configs]
    if missing:
        raise ConfigurationError(f"Trades missing from configuration: {', '.join(missing)}")

    return configs


# Compiled once at startup
_REGISTRY: Mapping[TradeType, TradeConfig] = MappingProxyType(load_trade_configs())


def _as_trade_type(trade_id: Any) -> TradeType:
    if isinstance(trade_id, TradeType):
        return trade_id
    if isinstance(trade_id, str):
        try:
            return TradeType(trade_id)
        except ValueError:
            pass
    raise UnknownTrade(trade_id)


def lookup(trade_id: TradeType | str) -> TradeConfig:
    """Return the configuration for a trade.

    Raises:
        UnknownTrade: If ``trade_id`` is not one of the five trade identifiers
    """
    return _REGISTRY[_as_trade_type(trade_id)]


def lookup_or_default(
    trade_id: TradeType | str | None, default: TradeType | str | None = None
) -> TradeConfig:
    """Look up a trade, falling back to ``default`` (or DEFAULT_TRADE) when unknown."""
    if trade_id is not None:
        try:
            return lookup(trade_id)
        except UnknownTrade:
            logger.warning("unknown_trade_fallback", trade_id=str(trade_id))
    return lookup(default if default is not None else get_config().default_trade)


def all_trades() -> tuple[TradeConfig, ...]:
    """All trade configs in registry (display) order."""
    return tuple(_REGISTRY.values())


def is_known_trade(trade_id: Any) -> bool:
    try:
        _as_trade_type(trade_id)
    except UnknownTrade:
        return False
    return True


def backend_name(trade_id: TradeType | str) -> str:
    """Name the backend stores for a trade (e.g. ``hvac`` -> ``hvac_pro``)."""
    return lookup(trade_id).backend_name


def from_backend_name(name: str) -> TradeType:
    """Inverse of backend_name(); plain trade identifiers pass through."""
    for config in _REGISTRY.values():
        if config.backend_name == name:
            return config.id
    return _as_trade_type(name)


def checklist_from_template(template: ChecklistTemplate) -> list[ChecklistItem]:
    """Fresh, all-incomplete job checklist built from a template."""
    return [
        ChecklistItem(id=f"c{index}", text=text, completed=False)
        for index, text in enumerate(template.items, start=1)
    ]


def find_checklist_template(
    trade_id: TradeType | str, template_id: str
) -> Optional[ChecklistTemplate]:
    return lookup(trade_id).checklist_template(template_id)
