"""Tests for the YAML-backed trade registry."""

from __future__ import annotations

from pathlib import Path

import pytest
from pydantic import ValidationError as PydanticValidationError

from tradedesk.errors import UnknownTrade
from tradedesk.models import ChecklistTemplate, TradeType
from tradedesk.trades.registry import (
    ConfigurationError,
    all_trades,
    backend_name,
    checklist_from_template,
    find_checklist_template,
    from_backend_name,
    is_known_trade,
    load_trade_configs,
    lookup,
    lookup_or_default,
)

TRADE_IDS = ["hvac", "electrical", "plumbing", "locksmith", "general-contractor"]


class TestLookup:
    """lookup() is total over the five trades and fails for anything else."""

    @pytest.mark.parametrize("trade_id", TRADE_IDS)
    def test_every_trade_resolves(self, trade_id):
        config = lookup(trade_id)

        assert config.id.value == trade_id
        assert config.job_types
        assert config.default_job_duration > 0

    def test_hvac_config(self):
        config = lookup("hvac")

        assert config.name == "HVAC Pro"
        assert config.default_job_duration == 120
        assert "Maintenance" in config.job_types
        assert config.job_types[0] == "Maintenance"

    def test_accepts_enum(self):
        assert lookup(TradeType.LOCKSMITH).default_job_duration == 60

    def test_repeated_lookups_return_same_object(self):
        assert lookup("plumbing") is lookup("plumbing")
        assert lookup("plumbing") is lookup(TradeType.PLUMBING)

    @pytest.mark.parametrize("trade_id", ["roofing", "HVAC", "", "hvac_pro", None, 3])
    def test_unknown_trade_raises(self, trade_id):
        with pytest.raises(UnknownTrade) as exc_info:
            lookup(trade_id)

        assert exc_info.value.trade_id == trade_id

    def test_unknown_trade_is_a_key_error(self):
        with pytest.raises(KeyError):
            lookup("roofing")

    def test_configs_are_frozen(self):
        config = lookup("hvac")

        with pytest.raises(PydanticValidationError):
            config.default_job_duration = 5

        assert lookup("hvac").default_job_duration == 120


class TestLookupOrDefault:
    def test_known_trade(self):
        assert lookup_or_default("electrical").id is TradeType.ELECTRICAL

    def test_unknown_falls_back_to_configured_default(self, monkeypatch):
        from tradedesk.config import reset_config

        monkeypatch.setenv("DEFAULT_TRADE", "plumbing")
        reset_config()

        assert lookup_or_default("roofing").id is TradeType.PLUMBING

    def test_none_uses_default(self):
        assert lookup_or_default(None).id is TradeType.HVAC

    def test_explicit_default(self):
        assert lookup_or_default("roofing", default="locksmith").id is TradeType.LOCKSMITH


class TestRegistryHelpers:
    def test_all_trades_in_display_order(self):
        assert [c.id.value for c in all_trades()] == TRADE_IDS

    def test_is_known_trade(self):
        assert is_known_trade("general-contractor")
        assert not is_known_trade("general_contractor")

    @pytest.mark.parametrize(
        "trade_id,name",
        [
            ("hvac", "hvac_pro"),
            ("electrical", "electrician_pro"),
            ("plumbing", "plumber_pro"),
            ("locksmith", "locksmith_pro"),
            ("general-contractor", "general_contractor_pro"),
        ],
    )
    def test_backend_names_round_trip(self, trade_id, name):
        assert backend_name(trade_id) == name
        assert from_backend_name(name).value == trade_id

    def test_from_backend_name_passes_plain_ids(self):
        assert from_backend_name("plumbing") is TradeType.PLUMBING

    def test_from_backend_name_unknown(self):
        with pytest.raises(UnknownTrade):
            from_backend_name("roofer_pro")


class TestChecklists:
    def test_checklist_from_template(self):
        template = find_checklist_template("hvac", "hvac-maintenance")

        checklist = checklist_from_template(template)

        assert [item.id for item in checklist[:3]] == ["c1", "c2", "c3"]
        assert checklist[0].text == "Check air filters"
        assert len(checklist) == len(template.items)
        assert not any(item.completed for item in checklist)

    def test_empty_template(self):
        template = ChecklistTemplate(id="empty", name="Empty", items=())

        assert checklist_from_template(template) == []

    def test_unknown_template(self):
        assert find_checklist_template("hvac", "plumb-fixture") is None

    def test_quick_line_item_lookup(self):
        quick = lookup("hvac").quick_line_item("hvac-1")

        assert quick.description == "Service Call"
        assert str(quick.default_price) == "85"


class TestLoadTradeConfigs:
    """Validation of the trades.yaml file."""

    def test_missing_file(self, tmp_path: Path):
        with pytest.raises(ConfigurationError, match="not found"):
            load_trade_configs(tmp_path / "nope.yaml")

    def test_invalid_yaml(self, tmp_path: Path):
        path = tmp_path / "trades.yaml"
        path.write_text("trades: [\n  - id: hvac\n")

        with pytest.raises(ConfigurationError, match="Invalid YAML"):
            load_trade_configs(path)

    def test_empty_file(self, tmp_path: Path):
        path = tmp_path / "trades.yaml"
        path.write_text("")

        with pytest.raises(ConfigurationError, match="No trades"):
            load_trade_configs(path)

    def test_incomplete_registry(self, tmp_path: Path):
        path = tmp_path / "trades.yaml"
        path.write_text(
            "trades:\n"
            "  - id: hvac\n"
            "    name: HVAC Pro\n"
            "    icon: x\n"
            "    color: bg-red-500\n"
            "    backend_name: hvac_pro\n"
            "    default_job_duration: 120\n"
            "    job_types: [Repair]\n"
        )

        with pytest.raises(ConfigurationError, match="missing"):
            load_trade_configs(path)

    def test_invalid_entry(self, tmp_path: Path):
        path = tmp_path / "trades.yaml"
        path.write_text(
            "trades:\n"
            "  - id: hvac\n"
            "    name: HVAC Pro\n"
            "    icon: x\n"
            "    color: bg-red-500\n"
            "    backend_name: hvac_pro\n"
            "    default_job_duration: 0\n"
            "    job_types: [Repair]\n"
        )

        with pytest.raises(ConfigurationError, match="hvac"):
            load_trade_configs(path)

    def test_bundled_file_loads(self):
        configs = load_trade_configs()

        assert set(configs) == set(TradeType)
