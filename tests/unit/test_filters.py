"""Tests for job, customer and inventory record filters."""

from __future__ import annotations

import pytest

from tradedesk.filters import (
    CustomerCriteria,
    InventoryCriteria,
    JobCriteria,
    filter_customers,
    filter_inventory,
    filter_jobs,
)
from tradedesk.filters.records import distinct_categories, jobs_assigned_to, low_stock_items
from tradedesk.models import JobStatus, Priority


def _ids(records):
    return [r.id for r in records]


class TestJobFilter:
    def test_all_criteria_is_identity(self, sample_jobs):
        assert filter_jobs(sample_jobs, JobCriteria()) == sample_jobs

    def test_no_criteria_is_identity(self, sample_jobs):
        assert filter_jobs(sample_jobs) == sample_jobs

    def test_empty_input(self):
        assert filter_jobs([], JobCriteria(search="anything", status="pending")) == []

    def test_search_is_case_insensitive(self, sample_jobs):
        assert _ids(filter_jobs(sample_jobs, JobCriteria(search="ROOFTOP"))) == ["j2"]

    def test_search_matches_job_type(self, sample_jobs):
        assert _ids(filter_jobs(sample_jobs, JobCriteria(search="filter"))) == ["j3"]

    def test_search_matches_customer_name(self, sample_jobs, sample_customers):
        matches = filter_jobs(sample_jobs, JobCriteria(search="johnson"), sample_customers)

        assert _ids(matches) == ["j1", "j4"]

    def test_customer_name_needs_index(self, sample_jobs):
        assert filter_jobs(sample_jobs, JobCriteria(search="johnson")) == []

    def test_status_filter(self, sample_jobs):
        matches = filter_jobs(sample_jobs, JobCriteria(status=JobStatus.IN_PROGRESS))

        assert _ids(matches) == ["j2"]

    def test_status_accepts_backend_spelling(self, sample_jobs):
        assert _ids(filter_jobs(sample_jobs, JobCriteria(status="in_progress"))) == ["j2"]

    def test_priority_filter(self, sample_jobs):
        assert _ids(filter_jobs(sample_jobs, JobCriteria(priority="urgent"))) == ["j2"]

    def test_criteria_are_conjunctive(self, sample_jobs):
        criteria = JobCriteria(search="a", status="completed", priority=Priority.LOW)

        assert _ids(filter_jobs(sample_jobs, criteria)) == ["j3"]

    def test_filter_is_idempotent(self, sample_jobs):
        criteria = JobCriteria(search="e", priority="high")
        once = filter_jobs(sample_jobs, criteria)

        assert filter_jobs(once, criteria) == once

    def test_unknown_status_rejected(self):
        with pytest.raises(ValueError):
            JobCriteria(status="on-hold")

    def test_jobs_assigned_to(self, sample_jobs):
        assert _ids(jobs_assigned_to(sample_jobs, "12")) == ["j1", "j3"]


class TestCustomerFilter:
    def test_all_is_identity(self, sample_customers):
        assert filter_customers(sample_customers, CustomerCriteria()) == sample_customers

    @pytest.mark.parametrize(
        "term,expected",
        [
            ("midtown", ["c2"]),  # name
            ("HARBORTOWN.EXAMPLE", ["c3"]),  # email
            ("poplar", ["c1"]),  # address
            ("vip", ["c1"]),  # tag
            ("memphis", ["c1", "c2", "c3"]),
            ("nowhere", []),
        ],
    )
    def test_search_fields(self, sample_customers, term, expected):
        assert _ids(filter_customers(sample_customers, CustomerCriteria(search=term))) == expected

    def test_property_type(self, sample_customers):
        matches = filter_customers(sample_customers, CustomerCriteria(property_type="hoa"))

        assert _ids(matches) == ["c3"]

    def test_whitespace_search_matches_all(self, sample_customers):
        assert filter_customers(sample_customers, CustomerCriteria(search="   ")) == sample_customers


class TestInventoryFilter:
    def test_all_is_identity(self, sample_inventory):
        assert filter_inventory(sample_inventory, InventoryCriteria()) == sample_inventory

    def test_search_sku_and_supplier(self, sample_inventory):
        assert _ids(filter_inventory(sample_inventory, InventoryCriteria(search="ref-410"))) == ["i2"]
        assert _ids(filter_inventory(sample_inventory, InventoryCriteria(search="grainger"))) == ["i3"]

    def test_category(self, sample_inventory):
        matches = filter_inventory(sample_inventory, InventoryCriteria(category="Filters"))

        assert _ids(matches) == ["i1"]

    def test_trade_specific_tri_state(self, sample_inventory):
        assert len(filter_inventory(sample_inventory, InventoryCriteria(trade_specific=None))) == 3
        assert _ids(filter_inventory(sample_inventory, InventoryCriteria(trade_specific=True))) == [
            "i1",
            "i2",
        ]
        assert _ids(filter_inventory(sample_inventory, InventoryCriteria(trade_specific=False))) == [
            "i3"
        ]

    def test_stock_status(self, sample_inventory):
        assert _ids(filter_inventory(sample_inventory, InventoryCriteria(stock="warning"))) == ["i2"]

    def test_low_stock_items(self, sample_inventory):
        assert _ids(low_stock_items(sample_inventory)) == ["i1"]

    def test_distinct_categories_first_seen_order(self, sample_inventory):
        items = sample_inventory + [sample_inventory[0]]

        assert distinct_categories(items) == ["Filters", "Refrigerants", "Tools"]
