"""Tests for tradedesk.web.routes.jobs - job listing and work-order creation."""

from __future__ import annotations

from datetime import datetime

from tradedesk.errors import SubmissionFailure
from tradedesk.models import Job, JobStatus


class TestListJobs:
    def test_all_jobs_classified(self, client):
        response = client.get("/jobs")

        assert response.status_code == 200
        views = response.json()
        assert [v["job"]["id"] for v in views] == ["j1", "j2", "j3", "j4"]
        assert views[0]["status_label"] == "Confirmed"
        assert views[0]["next_action"] == "Start Job"
        assert views[0]["checklist_done"] == 1
        assert views[0]["checklist_total"] == 2

    def test_search_matches_customer_name(self, client):
        response = client.get("/jobs", params={"search": "midtown"})

        assert [v["job"]["id"] for v in response.json()] == ["j2"]

    def test_status_filter_accepts_underscore(self, client):
        response = client.get("/jobs", params={"status": "in_progress"})

        assert [v["job"]["id"] for v in response.json()] == ["j2"]

    def test_assigned_to(self, client):
        response = client.get("/jobs", params={"assigned_to": "12"})

        assert [v["job"]["id"] for v in response.json()] == ["j1", "j3"]

    def test_unknown_filter_values(self, client):
        response = client.get("/jobs", params={"status": "paused", "priority": "critical"})

        assert response.status_code == 422
        assert set(response.json()["errors"]) == {"status", "priority"}

    def test_backend_failure_is_502(self, client, backend):
        from tradedesk.errors import CollaboratorError

        backend.list_work_orders.side_effect = CollaboratorError("Backend returned 503", 503)

        response = client.get("/jobs")

        assert response.status_code == 502
        assert response.json()["backend_status"] == 503


class TestCreateWorkOrder:
    FORM = {
        "customer_id": "3",
        "job_type": "Repair",
        "description": "Furnace short-cycling",
        "priority": "high",
        "tags": "heating, repeat",
        "scheduled_for": "2024-06-10T09:30:00",
        "assigned_to": "12",
        "amount": "249.99",
        "address": "1234 Poplar Ave",
    }

    def test_creates_work_order(self, client, backend, admin_headers):
        backend.create_work_order.return_value = Job(
            id="41",
            customer_id="3",
            scheduled_time=datetime(2024, 6, 10, 9, 30),
            job_type="Repair",
            description="Furnace short-cycling",
        )

        response = client.post("/work-orders", json=self.FORM, headers=admin_headers)

        assert response.status_code == 201
        assert response.json()["job"]["id"] == "41"
        payload = backend.create_work_order.await_args.args[0]
        assert payload.customer == 3
        assert payload.owner == 7
        assert payload.tags == ["heating", "repeat"]
        assert payload.primary_trade == "hvac"
        assert payload.status is JobStatus.PENDING

    def test_validation_errors(self, client, backend, admin_headers):
        response = client.post(
            "/work-orders",
            json={**self.FORM, "customer_id": "", "progress_current": "5", "progress_total": "3"},
            headers=admin_headers,
        )

        assert response.status_code == 422
        errors = response.json()["errors"]
        assert set(errors) == {"customer_id", "progress_current"}
        backend.create_work_order.assert_not_awaited()

    def test_technician_denied(self, client, backend, admin_headers):
        headers = {**admin_headers, "X-User-Id": "12", "X-User-Role": "technician"}

        response = client.post("/work-orders", json=self.FORM, headers=headers)

        assert response.status_code == 403
        backend.create_work_order.assert_not_awaited()

    def test_anonymous_denied(self, client):
        response = client.post("/work-orders", json=self.FORM)

        assert response.status_code == 403

    def test_backend_rejection(self, client, backend, admin_headers):
        backend.create_work_order.side_effect = SubmissionFailure('{"customer": ["Invalid pk."]}', 400)

        response = client.post("/work-orders", json=self.FORM, headers=admin_headers)

        assert response.status_code == 502
        body = response.json()
        assert body["backend_status"] == 400
        assert "Invalid pk" in body["backend_detail"]


class TestWorkOrderRoles:
    def test_missing_role_header_denied(self, client, backend, admin_headers):
        headers = {k: v for k, v in admin_headers.items() if k != "X-User-Role"}

        response = client.post("/work-orders", json=TestCreateWorkOrder.FORM, headers=headers)

        assert response.status_code == 403
        backend.create_work_order.assert_not_awaited()
