"""Tests for the customer, inventory and estimate routes."""

from __future__ import annotations


class TestCustomers:
    def test_list_customers(self, client):
        response = client.get("/customers")

        assert response.status_code == 200
        views = response.json()
        assert [v["customer"]["id"] for v in views] == ["c1", "c2", "c3"]
        assert views[0]["property_type_color"] == "bg-green-100 text-green-800"

    def test_search_tags(self, client):
        response = client.get("/customers", params={"search": "VIP"})

        assert [v["customer"]["id"] for v in response.json()] == ["c1"]

    def test_property_type(self, client):
        response = client.get("/customers", params={"property_type": "hoa"})

        assert [v["customer"]["id"] for v in response.json()] == ["c3"]

    def test_unknown_property_type(self, client):
        response = client.get("/customers", params={"property_type": "industrial"})

        assert response.status_code == 422


class TestInventory:
    def test_stock_status(self, client):
        response = client.get("/inventory")

        assert response.status_code == 200
        by_id = {v["item"]["id"]: v for v in response.json()}
        assert by_id["i1"]["stock_status"] == "low"
        assert by_id["i1"]["stock_label"] == "Low Stock"
        assert by_id["i2"]["stock_status"] == "warning"
        assert by_id["i3"]["stock_status"] == "good"

    def test_trade_specific_only(self, client):
        response = client.get("/inventory", params={"trade_specific": "true"})

        assert [v["item"]["id"] for v in response.json()] == ["i1", "i2"]

    def test_general_only(self, client):
        response = client.get("/inventory", params={"trade_specific": "false"})

        assert [v["item"]["id"] for v in response.json()] == ["i3"]

    def test_stock_filter(self, client):
        response = client.get("/inventory", params={"stock": "low"})

        assert [v["item"]["id"] for v in response.json()] == ["i1"]

    def test_unknown_stock_filter(self, client):
        response = client.get("/inventory", params={"stock": "empty"})

        assert response.status_code == 422

    def test_categories(self, client):
        response = client.get("/inventory/categories")

        assert response.json() == ["Filters", "Refrigerants", "Tools"]


class TestEstimatePreview:
    def test_preview(self, client):
        response = client.post(
            "/estimates/preview",
            json={
                "trade": "hvac",
                "lines": [
                    {"quick_item_id": "hvac-1"},
                    {"description": "Capacitor", "quantity": "2", "unit_price": "42.50", "category": "Parts"},
                ],
                "discount": "20",
            },
        )

        assert response.status_code == 200
        body = response.json()
        assert body["trade"] == "hvac"
        assert len(body["line_items"]) == 2
        assert body["subtotal"] == "170.00"
        assert body["tax"] == "13.88"
        assert body["total"] == "163.88"

    def test_preview_without_lines(self, client):
        response = client.post("/estimates/preview", json={"trade": "hvac"})

        assert response.status_code == 422
        assert "line_items" in response.json()["errors"]

    def test_preview_unknown_trade(self, client):
        response = client.post("/estimates/preview", json={"trade": "roofing", "lines": []})

        assert response.status_code == 404
