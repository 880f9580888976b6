"""
API tests for partial updates that try to clear required fields.
"""
import pytest


@pytest.fixture
def records(client, user_headers, catalog):
    """One of every editable record, keyed by its URL."""
    client.post("/api/inventory/", json={"materialCode": "FAB-001", "quantityOnHand": "5"},
                headers=user_headers)
    wo = client.post("/api/work-orders/", json={"skuCode": "ST-100-BLK-M", "quantity": 10},
                     headers=user_headers).json()
    po = client.post("/api/purchase-orders/", json={"supplierId": catalog["supplier"]["id"]},
                     headers=user_headers).json()
    return {
        "styles": "/api/styles/ST-100",
        "skus": "/api/skus/ST-100-BLK-M",
        "materials": "/api/materials/FAB-001",
        "inventory": "/api/inventory/FAB-001",
        "suppliers": f"/api/suppliers/{catalog['supplier']['id']}",
        "work-orders": f"/api/work-orders/{wo['woNumber']}",
        "purchase-orders": f"/api/purchase-orders/{po['poNumber']}",
    }


class TestNullUpdates:
    """Explicit nulls on NOT NULL columns are rejected; nullable ones are cleared."""

    @pytest.mark.parametrize("resource,payload", [
        ("styles", {"description": None}),
        ("skus", {"color": None}),
        ("skus", {"isActive": None}),
        ("materials", {"costPerUnit": None}),
        ("materials", {"unitOfMeasure": None}),
        ("inventory", {"quantityOnHand": None}),
        ("suppliers", {"supplierName": None}),
        ("work-orders", {"quantity": None}),
        ("work-orders", {"startDate": None}),
        ("purchase-orders", {"orderDate": None}),
        ("purchase-orders", {"status": None}),
    ])
    def test_required_field_cannot_be_null(self, client, user_headers, records, resource, payload):
        response = client.put(records[resource], json=payload, headers=user_headers)

        assert response.status_code == 400
        assert "cannot be null" in response.json()["detail"]

    def test_record_unchanged_after_rejection(self, client, user_headers, records):
        client.put(records["work-orders"], json={"quantity": None, "endDate": "2025-04-01"},
                   headers=user_headers)

        body = client.get(records["work-orders"], headers=user_headers).json()
        assert body["quantity"] == 10
        assert body["endDate"] is None

    def test_nullable_field_can_be_cleared(self, client, user_headers, records):
        client.put(records["styles"], json={"brand": "Other"}, headers=user_headers)

        response = client.put(records["styles"], json={"brand": None}, headers=user_headers)

        assert response.status_code == 200
        assert response.json()["brand"] is None
