"""
API tests for purchase orders: totals, item editing and the status workflow.
"""
from decimal import Decimal

import pytest

BASE = "/api/purchase-orders"


@pytest.fixture
def create_po(client, user_headers, catalog):
    def _create_po(items=None, **fields):
        payload = {"supplierId": catalog["supplier"]["id"], "orderDate": "2025-03-01"}
        payload.update(fields)
        if items is not None:
            payload["items"] = items
        response = client.post(f"{BASE}/", json=payload, headers=user_headers)
        assert response.status_code == 201, response.text
        return response.json()
    return _create_po


@pytest.fixture
def draft_po(create_po):
    """Draft order worth 3 x 10.0 + 2 x 25.0"""
    return create_po(items=[
        {"materialCode": "FAB-001", "quantity": "3", "unitCost": "10.0"},
        {"materialCode": "THR-001", "quantity": "2", "unitCost": "25.0"},
    ])


def set_status(client, headers, po_number, status, notes=None):
    payload = {"status": status}
    if notes:
        payload["notes"] = notes
    return client.put(f"{BASE}/{po_number}/status", json=payload, headers=headers)


class TestCreatePurchaseOrder:

    def test_new_order_is_draft_with_totals(self, draft_po):
        assert draft_po["poNumber"] == "PO-0001"
        assert draft_po["status"] == "Draft"
        assert draft_po["supplierName"] == "Acme Textiles"
        assert draft_po["itemsCount"] == 2
        assert Decimal(draft_po["totalAmount"]) == Decimal("80.0")
        assert draft_po["formattedTotal"] == "USD 80.00"
        assert draft_po["allowedTransitions"] == ["Ordered", "Cancelled"]

    def test_requested_status_is_ignored(self, create_po):
        po = create_po(status="Received")
        assert po["status"] == "Draft"

    def test_sequential_numbers(self, create_po):
        assert create_po()["poNumber"] == "PO-0001"
        assert create_po()["poNumber"] == "PO-0002"

    def test_unknown_supplier(self, client, user_headers, catalog):
        response = client.post(f"{BASE}/", json={"supplierId": 999}, headers=user_headers)
        assert response.status_code == 404

    def test_duplicate_material_rejected(self, client, user_headers, catalog):
        response = client.post(f"{BASE}/", json={
            "supplierId": catalog["supplier"]["id"],
            "items": [
                {"materialCode": "FAB-001", "quantity": "1"},
                {"materialCode": "FAB-001", "quantity": "2"},
            ],
        }, headers=user_headers)
        assert response.status_code == 400

    def test_empty_order_has_zero_total(self, create_po):
        po = create_po()
        assert Decimal(po["totalAmount"]) == Decimal("0")
        assert po["allowedTransitions"] == []


class TestPurchaseOrderItems:

    def test_add_item_defaults_to_material_cost(self, client, user_headers, create_po):
        po = create_po()

        response = client.post(f"{BASE}/{po['poNumber']}/items",
                               json={"materialCode": "FAB-001", "quantity": "5"}, headers=user_headers)

        assert response.status_code == 201
        item = response.json()["items"][0]
        assert Decimal(item["unitCost"]) == Decimal("4.00")
        assert Decimal(item["lineTotal"]) == Decimal("20.00")
        assert item["description"] == "Cotton jersey"

    def test_add_duplicate_material_rejected(self, client, user_headers, draft_po):
        response = client.post(f"{BASE}/{draft_po['poNumber']}/items",
                               json={"materialCode": "FAB-001", "quantity": "1"}, headers=user_headers)
        assert response.status_code == 400

    def test_remove_item_from_draft(self, client, user_headers, draft_po):
        item_id = draft_po["items"][0]["id"]

        response = client.delete(f"{BASE}/{draft_po['poNumber']}/items/{item_id}", headers=user_headers)

        assert response.status_code == 200
        assert response.json()["itemsCount"] == 1
        assert Decimal(response.json()["totalAmount"]) == Decimal("50.0")

    @pytest.mark.parametrize("path", [["Ordered"], ["Ordered", "Shipped"], ["Ordered", "Shipped", "Received"], ["Cancelled"]])
    def test_items_locked_after_draft(self, client, user_headers, draft_po, path):
        po_number = draft_po["poNumber"]
        for status in path:
            assert set_status(client, user_headers, po_number, status).status_code == 200

        added = client.post(f"{BASE}/{po_number}/items",
                            json={"materialCode": "THR-001", "quantity": "1"}, headers=user_headers)
        removed = client.delete(f"{BASE}/{po_number}/items/{draft_po['items'][0]['id']}", headers=user_headers)

        assert added.status_code == 409
        assert removed.status_code == 409
        assert client.get(f"{BASE}/{po_number}", headers=user_headers).json()["itemsCount"] == 2

    def test_available_materials(self, client, user_headers, create_po):
        po = create_po(items=[{"materialCode": "THR-001", "quantity": "1"}])
        response = client.get(f"{BASE}/{po['poNumber']}/available-materials", headers=user_headers)
        assert [m["materialCode"] for m in response.json()] == ["FAB-001"]


class TestStatusWorkflow:

    def test_full_lifecycle(self, client, user_headers, draft_po):
        po_number = draft_po["poNumber"]
        for status in ("Ordered", "Shipped", "Received"):
            response = set_status(client, user_headers, po_number, status)
            assert response.status_code == 200
            assert response.json()["status"] == status

        assert response.json()["allowedTransitions"] == []

    def test_empty_draft_cannot_be_ordered(self, client, user_headers, create_po):
        po = create_po()
        response = set_status(client, user_headers, po["poNumber"], "Ordered")
        assert response.status_code == 409

    def test_skipping_a_step_rejected(self, client, user_headers, draft_po):
        response = set_status(client, user_headers, draft_po["poNumber"], "Received")
        assert response.status_code == 409

    def test_received_is_terminal(self, client, user_headers, draft_po):
        po_number = draft_po["poNumber"]
        for status in ("Ordered", "Shipped", "Received"):
            set_status(client, user_headers, po_number, status)

        assert set_status(client, user_headers, po_number, "Cancelled").status_code == 409

    def test_resubmitting_current_status_is_accepted(self, client, user_headers, draft_po):
        response = set_status(client, user_headers, draft_po["poNumber"], "Draft")
        assert response.status_code == 200
        assert response.json()["status"] == "Draft"

    def test_status_notes_are_appended(self, client, user_headers, create_po):
        po = create_po(items=[{"materialCode": "FAB-001", "quantity": "1"}], notes="Rush order")
        response = set_status(client, user_headers, po["poNumber"], "Ordered", notes="Confirmed by phone")
        assert response.json()["notes"] == "Rush order\nConfirmed by phone"

    def test_status_through_header_update(self, client, user_headers, draft_po):
        po_number = draft_po["poNumber"]

        ok = client.put(f"{BASE}/{po_number}", json={"status": "Ordered", "deliveryDate": "2025-04-01"},
                        headers=user_headers)
        bad = client.put(f"{BASE}/{po_number}", json={"status": "Draft"}, headers=user_headers)

        assert ok.status_code == 200
        assert ok.json()["deliveryDate"] == "2025-04-01"
        assert bad.status_code == 409

    def test_transitions_endpoint(self, client, user_headers, draft_po):
        body = client.get(f"{BASE}/{draft_po['poNumber']}/transitions", headers=user_headers).json()
        assert body == {
            "poNumber": draft_po["poNumber"],
            "status": "Draft",
            "itemsCount": 2,
            "allowedTransitions": ["Ordered", "Cancelled"],
        }


class TestDeletePurchaseOrder:

    def test_delete_draft_removes_items(self, client, user_headers, draft_po, db_session):
        from models.purchase_order import PurchaseOrderItem

        response = client.delete(f"{BASE}/{draft_po['poNumber']}", headers=user_headers)

        assert response.status_code == 200
        assert client.get(f"{BASE}/{draft_po['poNumber']}", headers=user_headers).status_code == 404
        assert db_session.query(PurchaseOrderItem).count() == 0

    def test_only_drafts_can_be_deleted(self, client, user_headers, draft_po):
        set_status(client, user_headers, draft_po["poNumber"], "Ordered")
        response = client.delete(f"{BASE}/{draft_po['poNumber']}", headers=user_headers)
        assert response.status_code == 409

    def test_supplier_with_orders_cannot_be_deleted(self, client, user_headers, catalog, draft_po):
        response = client.delete(f"/api/suppliers/{catalog['supplier']['id']}", headers=user_headers)
        assert response.status_code == 400


class TestListAndTotals:

    def test_list_rows_carry_totals(self, client, user_headers, draft_po, create_po):
        create_po()

        rows = client.get(f"{BASE}/", headers=user_headers).json()

        assert [row["poNumber"] for row in rows] == ["PO-0002", "PO-0001"]
        assert Decimal(rows[1]["totalAmount"]) == Decimal("80.0")
        assert rows[1]["itemsCount"] == 2
        assert Decimal(rows[0]["totalAmount"]) == Decimal("0")

    def test_filters(self, client, user_headers, draft_po, create_po):
        create_po(orderDate="2025-05-10", deliveryDate="2025-06-01")
        set_status(client, user_headers, draft_po["poNumber"], "Ordered")

        def numbers(query):
            return [row["poNumber"] for row in client.get(f"{BASE}/?{query}", headers=user_headers).json()]

        assert numbers("status=Ordered") == ["PO-0001"]
        assert numbers("items_count=0") == ["PO-0002"]
        assert numbers("po_number=0002") == ["PO-0002"]
        assert numbers("order_date_from=2025-05-01") == ["PO-0002"]
        assert numbers("order_date_to=2025-03-31") == ["PO-0001"]
        assert numbers("delivery_date_from=2025-05-15&delivery_date_to=2025-06-30") == ["PO-0002"]

    def test_totals_by_order(self, client, user_headers, draft_po, create_po):
        other = create_po(items=[{"materialCode": "THR-001", "quantity": "4", "unitCost": "1.25"}])
        set_status(client, user_headers, other["poNumber"], "Ordered")

        totals = client.get(f"{BASE}/totals", headers=user_headers).json()
        ordered_only = client.get(f"{BASE}/totals?status=Ordered", headers=user_headers).json()

        assert {k: Decimal(v) for k, v in totals.items()} == {"PO-0001": Decimal("80"), "PO-0002": Decimal("5")}
        assert list(ordered_only) == ["PO-0002"]

    def test_viewer_can_read_but_not_write(self, client, viewer_headers, draft_po):
        assert client.get(f"{BASE}/{draft_po['poNumber']}", headers=viewer_headers).status_code == 200
        response = set_status(client, viewer_headers, draft_po["poNumber"], "Ordered")
        assert response.status_code == 403
