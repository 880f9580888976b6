"""
API tests for styles, SKUs, materials, inventory, settings and the dashboard.
"""
from decimal import Decimal


class TestStylesAndSkus:

    def test_style_code_generated(self, client, user_headers):
        response = client.post("/api/styles/", json={"description": "Hoodie"}, headers=user_headers)
        assert response.status_code == 201
        assert response.json()["styleCode"] == "STY-0001"

    def test_search_styles(self, client, user_headers, catalog):
        client.post("/api/styles/", json={"description": "Denim jacket", "brand": "Other"}, headers=user_headers)

        rows = client.get("/api/styles/?brand=Northwind", headers=user_headers).json()
        assert [row["styleCode"] for row in rows] == ["ST-100"]

    def test_style_with_skus_cannot_be_deleted(self, client, user_headers, catalog):
        assert client.delete("/api/styles/ST-100", headers=user_headers).status_code == 400

    def test_sku_requires_style(self, client, user_headers):
        response = client.post("/api/skus/", json={
            "skuCode": "X-1", "styleCode": "NOPE", "color": "Red", "size": "S"
        }, headers=user_headers)
        assert response.status_code == 404

    def test_duplicate_sku_rejected(self, client, user_headers, catalog):
        response = client.post("/api/skus/", json={
            "skuCode": "ST-100-BLK-M", "styleCode": "ST-100", "color": "Black", "size": "M"
        }, headers=user_headers)
        assert response.status_code == 400

    def test_delete_sku_removes_bom(self, client, user_headers, catalog):
        client.post("/api/boms/", json={
            "skuCode": "ST-100-BLK-M", "materialCode": "FAB-001", "consumptionPerGarment": "1"
        }, headers=user_headers)

        assert client.delete("/api/skus/ST-100-BLK-M", headers=user_headers).status_code == 200
        assert client.get("/api/boms/", headers=user_headers).json() == []


class TestMaterialsAndInventory:

    def test_material_code_generated(self, client, user_headers):
        response = client.post("/api/materials/", json={
            "description": "Metal zip", "unitOfMeasure": "Piece", "costPerUnit": "0.35"
        }, headers=user_headers)
        assert response.status_code == 201
        assert response.json()["materialCode"] == "MAT-0001"

    def test_material_in_use_cannot_be_deleted(self, client, user_headers, catalog):
        client.post("/api/inventory/", json={"materialCode": "FAB-001", "quantityOnHand": "1"},
                    headers=user_headers)
        assert client.delete("/api/materials/FAB-001", headers=user_headers).status_code == 400
        assert client.delete("/api/materials/THR-001", headers=user_headers).status_code == 200

    def test_low_stock_flag_and_filter(self, client, user_headers, catalog):
        client.post("/api/inventory/", json={
            "materialCode": "FAB-001", "quantityOnHand": "10", "minStockLevel": "25"
        }, headers=user_headers)
        client.post("/api/inventory/", json={
            "materialCode": "THR-001", "quantityOnHand": "40", "minStockLevel": "5"
        }, headers=user_headers)

        low = client.get("/api/inventory/?low_stock=true", headers=user_headers).json()
        stocked = client.get("/api/inventory/?low_stock=false", headers=user_headers).json()
        item = client.get("/api/inventory/FAB-001", headers=user_headers).json()

        assert [row["materialCode"] for row in low] == ["FAB-001"]
        assert [row["materialCode"] for row in stocked] == ["THR-001"]
        assert item["isLowStock"] is True
        assert item["description"] == "Cotton jersey"

    def test_one_stock_record_per_material(self, client, user_headers, catalog):
        payload = {"materialCode": "FAB-001", "quantityOnHand": "1"}
        client.post("/api/inventory/", json=payload, headers=user_headers)
        assert client.post("/api/inventory/", json=payload, headers=user_headers).status_code == 400

    def test_update_stock(self, client, user_headers, catalog):
        client.post("/api/inventory/", json={"materialCode": "FAB-001", "quantityOnHand": "1"},
                    headers=user_headers)
        response = client.put("/api/inventory/FAB-001", json={"quantityOnHand": "12.5"}, headers=user_headers)
        assert Decimal(response.json()["quantityOnHand"]) == Decimal("12.5")


class TestSettings:

    def test_default_currency_falls_back_to_configuration(self, client, user_headers):
        body = client.get("/api/settings/", headers=user_headers).json()
        assert body["defaultCurrency"] == "USD"
        assert body["currencies"] == []

    def test_single_default_currency(self, client, user_headers):
        usd = client.post("/api/settings/currencies", json={"value": "USD"}, headers=user_headers).json()
        eur = client.post("/api/settings/currencies", json={"value": "EUR"}, headers=user_headers).json()
        assert usd["isDefault"] is True
        assert eur["isDefault"] is False

        client.put(f"/api/settings/currencies/{eur['id']}/default", headers=user_headers)

        body = client.get("/api/settings/", headers=user_headers).json()
        assert body["defaultCurrency"] == "EUR"
        assert [c["value"] for c in body["currencies"] if c["isDefault"]] == ["EUR"]

    def test_duplicate_currency_rejected(self, client, user_headers):
        client.post("/api/settings/currencies", json={"value": "USD"}, headers=user_headers)
        response = client.post("/api/settings/currencies", json={"value": "usd"}, headers=user_headers)
        assert response.status_code == 400

    def test_lookup_lists(self, client, user_headers):
        created = client.post("/api/settings/colors", json={"value": "Navy"}, headers=user_headers)
        duplicate = client.post("/api/settings/colors", json={"value": "Navy"}, headers=user_headers)
        unknown = client.post("/api/settings/fabrics", json={"value": "Silk"}, headers=user_headers)

        assert created.status_code == 201
        assert duplicate.status_code == 400
        assert unknown.status_code == 404
        assert client.get("/api/settings/", headers=user_headers).json()["colors"] == [created.json()]

        removed = client.delete(f"/api/settings/colors/{created.json()['id']}", headers=user_headers)
        assert removed.status_code == 200


class TestDashboard:

    def test_counts(self, client, user_headers, catalog):
        client.post("/api/inventory/", json={
            "materialCode": "FAB-001", "quantityOnHand": "1", "minStockLevel": "10"
        }, headers=user_headers)
        po = client.post("/api/purchase-orders/", json={
            "supplierId": catalog["supplier"]["id"],
            "items": [{"materialCode": "FAB-001", "quantity": "3", "unitCost": "10"}],
        }, headers=user_headers).json()
        client.put(f"/api/purchase-orders/{po['poNumber']}/status", json={"status": "Ordered"},
                   headers=user_headers)
        client.post("/api/work-orders/", json={
            "skuCode": "ST-100-BLK-M", "quantity": 50, "status": "In Progress"
        }, headers=user_headers)

        body = client.get("/api/dashboard/", headers=user_headers).json()

        assert body["totalStyles"] == 1
        assert body["totalSkus"] == 1
        assert body["lowStockItems"] == 1
        assert body["activePurchaseOrders"] == 1
        assert body["workOrdersInProgress"] == 1
        assert len(body["recentWorkOrders"]) == 1
        assert Decimal(body["pendingPurchaseOrders"][0]["totalAmount"]) == Decimal("30")
