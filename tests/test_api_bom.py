"""
API tests for bills of materials and SKU costing.
"""
from decimal import Decimal

SKU = "ST-100-BLK-M"


def add_line(client, headers, material_code, consumption, wastage="0", sku_code=SKU):
    return client.post("/api/boms/", json={
        "skuCode": sku_code,
        "materialCode": material_code,
        "consumptionPerGarment": consumption,
        "wastagePercentage": wastage,
    }, headers=headers)


class TestBomLines:

    def test_add_line_takes_style_from_sku(self, client, user_headers, catalog):
        response = add_line(client, user_headers, "FAB-001", "2.5", "10")

        assert response.status_code == 201
        body = response.json()
        assert body["styleCode"] == "ST-100"
        assert Decimal(body["consumptionPerGarment"]) == Decimal("2.5")

    def test_duplicate_material_rejected(self, client, user_headers, catalog):
        add_line(client, user_headers, "FAB-001", "1")
        response = add_line(client, user_headers, "FAB-001", "2")
        assert response.status_code == 400

    def test_unknown_sku(self, client, user_headers, catalog):
        response = add_line(client, user_headers, "FAB-001", "1", sku_code="NOPE")
        assert response.status_code == 404

    def test_unknown_material(self, client, user_headers, catalog):
        response = add_line(client, user_headers, "GHOST", "1")
        assert response.status_code == 404

    def test_non_positive_consumption_rejected(self, client, user_headers, catalog):
        response = add_line(client, user_headers, "FAB-001", "0")
        assert response.status_code == 422

    def test_viewer_cannot_edit(self, client, viewer_headers, catalog):
        response = add_line(client, viewer_headers, "FAB-001", "1")
        assert response.status_code == 403

    def test_list_and_delete(self, client, user_headers, catalog):
        line_id = add_line(client, user_headers, "FAB-001", "1").json()["id"]

        listed = client.get(f"/api/boms/?sku_code={SKU}", headers=user_headers).json()
        assert [line["id"] for line in listed] == [line_id]

        assert client.delete(f"/api/boms/{line_id}", headers=user_headers).status_code == 200
        assert client.get("/api/boms/", headers=user_headers).json() == []

    def test_available_materials_exclude_used(self, client, user_headers, catalog):
        add_line(client, user_headers, "FAB-001", "1")

        response = client.get(f"/api/boms/sku/{SKU}/available-materials", headers=user_headers)

        assert response.status_code == 200
        assert [m["materialCode"] for m in response.json()] == ["THR-001"]


class TestBomCost:

    def test_cost_of_single_line(self, client, user_headers, catalog):
        add_line(client, user_headers, "FAB-001", "2.5", "10")

        response = client.get(f"/api/boms/sku/{SKU}/cost", headers=user_headers)

        assert response.status_code == 200
        body = response.json()
        assert Decimal(body["totalCost"]) == Decimal("11.00")
        assert body["formattedTotal"] == "USD 11.00"
        assert body["currency"] == "USD"
        assert Decimal(body["targetCostPrice"]) == Decimal("12.50")
        assert body["missingMaterials"] == []
        assert Decimal(body["lines"][0]["lineCost"]) == Decimal("11.00")

    def test_cost_sums_lines(self, client, user_headers, catalog):
        add_line(client, user_headers, "FAB-001", "2.5", "10")
        add_line(client, user_headers, "THR-001", "2")

        body = client.get(f"/api/boms/sku/{SKU}/cost", headers=user_headers).json()

        assert Decimal(body["totalCost"]) == Decimal("12.00")
        assert len(body["lines"]) == 2

    def test_empty_bom_costs_nothing(self, client, user_headers, catalog):
        body = client.get(f"/api/boms/sku/{SKU}/cost", headers=user_headers).json()
        assert Decimal(body["totalCost"]) == Decimal("0")
        assert body["lines"] == []

    def test_uses_default_currency(self, client, user_headers, catalog):
        add_line(client, user_headers, "THR-001", "2")
        currency = client.post("/api/settings/currencies", json={"value": "eur"}, headers=user_headers).json()
        client.put(f"/api/settings/currencies/{currency['id']}/default", headers=user_headers)

        body = client.get(f"/api/boms/sku/{SKU}/cost", headers=user_headers).json()
        assert body["formattedTotal"] == "EUR 1.00"

    def test_unknown_sku(self, client, user_headers):
        response = client.get("/api/boms/sku/NOPE/cost", headers=user_headers)
        assert response.status_code == 404
