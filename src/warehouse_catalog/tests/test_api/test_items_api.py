import pytest

BASE = "/api/items"


@pytest.mark.asyncio
class TestItemsApi:

    async def test_create_with_defaults(self, client):
        resp = await client.post(BASE, json={"item_code": "ITM-TAPE-01", "item_name": "Duct Tape"})

        assert resp.status_code == 201
        data = resp.json()["data"]
        assert data["item_type"] == "STOCK"
        assert data["item_usage_type"] == "CONSUMABLE"
        assert data["unit"] == "PCS"
        assert data["max_loan_duration_days"] == 30
        assert data["is_loanable"] is False

    async def test_create_loanable_tool(self, client, sample_item_data):
        resp = await client.post(BASE, json={**sample_item_data, "replacement_cost": "1250000.50"})

        assert resp.status_code == 201
        data = resp.json()["data"]
        assert data["is_loanable"] is True
        assert data["max_loan_duration_days"] == 14
        assert float(data["replacement_cost"]) == 1250000.5

    async def test_negative_cost_rejected(self, client):
        resp = await client.post(BASE, json={"item_code": "ITM-X", "item_name": "X", "standard_cost": -5})

        assert resp.status_code == 400
        assert resp.json()["error"]["fields"] == ["standard_cost"]

    async def test_duplicate_code(self, client, created_item):
        resp = await client.post(BASE, json={"item_code": created_item.item_code, "item_name": "Other drill"})

        assert resp.status_code == 409
        assert resp.json()["error"]["fields"] == ["item_code"]

    async def test_item_code_is_immutable(self, client, created_item):
        resp = await client.put(f"{BASE}/{created_item.item_id}", json={"item_code": "ITM-RENAMED"})

        assert resp.status_code == 400
        assert resp.json()["error"]["fields"] == ["item_code"]

        still = await client.get(f"{BASE}/code/ITM-DRILL-01")
        assert still.status_code == 200

    async def test_update_and_search(self, client, created_item):
        resp = await client.put(f"{BASE}/{created_item.item_id}", json={"brand": "DeWalt"})
        assert resp.json()["data"]["brand"] == "DeWalt"

        found = await client.get(BASE, params={"search": "dewalt"})
        assert [i["item_code"] for i in found.json()["data"]["data"]] == ["ITM-DRILL-01"]

        none = await client.get(BASE, params={"search": "makita"})
        assert none.json()["data"]["pagination"]["total"] == 0

    async def test_delete(self, client, created_item):
        resp = await client.delete(f"{BASE}/{created_item.item_id}")

        assert resp.status_code == 200
        assert resp.json()["message"] == "Item deleted successfully"
        assert (await client.get(f"{BASE}/{created_item.item_id}")).status_code == 404
