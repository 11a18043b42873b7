"""
End-to-end tests for /api/warehouses through the ASGI app.
"""
import uuid

import pytest

BASE = "/api/warehouses"


def warehouse_payload(**overrides) -> dict:
    payload = {
        "warehouse_code": "WH-SMG-01",
        "warehouse_name": "Semarang Distribution Center",
        "city": "Semarang",
        "state": "Jawa Tengah",
        "email": "semarang@warehouse.co.id",
    }
    payload.update(overrides)
    return payload


@pytest.mark.asyncio
class TestCreateWarehouse:

    async def test_create(self, client):
        resp = await client.post(BASE, json=warehouse_payload())

        assert resp.status_code == 201
        body = resp.json()
        assert body["success"] is True
        assert body["message"] == "Warehouse created successfully"
        assert body["error"] is None
        assert body["data"]["warehouse_code"] == "WH-SMG-01"
        assert body["data"]["is_active"] is True
        assert body["data"]["country"] == "Indonesia"
        assert body["data"]["created_by"] == 1
        assert "timestamp" in body

    async def test_missing_name(self, client):
        resp = await client.post(BASE, json={"warehouse_code": "WH-X"})

        assert resp.status_code == 400
        body = resp.json()
        assert body["success"] is False
        assert body["data"] is None
        assert body["error"]["code"] == "VALIDATION_ERROR"
        assert body["error"]["fields"] == ["warehouse_name"]

    async def test_unknown_field(self, client):
        resp = await client.post(BASE, json=warehouse_payload(floor_count=3))

        assert resp.status_code == 400
        assert resp.json()["error"]["fields"] == ["floor_count"]

    async def test_invalid_json(self, client):
        resp = await client.post(BASE, content=b"{not json", headers={"Content-Type": "application/json"})

        assert resp.status_code == 400
        assert resp.json()["error"]["code"] == "VALIDATION_ERROR"

    async def test_duplicate_code(self, client):
        await client.post(BASE, json=warehouse_payload())

        resp = await client.post(BASE, json=warehouse_payload(warehouse_name="Another"))

        assert resp.status_code == 409
        body = resp.json()
        assert body["error"]["code"] == "ALREADY_EXISTS"
        assert body["error"]["message"] == "Warehouse already exists"
        assert body["error"]["fields"] == ["warehouse_code"]


@pytest.mark.asyncio
class TestReadWarehouse:

    async def test_get_by_id(self, client, created_warehouse):
        resp = await client.get(f"{BASE}/{created_warehouse.warehouse_id}")

        assert resp.status_code == 200
        assert resp.json()["data"]["warehouse_name"] == "Jakarta Central Warehouse"

    async def test_get_by_code(self, client, created_warehouse):
        resp = await client.get(f"{BASE}/code/WH-JKT-01")

        assert resp.status_code == 200
        assert resp.json()["data"]["warehouse_id"] == created_warehouse.warehouse_id

    async def test_not_found(self, client):
        resp = await client.get(f"{BASE}/999999")

        assert resp.status_code == 404
        body = resp.json()
        assert body["success"] is False
        assert body["message"] == "Warehouse not found"
        assert body["error"]["code"] == "NOT_FOUND"

    async def test_code_not_found(self, client):
        resp = await client.get(f"{BASE}/code/WH-NOPE")
        assert resp.status_code == 404

    @pytest.mark.parametrize("entity_id", ["3000000000", "99999999999999999999"])
    async def test_oversized_id_is_not_found(self, client, entity_id):
        url = f"{BASE}/{entity_id}"

        for resp in (
            await client.get(url),
            await client.put(url, json={"city": "Bogor"}),
            await client.put(url, json={"warehouse_code": "WH-NEW"}),
            await client.delete(url),
        ):
            assert resp.status_code == 404
            assert resp.json()["error"]["code"] == "NOT_FOUND"

    async def test_non_integer_id(self, client):
        resp = await client.get(f"{BASE}/abc")

        assert resp.status_code == 400
        assert resp.json()["error"]["fields"] == ["entity_id"]


@pytest.mark.asyncio
class TestListWarehouses:

    async def test_list_defaults(self, client, multiple_warehouses):
        resp = await client.get(BASE)

        assert resp.status_code == 200
        data = resp.json()["data"]
        assert [w["warehouse_code"] for w in data["data"]] == ["WH-A", "WH-B", "WH-C", "WH-D", "WH-E"]
        assert data["pagination"] == {
            "total": 5,
            "page": 1,
            "limit": 20,
            "total_pages": 1,
            "has_next": False,
            "has_prev": False,
        }

    async def test_search_sort_and_paging(self, client, multiple_warehouses):
        resp = await client.get(
            BASE, params={"search": "jakarta", "sort_by": "code", "sort_order": "DESC", "limit": 1, "page": 2}
        )

        data = resp.json()["data"]
        assert [w["warehouse_code"] for w in data["data"]] == ["WH-A"]
        assert data["pagination"]["total"] == 2
        assert data["pagination"]["has_prev"] is True

    async def test_lenient_paging_parameters(self, client, multiple_warehouses):
        resp = await client.get(BASE, params={"page": "abc", "limit": "999"})

        assert resp.status_code == 200
        pagination = resp.json()["data"]["pagination"]
        assert pagination["page"] == 1
        assert pagination["limit"] == 100

    async def test_huge_page_returns_empty_page(self, client, multiple_warehouses):
        resp = await client.get(BASE, params={"page": "99999999999999999999"})

        assert resp.status_code == 200
        data = resp.json()["data"]
        assert data["data"] == []
        assert data["pagination"]["total"] == 5
        assert data["pagination"]["has_next"] is False

    async def test_zero_and_negative_paging(self, client, multiple_warehouses):
        resp = await client.get(BASE, params={"page": "-3", "limit": "0"})

        pagination = resp.json()["data"]["pagination"]
        assert pagination["page"] == 1
        assert pagination["limit"] == 1
        assert pagination["total_pages"] == 5


@pytest.mark.asyncio
class TestUpdateWarehouse:

    async def test_partial_update(self, client, created_warehouse):
        resp = await client.put(f"{BASE}/{created_warehouse.warehouse_id}", json={"city": "Tangerang"})

        assert resp.status_code == 200
        body = resp.json()
        assert body["message"] == "Warehouse updated successfully"
        assert body["data"]["city"] == "Tangerang"
        assert body["data"]["warehouse_name"] == "Jakarta Central Warehouse"

    async def test_explicit_null_clears(self, client, created_warehouse):
        resp = await client.put(f"{BASE}/{created_warehouse.warehouse_id}", json={"phone": None})

        assert resp.status_code == 200
        assert resp.json()["data"]["phone"] is None

    async def test_null_required_field(self, client, created_warehouse):
        resp = await client.put(f"{BASE}/{created_warehouse.warehouse_id}", json={"warehouse_name": None})

        assert resp.status_code == 400
        assert resp.json()["error"]["fields"] == ["warehouse_name"]

    async def test_code_conflict(self, client, multiple_warehouses):
        target = multiple_warehouses[1]
        resp = await client.put(f"{BASE}/{target.warehouse_id}", json={"warehouse_code": "WH-A"})

        assert resp.status_code == 409

    async def test_update_missing(self, client):
        resp = await client.put(f"{BASE}/424242", json={"city": "Bogor"})
        assert resp.status_code == 404


@pytest.mark.asyncio
class TestDeleteWarehouse:

    async def test_delete(self, client, created_warehouse):
        url = f"{BASE}/{created_warehouse.warehouse_id}"

        resp = await client.delete(url)
        assert resp.status_code == 200
        body = resp.json()
        assert body["success"] is True
        assert body["data"] is None
        assert body["message"] == "Warehouse deleted successfully"

        assert (await client.get(url)).status_code == 404
        assert (await client.delete(url)).status_code == 404

    async def test_code_reusable_after_delete(self, client, created_warehouse):
        await client.delete(f"{BASE}/{created_warehouse.warehouse_id}")

        resp = await client.post(BASE, json=warehouse_payload(warehouse_code="WH-JKT-01"))
        assert resp.status_code == 201


@pytest.mark.asyncio
class TestEnvelopeAndHeaders:

    async def test_request_id_echoed(self, client):
        rid = str(uuid.uuid4())
        resp = await client.get(BASE, headers={"X-Request-ID": rid})
        assert resp.headers["X-Request-ID"] == rid

    async def test_unknown_route(self, client):
        resp = await client.get("/api/nowhere")

        assert resp.status_code == 404
        assert resp.json()["error"]["code"] == "NOT_FOUND"

    async def test_wrong_method(self, client):
        resp = await client.patch(BASE)

        assert resp.status_code == 405
        assert resp.json()["error"]["code"] == "METHOD_NOT_ALLOWED"
