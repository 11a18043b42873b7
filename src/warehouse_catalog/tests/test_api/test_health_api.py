import pytest


@pytest.mark.asyncio
async def test_root_banner(client):
    resp = await client.get("/")

    assert resp.status_code == 200
    body = resp.json()
    assert body["success"] is True
    assert body["message"] == "Warehouse Catalog API"
    assert body["data"]["service"] == "warehouse-catalog"
    assert "version" in body["data"]


@pytest.mark.asyncio
async def test_health_healthy(client):
    resp = await client.get("/health")

    assert resp.status_code == 200
    data = resp.json()["data"]
    assert data["status"] == "healthy"
    assert data["services"]["database"]["status"] == "healthy"
    assert data["services"]["database"]["response_time_ms"] >= 0
    assert data["uptime"].endswith("s")


@pytest.mark.asyncio
async def test_health_reports_failure_with_200(client, app):
    class BrokenDatabase:
        async def ping(self):
            raise ConnectionError("could not connect to server")

    app.state.database = BrokenDatabase()

    resp = await client.get("/health")

    assert resp.status_code == 200
    data = resp.json()["data"]
    assert data["status"] == "unhealthy"
    assert data["services"]["database"]["status"] == "error"
    assert data["services"]["database"]["error"] == "could not connect to server"
