"""Tests for planning API routes (in-memory repository)."""

from unittest.mock import AsyncMock

import pytest
from httpx import AsyncClient
from sqlalchemy.exc import OperationalError

from app.features.planning.schemas import SALES_UNITS_MAX


class TestPlanningRoutes:
    """Tests for GET /planning/{store_id} endpoints."""

    async def test_aggregate_keyed_by_sku_id(self, client: AsyncClient, repository):
        """Response maps SKU ids to their planning records."""
        repository.facts[("ST001", "SK001", "W01")] = 10

        response = await client.get("/planning/ST001")

        assert response.status_code == 200
        data = response.json()
        assert data["store_id"] == "ST001"
        assert data["skus"]["SK001"] == {
            "id": "SK001",
            "label": "Basic Tee",
            "price": 5.0,
            "cost": 3.0,
            "sales_data": [{"week": "W01", "sales_units": 10}],
        }

    async def test_unknown_store_is_empty(self, client: AsyncClient):
        """Unknown store returns 200 with no SKUs."""
        response = await client.get("/planning/ST999")

        assert response.status_code == 200
        assert response.json()["skus"] == {}

    async def test_weekly_metrics(self, client: AsyncClient, repository):
        """Weekly metrics are 52 parallel lists."""
        repository.facts[("ST001", "SK001", "W01")] = 10

        response = await client.get("/planning/ST001/metrics/weekly")

        assert response.status_code == 200
        data = response.json()
        assert data["weeks"][0] == "W01"
        assert data["weeks"][-1] == "W52"
        for key in ("revenue", "cost", "gm_dollars", "gm_percent"):
            assert len(data[key]) == 52
        assert data["gm_percent"][0] == pytest.approx(40.0)
        assert data["gm_percent"][1] == 0.0

    async def test_monthly_metrics(self, client: AsyncClient):
        """Monthly metrics expose month tokens and labels."""
        response = await client.get("/planning/ST001/metrics/monthly")

        assert response.status_code == 200
        data = response.json()
        assert len(data["months"]) == 12
        assert data["month_labels"][-1] == "Jan"

    async def test_sku_detail_not_found(self, client: AsyncClient):
        """Missing SKU planning returns a 404 problem."""
        response = await client.get("/planning/ST001/skus/SK001")

        assert response.status_code == 404
        assert response.headers["content-type"].startswith("application/problem+json")


class TestPlanningFactRoutes:
    """Tests for POST /planning/facts."""

    async def test_ingest_then_read(self, client: AsyncClient):
        """Ingested facts are visible in the aggregate."""
        response = await client.post(
            "/planning/facts",
            json={
                "records": [
                    {"store_id": "ST001", "sku_id": "SK002", "week": "W07", "sales_units": 3}
                ]
            },
        )

        assert response.status_code == 200
        assert response.json()["upserted_count"] == 1

        data = (await client.get("/planning/ST001")).json()
        assert data["skus"]["SK002"]["sales_data"] == [{"week": "W07", "sales_units": 3}]

    async def test_unknown_week_rejected(self, client: AsyncClient, repository):
        """Unknown references return 422 with field errors and write nothing."""
        response = await client.post(
            "/planning/facts",
            json={
                "records": [
                    {"store_id": "ST001", "sku_id": "SK001", "week": "W53", "sales_units": 1}
                ]
            },
        )

        assert response.status_code == 422
        body = response.json()
        assert body["errors"][0]["field"] == "records[0].week"
        assert repository.facts == {}

    async def test_negative_units_rejected(self, client: AsyncClient):
        """Schema validation rejects negative units."""
        response = await client.post(
            "/planning/facts",
            json={
                "records": [
                    {"store_id": "ST001", "sku_id": "SK001", "week": "W01", "sales_units": -1}
                ]
            },
        )

        assert response.status_code == 422

    async def test_units_beyond_int4_rejected(self, client: AsyncClient, repository):
        """Units that overflow a 32-bit column are a 422 before any write."""
        response = await client.post(
            "/planning/facts",
            json={
                "records": [
                    {
                        "store_id": "ST001",
                        "sku_id": "SK001",
                        "week": "W01",
                        "sales_units": SALES_UNITS_MAX + 1,
                    }
                ]
            },
        )

        assert response.status_code == 422
        assert response.json()["errors"][0]["field"] == "records.0.sales_units"
        assert repository.upsert_calls == []

    async def test_units_at_int4_maximum_accepted(self, client: AsyncClient, repository):
        """The largest 32-bit value is accepted."""
        response = await client.post(
            "/planning/facts",
            json={
                "records": [
                    {
                        "store_id": "ST001",
                        "sku_id": "SK001",
                        "week": "W01",
                        "sales_units": SALES_UNITS_MAX,
                    }
                ]
            },
        )

        assert response.status_code == 200
        assert repository.facts[("ST001", "SK001", "W01")] == SALES_UNITS_MAX

    async def test_empty_batch_rejected(self, client: AsyncClient):
        """At least one record is required."""
        response = await client.post("/planning/facts", json={"records": []})

        assert response.status_code == 422


class TestDatabaseFailures:
    """Datastore failures surface as 500 problem responses with no partial result."""

    @pytest.fixture
    def failing_reads(self, repository, monkeypatch):
        monkeypatch.setattr(
            repository,
            "fetch_store_rows",
            AsyncMock(side_effect=OperationalError("SELECT", {}, Exception("down"))),
        )

    @pytest.mark.usefixtures("failing_reads")
    async def test_aggregate_database_error(self, client: AsyncClient):
        """GET /planning/{store_id} returns DATABASE_ERROR without skus."""
        response = await client.get("/planning/ST001")

        assert response.status_code == 500
        assert response.headers["content-type"].startswith("application/problem+json")
        body = response.json()
        assert body["code"] == "DATABASE_ERROR"
        assert "skus" not in body

    @pytest.mark.usefixtures("failing_reads")
    async def test_weekly_metrics_database_error(self, client: AsyncClient):
        """GET /planning/{store_id}/metrics/weekly returns DATABASE_ERROR without weeks."""
        response = await client.get("/planning/ST001/metrics/weekly")

        assert response.status_code == 500
        body = response.json()
        assert body["code"] == "DATABASE_ERROR"
        assert "weeks" not in body
        assert "gm_dollars" not in body

    async def test_fact_upsert_database_error(self, client: AsyncClient, repository, monkeypatch):
        """A failing upsert returns DATABASE_ERROR."""
        monkeypatch.setattr(
            repository,
            "upsert_facts",
            AsyncMock(side_effect=OperationalError("INSERT", {}, Exception("down"))),
        )

        response = await client.post(
            "/planning/facts",
            json={
                "records": [
                    {"store_id": "ST001", "sku_id": "SK001", "week": "W01", "sales_units": 1}
                ]
            },
        )

        assert response.status_code == 500
        assert response.json()["code"] == "DATABASE_ERROR"
        assert repository.facts == {}
