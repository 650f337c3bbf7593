"""Unit tests for PlanningService."""

import pytest

from app.core.exceptions import NotFoundError, ValidationError
from app.features.planning.schemas import PlanningFactRow


def fact(store_id="ST001", sku_id="SK001", week="W01", sales_units=10) -> PlanningFactRow:
    return PlanningFactRow(store_id=store_id, sku_id=sku_id, week=week, sales_units=sales_units)


class TestPlanningAggregate:
    """Tests for PlanningService.get_planning_aggregate."""

    async def test_unknown_store_returns_empty_mapping(self, service, mock_session):
        """A store with no rows yields an empty mapping, not an error."""
        result = await service.get_planning_aggregate(mock_session, "ST999")

        assert result.store_id == "ST999"
        assert result.skus == {}

    async def test_skus_sharing_a_label_stay_separate(self, service, repository, mock_session):
        """Both 'Basic Tee' SKUs are reported under their own ids."""
        repository.facts[("ST001", "SK001", "W01")] = 10
        repository.facts[("ST001", "SK002", "W01")] = 3

        result = await service.get_planning_aggregate(mock_session, "ST001")

        assert set(result.skus) == {"SK001", "SK002"}
        assert result.skus["SK001"].label == result.skus["SK002"].label == "Basic Tee"
        assert result.skus["SK001"].price == 5.0
        assert result.skus["SK002"].price == 10.0

    async def test_sales_data_in_week_order(self, service, repository, mock_session):
        """Sales data follows calendar order."""
        repository.facts[("ST001", "SK001", "W10")] = 1
        repository.facts[("ST001", "SK001", "W02")] = 2

        result = await service.get_planning_aggregate(mock_session, "ST001")

        assert [s.week for s in result.skus["SK001"].sales_data] == ["W02", "W10"]


class TestWeeklyMetrics:
    """Tests for PlanningService.get_weekly_metrics."""

    async def test_worked_example(self, service, repository, mock_session):
        """10 units at 5/3 in W01 gives 50 revenue and 40% margin."""
        repository.facts[("ST001", "SK001", "W01")] = 10

        result = await service.get_weekly_metrics(mock_session, "ST001")

        assert len(result.weeks) == 52
        assert result.revenue[0] == pytest.approx(50.0)
        assert result.cost[0] == pytest.approx(30.0)
        assert result.gm_dollars[0] == pytest.approx(20.0)
        assert result.gm_percent[0] == pytest.approx(40.0)
        assert result.revenue[1:] == [0.0] * 51

    async def test_reflects_latest_writes(self, service, repository, mock_session):
        """Each call recomputes from current data."""
        first = await service.get_weekly_metrics(mock_session, "ST001")
        repository.facts[("ST001", "SK001", "W01")] = 10
        second = await service.get_weekly_metrics(mock_session, "ST001")

        assert first.revenue[0] == 0.0
        assert second.revenue[0] == pytest.approx(50.0)


class TestMonthlyMetrics:
    """Tests for PlanningService.get_monthly_metrics."""

    async def test_months_follow_calendar(self, service, repository, mock_session):
        """Twelve fiscal months starting in February."""
        repository.facts[("ST001", "SK001", "W05")] = 4

        result = await service.get_monthly_metrics(mock_session, "ST001")

        assert result.months[:2] == ["M01", "M02"]
        assert result.month_labels[0] == "Feb"
        assert len(result.months) == 12
        assert result.revenue[0] == 0.0
        assert result.revenue[1] == pytest.approx(20.0)


class TestSkuPlanning:
    """Tests for PlanningService.get_sku_planning."""

    async def test_returns_week_details(self, service, repository, mock_session):
        """Detail rows carry per-week financials."""
        repository.facts[("ST001", "SK002", "W03")] = 5

        result = await service.get_sku_planning(mock_session, "ST001", "SK002")

        assert result.sku_id == "SK002"
        assert len(result.weeks) == 1
        assert result.weeks[0].revenue == pytest.approx(50.0)
        assert result.weeks[0].gm_percent == pytest.approx(60.0)

    async def test_missing_sku_raises_not_found(self, service, mock_session):
        """No planning rows for the SKU raises NotFoundError."""
        with pytest.raises(NotFoundError):
            await service.get_sku_planning(mock_session, "ST001", "SK001")


class TestUpsertPlanningFacts:
    """Tests for PlanningService.upsert_planning_facts."""

    async def test_upsert_writes_rows(self, service, repository, mock_session):
        """Valid facts are written on their grain."""
        result = await service.upsert_planning_facts(
            mock_session, [fact(week="W01"), fact(week="W02", sales_units=4)]
        )

        assert result.upserted_count == 2
        assert result.total_processed == 2
        assert result.duplicate_count == 0
        assert repository.facts[("ST001", "SK001", "W02")] == 4

    async def test_upsert_is_idempotent(self, service, repository, mock_session):
        """Re-sending a fact updates it in place."""
        await service.upsert_planning_facts(mock_session, [fact(sales_units=10)])
        await service.upsert_planning_facts(mock_session, [fact(sales_units=12)])

        assert repository.facts == {("ST001", "SK001", "W01"): 12}

    async def test_duplicate_grain_last_wins(self, service, repository, mock_session):
        """Repeated grain within a batch collapses to the last record."""
        result = await service.upsert_planning_facts(
            mock_session, [fact(sales_units=1), fact(sales_units=9)]
        )

        assert result.duplicate_count == 1
        assert repository.upsert_calls[-1] == [
            {"store_id": "ST001", "sku_id": "SK001", "week": "W01", "sales_units": 9}
        ]

    async def test_unknown_keys_reject_whole_batch(self, service, repository, mock_session):
        """Any unknown reference fails the batch before writing."""
        with pytest.raises(ValidationError) as exc_info:
            await service.upsert_planning_facts(
                mock_session,
                [
                    fact(),
                    fact(store_id="ST404"),
                    fact(sku_id="SK404", week="W60"),
                ],
            )

        errors = exc_info.value.errors
        assert [e["field"] for e in errors] == [
            "records[1].store_id",
            "records[2].sku_id",
            "records[2].week",
        ]
        assert [e["type"] for e in errors] == ["unknown_store", "unknown_sku", "unknown_week"]
        assert repository.facts == {}
        assert repository.upsert_calls == []

    async def test_batch_size_limit(self, service, mock_session):
        """Batches over the configured maximum are rejected."""
        service.settings = service.settings.model_copy(update={"ingest_max_records": 1})

        with pytest.raises(ValidationError) as exc_info:
            await service.upsert_planning_facts(mock_session, [fact(), fact(week="W02")])

        assert exc_info.value.errors[0]["type"] == "too_many_records"
