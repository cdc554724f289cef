"""Tests for RiskQueryFacade — the single entry point used by the HTTP API
and the CLI.

The facade is built on a real container over the bundled dataset with a
seeded random source.
"""

import json

import pytest
from dependency_injector import providers

from pharmarisk.config import Settings
from pharmarisk.container import AppContainer
from pharmarisk.facade import RiskQueryFacade
from pharmarisk.repositories.complaint_log import InvalidComplaintError
from pharmarisk.repositories.reference_store import CatalogLoadError
from pharmarisk.schemas.batch import BatchRiskLevel
from pharmarisk.schemas.price import AnomalyType, PriceRiskLevel


@pytest.fixture()
def facade(test_settings):
    with RiskQueryFacade(settings=test_settings) as f:
        yield f


class TestConstruction:
    def test_from_settings(self, test_settings):
        facade = RiskQueryFacade(settings=test_settings)
        assert facade.reference_version == "2024.11-tashkent"
        facade.close()

    def test_from_container(self, test_settings, empty_log):
        container = AppContainer()
        container.settings.override(providers.Object(test_settings))
        container.complaint_log.override(providers.Object(empty_log))

        facade = RiskQueryFacade(container=container)
        assert facade.complaint_count() == 0
        assert facade.score_batch("A93KD881").risk_level == BatchRiskLevel.SAFE

    def test_close_clears_complaints(self, test_settings):
        facade = RiskQueryFacade(settings=test_settings)
        facade.submit_complaint("A93KD881", "drug_1", "rash", "mild")
        facade.close()
        assert facade.complaint_count() == 0


class TestPriceQueries:
    def test_score_price(self, facade):
        result = facade.score_price("Trimol", 3000)
        assert result.anomaly_type == AnomalyType.EXTREME_LOW
        assert result.risk_level == PriceRiskLevel.DANGER

    def test_score_bulk(self, facade):
        entries = facade.score_bulk("Kyupene", [("A", 18000), ("B", 2000)])
        assert [e.analysis.risk_level for e in entries] == [PriceRiskLevel.SAFE, PriceRiskLevel.DANGER]

    def test_compare_offers(self, facade):
        ranked = facade.compare_offers("Kyupene", [("A", 2000), ("B", 19000), ("C", 17500)])
        assert [r.pharmacy for r in ranked] == ["C", "B", "A"]

    def test_seeded_facades_agree(self, test_settings):
        with RiskQueryFacade(settings=test_settings) as a, RiskQueryFacade(settings=test_settings) as b:
            assert a.score_price("Almagel", 70000) == b.score_price("Almagel", 70000)

    def test_camel_case_serialisation(self, facade):
        payload = json.loads(facade.score_price("Trimol", 12500).model_dump_json(by_alias=True))
        assert set(payload) == {
            "isAnomaly", "anomalyScore", "anomalyType", "riskLevel",
            "message", "recommendation", "priceAnalysis",
        }
        assert set(payload["priceAnalysis"]) == {
            "inputPrice", "expectedRange", "averagePrice", "zScore", "percentileRank",
        }


class TestBatchQueries:
    def test_score_batch(self, facade):
        analysis = facade.score_batch("A93KD881")
        assert analysis.risk_level == BatchRiskLevel.POTENTIAL_RISK

    def test_high_risk_batches(self, facade):
        assert [b.batch_number for b in facade.high_risk_batches()] == ["A93KD881"]

    def test_submit_then_score(self, facade):
        before = facade.score_batch("C92MN445").complaint_count
        complaint = facade.submit_complaint("C92MN445", "drug_3", "rash", "moderate")

        assert complaint.verified is False
        assert facade.score_batch("C92MN445").complaint_count == before + 1
        assert facade.complaint_count() == 9

    def test_submit_invalid(self, facade):
        with pytest.raises(InvalidComplaintError):
            facade.submit_complaint("C92MN445", "drug_3", "rash", "lethal")


class TestReferenceData:
    def test_stats(self, facade):
        assert facade.reference_stats() == {"version": "2024.11-tashkent", "drugs": 3, "batches": 3}

    def test_reload_from_path(self, facade, tmp_path):
        path = tmp_path / "catalog.json"
        path.write_text(
            json.dumps({"version": "v9", "drugs": [{"id": "d", "name": "Testol", "price": 500}]}),
            encoding="utf-8",
        )
        assert facade.reload_reference(path) == "v9"
        assert facade.reference_version == "v9"
        assert facade.score_price("Testol", 500).risk_level == PriceRiskLevel.SAFE

    def test_reload_default_catalog(self, facade):
        assert facade.reload_reference() == "2024.11-tashkent"

    def test_reload_failure_keeps_version(self, facade, tmp_path):
        with pytest.raises(CatalogLoadError):
            facade.reload_reference(tmp_path / "missing.json")
        assert facade.reference_version == "2024.11-tashkent"


def test_settings_object_is_used():
    facade = RiskQueryFacade(settings=Settings(price_strategy="iqr", random_seed=1))
    try:
        # 9000 is 25% below the mean: the IQR strategy scores it as an anomaly
        assert facade.score_price("Trimol", 9000).is_anomaly is True
    finally:
        facade.close()
