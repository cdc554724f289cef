"""Shared test fixtures.

Every test gets a fresh complaint log seeded from the bundled dataset and a
seeded random source, so scores are reproducible and tests are isolated.
"""

import random
from datetime import date

import pytest

from pharmarisk.config import Settings
from pharmarisk.engines.batch_risk_scorer import BatchRiskScorer
from pharmarisk.engines.complaint_pattern_analyzer import ComplaintPatternAnalyzer
from pharmarisk.engines.price_anomaly_scorer import PriceAnomalyScorer
from pharmarisk.engines.price_strategies import IsolationDepthStrategy
from pharmarisk.repositories.complaint_log import ComplaintLog
from pharmarisk.repositories.reference_store import ReferenceStore, load_dataset
from pharmarisk.schemas.reference import DrugPriceReference, ReferenceDataset

TODAY = date(2024, 11, 20)


@pytest.fixture()
def rng() -> random.Random:
    return random.Random(42)


@pytest.fixture()
def dataset() -> ReferenceDataset:
    return load_dataset()


@pytest.fixture()
def reference_store(dataset: ReferenceDataset) -> ReferenceStore:
    return ReferenceStore(dataset)


@pytest.fixture()
def complaint_log(dataset: ReferenceDataset) -> ComplaintLog:
    return ComplaintLog(seed=dataset.complaints, today=lambda: TODAY)


@pytest.fixture()
def empty_log() -> ComplaintLog:
    return ComplaintLog(today=lambda: TODAY)


# ── Convenience fixtures ─────────────────────────────────────────────────

@pytest.fixture()
def trimol_reference() -> DrugPriceReference:
    """Price profile derived from Trimol's 12,000 so'm list price."""
    return DrugPriceReference(
        drug_id="uz_med_001",
        generic_name="Trimol",
        average_price=12000,
        min_price=10800,
        max_price=14400,
        std_deviation=1200,
        price_history=[11400, 11760, 12000, 12600, 12000],
    )


@pytest.fixture()
def price_scorer(reference_store: ReferenceStore, rng: random.Random) -> PriceAnomalyScorer:
    return PriceAnomalyScorer(reference_store, IsolationDepthStrategy(rng))


@pytest.fixture()
def batch_scorer(
    reference_store: ReferenceStore,
    complaint_log: ComplaintLog,
    rng: random.Random,
) -> BatchRiskScorer:
    return BatchRiskScorer(reference_store, complaint_log, ComplaintPatternAnalyzer(), rng)


@pytest.fixture()
def test_settings() -> Settings:
    """Settings with a fixed seed and the bundled catalog."""
    return Settings(random_seed=42, catalog_path=None, price_strategy="isolation_depth")
