"""Dependency Injection Container.

Centralized definition of all engine dependencies using dependency-injector.
The complaint log and reference store are constructed once here and handed
to the scorers by reference; nothing reads them from module globals.

Usage::

    from pharmarisk.container import AppContainer

    container = AppContainer()
    container.init_resources()      # load reference data, seed complaint log

    price_scorer = container.price_scorer()
    batch_scorer = container.batch_scorer()

    container.shutdown_resources()  # tear the complaint log down
"""

import random
from typing import Iterator, Optional

from dependency_injector import containers, providers

from pharmarisk.config import Settings
from pharmarisk.engines.batch_risk_scorer import BatchRiskScorer
from pharmarisk.engines.complaint_pattern_analyzer import ComplaintPatternAnalyzer
from pharmarisk.engines.price_anomaly_scorer import PriceAnomalyScorer
from pharmarisk.engines.price_strategies import build_strategy
from pharmarisk.repositories.complaint_log import ComplaintLog
from pharmarisk.repositories.reference_store import ReferenceStore


def _build_random(seed: Optional[int]) -> random.Random:
    """Seeded when ``seed`` is an int, system-seeded when None."""
    return random.Random(seed)


def _init_complaint_log(reference_store: ReferenceStore) -> Iterator[ComplaintLog]:
    """Seed the log from the reference dataset; clear it on shutdown."""
    log = ComplaintLog(seed=reference_store.seed_complaints())
    yield log
    log.clear()


class AppContainer(containers.DeclarativeContainer):
    """Application Dependency Injection Container.

    Defines all engine dependencies in one place:
    - Configuration (Settings)
    - Random source (shared, optionally seeded)
    - Data (reference store, complaint log)
    - Engines (strategy, scorers, analyzer)
    """

    # ══════════════════════════════════════════════════════════════════
    # CONFIGURATION
    # ══════════════════════════════════════════════════════════════════

    settings = providers.Singleton(Settings)

    rng = providers.Singleton(
        _build_random,
        seed=settings.provided.random_seed,
    )

    # ══════════════════════════════════════════════════════════════════
    # DATA
    # ══════════════════════════════════════════════════════════════════

    reference_store = providers.Singleton(
        ReferenceStore.from_file,
        path=settings.provided.catalog_path,
    )

    complaint_log = providers.Resource(
        _init_complaint_log,
        reference_store=reference_store,
    )

    # ══════════════════════════════════════════════════════════════════
    # ENGINES
    # ══════════════════════════════════════════════════════════════════

    price_strategy = providers.Singleton(
        build_strategy,
        kind=settings.provided.price_strategy,
        rng=rng,
        num_trees=settings.provided.num_trees,
    )

    price_scorer = providers.Factory(
        PriceAnomalyScorer,
        reference_store=reference_store,
        strategy=price_strategy,
        contamination=settings.provided.contamination,
    )

    pattern_analyzer = providers.Factory(ComplaintPatternAnalyzer)

    batch_scorer = providers.Factory(
        BatchRiskScorer,
        reference_store=reference_store,
        complaint_log=complaint_log,
        analyzer=pattern_analyzer,
        rng=rng,
    )
