"""Fixtures for API tests.

Each test gets a fresh shared facade (seeded, bundled catalog) so complaint
submissions never leak between tests.
"""

import shutil

import pytest
from fastapi.testclient import TestClient

import pharmarisk.dependencies as deps
from pharmarisk.facade import RiskQueryFacade
from pharmarisk.main import app
from pharmarisk.repositories.reference_store import BUNDLED_CATALOG


@pytest.fixture()
def api_facade(test_settings):
    """Install a seeded facade as the process-wide instance."""
    deps.reset()
    facade = RiskQueryFacade(settings=test_settings)
    deps._facade = facade
    yield facade
    deps.reset()


@pytest.fixture()
def client(api_facade):
    """FastAPI test client."""
    with TestClient(app) as c:
        yield c


@pytest.fixture()
def catalog_file(tmp_path):
    """Writable copy of the bundled catalog, used as the configured catalog."""
    path = tmp_path / "catalog.json"
    shutil.copyfile(BUNDLED_CATALOG, path)
    return path


@pytest.fixture()
def file_client(test_settings, catalog_file):
    """Test client whose facade reloads from ``catalog_file``."""
    deps.reset()
    settings = test_settings.model_copy(update={"catalog_path": str(catalog_file)})
    deps._facade = RiskQueryFacade(settings=settings)
    with TestClient(app) as c:
        yield c
    deps.reset()
