"""Tests for Settings loading."""

from pharmarisk.config import Settings


class TestSettings:
    def test_defaults(self, monkeypatch):
        for var in ("PRICE_STRATEGY", "CONTAMINATION", "NUM_TREES", "RANDOM_SEED", "CATALOG_PATH"):
            monkeypatch.delenv(var, raising=False)
        settings = Settings()

        assert settings.app_name == "pharmarisk"
        assert settings.price_strategy == "isolation_depth"
        assert settings.contamination == 0.1
        assert settings.num_trees == 100
        assert settings.random_seed is None
        assert settings.catalog_path is None

    def test_environment_overrides(self, monkeypatch):
        monkeypatch.setenv("PRICE_STRATEGY", "iqr")
        monkeypatch.setenv("RANDOM_SEED", "42")
        monkeypatch.setenv("JSON_LOGS", "true")
        monkeypatch.setenv("CATALOG_PATH", "/tmp/catalog.json")

        settings = Settings()

        assert settings.price_strategy == "iqr"
        assert settings.random_seed == 42
        assert settings.json_logs is True
        assert settings.catalog_path == "/tmp/catalog.json"

    def test_explicit_values_win(self, monkeypatch):
        monkeypatch.setenv("NUM_TREES", "10")
        assert Settings(num_trees=3).num_trees == 3
