"""Tests for the risk-check command line script."""

import argparse
import json

import pytest

from scripts.run_risk_check import _parse_offer, main


class TestParseOffer:
    def test_valid(self):
        offer = _parse_offer("Oson Apteka=11800")
        assert offer.pharmacy == "Oson Apteka"
        assert offer.price == 11800

    def test_name_may_contain_equals(self):
        assert _parse_offer("A=B=5").pharmacy == "A=B"

    @pytest.mark.parametrize("raw", ["nope", "=100", "Apteka=cheap"])
    def test_invalid(self, raw):
        with pytest.raises(argparse.ArgumentTypeError):
            _parse_offer(raw)


class TestMain:
    def test_price(self, capsys):
        assert main(["--seed", "1", "price", "Trimol", "3000"]) == 0

        data = json.loads(capsys.readouterr().out)
        assert data["riskLevel"] == "danger"

    def test_price_with_offers(self, capsys):
        main(["--seed", "1", "price", "Trimol", "12500", "--offer", "Cheap=3000", "--offer", "Oson=11800"])

        data = json.loads(capsys.readouterr().out)
        assert [o["pharmacy"] for o in data] == ["Oson", "(observed)", "Cheap"]

    def test_batch(self, capsys):
        main(["--seed", "1", "batch", "A93KD881"])

        data = json.loads(capsys.readouterr().out)
        assert data["riskLevel"] == "potential_risk"
        assert data["trendAnalysis"]["daysMonitored"] == 14

    def test_high_risk(self, capsys):
        main(["--seed", "1", "--strategy", "iqr", "high-risk"])

        data = json.loads(capsys.readouterr().out)
        assert [b["batchNumber"] for b in data] == ["A93KD881"]

    def test_subcommand_required(self):
        with pytest.raises(SystemExit):
            main([])
