"""Tests for price API endpoints."""

import pytest


class TestScorePrice:
    """POST /api/v1/prices/score"""

    def test_counterfeit_price(self, client):
        response = client.post("/api/v1/prices/score", json={"drugName": "Trimol", "price": 3000})

        assert response.status_code == 200
        data = response.json()
        assert data["anomalyType"] == "extreme_low"
        assert data["riskLevel"] == "danger"
        assert data["isAnomaly"] is True
        assert 0.0 <= data["anomalyScore"] <= 1.0
        assert data["priceAnalysis"]["expectedRange"] == {"min": pytest.approx(10800), "max": pytest.approx(14400)}
        assert data["priceAnalysis"]["zScore"] == pytest.approx(-7.5)
        assert data["priceAnalysis"]["formattedPrice"] == "3,000 so'm"

    def test_fair_price(self, client):
        response = client.post("/api/v1/prices/score", json={"drugName": "Trimol 500mg", "price": 12500})

        assert response.status_code == 200
        assert response.json()["riskLevel"] == "safe"

    def test_snake_case_body_accepted(self, client):
        response = client.post("/api/v1/prices/score", json={"drug_name": "Trimol", "price": 25000})

        assert response.status_code == 200
        assert response.json()["anomalyType"] == "extreme_high"

    def test_unknown_drug_is_caution(self, client):
        response = client.post("/api/v1/prices/score", json={"drugName": "UNKNOWN_XYZ", "price": 5000})

        assert response.status_code == 200
        data = response.json()
        assert data["riskLevel"] == "caution"
        assert data["anomalyScore"] == 0.0
        assert data["message"] == "No price reference data available for this medication"

    def test_negative_price_is_caution(self, client):
        response = client.post("/api/v1/prices/score", json={"drugName": "Trimol", "price": -10})

        assert response.status_code == 200
        assert response.json()["riskLevel"] == "caution"

    def test_missing_fields(self, client):
        response = client.post("/api/v1/prices/score", json={"drugName": "Trimol"})
        assert response.status_code == 422

    def test_empty_drug_name(self, client):
        response = client.post("/api/v1/prices/score", json={"drugName": "", "price": 100})
        assert response.status_code == 422


class TestBulkAndCompare:
    """POST /api/v1/prices/bulk and /api/v1/prices/compare"""

    BODY = {
        "drugName": "Trimol",
        "offers": [
            {"pharmacy": "Dori-Darmon", "price": 12500, "distance": "0.8 km"},
            {"pharmacy": "Cheap Meds", "price": 3000, "verified": False},
            {"pharmacy": "Oson Apteka", "price": 11800},
        ],
    }

    def test_bulk(self, client):
        response = client.post("/api/v1/prices/bulk", json=self.BODY)

        assert response.status_code == 200
        data = response.json()
        assert [e["pharmacy"] for e in data] == ["Dori-Darmon", "Cheap Meds", "Oson Apteka"]
        assert data[1]["analysis"]["riskLevel"] == "danger"

    def test_compare(self, client):
        response = client.post("/api/v1/prices/compare", json=self.BODY)

        assert response.status_code == 200
        data = response.json()
        assert [o["pharmacy"] for o in data] == ["Oson Apteka", "Dori-Darmon", "Cheap Meds"]
        assert data[-1]["isSuspicious"] is True
        assert data[-1]["suspicionReason"]
        assert data[-1]["verified"] is False
        assert data[1]["distance"] == "0.8 km"

    def test_too_many_offers(self, client):
        body = {"drugName": "Trimol", "offers": [{"pharmacy": f"P{i}", "price": 12000} for i in range(101)]}
        response = client.post("/api/v1/prices/bulk", json=body)
        assert response.status_code == 422
