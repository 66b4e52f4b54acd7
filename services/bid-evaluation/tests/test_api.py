"""
Tests for the Bid Evaluation HTTP API
=====================================
"""

import pytest
from fastapi.testclient import TestClient

from app import app


@pytest.fixture
def client():
    return TestClient(app)


@pytest.fixture
def package_json(steel_package):
    return steel_package.model_dump(mode="json")


class TestEvaluateEndpoint:

    def test_health(self, client):
        assert client.get("/health").json() == {"status": "healthy"}

    def test_evaluate(self, client, package_json):
        response = client.post("/evaluate", json=package_json)
        assert response.status_code == 200
        body = response.json()
        assert body["ranking"] == ["X", "Z", "Y"]
        assert body["recommendation"]["bid_id"] == "X"
        totals = {b["bid_id"]: b["breakdown"]["total"] for b in body["bids"]}
        assert totals == {"X": 95.2, "Y": 56.0, "Z": 80.9}

    def test_invalid_weights_are_422(self, client, package_json):
        package_json["criteria_weights"] = {"price": 40, "schedule": 20}
        response = client.post("/evaluate", json=package_json)
        assert response.status_code == 422
        body = response.json()
        assert body["kind"] == "invalid_weights"
        assert body["rule"] == "sum_mismatch"
        assert body["identifier"] == "bp001"

    def test_wrong_status_is_409(self, client, package_json):
        package_json["status"] = "bidding"
        response = client.post("/evaluate", json=package_json)
        assert response.status_code == 409
        body = response.json()
        assert body["kind"] == "invalid_package_state"
        assert body["status"] == "bidding"
        assert body["operation"] == "evaluate"

    def test_malformed_package_is_422(self, client, package_json):
        del package_json["bids"][0]["amount"]
        response = client.post("/evaluate", json=package_json)
        assert response.status_code == 422

    def test_incomplete_bid_reported(self, client, package_json):
        del package_json["bids"][1]["raw_scores"]["safety"]
        response = client.post("/evaluate", json=package_json)
        assert response.status_code == 200
        body = response.json()
        assert body["ranking"] == ["X", "Z"]
        assert body["errors"][0]["kind"] == "incomplete_bid"
        assert body["errors"][0]["identifier"] == "Y"


class TestReferenceEndpoints:

    def test_summary(self, client, package_json):
        response = client.post("/packages/summary", json={"packages": [package_json], "trade": "Structural"})
        assert response.status_code == 200
        body = response.json()
        assert body["total_packages"] == 1
        assert body["total_bids"] == 3

    def test_criteria(self, client):
        body = client.get("/criteria").json()
        assert body["criteria"][:5] == ["price", "schedule", "experience", "quality", "safety"]
        assert sum(body["default_weights"].values()) == 100

    def test_score_bands(self, client):
        bands = client.get("/score-bands").json()
        assert bands[0] == {"band": "excellent", "min_score": 90.0}
