"""HTTP surface tests: /validate, health endpoints, insufficient signal."""

import os
import sys

# Ensure the backend package is importable
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

import pytest
from fastapi.testclient import TestClient

from viability.config import Settings
from viability.main import app
from viability.routers.validation import get_validation_service
from viability.services.validation_service import ValidationService

client = TestClient(app)

BAKERY_IDEA = (
    "Software that predicts daily bread demand for independent bakeries using weather "
    "and local event data, cutting waste for small business owners. Subscription at $79 per month."
)


@pytest.fixture(autouse=True)
def static_service():
    """Use static benchmarks regardless of the environment."""
    app.dependency_overrides[get_validation_service] = lambda: ValidationService(settings=Settings())
    yield
    app.dependency_overrides.pop(get_validation_service, None)


class TestValidateEndpoint:
    def test_strong_idea(self):
        response = client.post("/validate", json={
            "idea_text": BAKERY_IDEA,
            "signals": {
                "unavoidable": 9, "urgency": 9, "pain_gain_ratio": 9, "whitespace": 8,
                "underserved": 8, "feasibility": 8, "competition_density": 2,
                "attributes": {"Disruptive": 7, "Defensible": 7, "Discontinuous": 6,
                               "SocialNeed": 6, "Growth": 8, "Achievement": 7},
                "interviews": 15, "interviews_positive_pct": 80, "waitlist_conv_rate_pct": 70,
                "lois": 5, "preorders": 20, "willingness_to_pay": 8, "price_point": 79,
                "channels_clarity": 8, "ltv_estimate": 3000, "cac_estimate": 400,
                "team_experience": 8, "capital_runway_months": 12, "regulatory_risk": 2,
                "platform_dependency_risk": 2, "safety_risk": 1, "tam_quality": 8,
                "growth_rate_quality": 8,
            },
        })
        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "GO"
        assert body["business_dna"]["industry"] == "food"
        assert isinstance(body["adjustments"], list)

    def test_generic_project_management(self):
        response = client.post("/validate", json={
            "idea_text": "Generic project management tool with kanban boards and Slack integration, $29/month",
        })
        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "NO-GO"
        assert body["scores"]["overall"] <= 20

    def test_out_of_range_signals_are_clamped(self):
        response = client.post("/validate", json={
            "idea_text": BAKERY_IDEA,
            "signals": {"feasibility": 42, "interviews": -3, "urgency": None},
        })
        assert response.status_code == 200
        assert response.json()["base_scores"]["feasibility"] == 10

    def test_huge_numeric_signals_do_not_abort(self):
        response = client.post("/validate", json={
            "idea_text": BAKERY_IDEA,
            "signals": {"interviews": 10**400, "ltv_estimate": 10**400, "cac_estimate": 100},
        })
        assert response.status_code == 200
        assert response.json()["unit_economics"]["ltv_cac_ratio"]["value"] is not None

    def test_non_mapping_attributes_is_422(self):
        response = client.post("/validate", json={
            "idea_text": BAKERY_IDEA,
            "signals": {"attributes": "Disruptive"},
        })
        assert response.status_code == 422

    def test_empty_idea_is_422(self):
        response = client.post("/validate", json={"idea_text": ""})
        assert response.status_code == 422
        detail = response.json()["detail"]
        assert detail["confidence"] < 0.4
        assert "more specific details" in detail["error"]

    def test_overlong_idea_rejected(self):
        response = client.post("/validate", json={"idea_text": "x" * 5001})
        assert response.status_code == 422


class TestHealth:
    def test_validate_health(self):
        response = client.get("/validate/health")
        assert response.status_code == 200
        assert response.json()["status"] == "healthy"

    def test_global_health(self):
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json()["service"] == "viability-validator"
