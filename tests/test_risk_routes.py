"""Risk score endpoint and AI analysis."""
from datetime import date, timedelta
from unittest.mock import patch

import pytest

from health_dashboard.controllers.risk_controller import combine_scores
from health_dashboard.extensions import ai_client, db
from health_dashboard.models import HealthMetric


@pytest.fixture
def abnormal_today(app):
    with app.app_context():
        db.session.add(HealthMetric(
            user_id=42, date=date.today(),
            heart_rate=45, steps=3000, sleep_hours=5, sugar_level=140,
            bp_systolic=150, bp_diastolic=95,
        ))
        db.session.add(HealthMetric(user_id=42, date=date.today() - timedelta(days=1), heart_rate=70))
        db.session.commit()


def test_risk_without_metrics_is_zero(client, user_headers):
    response = client.get("/api/risk", headers=user_headers)
    assert response.status_code == 200
    body = response.get_json()
    assert body["riskScore"] == 0
    assert body["factors"] == []
    assert body["message"] == "No health data available"


def test_risk_combines_rule_and_ai_scores(client, user_headers, abnormal_today):
    prediction = {"overallRiskScore": 40, "riskFactors": []}
    with patch.object(ai_client, "predict_risk", return_value=prediction) as predict:
        body = client.get("/api/risk", headers=user_headers).get_json()

    history = predict.call_args.args[0]
    assert len(history) == 2
    assert body["riskScore"] == 70
    assert body["riskLevel"] == "high"
    assert len(body["factors"]) == 5
    assert body["aiInsights"] == prediction
    assert body["latestMetric"]["heartRate"] == 45
    assert body["latestMetric"]["date"] == date.today().isoformat()


def test_risk_falls_back_to_rule_score_when_ai_fails(client, user_headers, abnormal_today, failing_ai):
    response = client.get("/api/risk", headers=user_headers)
    assert response.status_code == 200
    body = response.get_json()
    assert body["riskScore"] == 100
    assert body["riskLevel"] == "critical"
    assert body["aiInsights"] is None


def test_risk_requires_user(client):
    assert client.get("/api/risk").status_code == 400


@pytest.mark.parametrize("rule,ai_risk,expected", [
    (100, {"overallRiskScore": 40}, 70),
    (15, {"overallRiskScore": 30}, 23),
    (20, {"overallRiskScore": 0}, 20),
    (20, {"overallRiskScore": "high"}, 20),
    (20, None, 20),
])
def test_combine_scores(rule, ai_risk, expected):
    assert combine_scores(rule, ai_risk) == expected


def test_analyze_returns_ai_analysis(client, user_headers, abnormal_today):
    response = client.post("/api/risk/analyze", headers=user_headers)
    assert response.status_code == 200
    analysis = response.get_json()["analysis"]
    assert "advice" in analysis
    assert "recommendations" in analysis


def test_analyze_without_metrics_is_not_found(client, user_headers):
    response = client.post("/api/risk/analyze", headers=user_headers)
    assert response.status_code == 404


def test_analyze_ai_failure_is_server_error(client, user_headers, abnormal_today, failing_ai):
    response = client.post("/api/risk/analyze", headers=user_headers)
    assert response.status_code == 500
