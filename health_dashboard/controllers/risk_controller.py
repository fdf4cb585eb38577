from datetime import datetime, timezone

from flask import current_app

from health_dashboard.ai import AIClientError
from health_dashboard.errors import NotFoundError
from health_dashboard.extensions import ai_client
from health_dashboard.helpers import api_response, resolve_user_id
from health_dashboard.services import metrics_service
from health_dashboard.utils.health_utils import calculate_risk_score, risk_level

HISTORY_WINDOW = 30


def _ai_risk_prediction(user_id):
    history = metrics_service.recent_metrics(user_id, HISTORY_WINDOW)
    if not history:
        return None
    try:
        return ai_client.predict_risk([m.readings() for m in history])
    except AIClientError:
        current_app.logger.warning("AI risk prediction failed, using rule-based only", exc_info=True)
        return None


def combine_scores(rule_score, ai_risk):
    ai_score = ai_risk.get("overallRiskScore") if isinstance(ai_risk, dict) else None
    if isinstance(ai_score, (int, float)) and not isinstance(ai_score, bool) and ai_score:
        ai_score = max(0, min(ai_score, 100))
        # half-up rounding
        return int((rule_score + ai_score) / 2 + 0.5)
    return rule_score


def get_risk():
    user_id = resolve_user_id()

    latest = metrics_service.latest_metric(user_id)
    if latest is None:
        return api_response(riskScore=0, message="No health data available", factors=[])

    readings = latest.readings()
    rule_based = calculate_risk_score(readings)
    ai_risk = _ai_risk_prediction(user_id)
    final_score = combine_scores(rule_based.risk_score, ai_risk)

    return api_response(
        riskScore=final_score,
        riskLevel=risk_level(final_score),
        factors=rule_based.factors,
        aiInsights=ai_risk,
        latestMetric={
            key: readings[key]
            for key in ("date", "heartRate", "steps", "sleepHours", "sugarLevel")
        },
    )


def analyze():
    user_id = resolve_user_id()

    latest = metrics_service.latest_metric(user_id)
    if latest is None:
        raise NotFoundError("No health data available")

    advice = ai_client.generate_health_advice(latest.readings())
    return api_response(analysis=advice, timestamp=datetime.now(timezone.utc).isoformat())
