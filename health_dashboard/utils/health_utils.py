# health_dashboard/utils/health_utils.py
"""
Rule-based helpers for daily health metrics:
status buckets per reading, a capped risk score, demo data and period averages.

All functions take camelCase metric mappings, the shape used on the wire.
"""
import random
from dataclasses import dataclass, field
from datetime import date, timedelta
from typing import List, Optional


@dataclass
class RiskAssessment:
    risk_score: int = 0
    factors: List[str] = field(default_factory=list)


def _present(value):
    return value is not None


def _bp_components(metrics):
    bp = metrics.get("bloodPressure") or {}
    return bp.get("systolic"), bp.get("diastolic")


def classify_heart_rate(bpm):
    if bpm < 60:
        return "low"
    if bpm > 100:
        return "elevated"
    return "normal"


def classify_steps(steps):
    if steps < 5000:
        return "low"
    if steps < 10000:
        return "moderate"
    return "excellent"


def classify_sleep(hours):
    if hours < 6:
        return "insufficient"
    if hours <= 9:
        return "optimal"
    return "excessive"


def classify_sugar(mg_dl):
    if mg_dl < 70:
        return "low"
    if mg_dl <= 100:
        return "normal"
    if mg_dl <= 125:
        return "prediabetic"
    return "diabetic"


def classify_blood_pressure(systolic=None, diastolic=None):
    if systolic is None and diastolic is None:
        return None
    sys_ = systolic if systolic is not None else 0
    dia = diastolic if diastolic is not None else 0
    if sys_ >= 140 or dia >= 90:
        return "high_stage2"
    if sys_ >= 130 or dia >= 80:
        return "high_stage1"
    if sys_ >= 120:
        return "elevated"
    return "normal"


def normalize_metrics(metrics):
    """Return a copy of ``metrics`` with a status bucket for every reading present."""
    normalized = dict(metrics)

    if _present(metrics.get("heartRate")):
        normalized["heartRateStatus"] = classify_heart_rate(metrics["heartRate"])
    if _present(metrics.get("steps")):
        normalized["stepsStatus"] = classify_steps(metrics["steps"])
    if _present(metrics.get("sleepHours")):
        normalized["sleepStatus"] = classify_sleep(metrics["sleepHours"])
    if _present(metrics.get("sugarLevel")):
        normalized["sugarStatus"] = classify_sugar(metrics["sugarLevel"])

    bp_status = classify_blood_pressure(*_bp_components(metrics))
    if bp_status is not None:
        normalized["bpStatus"] = bp_status

    return normalized


def calculate_risk_score(metrics) -> RiskAssessment:
    """Sum per-reading penalties into a 0-100 score."""
    assessment = RiskAssessment()

    heart_rate = metrics.get("heartRate")
    if _present(heart_rate) and (heart_rate < 50 or heart_rate > 120):
        assessment.risk_score += 20
        assessment.factors.append("Abnormal heart rate")

    steps = metrics.get("steps")
    if _present(steps) and steps < 5000:
        assessment.risk_score += 15
        assessment.factors.append("Low physical activity")

    sleep = metrics.get("sleepHours")
    if _present(sleep) and sleep < 6:
        assessment.risk_score += 20
        assessment.factors.append("Insufficient sleep")

    sugar = metrics.get("sugarLevel")
    if _present(sugar) and (sugar < 70 or sugar > 125):
        assessment.risk_score += 25
        assessment.factors.append("Abnormal blood sugar levels")

    systolic, diastolic = _bp_components(metrics)
    if (_present(systolic) and systolic >= 140) or (_present(diastolic) and diastolic >= 90):
        assessment.risk_score += 20
        assessment.factors.append("High blood pressure")

    assessment.risk_score = min(assessment.risk_score, 100)
    return assessment


def risk_level(score):
    if score < 30:
        return "low"
    if score < 60:
        return "moderate"
    if score < 80:
        return "high"
    return "critical"


def generate_dummy_data(days=30, today: Optional[date] = None, rng=None):
    """Plausible daily readings for ``days`` days ending today, oldest first."""
    rng = rng or random.Random()
    today = today or date.today()
    data = []
    for offset in range(days - 1, -1, -1):
        data.append({
            "date": today - timedelta(days=offset),
            "heartRate": rng.randint(60, 99),
            "steps": rng.randint(3000, 10999),
            "sleepHours": round(rng.uniform(6, 9), 1),
            "sugarLevel": rng.randint(85, 114),
            "bloodPressure": {
                "systolic": rng.randint(110, 129),
                "diastolic": rng.randint(70, 84),
            },
            "weight": round(rng.uniform(65, 75), 1),
        })
    return data


def _average(metrics, key):
    values = [m[key] for m in metrics if m.get(key) is not None]
    if not values:
        return 0
    return sum(values) / len(values)


def summarize_metrics(metrics):
    return {
        "avgHeartRate": _average(metrics, "heartRate"),
        "avgSteps": _average(metrics, "steps"),
        "avgSleep": _average(metrics, "sleepHours"),
        "avgSugar": _average(metrics, "sugarLevel"),
        "totalDays": len(metrics),
    }
