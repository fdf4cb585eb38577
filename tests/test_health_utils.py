"""
Unit tests for the rule-based metric helpers.
"""
import random
from datetime import date

import pytest

from health_dashboard.utils.health_utils import (
    calculate_risk_score,
    classify_blood_pressure,
    generate_dummy_data,
    normalize_metrics,
    risk_level,
    summarize_metrics,
)


@pytest.fixture
def abnormal_metrics():
    return {
        "heartRate": 45,
        "steps": 3000,
        "sleepHours": 5,
        "sugarLevel": 140,
        "bloodPressure": {"systolic": 150, "diastolic": 95},
    }


class TestNormalizeMetrics:
    @pytest.mark.parametrize("bpm,expected", [(59, "low"), (60, "normal"), (100, "normal"), (101, "elevated")])
    def test_heart_rate_buckets(self, bpm, expected):
        assert normalize_metrics({"heartRate": bpm})["heartRateStatus"] == expected

    @pytest.mark.parametrize("steps,expected", [(0, "low"), (4999, "low"), (5000, "moderate"),
                                                (9999, "moderate"), (10000, "excellent")])
    def test_steps_buckets(self, steps, expected):
        assert normalize_metrics({"steps": steps})["stepsStatus"] == expected

    @pytest.mark.parametrize("hours,expected", [(5.9, "insufficient"), (6, "optimal"), (9, "optimal"),
                                                (9.5, "excessive")])
    def test_sleep_buckets(self, hours, expected):
        assert normalize_metrics({"sleepHours": hours})["sleepStatus"] == expected

    @pytest.mark.parametrize("sugar,expected", [(69, "low"), (70, "normal"), (100, "normal"),
                                                (125, "prediabetic"), (126, "diabetic")])
    def test_sugar_buckets(self, sugar, expected):
        assert normalize_metrics({"sugarLevel": sugar})["sugarStatus"] == expected

    @pytest.mark.parametrize("systolic,diastolic,expected", [
        (115, 75, "normal"),
        (125, 75, "elevated"),
        (135, 75, "high_stage1"),
        (118, 85, "high_stage1"),
        (145, 75, "high_stage2"),
        (125, 95, "high_stage2"),
    ])
    def test_blood_pressure_stages(self, systolic, diastolic, expected):
        metrics = {"bloodPressure": {"systolic": systolic, "diastolic": diastolic}}
        assert normalize_metrics(metrics)["bpStatus"] == expected

    def test_blood_pressure_stage_never_decreases(self):
        order = ["normal", "elevated", "high_stage1", "high_stage2"]
        previous = 0
        for systolic in range(90, 200, 5):
            stage = order.index(classify_blood_pressure(systolic, 70))
            assert stage >= previous
            previous = stage

    def test_absent_fields_have_no_status(self):
        normalized = normalize_metrics({"notes": "rest day"})
        for key in ("heartRateStatus", "stepsStatus", "sleepStatus", "sugarStatus", "bpStatus"):
            assert key not in normalized

    def test_none_values_are_treated_as_absent(self):
        normalized = normalize_metrics({"heartRate": None, "bloodPressure": None})
        assert "heartRateStatus" not in normalized
        assert "bpStatus" not in normalized

    def test_input_is_not_mutated(self):
        metrics = {"heartRate": 70}
        normalize_metrics(metrics)
        assert metrics == {"heartRate": 70}


class TestRiskScore:
    def test_all_abnormal_is_capped_at_100(self, abnormal_metrics):
        result = calculate_risk_score(abnormal_metrics)
        assert result.risk_score == 100
        assert result.factors == [
            "Abnormal heart rate",
            "Low physical activity",
            "Insufficient sleep",
            "Abnormal blood sugar levels",
            "High blood pressure",
        ]

    def test_healthy_metrics_score_zero(self):
        result = calculate_risk_score({"heartRate": 70, "steps": 9000, "sleepHours": 8})
        assert result.risk_score == 0
        assert result.factors == []

    def test_empty_metrics_score_zero(self):
        assert calculate_risk_score({}).risk_score == 0

    @pytest.mark.parametrize("metrics,score", [
        ({"heartRate": 121}, 20),
        ({"heartRate": 50}, 0),
        ({"steps": 4999}, 15),
        ({"sleepHours": 5.5}, 20),
        ({"sugarLevel": 65}, 25),
        ({"sugarLevel": 125}, 0),
        ({"bloodPressure": {"systolic": 120, "diastolic": 90}}, 20),
        ({"bloodPressure": {"systolic": 139, "diastolic": 89}}, 0),
    ])
    def test_individual_penalties(self, metrics, score):
        assert calculate_risk_score(metrics).risk_score == score

    def test_score_is_monotonic_as_abnormal_fields_are_added(self, abnormal_metrics):
        accumulated = {}
        previous = 0
        for key, value in abnormal_metrics.items():
            accumulated[key] = value
            score = calculate_risk_score(accumulated).risk_score
            assert previous <= score <= 100
            previous = score

    def test_random_inputs_stay_in_bounds(self):
        rng = random.Random(7)
        for _ in range(200):
            metrics = {
                "heartRate": rng.randint(30, 220),
                "steps": rng.randint(0, 30000),
                "sleepHours": rng.uniform(0, 24),
                "sugarLevel": rng.uniform(0, 500),
                "bloodPressure": {"systolic": rng.uniform(50, 250), "diastolic": rng.uniform(30, 150)},
            }
            assert 0 <= calculate_risk_score(metrics).risk_score <= 100

    @pytest.mark.parametrize("score,level", [(0, "low"), (29, "low"), (30, "moderate"), (59, "moderate"),
                                             (60, "high"), (79, "high"), (80, "critical"), (100, "critical")])
    def test_risk_level(self, score, level):
        assert risk_level(score) == level


def test_generate_dummy_data_covers_each_day_oldest_first():
    data = generate_dummy_data(10, today=date(2025, 3, 10), rng=random.Random(1))
    assert len(data) == 10
    assert data[0]["date"] == date(2025, 3, 1)
    assert data[-1]["date"] == date(2025, 3, 10)
    for reading in data:
        assert 60 <= reading["heartRate"] <= 99
        assert 3000 <= reading["steps"] <= 10999
        assert 6 <= reading["sleepHours"] <= 9
        assert 85 <= reading["sugarLevel"] <= 114
        assert 110 <= reading["bloodPressure"]["systolic"] <= 129
        assert 70 <= reading["bloodPressure"]["diastolic"] <= 84


def test_summarize_metrics_averages_present_values_only():
    stats = summarize_metrics([
        {"heartRate": 60, "steps": 1000},
        {"heartRate": 80, "sleepHours": 7},
        {"sugarLevel": None},
    ])
    assert stats == {
        "avgHeartRate": 70,
        "avgSteps": 1000,
        "avgSleep": 7,
        "avgSugar": 0,
        "totalDays": 3,
    }
