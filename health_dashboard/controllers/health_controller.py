from flask import current_app, request

from health_dashboard.errors import BadRequestError
from health_dashboard.helpers import api_response, date_arg, int_arg, resolve_user_id
from health_dashboard.schemas import HealthMetricInput
from health_dashboard.services import metrics_service
from health_dashboard.utils.health_utils import generate_dummy_data, normalize_metrics, summarize_metrics

MAX_DUMMY_DAYS = 365


def _serialize(metric):
    return normalize_metrics(metric.to_dict())


def list_metrics():
    user_id = resolve_user_id()
    start_date = date_arg("startDate")
    end_date = date_arg("endDate")
    limit = int_arg("limit", 30)
    if start_date and end_date and start_date > end_date:
        raise BadRequestError("'startDate' must not be after 'endDate'")

    metrics = metrics_service.query_metrics(user_id, start_date, end_date, limit)
    return api_response(count=len(metrics), metrics=[_serialize(m) for m in metrics])


def save_metric():
    user_id = resolve_user_id()
    data = HealthMetricInput.model_validate(request.get_json(silent=True) or {})

    metric = metrics_service.upsert_daily_metric(user_id, data.submitted())
    current_app.logger.info("Health metric saved for user %s", user_id)

    return api_response(201, message="Health metric saved successfully", metric=_serialize(metric))


def generate_dummy_metrics():
    user_id = resolve_user_id()
    days = int_arg("days", 30, maximum=MAX_DUMMY_DAYS)

    metrics = []
    for reading in generate_dummy_data(days):
        day = reading.pop("date")
        metrics.append(metrics_service.upsert_daily_metric(user_id, reading, day=day))

    current_app.logger.info("Generated %d days of dummy data for user %s", days, user_id)
    return api_response(
        message=f"Generated {days} days of dummy health data",
        count=len(metrics),
        metrics=[_serialize(m) for m in metrics],
    )


def get_stats():
    user_id = resolve_user_id()
    days = int_arg("days", 30)

    metrics = metrics_service.metrics_for_window(user_id, days)
    return api_response(stats=summarize_metrics([m.readings() for m in metrics]))
