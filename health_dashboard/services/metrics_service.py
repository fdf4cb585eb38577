# health_dashboard/services/metrics_service.py
"""Queries and writes shared by the health, chat, risk and report controllers."""
from datetime import date, timedelta

from sqlalchemy.exc import IntegrityError

from health_dashboard.extensions import db
from health_dashboard.models import AIInsight, HealthMetric


def upsert_daily_metric(user_id, data, day=None):
    """Create or update the user's record for ``day`` (default today)."""
    day = day or date.today()
    metric = HealthMetric.query.filter_by(user_id=user_id, date=day).first()
    if metric is None:
        metric = HealthMetric(user_id=user_id, date=day)
        db.session.add(metric)
    metric.apply(data)
    try:
        db.session.commit()
    except IntegrityError:
        # lost a race with a concurrent insert for the same day
        db.session.rollback()
        metric = HealthMetric.query.filter_by(user_id=user_id, date=day).one()
        metric.apply(data)
        db.session.commit()
    return metric


def query_metrics(user_id, start_date=None, end_date=None, limit=30):
    query = HealthMetric.query.filter_by(user_id=user_id)
    if start_date:
        query = query.filter(HealthMetric.date >= start_date)
    if end_date:
        query = query.filter(HealthMetric.date <= end_date)
    return query.order_by(HealthMetric.date.desc()).limit(limit).all()


def recent_metrics(user_id, limit):
    return (
        HealthMetric.query.filter_by(user_id=user_id)
        .order_by(HealthMetric.date.desc())
        .limit(limit)
        .all()
    )


def latest_metric(user_id):
    return (
        HealthMetric.query.filter_by(user_id=user_id)
        .order_by(HealthMetric.date.desc())
        .first()
    )


def metrics_for_window(user_id, days):
    """Records from the last ``days`` days, oldest first."""
    start = date.today() - timedelta(days=days - 1)
    return (
        HealthMetric.query.filter(HealthMetric.user_id == user_id, HealthMetric.date >= start)
        .order_by(HealthMetric.date.asc())
        .all()
    )


def recent_insights(user_id, limit):
    return (
        AIInsight.query.filter_by(user_id=user_id)
        .order_by(AIInsight.created_at.desc(), AIInsight.id.desc())
        .limit(limit)
        .all()
    )
