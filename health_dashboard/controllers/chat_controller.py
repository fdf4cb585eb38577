# health_dashboard/controllers/chat_controller.py
"""
Chat controller: forwards questions to the health assistant with the user's
recent readings and past conversation as context, then logs the exchange.
"""
from datetime import datetime, timezone

from flask import current_app, request
from sqlalchemy.exc import SQLAlchemyError

from health_dashboard.extensions import ai_client, db
from health_dashboard.helpers import api_response, int_arg, resolve_user_id
from health_dashboard.models import AIInsight
from health_dashboard.schemas import ChatRequest
from health_dashboard.services import metrics_service
from health_dashboard.utils.ai_prompts import get_chat_category

CONTEXT_METRICS = 7
CONTEXT_CHATS = 5


def _build_user_context(user_id):
    recent = metrics_service.recent_metrics(user_id, CONTEXT_METRICS)
    chats = metrics_service.recent_insights(user_id, CONTEXT_CHATS)
    return {
        "recentMetrics": [m.readings() for m in recent],
        "chatHistory": [
            {
                "query": c.query_text,
                "response": c.ai_response,
                "timestamp": c.created_at.isoformat() if c.created_at else None,
            }
            for c in chats
        ],
    }


def _log_insight(user_id, query, response, context):
    try:
        insight = AIInsight(
            user_id=user_id,
            query_text=query,
            ai_response=response,
            category=get_chat_category(query),
            risk_score=0,
            context={
                "healthContext": context["recentMetrics"],
                "chatContext": context["chatHistory"],
            },
        )
        db.session.add(insight)
        db.session.commit()
    except SQLAlchemyError:
        db.session.rollback()
        current_app.logger.warning("Failed to save AI insight for user %s", user_id, exc_info=True)


def send_message():
    data = ChatRequest.model_validate(request.get_json(silent=True) or {})
    user_id = resolve_user_id(required=False)

    context = _build_user_context(user_id) if user_id is not None else None
    response = ai_client.chat(data.query, context)

    if user_id is not None:
        _log_insight(user_id, data.query, response, context)

    return api_response(
        response=response,
        timestamp=datetime.now(timezone.utc).isoformat(),
    )


def get_history():
    user_id = resolve_user_id()
    limit = int_arg("limit", 50)

    history = metrics_service.recent_insights(user_id, limit)
    return api_response(count=len(history), history=[h.to_history_entry() for h in history])
