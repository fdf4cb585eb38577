from datetime import datetime

from health_dashboard.extensions import db
from health_dashboard.helpers import isoformat

INSIGHT_CATEGORIES = ("preventive", "diagnostic", "lifestyle", "nutrition", "exercise", "general")


class AIInsight(db.Model):
    """Append-only log of assistant interactions."""

    __tablename__ = "ai_insights"

    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, nullable=False, index=True)

    query_text = db.Column("query", db.Text, nullable=False)
    ai_response = db.Column(db.Text, nullable=False)
    risk_score = db.Column(db.Integer, nullable=False, default=0)
    category = db.Column(db.String(20), nullable=False, default="general")
    # "metadata" is reserved on declarative models
    context = db.Column("metadata", db.JSON, nullable=True)

    created_at = db.Column(db.DateTime, default=datetime.utcnow, index=True)

    __table_args__ = (
        db.CheckConstraint("risk_score >= 0 AND risk_score <= 100", name="ck_ai_insights_risk_score"),
        db.Index("ix_ai_insights_user_created", "user_id", "created_at"),
    )

    def to_history_entry(self):
        return {
            "id": self.id,
            "query": self.query_text,
            "aiResponse": self.ai_response,
            "category": self.category,
            "createdAt": isoformat(self.created_at),
        }

    def to_dict(self):
        entry = self.to_history_entry()
        entry.update({
            "userId": self.user_id,
            "riskScore": self.risk_score,
            "metadata": self.context,
        })
        return entry
