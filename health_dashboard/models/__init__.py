# health_dashboard/models/__init__.py
from .user import User
from .health_metric import HealthMetric
from .ai_insight import AIInsight, INSIGHT_CATEGORIES
