# health_dashboard/extensions.py
from flask_jwt_extended import JWTManager
from flask_migrate import Migrate
from flask_sqlalchemy import SQLAlchemy

from health_dashboard.ai import HealthAIClient

db = SQLAlchemy()
migrate = Migrate()
jwt = JWTManager()
ai_client = HealthAIClient()
