# health_dashboard/routes/risk_routes.py
from flask import Blueprint
from health_dashboard.controllers import risk_controller

risk_bp = Blueprint("risk", __name__, url_prefix="/api/risk")

risk_bp.route("", methods=["GET"])(risk_controller.get_risk)
risk_bp.route("/analyze", methods=["POST"])(risk_controller.analyze)
