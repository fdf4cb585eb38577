# health_dashboard/routes/health_routes.py
from flask import Blueprint
from health_dashboard.controllers import health_controller

health_bp = Blueprint("health", __name__, url_prefix="/api/health")

health_bp.route("", methods=["GET"])(health_controller.list_metrics)
health_bp.route("", methods=["POST"])(health_controller.save_metric)
health_bp.route("/dummy", methods=["GET"])(health_controller.generate_dummy_metrics)
health_bp.route("/stats", methods=["GET"])(health_controller.get_stats)
