# health_dashboard/routes/report_routes.py
from flask import Blueprint
from health_dashboard.controllers import report_controller

report_bp = Blueprint("report", __name__, url_prefix="/api/report")

report_bp.route("/pdf", methods=["GET"])(report_controller.pdf_report)
report_bp.route("/csv", methods=["GET"])(report_controller.csv_report)
