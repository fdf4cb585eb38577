# health_dashboard/routes/chat_routes.py
from flask import Blueprint
from health_dashboard.controllers import chat_controller

chat_bp = Blueprint("chat", __name__, url_prefix="/api/chat")

chat_bp.route("", methods=["POST"])(chat_controller.send_message)
chat_bp.route("/history", methods=["GET"])(chat_controller.get_history)
