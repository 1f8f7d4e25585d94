from flask import Blueprint, jsonify, request

from schooldesk.lib.current_app import get_dashboard_instance

notifications_bp = Blueprint("notifications", __name__)


@notifications_bp.route("/notifications")
def notifications():
    """Recent toasts, newest last, for clients that missed the socket push."""
    limit = request.args.get("limit", type=int)
    return jsonify(get_dashboard_instance().notifier.recent(limit))
