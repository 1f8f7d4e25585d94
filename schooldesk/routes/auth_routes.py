import datetime

import flask_babel
from flask import Blueprint, current_app, jsonify, make_response, request

from schooldesk.lib.current_app import get_dashboard_instance

_ = flask_babel.gettext

auth_bp = Blueprint("auth", __name__)


@auth_bp.route("/auth/login", methods=["POST"])
def login():
    """Sign in to the backend and keep the token for this dashboard."""
    d = get_dashboard_instance()
    data = request.get_json(silent=True) if request.is_json else request.form.to_dict()
    data = data or {}
    email = (data.get("email") or "").strip()
    password = data.get("password") or ""
    if not email or not password:
        return jsonify({"success": False, "message": _("Email and password are required")}), 400

    success, message = d.login(email, password)
    if not success:
        return jsonify({"success": False, "message": message}), 401
    return jsonify({"success": True, "message": message, "user": d.auth.user_data})


@auth_bp.route("/auth/logout", methods=["POST"])
def logout():
    d = get_dashboard_instance()
    d.logout()
    return jsonify({"success": True, "message": _("Logged out")})


@auth_bp.route("/auth/status")
def status():
    d = get_dashboard_instance()
    return jsonify({"authenticated": d.auth.is_authenticated, "user": d.auth.user_data})


@auth_bp.route("/auth/admin", methods=["POST"])
def admin():
    """Unlock preference changes for this browser with the admin password."""
    pw = request.form.to_dict().get("admin-password")
    if not pw:
        return jsonify({"success": False, "message": _("Admin password is required")}), 400
    if pw != current_app.config.get("ADMIN_PASSWORD"):
        return jsonify({"success": False, "message": _("Incorrect admin password!")}), 403
    resp = make_response(jsonify({"success": True, "message": _("Admin mode granted!")}))
    expire_date = datetime.datetime.now() + datetime.timedelta(days=90)
    resp.set_cookie("admin", pw, expires=expire_date)
    return resp
