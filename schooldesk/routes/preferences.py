"""Dashboard preference routes."""

import flask_babel
from flask import Blueprint, jsonify, request

from schooldesk.lib.current_app import get_dashboard_instance, is_admin

preferences_bp = Blueprint("preferences", __name__)

_ = flask_babel.gettext


@preferences_bp.route("/preferences", methods=["GET"])
def get_preferences():
    """Current preference values, defaults filled in.
    ---
    tags:
      - Preferences
    responses:
      200:
        description: Mapping of preference name to value
    """
    d = get_dashboard_instance()
    return jsonify(d.preferences.all())


@preferences_bp.route("/preferences", methods=["POST"])
def change_preferences():
    """Change a single preference.
    ---
    tags:
      - Preferences
    parameters:
      - name: pref
        in: formData
        type: string
        required: true
      - name: val
        in: formData
        type: string
        required: true
    responses:
      200:
        description: JSON result of preference change
      403:
        description: Admin password required
    """
    if not is_admin():
        # MSG: Message shown after trying to change preferences without admin permissions.
        return jsonify([False, _("You don't have permission to change preferences")]), 403
    d = get_dashboard_instance()
    data = request.get_json(silent=True) if request.is_json else request.form.to_dict()
    data = data or {}
    if "pref" not in data or "val" not in data:
        return jsonify([False, _("Both pref and val are required")]), 400
    rc = d.change_preferences(data["pref"], data["val"])
    return jsonify(rc), 200 if rc[0] else 400


@preferences_bp.route("/preferences/clear", methods=["POST"])
def clear_preferences():
    """Reset all preferences to defaults.
    ---
    tags:
      - Preferences
    responses:
      200:
        description: JSON result of the reset
    """
    if not is_admin():
        # MSG: Message shown after trying to clear preferences without admin permissions.
        return jsonify([False, _("You don't have permission to clear preferences")]), 403
    d = get_dashboard_instance()
    rc = d.clear_preferences()
    return jsonify(rc), 200 if rc[0] else 500
