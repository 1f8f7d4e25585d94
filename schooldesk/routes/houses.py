"""House creation with teacher assignments."""

import flask_babel
from flask import Blueprint, jsonify, request

from schooldesk.lib.current_app import get_dashboard_instance

_ = flask_babel.gettext

houses_bp = Blueprint("houses", __name__)


@houses_bp.route("/api/houses/with-teachers", methods=["POST"])
def create_house():
    """Create a house, then assign each selected teacher to it.
    ---
    tags:
      - Houses
    parameters:
      - name: body
        in: body
        schema:
          type: object
          properties:
            name:
              type: string
            description:
              type: string
            teacher_ids:
              type: array
              items:
                type: integer
    responses:
      201:
        description: House created, possibly with some failed assignments
      400:
        description: Validation or authentication failure
      502:
        description: The backend rejected the house
    """
    d = get_dashboard_instance()
    if request.is_json:
        data = request.get_json(silent=True) or {}
        teacher_ids = data.get("teacher_ids") or []
    else:
        data = request.form.to_dict()
        teacher_ids = request.form.getlist("teacher_ids")

    result = d.create_house(data.get("name", ""), data.get("description"), teacher_ids)
    if result.success:
        return jsonify(
            {
                "success": True,
                "partial": result.partial,
                "message": result.message,
                "house": result.house,
                "failed_teacher_ids": result.failed_teacher_ids,
            }
        ), 201
    status = {"auth": 401, "validation": 400}.get(result.error, 502)
    return jsonify({"success": False, "message": result.message}), status
