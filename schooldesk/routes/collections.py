"""Entity table pages and the form endpoints that mutate them."""

import flask_babel
from flask import Blueprint, abort, jsonify, render_template, request

from schooldesk.lib.current_app import get_dashboard_instance, get_site_name
from schooldesk.lib.entities import EntityDefinition, get_definition
from schooldesk.lib.forms import FormMode

_ = flask_babel.gettext

collections_bp = Blueprint("collections", __name__)

ERROR_STATUS = {"state": 409, "validation": 400, "auth": 401, "api": 502}


def _definition_or_404(entity: str) -> EntityDefinition:
    try:
        return get_definition(entity)
    except ValueError:
        abort(404)


def _form_values() -> dict:
    if request.is_json:
        return request.get_json(silent=True) or {}
    return request.form.to_dict()


def _submit(entity: str, mode: FormMode, record_id=None):
    definition = _definition_or_404(entity)
    d = get_dashboard_instance()
    try:
        result = d.submit_form(definition.entity, mode, _form_values(), record_id)
    except KeyError:
        return jsonify({"success": False, "message": _("Record not found")}), 404

    if result.success:
        status = 201 if mode is FormMode.CREATE else 200
        return jsonify(
            {
                "success": True,
                "message": result.message,
                "event": result.event.name,
                "payload": result.event.to_payload(),
            }
        ), status

    status = ERROR_STATUS.get(result.error, 502)
    return jsonify({"success": False, "message": result.message}), status


@collections_bp.route("/<entity>")
def collection_page(entity):
    """HTML table for one entity family."""
    definition = _definition_or_404(entity)
    d = get_dashboard_instance()
    page = d.get_page(definition.entity)
    return render_template(
        "collection.html",
        site_title=get_site_name(),
        title=_(definition.title),
        entity=definition.entity.slug,
        columns=definition.columns,
        rows=page.rows(),
        loading=page.loading,
    )


@collections_bp.route("/api/<entity>", methods=["GET"])
def list_records(entity):
    definition = _definition_or_404(entity)
    page = get_dashboard_instance().get_page(definition.entity)
    return jsonify(page.rows())


@collections_bp.route("/api/<entity>/<record_id>", methods=["GET"])
def get_record(entity, record_id):
    definition = _definition_or_404(entity)
    record = get_dashboard_instance().get_page(definition.entity).find(record_id)
    if record is None:
        return jsonify({"success": False, "message": _("Record not found")}), 404
    return jsonify(record)


@collections_bp.route("/api/<entity>/refresh", methods=["POST"])
def refresh(entity):
    definition = _definition_or_404(entity)
    d = get_dashboard_instance()
    ok = d.refresh(definition.entity)
    return jsonify({"success": ok, "rows": d.get_page(definition.entity).rows()})


@collections_bp.route("/api/<entity>", methods=["POST"])
def create_record(entity):
    return _submit(entity, FormMode.CREATE)


@collections_bp.route("/api/<entity>/<record_id>", methods=["PUT"])
def update_record(entity, record_id):
    return _submit(entity, FormMode.UPDATE, record_id)


@collections_bp.route("/api/<entity>/<record_id>", methods=["DELETE"])
def delete_record(entity, record_id):
    return _submit(entity, FormMode.DELETE, record_id)
