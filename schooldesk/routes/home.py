import flask_babel
from flask import Blueprint, render_template

from schooldesk.lib.current_app import get_dashboard_instance, get_site_name, is_admin
from schooldesk.lib.entities import DEFINITIONS

_ = flask_babel.gettext


home_bp = Blueprint("home", __name__)


@home_bp.route("/")
def home():
    d = get_dashboard_instance()
    return render_template(
        "home.html",
        site_title=get_site_name(),
        title=_("Home"),
        sections=[(definition.entity.slug, _(definition.title)) for definition in DEFINITIONS.values()],
        user=d.auth.user_data,
        authenticated=d.auth.is_authenticated,
        admin=is_admin(),
    )
