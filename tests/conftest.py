"""Pytest fixtures for SchoolDesk tests."""

import os
from unittest.mock import MagicMock

import pytest
from flask import Flask
from flask_babel import Babel

from schooldesk.dashboard import Dashboard
from schooldesk.lib.api_client import ApiClient
from schooldesk.lib.auth_context import AuthContext
from schooldesk.lib.entities import get_definition
from schooldesk.lib.events import EventSystem
from schooldesk.lib.mutation_events import EntityType
from schooldesk.lib.notifier import Notifier
from schooldesk.routes.auth_routes import auth_bp
from schooldesk.routes.collections import collections_bp
from schooldesk.routes.home import home_bp
from schooldesk.routes.houses import houses_bp
from schooldesk.routes.notifications import notifications_bp
from schooldesk.routes.preferences import preferences_bp


def http_response(status_code=200, body=None):
    """Mock of a requests.Response."""
    response = MagicMock()
    response.status_code = status_code
    if body is None:
        response.json.side_effect = ValueError("No JSON")
    else:
        response.json.return_value = body
    return response


@pytest.fixture
def api():
    """ApiClient mock; with_token returns the same mock so calls are easy to assert."""
    client = MagicMock(spec=ApiClient)
    client.with_token.return_value = client
    return client


@pytest.fixture
def auth():
    return AuthContext(token="test-token", user_data={"email": "admin@school.test"})


@pytest.fixture
def signed_out():
    return AuthContext()


@pytest.fixture
def events():
    return EventSystem()


@pytest.fixture
def notifier(events):
    return Notifier(events)


@pytest.fixture
def grading_periods():
    return get_definition(EntityType.GRADING_PERIOD)


@pytest.fixture
def http_session():
    """requests.Session mock backing a real ApiClient."""
    session = MagicMock()
    session.request.return_value = http_response(200, {"success": True, "data": [], "message": None})
    return session


@pytest.fixture
def dashboard(tmp_path, http_session):
    """Dashboard with a mocked HTTP session, a mocked Socket.IO and a temp config file."""
    return Dashboard(
        api_url="http://api.test/api",
        api_token="test-token",
        config_file_path=str(tmp_path / "config.ini"),
        socketio=MagicMock(),
        session=http_session,
    )


@pytest.fixture
def make_http_response():
    return http_response


@pytest.fixture
def app(dashboard):
    """Bare Flask app with every blueprint registered and the test Dashboard attached."""
    template_folder = os.path.join(os.path.dirname(__file__), "..", "schooldesk", "templates")
    test_app = Flask(__name__, template_folder=template_folder)
    test_app.secret_key = "test"
    test_app.config["SITE_NAME"] = "Test School"
    Babel(test_app)
    for bp in (home_bp, auth_bp, preferences_bp, notifications_bp, houses_bp, collections_bp):
        test_app.register_blueprint(bp)
    test_app.dashboard = dashboard
    return test_app


@pytest.fixture
def client(app):
    return app.test_client()
