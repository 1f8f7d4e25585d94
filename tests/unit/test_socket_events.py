"""Tests for the Socket.IO event handlers."""

from unittest.mock import patch

import pytest

from schooldesk.routes.socket_events import setup_socket_events

ROUTE_PREFIX = "schooldesk.routes.socket_events"


class FakeSocketIO:
    """Collects handlers registered with @socketio.on."""

    def __init__(self):
        self.handlers = {}

    def on(self, name):
        def decorator(fn):
            self.handlers[name] = fn
            return fn

        return decorator


@pytest.fixture
def handlers():
    socketio = FakeSocketIO()
    setup_socket_events(socketio)
    return socketio.handlers


def test_registers_handlers(handlers):
    assert set(handlers) == {"refresh_collection", "get_collection"}


def test_get_collection_replies_to_sender(app, handlers, http_session, make_http_response):
    http_session.request.return_value = make_http_response(200, {"success": True, "data": [{"id": 1}]})

    with app.app_context(), patch(f"{ROUTE_PREFIX}.emit") as mock_emit:
        handlers["get_collection"]("news")

    mock_emit.assert_called_once_with("collection_update", {"entity": "news", "rows": [{"id": 1}]})


def test_refresh_collection_reloads(app, handlers, dashboard, http_session):
    with app.app_context():
        handlers["refresh_collection"]("grading-period")

    assert http_session.request.call_args[0] == ("GET", "http://api.test/api/grading-periods")
    dashboard.socketio.emit.assert_any_call(
        "collection_update", {"entity": "grading-period", "rows": []}, namespace="/"
    )


def test_refresh_unknown_entity(app, handlers, http_session):
    with app.app_context(), patch(f"{ROUTE_PREFIX}.emit") as mock_emit:
        handlers["refresh_collection"]("students")

    assert mock_emit.call_args[0][0] == "notification"
    http_session.request.assert_not_called()
