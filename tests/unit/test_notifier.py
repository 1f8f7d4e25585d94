"""Tests for Notifier."""

import logging

from schooldesk.lib.events import EventSystem
from schooldesk.lib.notifier import Notifier


def test_show_emits_notification():
    events = EventSystem()
    received = []
    events.on("notification", received.append)

    Notifier(events).show("Success", "Saved", "success")

    assert len(received) == 1
    toast = received[0]
    assert toast["title"] == "Success"
    assert toast["message"] == "Saved"
    assert toast["variant"] == "success"
    assert toast["duration"] == 3000


def test_unknown_variant_falls_back_to_info():
    notifier = Notifier(EventSystem())
    notifier.show("Hi", "there", "purple")
    assert notifier.recent()[-1]["variant"] == "info"


def test_default_and_explicit_duration():
    notifier = Notifier(EventSystem(), default_duration=5000)
    notifier.show("A", "a")
    notifier.show("B", "b", duration=100)
    assert [t["duration"] for t in notifier.recent()] == [5000, 100]


def test_hidden_notifications_are_kept_but_not_emitted():
    events = EventSystem()
    received = []
    events.on("notification", received.append)
    notifier = Notifier(events, hide_notifications=True)

    notifier.show("Error", "Boom", "error")

    assert received == []
    assert notifier.recent()[0]["message"] == "Boom"


def test_history_is_bounded():
    notifier = Notifier(EventSystem(), history_size=2)
    for i in range(5):
        notifier.show("T", str(i))
    assert [t["message"] for t in notifier.recent()] == ["3", "4"]
    assert [t["message"] for t in notifier.recent(1)] == ["4"]


def test_log_level_follows_variant(caplog):
    notifier = Notifier(EventSystem())
    with caplog.at_level(logging.INFO):
        notifier.show("Error", "Boom", "error")
        notifier.show("Partial Success", "Some failed", "warning")
    levels = [r.levelno for r in caplog.records]
    assert levels == [logging.ERROR, logging.WARNING]
