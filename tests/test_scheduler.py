"""Tests for PeriodicTask and MissedMessageWatcher."""
import threading
from unittest.mock import MagicMock

import pytest

from chatterbox_mcp import MessageData, MissedMessages, MissedMessageWatcher, PeriodicTask


def test_periodic_task_survives_failing_runs():
    done = threading.Event()
    calls = []

    def task():
        calls.append(1)
        if len(calls) == 1:
            raise RuntimeError("first run fails")
        done.set()

    periodic = PeriodicTask(0.01, task)
    periodic.start()
    try:
        assert done.wait(2)
    finally:
        periodic.stop()
    assert len(calls) >= 2
    assert not periodic.is_running


def test_periodic_task_start_requires_task_and_stop_is_idempotent():
    periodic = PeriodicTask(0.01)
    periodic.start()
    assert not periodic.is_running
    periodic.stop()

    periodic.set_task(lambda: None)
    periodic.start()
    assert periodic.is_running
    periodic.stop()
    periodic.stop()
    assert not periodic.is_running


def test_set_interval_restarts_running_task():
    periodic = PeriodicTask(10, lambda: None)
    periodic.start()
    first_thread = periodic._thread
    periodic.set_interval(0.05)
    try:
        assert periodic.is_running
        assert periodic.interval == 0.05
        assert periodic._thread is not first_thread
    finally:
        periodic.stop()


def test_periodic_task_rejects_non_positive_interval():
    with pytest.raises(ValueError):
        PeriodicTask(0, lambda: None)

    periodic = PeriodicTask(10, lambda: None)
    with pytest.raises(ValueError):
        periodic.set_interval(-1)
    assert periodic.interval == 10


def _unanswered(sender="27820000000@c.us", body="are you there?", timestamp=100):
    return MissedMessages(messages=[MessageData(sender=sender, body=body, timestamp=timestamp)], has_new_messages=True)


def test_watcher_notifies_admin_once_per_message():
    whatsapp = MagicMock()
    whatsapp.get_messages.return_value = _unanswered()
    watcher = MissedMessageWatcher(whatsapp, ["27820000000"], admin_number="27830000000")

    watcher.check()
    watcher.check()

    whatsapp.get_messages.assert_called_with("27820000000", 10)
    whatsapp.send_message.assert_called_once_with(
        "27830000000", "New messages for 27820000000: [100] 27820000000@c.us : are you there?"
    )

    whatsapp.get_messages.return_value = _unanswered(timestamp=200, body="hello?")
    watcher.check()
    assert whatsapp.send_message.call_count == 2


def test_watcher_skips_answered_chats_and_admin_itself():
    whatsapp = MagicMock()
    whatsapp.get_messages.return_value = MissedMessages(
        messages=[MessageData(sender="You", body="hi", timestamp=1)], has_new_messages=False
    )
    MissedMessageWatcher(whatsapp, ["1"], admin_number="2").check()
    whatsapp.send_message.assert_not_called()

    whatsapp.get_messages.return_value = _unanswered()
    MissedMessageWatcher(whatsapp, ["2"], admin_number="2").check()
    whatsapp.send_message.assert_not_called()


def test_watcher_keeps_polling_after_a_failure():
    whatsapp = MagicMock()
    whatsapp.get_messages.side_effect = [RuntimeError("server down"), _unanswered()]
    watcher = MissedMessageWatcher(whatsapp, ["1", "3"], admin_number="2")

    watcher.check()

    assert whatsapp.get_messages.call_count == 2
    whatsapp.send_message.assert_called_once()


def test_watcher_without_numbers_stops_itself():
    whatsapp = MagicMock()
    watcher = MissedMessageWatcher(whatsapp, [], interval=10)
    watcher.start()
    assert watcher.task.is_running

    watcher.check()

    assert not watcher.task.is_running
    whatsapp.get_messages.assert_not_called()
