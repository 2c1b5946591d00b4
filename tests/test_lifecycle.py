from __future__ import annotations

import logging
import signal
import sys
import threading
from pathlib import Path

import pytest

# Make the api package importable when running tests from a checkout
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from api.core.lifecycle import ShutdownHook


def test_hook_runs_once():
    calls = []
    hook = ShutdownHook(lambda: calls.append("saved"))
    assert hook.run() is True
    assert hook.run("SIGTERM") is False
    assert calls == ["saved"]
    assert hook.done


def test_hook_runs_once_under_concurrent_triggers():
    calls = []
    hook = ShutdownHook(lambda: calls.append(1))
    threads = [threading.Thread(target=hook.run) for _ in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()
    assert calls == [1]


def test_failing_callback_does_not_raise():
    def explode():
        raise OSError("read-only filesystem")

    hook = ShutdownHook(explode)
    assert hook.run() is True
    assert hook.done


def test_signal_handler_saves_then_exits(monkeypatch):
    installed = {}
    monkeypatch.setattr(signal, "signal", lambda signum, handler: installed.__setitem__(signum, handler))
    calls = []
    hook = ShutdownHook(lambda: calls.append("saved"))
    hook.install_signal_handlers()
    assert set(installed) == {signal.SIGINT, signal.SIGTERM}

    with pytest.raises(SystemExit) as excinfo:
        installed[signal.SIGTERM](signal.SIGTERM, None)
    assert excinfo.value.code == 0
    with pytest.raises(SystemExit):
        installed[signal.SIGINT](signal.SIGINT, None)
    assert calls == ["saved"]


def test_log_line_names_the_trigger(caplog):
    caplog.set_level(logging.INFO, logger="api.core.lifecycle")
    ShutdownHook(lambda: None).run()
    ShutdownHook(lambda: None).run("SIGTERM")
    messages = [r.getMessage() for r in caplog.records if r.name == "api.core.lifecycle"]
    assert messages == ["Received shutdown. Saving employees...", "Received SIGTERM. Saving employees..."]
