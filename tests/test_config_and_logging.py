"""
Settings parsing and the request log threshold.
"""
from __future__ import annotations

import logging
import sys
from dataclasses import replace
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

# Make the api package importable when running tests from a checkout
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from api.app import create_app
from api.core import config as core_config


@pytest.fixture()
def clean_env(monkeypatch):
    for name in ("APP_ENV", "HOST", "PORT", "DATA_FILE", "LOG_LEVEL", "REQUEST_LOG_FORMAT", "REQUEST_LOG_THRESHOLD"):
        monkeypatch.delenv(name, raising=False)
    core_config.get_settings.cache_clear()
    yield monkeypatch
    core_config.get_settings.cache_clear()


def test_defaults(clean_env):
    settings = core_config.get_settings()
    assert settings.port == 3000
    assert settings.data_file == Path("data") / "employees.json"
    assert settings.request_log_format == "tiny"
    assert settings.request_log_threshold == 400
    assert settings.log_level == "INFO"


def test_environment_overrides(clean_env, tmp_path):
    clean_env.setenv("PORT", "8080")
    clean_env.setenv("DATA_FILE", str(tmp_path / "x.json"))
    clean_env.setenv("REQUEST_LOG_FORMAT", "SHORT")
    clean_env.setenv("REQUEST_LOG_THRESHOLD", "0")
    clean_env.setenv("LOG_LEVEL", "debug")
    settings = core_config.get_settings()
    assert settings.port == 8080
    assert settings.data_file == tmp_path / "x.json"
    assert settings.request_log_format == "short"
    assert settings.request_log_threshold == 0
    assert settings.log_level == "DEBUG"


def test_invalid_values_fall_back(clean_env):
    clean_env.setenv("PORT", "abc")
    clean_env.setenv("REQUEST_LOG_FORMAT", "combined")
    settings = core_config.get_settings()
    assert settings.port == 3000
    assert settings.request_log_format == "tiny"


def _app_settings(tmp_path, **overrides):
    base = core_config.Settings(
        app_env="test",
        host="127.0.0.1",
        port=3000,
        data_file=tmp_path / "employees.json",
        log_level="INFO",
        request_log_format="tiny",
        request_log_threshold=400,
    )
    return replace(base, **overrides)


def test_only_responses_over_threshold_are_logged(tmp_path, caplog):
    caplog.set_level(logging.INFO, logger="api.access")
    with TestClient(create_app(_app_settings(tmp_path))) as client:
        client.get("/api/employees")
        client.delete("/api/employees/ghost")
    access = [r.getMessage() for r in caplog.records if r.name == "api.access"]
    assert len(access) == 1
    assert access[0].startswith("DELETE /api/employees/ghost 404 ")
    assert access[0].endswith(" ms")


def test_short_format_includes_client_and_protocol(tmp_path, caplog):
    caplog.set_level(logging.INFO, logger="api.access")
    settings = _app_settings(tmp_path, request_log_format="short", request_log_threshold=0)
    with TestClient(create_app(settings)) as client:
        client.get("/api/employees", params={"department": "Sales"})
    access = [r.getMessage() for r in caplog.records if r.name == "api.access"]
    assert len(access) == 1
    assert " - GET /api/employees?department=Sales HTTP/1.1 200 " in access[0]


def test_configure_logging_installs_one_handler(tmp_path):
    from api.core.request_logging import configure_logging

    root = logging.getLogger()
    previous_level = root.level
    settings = _app_settings(tmp_path, log_level="WARNING")
    try:
        configure_logging(settings)
        configure_logging(settings)
        ours = [h for h in root.handlers if getattr(h, "_employees_api", False)]
        assert len(ours) == 1
        assert root.level == logging.WARNING
    finally:
        for handler in [h for h in root.handlers if getattr(h, "_employees_api", False)]:
            root.removeHandler(handler)
        root.setLevel(previous_level)
