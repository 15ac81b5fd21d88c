"""
Tests for logging, request context, metrics and health endpoints
"""
import json
import logging

from prometheus_client import REGISTRY

from conftest import BOOSTED_HEADERS
from formwizard.core.logging_config import ContextualFormatter, LoggingConfig


def _record(msg="hello", **extra):
    record = logging.makeLogRecord({"name": "formwizard.test", "levelname": "INFO", "msg": msg})
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_json_formatter_includes_context_and_extra():
    LoggingConfig.set_context(request_id="req-1", path="/form/one")
    try:
        line = ContextualFormatter().format(_record(step="one", fields=["next"]))
    finally:
        LoggingConfig.clear_context()

    payload = json.loads(line)
    assert payload["message"] == "hello"
    assert payload["level"] == "INFO"
    assert payload["request_id"] == "req-1"
    assert payload["path"] == "/form/one"
    assert payload["step"] == "one"
    assert payload["fields"] == ["next"]


def test_json_formatter_stringifies_unserializable_extra():
    payload = json.loads(ContextualFormatter().format(_record(obj=object())))
    assert payload["obj"].startswith("<object object")


def test_context_helpers():
    LoggingConfig.clear_context()
    LoggingConfig.set_context(a=1)
    LoggingConfig.set_context(b=2)
    assert LoggingConfig.get_context() == {"a": 1, "b": 2}
    LoggingConfig.clear_context()
    assert LoggingConfig.get_context() == {}


def test_module_level_roundtrip():
    LoggingConfig.set_module_level("formwizard.test", "WARNING")
    assert LoggingConfig.get_module_level("formwizard.test") == "WARNING"


def test_responses_carry_request_id(client):
    r = client.get("/")
    assert r.headers["x-request-id"]

    r = client.get("/", headers={"X-Request-ID": "abc-123"})
    assert r.headers["x-request-id"] == "abc-123"


def test_form_navigation_counter(client):
    labels = {"step": "two", "action": "prev", "outcome": "render"}
    before = REGISTRY.get_sample_value("form_navigation_total", labels) or 0.0

    client.post("/form/two", data={"prev": "prev"}, headers=BOOSTED_HEADERS)

    after = REGISTRY.get_sample_value("form_navigation_total", labels)
    assert after == before + 1


def test_bad_request_counted_with_no_action(client):
    labels = {"step": "three", "action": "none", "outcome": "bad_request"}
    before = REGISTRY.get_sample_value("form_navigation_total", labels) or 0.0

    client.post("/form/three", data={"cancel": "cancel"})

    assert REGISTRY.get_sample_value("form_navigation_total", labels) == before + 1


def test_http_metrics_use_route_template(client):
    labels = {"method": "GET", "endpoint": "/form/{section}", "status_code": "200"}
    before = REGISTRY.get_sample_value("http_requests_total", labels) or 0.0

    client.get("/form/two")

    assert REGISTRY.get_sample_value("http_requests_total", labels) == before + 1


def test_metrics_endpoint(client):
    client.get("/")
    r = client.get("/metrics")
    assert r.status_code == 200
    assert r.headers["content-type"].startswith("text/plain")
    assert "http_requests_total" in r.text
    assert "form_navigation_total" in r.text


def test_metrics_can_be_disabled(monkeypatch):
    from fastapi.testclient import TestClient

    from formwizard.core.config import Settings
    from main import create_app

    monkeypatch.setenv("ENABLE_METRICS", "false")
    client = TestClient(create_app(Settings()))
    assert client.get("/metrics").status_code == 404


def test_health(client):
    r = client.get("/health")
    assert r.status_code == 200
    body = r.json()
    assert body["status"] == "healthy"
    assert body["service"] == "Form Wizard"
    assert "timestamp" in body
