import json
import logging

from fastapi import FastAPI, Request
from fastapi.testclient import TestClient

from ecommerce_portal.core.logging_setup import JsonFormatter
from ecommerce_portal.core.metrics import InMemoryRequestMetrics, request_metrics
from ecommerce_portal.core.request_context import clear_request_context, request_context_snapshot, set_request_context
from ecommerce_portal.middleware.observability import ObservabilityMiddleware
from tests.fixtures_data import SELLER_PRINCIPAL


def _build_client():
    app = FastAPI()
    app.add_middleware(ObservabilityMiddleware)

    @app.get("/product/{product_id}")
    def _product(product_id: int):
        return {"id": product_id}

    @app.get("/seller/me")
    def _seller(request: Request):
        request.state.principal = SELLER_PRINCIPAL
        return {"id": SELLER_PRINCIPAL.user_id}

    return TestClient(app)


def _record(msg="request completed"):
    return logging.LogRecord(
        name="ecommerce_portal.test",
        level=logging.INFO,
        pathname=__file__,
        lineno=1,
        msg=msg,
        args=(),
        exc_info=None,
    )


def test_request_id_is_echoed_and_metrics_use_route_template():
    request_metrics.reset()
    client = _build_client()

    response = client.get("/product/42", headers={"X-Request-ID": "req-123"})
    client.get("/product/43")

    assert response.headers["X-Request-ID"] == "req-123"
    snapshot = request_metrics.snapshot()
    assert snapshot["GET /product/{product_id}"]["total_requests"] == 2
    assert snapshot["GET /product/{product_id}"]["status_counts"] == {"200": 2}
    request_metrics.reset()


def test_metrics_count_errors():
    metrics = InMemoryRequestMetrics()

    metrics.observe("/seller/new", "POST", 409, 12.5)
    metrics.observe("/seller/new", "POST", 200, 7.5)

    entry = metrics.snapshot()["POST /seller/new"]
    assert entry["error_count"] == 1
    assert entry["avg_duration_ms"] == 10.0


def test_json_formatter_masks_secrets():
    record = _record("login password=hunter2 user_token=abc.def.ghi")

    payload = json.loads(JsonFormatter("%(message)s").format(record))

    assert "hunter2" not in payload["message"]
    assert "abc.def.ghi" not in payload["message"]
    assert payload["level"] == "INFO"


def test_json_formatter_includes_principal_from_context():
    set_request_context(request_id="req-9", user_id="2", user_type="seller")
    try:
        payload = json.loads(JsonFormatter("%(message)s").format(_record()))
    finally:
        clear_request_context()

    assert payload["request_id"] == "req-9"
    assert payload["user_id"] == "2"
    assert payload["user_type"] == "seller"
    assert request_context_snapshot() == {"request_id": None, "user_id": None, "user_type": None}


def test_request_log_carries_principal_user_type(caplog):
    client = _build_client()

    with caplog.at_level(logging.INFO, logger="ecommerce_portal.middleware.observability"):
        client.get("/seller/me")
        client.get("/product/1")

    completed = [record for record in caplog.records if record.getMessage() == "request completed"]
    assert [(record.user_id, record.user_type) for record in completed] == [("2", "seller"), (None, None)]
