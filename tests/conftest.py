import pytest
from unittest.mock import MagicMock
from fastapi.testclient import TestClient

from main import app
from order_ingest.routers.webhooks import get_sink


@pytest.fixture
def mock_sink():
    """Sink that records append calls"""
    return MagicMock()


@pytest.fixture
def failing_sink():
    """Sink whose every append fails like a Sheets outage"""
    sink = MagicMock()
    sink.append.side_effect = RuntimeError("sheets unavailable")
    return sink


@pytest.fixture
def client_with_sink(mock_sink):
    """TestClient with the sheet sink replaced by a mock"""
    app.dependency_overrides[get_sink] = lambda: mock_sink
    client = TestClient(app)
    yield client, mock_sink
    app.dependency_overrides.clear()


@pytest.fixture
def client_with_failing_sink(failing_sink):
    app.dependency_overrides[get_sink] = lambda: failing_sink
    client = TestClient(app)
    yield client, failing_sink
    app.dependency_overrides.clear()


@pytest.fixture
def client():
    return TestClient(app)


@pytest.fixture
def deleted_payload():
    return {
        "order_id": "1",
        "created_at": "2024-01-05T10:00:00Z",
        "last_updated_at": "2024-01-05T10:00:00Z",
    }


@pytest.fixture
def payment_payload():
    return {"id": 7, "paid_time": "2024-02-01T00:00:00Z", "payment_status": "PAID"}


@pytest.fixture
def order_payload():
    return {
        "order_id": "2",
        "gross_revenue": 50000,
        "status": "Processing",
        "orderlines": [{"product_name": "Widget"}],
    }


@pytest.fixture
def status_changed_payload():
    return {"order_id": "3", "status": "canceled", "draft_time": "2024-01-01T00:00:00Z"}
