"""
Pytest fixtures for the record showcase tests
"""

import json
import pytest
import httpx
from typing import Any, Dict, List

from shared.schemas.record import Record
import api_service.services.record_store as record_store_module


@pytest.fixture
def sample_records() -> List[Dict[str, Any]]:
    """Sample record list as the API returns it"""
    return [
        {"name": "apples", "value": 5, "img": "/content/apple.jpg"},
        {"name": "oranges", "value": 10, "img": "/content/orange.jpg"},
        {"name": "pears", "value": 7, "img": "/content/pear.jpg"},
    ]


@pytest.fixture
def sample_payload(sample_records) -> bytes:
    return json.dumps(sample_records).encode()


@pytest.fixture
def record_store(monkeypatch, sample_records):
    """Install a record store holding the sample records"""
    store = record_store_module.RecordStore(tuple(Record(**r) for r in sample_records))
    monkeypatch.setattr(record_store_module, "_record_store", store)
    return store


@pytest.fixture
def json_transport(sample_payload):
    """Mock upstream answering every request with the sample payload"""
    calls = []

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(request)
        return httpx.Response(200, content=sample_payload, headers={"content-type": "application/json"})

    transport = httpx.MockTransport(handler)
    transport.calls = calls
    return transport


@pytest.fixture
def refusing_transport():
    """Mock upstream that cannot be reached"""
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("Connection refused", request=request)

    return httpx.MockTransport(handler)


@pytest.fixture
def slow_transport():
    """Mock upstream that times out"""
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ReadTimeout("timed out", request=request)

    return httpx.MockTransport(handler)
