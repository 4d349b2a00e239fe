import pytest
from fastapi.testclient import TestClient
from loguru import logger

from even_service.server import create_app


@pytest.fixture
def log_records():
    """Collect loguru records emitted during a test."""
    records = []
    sink_id = logger.add(lambda message: records.append(message.record), level="DEBUG")
    yield records
    logger.remove(sink_id)


@pytest.fixture
def client():
    return TestClient(create_app())
