import pytest
from fastapi.testclient import TestClient

from qtree.api import app


@pytest.fixture
def client():
    # Not used as a context manager: the shutdown hook removes the shared temp directory
    return TestClient(app)
