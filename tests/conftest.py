import pytest
from fastapi.testclient import TestClient

from random_gateway.deps import get_invoker
from random_gateway.main import app


@pytest.fixture
def use_invoker():
    """Install an invoker for the app's routes; cleared after the test."""

    def _install(invoker):
        app.dependency_overrides[get_invoker] = lambda: invoker
        return invoker

    yield _install
    app.dependency_overrides.clear()


@pytest.fixture
def client():
    with TestClient(app) as c:
        yield c
