import pytest
from fastapi.testclient import TestClient

from brewplan.limits import rate_limit
from brewplan.main import app


@pytest.fixture
def client():
    app.dependency_overrides[rate_limit] = lambda: None
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()
