# tests/routers/conftest.py

import pytest
from fastapi.testclient import TestClient
from unittest.mock import Mock

from leadgen.database import get_db
from leadgen.main import app


def query_result(scalar=None, scalars=None, one=None, rowcount=None):
    """Mock of the Result returned by AsyncSession.execute"""
    result = Mock()
    result.scalar_one_or_none.return_value = scalar
    result.scalars.return_value.all.return_value = scalars or []
    result.one.return_value = one
    result.rowcount = rowcount
    return result


@pytest.fixture
def client(mock_db):
    """
    TestClient with the database replaced by mock_db.

    Startup hooks (dataset warm-up, scheduler) are not run because the
    client is not used as a context manager.
    """
    async def override_get_db():
        yield mock_db

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()
