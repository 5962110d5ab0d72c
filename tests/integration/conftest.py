"""Integration fixtures: the FastAPI app over the per-test database"""
import pytest
from fastapi.testclient import TestClient

from gaitlab.main import create_app


@pytest.fixture
def app(test_settings, db_engine, clock):
    return create_app(config=test_settings, engine=db_engine, clock=clock)


@pytest.fixture
def client(app):
    with TestClient(app) as test_client:
        yield test_client
