# tests/conftest.py
import pytest
from fastapi.testclient import TestClient

from discovery.app import create_app
from discovery.registry import RelationEntry
from discovery.settings import Settings

FIVE_RELATIONS = (
    RelationEntry("streams", "/streams"),
    RelationEntry("tasks", "/tasks"),
    RelationEntry("jobs", "/jobs"),
    RelationEntry("apps", "/apps"),
    RelationEntry("about", "/about"),
)


@pytest.fixture
def settings():
    return Settings(env="test", log_level="WARNING")


@pytest.fixture
def app(settings):
    return create_app(settings)


@pytest.fixture
def client(app):
    with TestClient(app) as c:
        yield c


@pytest.fixture
def five_client(settings):
    with TestClient(create_app(settings, registry=FIVE_RELATIONS)) as c:
        yield c
