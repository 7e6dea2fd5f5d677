import mongomock
import pytest
from fastapi.testclient import TestClient

import database
from main import app


@pytest.fixture
def mongo_db(monkeypatch):
    db = mongomock.MongoClient()["moodjournal_test"]
    monkeypatch.setattr(database, "db", db)
    return db


@pytest.fixture
def client(mongo_db):
    with TestClient(app) as c:
        yield c


@pytest.fixture
def offline_client(monkeypatch):
    monkeypatch.setattr(database, "db", None)
    with TestClient(app) as c:
        yield c
