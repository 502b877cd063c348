# tests/conftest.py
"""Shared fixtures: in-memory SQLite database, seeded session, API client."""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

# must be set before app.config is imported
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["API_KEY"] = ""

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker
from app.database import create_tables, get_db, make_engine
from app.main import app
from app.seed import seed_data


@pytest.fixture
def db_session():
    engine = make_engine("sqlite://")
    create_tables(bind=engine)
    session = sessionmaker(autocommit=False, autoflush=False, bind=engine)()
    try:
        yield session
    finally:
        session.close()
        engine.dispose()


@pytest.fixture
def seeded_session(db_session):
    seed_data(db_session)
    return db_session


@pytest.fixture
def client(seeded_session):
    def override_get_db():
        yield seeded_session

    app.dependency_overrides[get_db] = override_get_db
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()
