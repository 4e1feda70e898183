import pytest
from fastapi.testclient import TestClient

import main


@pytest.fixture
def app():
    return main.create_app("sqlite://")


@pytest.fixture
def client(app):
    with TestClient(app, follow_redirects=False) as c:
        yield c


@pytest.fixture
def db(app, client):
    # client first so the lifespan has created the tables
    session = app.state.SessionLocal()
    try:
        yield session
    finally:
        session.close()
