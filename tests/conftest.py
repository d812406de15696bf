import os
import sys
from pathlib import Path

import pytest

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

# In-memory store; must be set before the app module is imported.
os.environ["DATABASE_URL"] = "sqlite://"

from app import app as flask_app  # noqa: E402
from models import db, seed_reminders  # noqa: E402


@pytest.fixture
def app():
    flask_app.config["TESTING"] = True
    with flask_app.app_context():
        db.drop_all()
        db.create_all()
        seed_reminders()
        yield flask_app
        db.session.remove()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def year(client):
    """A year initialized from 2024-01-01; returns the cycle list."""
    r = client.post("/api/cycles/initialize", json={"startDate": "2024-01-01"})
    assert r.status_code == 201
    return client.get("/api/cycles").get_json()


@pytest.fixture
def day_id(client, year):
    cycle = client.get(f"/api/cycles/{year[0]['id']}").get_json()
    return cycle["days"][4]["id"]
