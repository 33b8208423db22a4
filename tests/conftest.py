import sys
from pathlib import Path

# Ajoute la racine du projet au PYTHONPATH EN PREMIER
sys.path.insert(0, str(Path(__file__).parent.parent))

from datetime import datetime, timedelta

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

# Créer engine SQLite pour tests AVANT d'importer app
SQLALCHEMY_TEST_DATABASE_URL = "sqlite:///./test.db"
test_engine = create_engine(
    SQLALCHEMY_TEST_DATABASE_URL,
    connect_args={"check_same_thread": False}
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=test_engine)

# PATCH: remplacer le engine et SessionLocal du core.database AVANT d'importer app
import taskmanager.core.database
taskmanager.core.database.engine = test_engine
taskmanager.core.database.SessionLocal = TestingSessionLocal

# Maintenant importer app (qui utilisera notre engine SQLite)
from taskmanager.core.database import Base, get_db
from taskmanager.main import app

def override_get_db():
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()

@pytest.fixture(autouse=True)
def setup_teardown():
    """Crée et nettoie la DB avant/après chaque test"""
    Base.metadata.drop_all(bind=test_engine)
    Base.metadata.create_all(bind=test_engine)
    yield
    Base.metadata.drop_all(bind=test_engine)

# Override la dépendance
app.dependency_overrides[get_db] = override_get_db


@pytest.fixture
def client():
    """Client de test FastAPI"""
    from fastapi.testclient import TestClient
    return TestClient(app)


@pytest.fixture
def db():
    """Session DB pour les tests"""
    db = TestingSessionLocal()
    yield db
    db.close()


def register(client, email, password="pass123", display_name=None):
    payload = {"email": email, "password": password}
    if display_name:
        payload["displayName"] = display_name
    return client.post("/api/auth/register", json=payload)


@pytest.fixture
def auth_headers(client):
    """Inscrit un utilisateur et retourne le header Authorization"""
    token = register(client, "test@example.com").json()["data"]["token"]
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def other_headers(client):
    """Un deuxième utilisateur, pour vérifier l'isolation"""
    token = register(client, "other@example.com").json()["data"]["token"]
    return {"Authorization": f"Bearer {token}"}


def iso_in(days=0, hours=0):
    return (datetime.utcnow() + timedelta(days=days, hours=hours)).isoformat()


@pytest.fixture
def make_task(client):
    """Factory : crée une tâche via l'API et retourne son JSON"""
    def _make_task(headers, title="Tâche", due_in_days=1, **fields):
        payload = {"title": title, "dueDate": iso_in(days=due_in_days), **fields}
        response = client.post("/api/tasks", headers=headers, json=payload)
        assert response.status_code == 201, response.text
        return response.json()["data"]["task"]
    return _make_task
