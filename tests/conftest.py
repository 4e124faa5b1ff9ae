"""
Fixtures communes : une base SQLite en mémoire par test, la dépendance
'get_db' redirigée vers cette base et un TestClient FastAPI.
"""

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from prescriptions.database import configure_sqlite
from prescriptions.dependencies import get_db
from prescriptions.main import app
from prescriptions.models import Base
from prescriptions.services import config_service


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    configure_sqlite(engine)
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    factory = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    db = factory()
    try:
        config_service.seed_defaults(db)
    finally:
        db.close()
    return factory


@pytest.fixture
def db(session_factory):
    """Session directe pour les tests de services (sans passer par l'API)."""
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client(session_factory):
    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    # Pas de 'with' : le lifespan (logs fichiers, base locale) n'est pas exécuté
    yield TestClient(app)
    app.dependency_overrides.clear()


# ------------------------------------------------------------------------------
# Helpers de création via l'API
# ------------------------------------------------------------------------------
@pytest.fixture
def make_disease(client):
    def _make(code, name, **extra):
        response = client.post("/api/diseases", json={"code": code, "name": name, **extra})
        assert response.status_code == 201, response.text
        return response.json()
    return _make


@pytest.fixture
def make_medication(client):
    def _make(name, **extra):
        response = client.post("/api/medications", json={"name": name, **extra})
        assert response.status_code == 201, response.text
        return response.json()
    return _make


@pytest.fixture
def make_therapy(client):
    def _make(name, **extra):
        response = client.post("/api/therapies", json={"name": name, **extra})
        assert response.status_code == 201, response.text
        return response.json()
    return _make


@pytest.fixture
def make_finding(client):
    def _make(name, **extra):
        response = client.post("/api/findings", json={"name": name, **extra})
        assert response.status_code == 201, response.text
        return response.json()
    return _make
