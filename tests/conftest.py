import os
import sys
from pathlib import Path

# Ajoute la racine du projet au PYTHONPATH EN PREMIER
sys.path.insert(0, str(Path(__file__).parent.parent))

SQLALCHEMY_TEST_DATABASE_URL = "sqlite:///./test.db"
os.environ.setdefault("DATABASE_URL", SQLALCHEMY_TEST_DATABASE_URL)

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

# Créer engine SQLite pour tests AVANT d'importer app
test_engine = create_engine(
    SQLALCHEMY_TEST_DATABASE_URL,
    connect_args={"check_same_thread": False}
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=test_engine)

# PATCH: remplacer le engine et SessionLocal du core.database AVANT d'importer app
import notecanvas.core.database
notecanvas.core.database.engine = test_engine
notecanvas.core.database.SessionLocal = TestingSessionLocal

# Maintenant importer app (qui utilisera notre engine SQLite)
from notecanvas.core.database import Base, get_db
from notecanvas.core.security import create_access_token
from notecanvas.main import app
from notecanvas.models.user import User

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


def make_user(db, email="test@example.com", username="testuser", password="pass123"):
    user = User(email=email, username=username)
    user.set_password(password)
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


@pytest.fixture
def test_user(db):
    """Crée un utilisateur test"""
    return make_user(db)


@pytest.fixture
def auth_token(test_user):
    """Token JWT de l'utilisateur test"""
    return create_access_token(test_user.id)


@pytest.fixture
def auth_headers(auth_token):
    return {"Authorization": f"Bearer {auth_token}"}


@pytest.fixture
def other_headers(db):
    """Headers d'un second utilisateur, pour les tests de propriété"""
    other = make_user(db, email="other@example.com", username="otheruser")
    return {"Authorization": f"Bearer {create_access_token(other.id)}"}


@pytest.fixture
def test_page(client, auth_headers):
    """Crée une page test"""
    response = client.post("/pages", headers=auth_headers, json={"title": "Test Page"})
    return response.json()
