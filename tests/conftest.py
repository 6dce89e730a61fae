"""
Shared fixtures: every test runs against a fresh temporary SQLite database.
"""
import os
import tempfile

_DB_DIR = tempfile.mkdtemp(prefix="gradebook-tests-")
os.environ["DATABASE_URL"] = f"sqlite:///{os.path.join(_DB_DIR, 'gradebook.db')}"
os.environ["STRICT_VALIDATION"] = "true"

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402

from gradebook.core.database import Base, SessionLocal, engine  # noqa: E402
from gradebook.models.grade import Grade  # noqa: E402,F401
from gradebook.models.student import Student  # noqa: E402,F401
from gradebook.main import app  # noqa: E402


@pytest.fixture(autouse=True)
def clean_tables():
    """Recreate the schema around each test."""
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def db():
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client():
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def make_student(client):
    """POST a student and return the created record."""
    def _make(nom="Dupont", prenom="Jean", matricule="ETU001", **extra):
        payload = {"nom": nom, "prenom": prenom, "matricule": matricule, **extra}
        response = client.post("/api/etudiants", json=payload)
        assert response.status_code == 201, response.text
        return response.json()["etudiant"]
    return _make


@pytest.fixture
def make_grade(client):
    """POST a grade and return the created record."""
    def _make(etudiant_id, matiere="Mathématiques", note=12, coefficient=None):
        payload = {"etudiant_id": etudiant_id, "matiere": matiere, "note": note}
        if coefficient is not None:
            payload["coefficient"] = coefficient
        response = client.post("/api/notes", json=payload)
        assert response.status_code == 201, response.text
        return response.json()["note"]
    return _make
