import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine, event
from sqlalchemy.orm import sessionmaker

from skillsync.config import settings
from skillsync.database import get_db, init_db
from skillsync.main import app
from skillsync.models.enums import Role
from skillsync.models.user import User
from skillsync.utils.filesystem import ensure_data_dirs


def _set_sqlite_pragmas(dbapi_conn, connection_record):
    cursor = dbapi_conn.cursor()
    cursor.execute("PRAGMA journal_mode=WAL")
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


@pytest.fixture
def tmp_data_dir(tmp_path):
    data_dir = tmp_path / "SkillSync"
    ensure_data_dirs(data_dir)
    return data_dir


@pytest.fixture
def test_db(tmp_data_dir):
    db_path = tmp_data_dir / "db.sqlite"
    engine = create_engine(
        f"sqlite:///{db_path}",
        connect_args={"check_same_thread": False},
    )
    event.listen(engine, "connect", _set_sqlite_pragmas)
    TestSession = sessionmaker(bind=engine, autoflush=False, autocommit=False)

    init_db(db_path)

    def override_get_db():
        db = TestSession()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    yield TestSession
    app.dependency_overrides.clear()
    engine.dispose()


@pytest.fixture
def client(tmp_data_dir, test_db):
    original_data_dir = settings.data_dir
    settings.data_dir = tmp_data_dir
    c = TestClient(app)
    yield c
    settings.data_dir = original_data_dir


@pytest.fixture
def register(client):
    """Register a user and return (token, user)."""
    counter = {"n": 0}

    def _register(role="candidate", skills=None, name=None, email=None):
        counter["n"] += 1
        n = counter["n"]
        r = client.post("/api/v1/register", json={
            "name": name or f"User {n}",
            "email": email or f"user{n}@example.com",
            "password": "secret-password",
            "skills": skills if skills is not None else [],
            "role": role,
        })
        assert r.status_code == 201, r.text
        data = r.json()
        return data["token"], data["user"]

    return _register


@pytest.fixture
def make_admin(register, test_db):
    """Register a user and promote them to admin directly in the database."""

    def _make_admin():
        token, user = register(role="recruiter", name="Admin")
        with test_db() as db:
            row = db.query(User).filter(User.id == user["id"]).one()
            row.role = Role.ADMIN
            db.commit()
        return token, user

    return _make_admin
