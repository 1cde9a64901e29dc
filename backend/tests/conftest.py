import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine, event
from sqlalchemy.orm import sessionmaker

from studio_api.config import settings
from studio_api.database import get_db, init_db
from studio_api.dependencies import get_notifier
from studio_api.main import app
from studio_api.services.account_service import account_store
from studio_api.services.notifications import Notifier

API = settings.api_prefix

COVER_LETTER = (
    "I have spent the last four years building interactive products for small studios, "
    "and I would love to bring that experience to your team."
)


def _set_sqlite_pragmas(dbapi_conn, connection_record):
    cursor = dbapi_conn.cursor()
    cursor.execute("PRAGMA journal_mode=WAL")
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


class FakeTransport:
    def __init__(self):
        self.sent: list[tuple[str, str, str]] = []
        self.attempts = 0
        self.fail = False

    def send(self, to: str, subject: str, html: str) -> None:
        self.attempts += 1
        if self.fail:
            raise ConnectionError("SMTP server unavailable")
        self.sent.append((to, subject, html))


@pytest.fixture
def test_db(tmp_path):
    db_path = tmp_path / "studio.sqlite"
    init_db(db_path)
    engine = create_engine(
        f"sqlite:///{db_path}",
        connect_args={"check_same_thread": False},
    )
    event.listen(engine, "connect", _set_sqlite_pragmas)
    TestSession = sessionmaker(bind=engine, autoflush=False, autocommit=False)

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
def db(test_db):
    session = test_db()
    yield session
    session.close()


@pytest.fixture
def transport():
    return FakeTransport()


@pytest.fixture
def notifier(transport):
    return Notifier(transport, operator_email="ops@studio.test")


@pytest.fixture
def client(test_db, notifier):
    app.dependency_overrides[get_notifier] = lambda: notifier
    return TestClient(app)


@pytest.fixture
def super_admin(db):
    return account_store.create(db, "root", "root@studio.test", "root-pass-123", role="super-admin")


@pytest.fixture
def admin_account(db):
    return account_store.create(db, "editor", "editor@studio.test", "editor-pass-123")


def login(client, username, password):
    return client.post(f"{API}/auth/login", json={"username": username, "password": password})


@pytest.fixture
def admin_headers(client, admin_account):
    token = login(client, "editor", "editor-pass-123").json()["token"]
    client.cookies.clear()
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def root_headers(client, super_admin):
    token = login(client, "root", "root-pass-123").json()["token"]
    client.cookies.clear()
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def create_job(client, admin_headers):
    def _create(**overrides):
        payload = {
            "title": "Motion Designer",
            "department": "Design",
            "location": "Remote",
            "type": "Full-time",
            "experience": "2-4 years",
            "description": "Design motion systems for client launches.",
            "requirements": ["After Effects", "A strong reel"],
            "benefits": ["Remote-first", "Learning budget"],
        }
        payload.update(overrides)
        r = client.post(f"{API}/jobs", json=payload, headers=admin_headers)
        assert r.status_code == 201, r.text
        return r.json()["job"]

    return _create


@pytest.fixture
def apply(client):
    def _apply(job_id, **overrides):
        payload = {
            "jobId": job_id,
            "name": "Ada Lovelace",
            "email": "ada@example.com",
            "phone": "+44 20 7946 0000",
            "resume": "https://example.com/ada/resume.pdf",
            "portfolio": "https://ada.example.com",
            "coverLetter": COVER_LETTER,
        }
        payload.update(overrides)
        return client.post(f"{API}/applications", json=payload)

    return _apply
