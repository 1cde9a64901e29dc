import sqlite3
from pathlib import Path
from sqlalchemy import create_engine, event
from sqlalchemy.orm import DeclarativeBase, sessionmaker

from studio_api.config import settings


class Base(DeclarativeBase):
    pass


def _set_sqlite_pragmas(dbapi_conn, connection_record):
    cursor = dbapi_conn.cursor()
    cursor.execute("PRAGMA journal_mode=WAL")
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def get_engine(db_path: Path | None = None):
    path = db_path or settings.db_path
    engine = create_engine(
        f"sqlite:///{path}",
        connect_args={"check_same_thread": False},
    )
    event.listen(engine, "connect", _set_sqlite_pragmas)
    return engine


engine = get_engine()
SessionLocal = sessionmaker(bind=engine, autoflush=False, autocommit=False)


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


SCHEMA_SQL = """\
-- ============================================================
-- ADMIN ACCOUNTS
-- ============================================================
CREATE TABLE IF NOT EXISTS admin_accounts (
    id              TEXT PRIMARY KEY,
    username        TEXT NOT NULL UNIQUE,
    email           TEXT NOT NULL UNIQUE COLLATE NOCASE,
    password_hash   TEXT NOT NULL,
    role            TEXT NOT NULL DEFAULT 'admin'
                    CHECK(role IN ('admin','super-admin')),
    is_active       INTEGER NOT NULL DEFAULT 1,
    failed_attempts INTEGER NOT NULL DEFAULT 0 CHECK(failed_attempts >= 0),
    locked_until    TEXT,
    last_login      TEXT,
    created_at      TEXT NOT NULL DEFAULT (strftime('%Y-%m-%dT%H:%M:%SZ','now')),
    updated_at      TEXT NOT NULL DEFAULT (strftime('%Y-%m-%dT%H:%M:%SZ','now'))
);

-- ============================================================
-- JOB POSTINGS
-- ============================================================
CREATE TABLE IF NOT EXISTS job_postings (
    id                   TEXT PRIMARY KEY,
    title                TEXT NOT NULL,
    department           TEXT NOT NULL,
    location             TEXT NOT NULL,
    type                 TEXT NOT NULL DEFAULT 'Full-time'
                         CHECK(type IN ('Full-time','Part-time','Contract','Internship')),
    experience           TEXT NOT NULL,
    description          TEXT NOT NULL,
    requirements         TEXT NOT NULL,
    benefits             TEXT NOT NULL,
    salary_min           REAL,
    salary_max           REAL,
    salary_currency      TEXT NOT NULL DEFAULT 'USD',
    application_deadline TEXT,
    status               TEXT NOT NULL DEFAULT 'active'
                         CHECK(status IN ('active','inactive','closed')),
    created_by           TEXT NOT NULL DEFAULT 'admin',
    created_at           TEXT NOT NULL DEFAULT (strftime('%Y-%m-%dT%H:%M:%SZ','now')),
    updated_at           TEXT NOT NULL DEFAULT (strftime('%Y-%m-%dT%H:%M:%SZ','now'))
);

CREATE INDEX IF NOT EXISTS idx_jobs_filter ON job_postings(department, location, status);
CREATE INDEX IF NOT EXISTS idx_jobs_created ON job_postings(created_at);

-- ============================================================
-- APPLICATIONS
-- ============================================================
CREATE TABLE IF NOT EXISTS applications (
    id           TEXT PRIMARY KEY,
    job_id       TEXT NOT NULL REFERENCES job_postings(id),
    name         TEXT NOT NULL,
    email        TEXT NOT NULL,
    phone        TEXT,
    resume       TEXT NOT NULL,
    portfolio    TEXT,
    experience   TEXT,
    cover_letter TEXT NOT NULL,
    status       TEXT NOT NULL DEFAULT 'pending'
                 CHECK(status IN ('pending','reviewing','shortlisted','rejected','hired')),
    notes        TEXT,
    reviewed_by  TEXT,
    reviewed_at  TEXT,
    created_at   TEXT NOT NULL DEFAULT (strftime('%Y-%m-%dT%H:%M:%SZ','now')),
    updated_at   TEXT NOT NULL DEFAULT (strftime('%Y-%m-%dT%H:%M:%SZ','now')),
    UNIQUE (job_id, email)
);

CREATE INDEX IF NOT EXISTS idx_applications_job_status ON applications(job_id, status);
CREATE INDEX IF NOT EXISTS idx_applications_created ON applications(created_at);

-- ============================================================
-- CONTACT LEADS
-- ============================================================
CREATE TABLE IF NOT EXISTS contact_leads (
    id             TEXT PRIMARY KEY,
    name           TEXT NOT NULL,
    organization   TEXT NOT NULL,
    email          TEXT NOT NULL,
    number         TEXT NOT NULL,
    website        TEXT,
    services       TEXT NOT NULL,
    status         TEXT NOT NULL DEFAULT 'new'
                   CHECK(status IN ('new','contacted','in-progress','completed','closed')),
    priority       TEXT NOT NULL DEFAULT 'medium'
                   CHECK(priority IN ('low','medium','high','urgent')),
    notes          TEXT,
    assigned_to    TEXT,
    follow_up_date TEXT,
    created_at     TEXT NOT NULL DEFAULT (strftime('%Y-%m-%dT%H:%M:%SZ','now')),
    updated_at     TEXT NOT NULL DEFAULT (strftime('%Y-%m-%dT%H:%M:%SZ','now'))
);

CREATE INDEX IF NOT EXISTS idx_contacts_status_priority ON contact_leads(status, priority);
CREATE INDEX IF NOT EXISTS idx_contacts_email_created ON contact_leads(email, created_at);
"""


def init_db(db_path: Path | None = None):
    path = db_path or settings.db_path
    path.parent.mkdir(parents=True, exist_ok=True)
    conn = sqlite3.connect(str(path))
    conn.executescript(SCHEMA_SQL)
    conn.close()
