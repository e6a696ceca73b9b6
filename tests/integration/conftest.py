import os
import uuid
from collections.abc import Generator
from pathlib import Path
from typing import Any

import psycopg
import pytest

from docingest.config.settings import Settings
from docingest.database.connection import close_pool, get_connection, init_pool
from docingest.extraction.factory import TEXT_MIME_TYPE
from docingest.ingestion.models import DocumentUpload

_SCHEMA = """
CREATE TABLE IF NOT EXISTS users (
    id BIGSERIAL PRIMARY KEY,
    email TEXT
);
CREATE TABLE IF NOT EXISTS documents (
    id UUID PRIMARY KEY,
    user_id BIGINT NOT NULL REFERENCES users (id),
    original_name TEXT NOT NULL,
    storage_key TEXT NOT NULL,
    mime_type TEXT NOT NULL,
    size_bytes BIGINT NOT NULL,
    parse_status TEXT NOT NULL DEFAULT 'none',
    error_message TEXT,
    text_content TEXT,
    summary TEXT,
    attempt INTEGER NOT NULL DEFAULT 0,
    created_at TIMESTAMPTZ NOT NULL DEFAULT NOW(),
    updated_at TIMESTAMPTZ NOT NULL DEFAULT NOW()
);
"""


def _test_settings() -> Settings:
    os.environ.setdefault("DB_DATABASE", "docingest_test")
    return Settings()


@pytest.fixture(scope="session")
def test_settings() -> Settings:
    return _test_settings()


@pytest.fixture(scope="session")
def integration_pool(test_settings: Settings) -> Generator[None, None, None]:
    try:
        with psycopg.connect(
            host=test_settings.db_host,
            port=test_settings.db_port,
            dbname=test_settings.db_database,
            user=test_settings.db_username,
            password=test_settings.db_password,
            connect_timeout=3,
        ) as conn:
            conn.execute(_SCHEMA)
            conn.commit()
    except Exception as e:
        pytest.skip(
            f"PostgreSQL test DB not available: {e}. Set DB_* env to run integration tests"
        )
    init_pool(test_settings)
    try:
        yield
    finally:
        close_pool()


@pytest.fixture
def db_conn(integration_pool: None) -> Generator[psycopg.Connection[Any], None, None]:
    with get_connection() as conn:
        yield conn


@pytest.fixture
def seed_owner(db_conn: psycopg.Connection[Any]) -> Generator[int, None, None]:
    with db_conn.cursor() as cur:
        cur.execute(
            "INSERT INTO users (email) VALUES (%s) RETURNING id",
            (f"{uuid.uuid4()}@example.com",),
        )
        row = cur.fetchone()
        assert row is not None
        owner_id = int(row[0])
    db_conn.commit()
    try:
        yield owner_id
    finally:
        with db_conn.cursor() as cur:
            cur.execute("DELETE FROM documents WHERE user_id = %s", (owner_id,))
            cur.execute("DELETE FROM users WHERE id = %s", (owner_id,))
        db_conn.commit()


@pytest.fixture
def files_root(tmp_path: Path) -> Path:
    return tmp_path


@pytest.fixture
def resume_on_disk(files_root: Path, resume_text: str) -> DocumentUpload:
    key = f"uploads/{uuid.uuid4()}.txt"
    path = files_root / key
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(resume_text, encoding="utf-8")
    return DocumentUpload(
        original_name="cv.txt",
        storage_key=key,
        mime_type=TEXT_MIME_TYPE,
        size_bytes=path.stat().st_size,
    )
