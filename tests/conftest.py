import os
import tempfile
from contextlib import contextmanager

# Set environment variables BEFORE any imports that might use settings
# Use a temporary directory for test database to avoid permission issues
_test_db_dir = tempfile.mkdtemp()
_test_db_path = os.path.join(_test_db_dir, "test_account.db")
os.environ["DATABASE_URL"] = f"sqlite:///{_test_db_path}"
os.environ["ECOM_ACCOUNT_SERVICE_DB_NAME"] = "ecom_account"
os.environ["ECOM_ACCOUNT_SERVICE_DB_TEST_NAME"] = "ecom_account_test"
os.environ["ECOM_ACCOUNT_SERVICE_DB_USERNAME"] = "postgres"
os.environ["ECOM_ACCOUNT_SERVICE_DB_PASSWORD"] = "postgres"
os.environ["ECOM_ACCOUNT_SERVICE_JWT_SECRET_KEY"] = "test-secret-key-min-32-characters-long-for-testing"
os.environ["ECOM_ACCOUNT_SERVICE_URL"] = "localhost:8010"
os.environ["ECOM_ACCOUNT_SERVICE_FRONTEND_URL"] = "http://localhost:3000/"
os.environ["ECOM_ACCOUNT_SERVICE_PRODUCT_SERVICE_URL"] = "http://localhost:8020"

import pytest
from alembic import command
from alembic.config import Config
from fastapi.testclient import TestClient
from sqlalchemy import create_engine, event, false
from sqlalchemy.orm import sessionmaker, Session

from app.main import app
from app.core.config import get_settings
from app.core.security import get_password_hash
from app.db.models.user import User as UserModel


@pytest.fixture(scope="function")
def db_session():
    """Create a fresh database for each test and run migrations."""
    temp_db_dir = tempfile.mkdtemp()
    test_db_path = os.path.join(temp_db_dir, "test.db")
    test_db_url = f"sqlite:///{test_db_path}"

    test_engine = create_engine(
        test_db_url,
        connect_args={"check_same_thread": False},
    )

    # WAL reduces locking issues; foreign keys make ON DELETE CASCADE work
    @event.listens_for(test_engine, "connect")
    def set_sqlite_pragma(dbapi_conn, connection_record):
        cursor = dbapi_conn.cursor()
        cursor.execute("PRAGMA journal_mode=WAL")
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    TestingSessionLocal = sessionmaker(
        autocommit=False, autoflush=False, bind=test_engine
    )

    alembic_cfg = Config("alembic.ini")
    alembic_cfg.set_main_option("sqlalchemy.url", test_db_url)
    command.upgrade(alembic_cfg, "head")

    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()
        test_engine.dispose()

        for suffix in ["", "-wal", "-shm"]:
            path = f"{test_db_path}{suffix}"
            if os.path.exists(path):
                os.remove(path)
        if os.path.exists(temp_db_dir):
            os.rmdir(temp_db_dir)


@pytest.fixture(scope="function")
def client(db_session):
    """Create a test client with database dependency override."""

    def override_get_db():
        try:
            yield db_session
        finally:
            pass

    from app.api.deps import get_db

    app.dependency_overrides[get_db] = override_get_db

    yield TestClient(app)

    app.dependency_overrides.clear()


@pytest.fixture(scope="function")
def db(db_session):
    """Alias for db_session to match test naming conventions."""
    return db_session


@pytest.fixture(scope="function")
def settings():
    return get_settings()


@pytest.fixture(scope="function")
def user_dict(db: Session) -> dict:
    """Create a registered user directly in the database."""
    password = "secret-password"
    user = UserModel(
        email="a@b.c",
        password_hash=get_password_hash(password),
        full_name="A",
        address="A",
        phone_number="0",
        role="user",
    )
    db.add(user)
    db.commit()
    db.refresh(user)

    return {
        "id": user.id,
        "email": user.email,
        "password": password,
        "role": user.role,
    }


@pytest.fixture(scope="function")
def login_token(client, user_dict: dict) -> str:
    """Log the user in through the API and return the issued token."""
    response = client.post(
        "/api/login/",
        data={"email": user_dict["email"], "password": user_dict["password"]},
    )
    assert response.status_code == 200
    return response.json()["token"]


@pytest.fixture(scope="function")
def racing_login(db: Session):
    """
    Context manager under which create_session's delete of the old row matches nothing.

    That is what a login sees when another login for the same user commits between
    its delete and its insert: the insert then hits the unique user_id column.
    """

    def miss_session_delete(orm_execute_state):
        if orm_execute_state.is_delete:
            orm_execute_state.statement = orm_execute_state.statement.where(false())

    @contextmanager
    def race():
        event.listen(db, "do_orm_execute", miss_session_delete)
        try:
            yield
        finally:
            event.remove(db, "do_orm_execute", miss_session_delete)

    return race
