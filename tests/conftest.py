# tests/conftest.py
import os
import tempfile

# configure the service before app/config get imported by any test module
os.environ.setdefault("JWT_SECRET", "test-secret-key-for-the-crack-report-suite")
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["UPLOAD_DIR"] = tempfile.mkdtemp(prefix="crack-uploads-")

import pytest


@pytest.fixture(scope="session")
def app_instance():
    import app as app_module
    return app_module.app


@pytest.fixture
def session_factory():
    from tests.utils import make_session_factory
    return make_session_factory()


@pytest.fixture
def db_session(session_factory):
    db = session_factory()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture
def client(app_instance, monkeypatch, session_factory):
    from db import get_db

    def override_get_db():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    app_instance.dependency_overrides[get_db] = override_get_db
    monkeypatch.setattr("auth_middleware.SessionLocal", session_factory)

    from fastapi.testclient import TestClient
    yield TestClient(app_instance)
    app_instance.dependency_overrides = {}


@pytest.fixture
def user_and_headers(session_factory):
    from tests.utils import create_user, get_auth_headers
    user = create_user(session_factory, "Ann", "ann@x.com")
    return user, get_auth_headers(user.id)
