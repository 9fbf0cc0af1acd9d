# tests/utils.py
import io
import shutil
import tempfile
import unittest
from unittest.mock import patch

from PIL import Image
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool


def make_session_factory():
    from db import Base
    import models  # noqa: F401  registers tables

    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    return sessionmaker(bind=engine, autoflush=False, autocommit=False)


def create_user(session_factory, name="Ann", email="ann@x.com", password_hash="not-a-real-hash"):
    import queries
    db = session_factory()
    try:
        user = queries.query_create_user(db, name, email, password_hash)
        db.expunge(user)
        return user
    finally:
        db.close()


def get_auth_headers(user_id=None, token=None):
    if token is None:
        import credentials
        token = credentials.issue_token(user_id)
    return {"Authorization": f"Bearer {token}"}


def create_image_bytes(fmt="JPEG", size=(20, 20)):
    img = Image.new("RGB", size, color=(0, 255, 0))
    buf = io.BytesIO()
    img.save(buf, format=fmt)
    buf.seek(0)
    return buf


def sample_report_fields(**overrides):
    fields = {
        "filename": "wall.jpg",
        "image_path": "/uploads/image-1700000000000-abc.jpg",
        "length_mm": 42.5,
        "width_mm": 1.25,
        "depth_mm": 7.0,
        "severity": "High",
        "recommendation": "Monitor the crack.",
        "analysis_data": {"confidence": 0.91, "model": "random-stub", "notes": ["a", "b"]},
    }
    fields.update(overrides)
    return fields


class ApiTestCase(unittest.TestCase):
    """TestClient wired to a fresh in-memory database and a temp upload dir."""

    def setUp(self):
        from fastapi.testclient import TestClient
        from app import app
        from db import get_db
        import controllers

        self.app = app
        self.session_factory = make_session_factory()

        def override_get_db():
            db = self.session_factory()
            try:
                yield db
            finally:
                db.close()

        app.dependency_overrides[get_db] = override_get_db

        self.p_session = patch("auth_middleware.SessionLocal", self.session_factory)
        self.p_session.start()

        self.upload_dir = tempfile.mkdtemp(prefix="test-uploads-")
        self.p_upload_dir = patch.object(controllers, "UPLOAD_DIR", self.upload_dir)
        self.p_upload_dir.start()

        self.client = TestClient(app)

    def tearDown(self):
        self.app.dependency_overrides = {}
        self.p_session.stop()
        self.p_upload_dir.stop()
        shutil.rmtree(self.upload_dir, ignore_errors=True)

    def create_user(self, name="Ann", email="ann@x.com"):
        return create_user(self.session_factory, name, email)
