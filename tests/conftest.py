import base64
import io
import os

# Keep imports of app.db.database away from any on-disk database
os.environ.setdefault("DATABASE_URL", "sqlite://")

import pytest
from fastapi.testclient import TestClient
from PIL import Image
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.db import models  # noqa: F401  registers tables on Base.metadata
from app.db.database import Base, get_db
from app.models import GeneratedImage
from app.services.auth import AuthenticatedUser, current_user
from app.services.image_resolver import ImageResolver, get_image_resolver


def make_png_base64(color=(20, 90, 200)) -> str:
    buffer = io.BytesIO()
    Image.new("RGB", (4, 4), color).save(buffer, format="PNG")
    return base64.b64encode(buffer.getvalue()).decode()


def make_data_uri(color=(20, 90, 200)) -> str:
    return f"data:image/png;base64,{make_png_base64(color)}"


class FakeGenerator:
    """Stands in for the image provider facade; records every hint."""

    def __init__(self, results=None, error=None):
        self.calls = []
        self._results = list(results) if results is not None else None
        self._error = error

    def __call__(self, hint):
        self.calls.append(hint)
        if self._error is not None:
            raise self._error
        if self._results is not None:
            return self._results.pop(0)
        return GeneratedImage(image_url=make_data_uri(), alt_text=hint)


@pytest.fixture()
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture()
def session_factory(engine):
    return sessionmaker(autoflush=False, bind=engine)


@pytest.fixture()
def db(session_factory):
    with session_factory() as session:
        yield session


@pytest.fixture()
def generator():
    return FakeGenerator()


@pytest.fixture()
def resolver(session_factory, generator):
    return ImageResolver(session_factory=session_factory, generator=generator)


@pytest.fixture()
def auth_user():
    return AuthenticatedUser(uid="firebase-uid-1", email="jane@apexora.com", email_verified=True)


@pytest.fixture()
def client(session_factory, resolver, auth_user):
    from app.main import app

    def _get_db():
        with session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = _get_db
    app.dependency_overrides[get_image_resolver] = lambda: resolver
    app.dependency_overrides[current_user] = lambda: auth_user
    yield TestClient(app)
    app.dependency_overrides.clear()
