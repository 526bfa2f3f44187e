"""
Shared fixtures: in-memory database, fake object storage and API clients.

Every test gets a fresh schema on a single SQLite connection (StaticPool) so
the sessions opened by request handlers and by fixtures see the same data.
"""

import os

import pytest
from botocore.exceptions import ClientError
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from catalog_api.core.security import create_access_token, get_password_hash
from catalog_api.core.storage import MediaUploader, get_media_uploader
from catalog_api.db import models  # noqa: F401
from catalog_api.db.base import Base
from catalog_api.db.models import Album, Artist, Playlist, Song, User
from catalog_api.db.session import get_db
from catalog_api.main import app

# =============================================================================
# Storage doubles
# =============================================================================


class FakeS3Client:
    """Records uploads; optionally fails like a real provider."""

    def __init__(self, error: ClientError = None):
        self.error = error
        self.uploads = []

    def upload_file(self, path, bucket, key, ExtraArgs=None):
        assert os.path.exists(path), "upload must happen before the temp file is removed"
        with open(path, "rb") as fh:
            body = fh.read()
        self.uploads.append({"path": path, "bucket": bucket, "key": key, "body": body, "extra": ExtraArgs})
        if self.error is not None:
            raise self.error


def provider_error(code: str = "AccessDenied", message: str = "Access Denied", status: int = 403) -> ClientError:
    return ClientError(
        {"Error": {"Code": code, "Message": message}, "ResponseMetadata": {"HTTPStatusCode": status}},
        "PutObject",
    )


# =============================================================================
# Database
# =============================================================================


@pytest.fixture
def engine():
    """Create an in-memory database with the full schema."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(bind=engine, autoflush=False)


@pytest.fixture
def db(session_factory):
    """Session for arranging and asserting on data outside of requests."""
    session = session_factory()
    yield session
    session.close()


# =============================================================================
# Application
# =============================================================================


@pytest.fixture
def s3_client() -> FakeS3Client:
    return FakeS3Client()


@pytest.fixture
def uploader(s3_client: FakeS3Client, tmp_path) -> MediaUploader:
    return MediaUploader(
        client=s3_client,
        bucket="test-bucket",
        root_folder="catalog",
        public_base_url="https://cdn.test",
        tmp_dir=str(tmp_path / "uploads"),
    )


@pytest.fixture
def client(session_factory, uploader: MediaUploader) -> TestClient:
    """API client wired to the test database and fake storage."""

    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_media_uploader] = lambda: uploader
    yield TestClient(app)
    app.dependency_overrides.clear()


# =============================================================================
# Users and tokens
# =============================================================================


def make_user(db, email: str, username: str = None, is_admin: bool = False, password: str = "secret123") -> User:
    user = User(
        email=email,
        username=username,
        hashed_password=get_password_hash(password),
        is_admin=is_admin,
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


def auth_header(user: User) -> dict:
    return {"Authorization": f"Bearer {create_access_token(user.id)}"}


@pytest.fixture
def user(db) -> User:
    return make_user(db, "listener@example.com", username="listener")


@pytest.fixture
def other_user(db) -> User:
    return make_user(db, "other@example.com", username="other")


@pytest.fixture
def admin(db) -> User:
    return make_user(db, "admin@example.com", username="admin", is_admin=True)


@pytest.fixture
def user_headers(user: User) -> dict:
    return auth_header(user)


@pytest.fixture
def other_headers(other_user: User) -> dict:
    return auth_header(other_user)


@pytest.fixture
def admin_headers(admin: User) -> dict:
    return auth_header(admin)


# =============================================================================
# Catalog factories
# =============================================================================


@pytest.fixture
def make_artist(db):
    def _make(name: str = "Test Artist", **kwargs) -> Artist:
        artist = Artist(name=name, **kwargs)
        db.add(artist)
        db.commit()
        db.refresh(artist)
        return artist

    return _make


@pytest.fixture
def make_album(db):
    def _make(artist: Artist, title: str = "Test Album", **kwargs) -> Album:
        album = Album(title=title, artist_id=artist.id, **kwargs)
        db.add(album)
        db.commit()
        db.refresh(album)
        return album

    return _make


@pytest.fixture
def make_song(db):
    def _make(artist: Artist, title: str = "Test Song", album: Album = None, **kwargs) -> Song:
        kwargs.setdefault("duration", 180)
        kwargs.setdefault("audio_url", "https://cdn.test/audio.mp3")
        song = Song(title=title, artist_id=artist.id, album_id=album.id if album else None, **kwargs)
        db.add(song)
        db.commit()
        db.refresh(song)
        return song

    return _make


@pytest.fixture
def make_playlist(db):
    def _make(creator: User, name: str = "Road Trip", **kwargs) -> Playlist:
        playlist = Playlist(name=name, creator_id=creator.id, **kwargs)
        db.add(playlist)
        db.commit()
        db.refresh(playlist)
        return playlist

    return _make
