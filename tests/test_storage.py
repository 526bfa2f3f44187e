"""
Tests for catalog_api.core.storage.MediaUploader.

The local temp file must be gone after every upload attempt, and provider
failures must surface the provider's message and status.
"""

import io
import os

import pytest
from botocore.exceptions import EndpointConnectionError
from starlette.datastructures import UploadFile

from catalog_api.core.exceptions import MediaUploadError
from catalog_api.core.storage import ARTIST_FOLDER, SONG_AUDIO_FOLDER, MediaUploader
from conftest import FakeS3Client, provider_error


@pytest.fixture
def temp_file(tmp_path) -> str:
    path = tmp_path / "cover.png"
    path.write_bytes(b"\x89PNG fake image")
    return str(path)


class TestUploadFile:
    """Tests for uploading a local file."""

    def test_success_returns_public_url_and_removes_file(self, uploader: MediaUploader, s3_client: FakeS3Client,
                                                        temp_file: str) -> None:
        url = uploader.upload_file(temp_file, ARTIST_FOLDER)

        assert not os.path.exists(temp_file)
        assert len(s3_client.uploads) == 1
        upload = s3_client.uploads[0]
        assert upload["bucket"] == "test-bucket"
        assert upload["key"].startswith("catalog/artists/")
        assert upload["key"].endswith(".png")
        assert upload["extra"] == {"ContentType": "image/png"}
        assert url == f"https://cdn.test/{upload['key']}"

    def test_provider_error_surfaces_message_and_removes_file(self, tmp_path, temp_file: str) -> None:
        client = FakeS3Client(error=provider_error("AccessDenied", "Access Denied", 403))
        uploader = MediaUploader(client=client, bucket="b", root_folder="r", public_base_url="https://cdn.test",
                                 tmp_dir=str(tmp_path))

        with pytest.raises(MediaUploadError) as exc:
            uploader.upload_file(temp_file, ARTIST_FOLDER)

        assert not os.path.exists(temp_file)
        assert exc.value.status_code == 500
        assert exc.value.provider_status == 403
        assert "Access Denied" in exc.value.detail
        assert "403" in exc.value.detail

    def test_connection_error_removes_file(self, tmp_path, temp_file: str) -> None:
        client = FakeS3Client(error=EndpointConnectionError(endpoint_url="https://s3.invalid"))
        uploader = MediaUploader(client=client, bucket="b", root_folder="r", public_base_url="", tmp_dir=str(tmp_path))

        with pytest.raises(MediaUploadError):
            uploader.upload_file(temp_file, ARTIST_FOLDER)
        assert not os.path.exists(temp_file)

    def test_audio_content_type_fallback(self, uploader: MediaUploader, s3_client: FakeS3Client, tmp_path) -> None:
        path = tmp_path / "track"
        path.write_bytes(b"ID3 fake audio")

        uploader.upload_file(str(path), SONG_AUDIO_FOLDER, resource_type="audio")

        assert s3_client.uploads[0]["extra"] == {"ContentType": "audio/mpeg"}
        assert s3_client.uploads[0]["key"].startswith("catalog/songs/audio/")


class TestUploadMultipart:
    """Tests for spooling an incoming UploadFile to disk first."""

    def test_upload_spools_and_cleans_tmp_dir(self, uploader: MediaUploader, s3_client: FakeS3Client) -> None:
        incoming = UploadFile(file=io.BytesIO(b"image-bytes"), filename="photo.JPG")

        url = uploader.upload(incoming, ARTIST_FOLDER)

        assert url.startswith("https://cdn.test/catalog/artists/")
        assert url.endswith(".jpg")
        assert s3_client.uploads[0]["body"] == b"image-bytes"
        assert os.listdir(uploader.tmp_dir) == []

    def test_interrupted_stream_cleans_tmp_dir(self, uploader: MediaUploader, s3_client: FakeS3Client) -> None:
        class BrokenStream(io.BytesIO):
            def __init__(self):
                super().__init__(b"x" * 4096)
                self.reads = 0

            def read(self, size=-1):
                self.reads += 1
                if self.reads > 1:
                    raise ConnectionResetError("client went away")
                return super().read(16)

        incoming = UploadFile(file=BrokenStream(), filename="photo.png")

        with pytest.raises(MediaUploadError) as exc:
            uploader.upload(incoming, ARTIST_FOLDER)

        assert "client went away" in exc.value.detail
        assert s3_client.uploads == []
        assert os.listdir(uploader.tmp_dir) == []


class TestPublicUrl:
    """Tests for URL construction without a CDN base."""

    def test_endpoint_style_url(self, monkeypatch) -> None:
        from catalog_api.config import settings

        monkeypatch.setattr(settings, "S3_ENDPOINT_URL", "https://storage.example.com")
        uploader = MediaUploader(client=FakeS3Client(), bucket="media", root_folder="r", public_base_url="")
        assert uploader.public_url("r/a.png") == "https://storage.example.com/media/r/a.png"
