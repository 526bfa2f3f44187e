# ============================================================================
# FILE: catalog_api/core/storage.py
# Uploads media to S3-compatible object storage and returns public URLs
# ============================================================================
import boto3
import mimetypes
import os
import shutil
import tempfile
import uuid
from botocore.client import Config
from botocore.exceptions import BotoCoreError, ClientError
from fastapi import UploadFile
from typing import Optional
from catalog_api.config import settings
from catalog_api.core.exceptions import MediaUploadError
import logging

logger = logging.getLogger(__name__)

# Folder per entity type
ARTIST_FOLDER = "artists"
ALBUM_FOLDER = "albums"
SONG_FOLDER = "songs"
SONG_AUDIO_FOLDER = "songs/audio"
PLAYLIST_FOLDER = "playlists"

DEFAULT_CONTENT_TYPES = {
    "image": "image/jpeg",
    "audio": "audio/mpeg",
}


def build_s3_client():
    """Create the boto3 client from settings"""
    boto_config = Config(signature_version="s3v4", s3={"addressing_style": "path"})
    return boto3.client(
        "s3",
        endpoint_url=settings.S3_ENDPOINT_URL,
        aws_access_key_id=settings.S3_ACCESS_KEY_ID,
        aws_secret_access_key=settings.S3_SECRET_ACCESS_KEY,
        region_name=settings.S3_REGION_NAME,
        config=boto_config,
    )


class MediaUploader:
    """Forwards local temp files to object storage"""

    def __init__(self, client=None, bucket: str = None, root_folder: str = None,
                 public_base_url: Optional[str] = None, tmp_dir: str = None):
        self.client = client if client is not None else build_s3_client()
        self.bucket = bucket or settings.S3_BUCKET_NAME
        self.root_folder = (root_folder or settings.MEDIA_ROOT_FOLDER).strip("/")
        self.public_base_url = public_base_url if public_base_url is not None else settings.S3_PUBLIC_BASE_URL
        self.tmp_dir = tmp_dir or settings.UPLOAD_TMP_DIR

    def object_key(self, folder: str, filename: str) -> str:
        ext = os.path.splitext(filename)[1].lower()
        return f"{self.root_folder}/{folder.strip('/')}/{uuid.uuid4().hex}{ext}"

    def public_url(self, key: str) -> str:
        if self.public_base_url:
            return f"{self.public_base_url.rstrip('/')}/{key}"
        if settings.S3_ENDPOINT_URL:
            return f"{settings.S3_ENDPOINT_URL.rstrip('/')}/{self.bucket}/{key}"
        return f"https://{self.bucket}.s3.{settings.S3_REGION_NAME}.amazonaws.com/{key}"

    def upload_file(self, path: str, folder: str, resource_type: str = "image") -> str:
        """
        Upload a local file and return its public URL

        The local file is deleted whether the upload succeeds or fails.
        Provider failures raise MediaUploadError with the provider's message
        and HTTP status.
        """
        key = self.object_key(folder, path)
        content_type = mimetypes.guess_type(path)[0] or DEFAULT_CONTENT_TYPES.get(resource_type, "application/octet-stream")
        try:
            self.client.upload_file(path, self.bucket, key, ExtraArgs={"ContentType": content_type})
        except ClientError as e:
            error = e.response.get("Error", {})
            provider_status = e.response.get("ResponseMetadata", {}).get("HTTPStatusCode")
            message = error.get("Message") or error.get("Code") or str(e)
            logger.error(f"Upload to {key} failed: {message}")
            raise MediaUploadError(f"Failed to upload {resource_type}: {message}", provider_status)
        except (BotoCoreError, OSError) as e:
            logger.error(f"Upload to {key} failed: {e}")
            raise MediaUploadError(f"Failed to upload {resource_type}: {e}")
        finally:
            self._remove(path)

        url = self.public_url(key)
        logger.info(f"Uploaded {resource_type} to {key}")
        return url

    def upload(self, upload: UploadFile, folder: str, resource_type: str = "image") -> str:
        """Spool an incoming multipart file to disk, then upload it"""
        path = self.save_temp(upload)
        return self.upload_file(path, folder, resource_type)

    def save_temp(self, upload: UploadFile) -> str:
        os.makedirs(self.tmp_dir, exist_ok=True)
        suffix = os.path.splitext(upload.filename or "")[1].lower()
        with tempfile.NamedTemporaryFile(dir=self.tmp_dir, suffix=suffix, delete=False) as tmp:
            try:
                upload.file.seek(0)
                shutil.copyfileobj(upload.file, tmp)
            except Exception as e:
                tmp.close()
                self._remove(tmp.name)
                logger.error(f"Could not spool upload {upload.filename}: {e}")
                raise MediaUploadError(f"Failed to read uploaded file: {e}")
            return tmp.name

    @staticmethod
    def _remove(path: str) -> None:
        try:
            if os.path.exists(path):
                os.remove(path)
        except OSError as e:
            logger.warning(f"Could not remove temp file {path}: {e}")


_uploader: Optional[MediaUploader] = None


def get_media_uploader() -> MediaUploader:
    """FastAPI dependency; the boto3 client is built on first use"""
    global _uploader
    if _uploader is None:
        _uploader = MediaUploader()
    return _uploader
