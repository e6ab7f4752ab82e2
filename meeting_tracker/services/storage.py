"""
Where uploaded transcripts are kept.

Objects live under ``{user}/{meetingId}/{timestamp}-{filename}``, on the local
filesystem in development or in a Supabase Storage bucket. The stored path is
what ends up in ``documents.file_path`` and on each chunk.
"""

import logging
import time
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Optional
from uuid import UUID

from meeting_tracker.core.config import settings

logger = logging.getLogger(__name__)


def build_storage_path(
    user_id: UUID | str,
    meeting_id: UUID | str,
    filename: str,
    timestamp_ms: Optional[int] = None,
) -> str:
    """Object path for an upload; ``timestamp_ms`` defaults to now."""
    if timestamp_ms is None:
        timestamp_ms = int(time.time() * 1000)
    return f"{user_id}/{meeting_id}/{timestamp_ms}-{Path(filename).name}"


class StorageService(ABC):
    @abstractmethod
    def upload(self, path: str, content: bytes, content_type: str) -> str:
        """Store ``content`` at ``path`` and return the stored location."""

    @abstractmethod
    def delete(self, path: str) -> None:
        """Remove a stored object; missing objects are ignored."""


class LocalStorageService(StorageService):
    def __init__(self, base_dir: str):
        self.base_dir = Path(base_dir)
        self.base_dir.mkdir(parents=True, exist_ok=True)

    def upload(self, path: str, content: bytes, content_type: str) -> str:
        target = self.base_dir / path
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_bytes(content)
        return str(target)

    def delete(self, path: str) -> None:
        target = Path(path)
        if not target.is_absolute():
            target = self.base_dir / path
        target.unlink(missing_ok=True)


class SupabaseStorageService(StorageService):
    def __init__(self, bucket: str):
        if not settings.SUPABASE_URL or not settings.SUPABASE_SERVICE_KEY:
            raise ValueError(
                "SUPABASE_URL and SUPABASE_SERVICE_KEY must be set for Supabase storage"
            )

        from supabase import create_client

        self.client = create_client(settings.SUPABASE_URL, settings.SUPABASE_SERVICE_KEY)
        self.bucket = bucket

    def upload(self, path: str, content: bytes, content_type: str) -> str:
        """Upload to the bucket; the returned location is the bucket-relative path."""
        path = path.lstrip("/")
        self.client.storage.from_(self.bucket).upload(
            path, content, {"content-type": content_type}
        )
        logger.debug(f"Uploaded {path} to bucket {self.bucket}")
        return path

    def delete(self, path: str) -> None:
        self.client.storage.from_(self.bucket).remove([path.lstrip("/")])


_storage_services: dict[str, StorageService] = {}


def get_storage_service() -> StorageService:
    """Storage backend for STORAGE_PROVIDER, created once per provider."""
    provider = settings.STORAGE_PROVIDER
    if provider not in _storage_services:
        if provider == "supabase":
            _storage_services[provider] = SupabaseStorageService(settings.SUPABASE_STORAGE_BUCKET)
        else:
            _storage_services[provider] = LocalStorageService(settings.UPLOAD_DIR)
    return _storage_services[provider]
