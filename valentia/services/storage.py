"""
Attachment storage.

LocalStorage keeps files on disk under UPLOAD_DIR. SupabaseStorage talks to
the Supabase Storage REST API with httpx using the service role key.
"""

from pathlib import Path
from typing import Iterable, List, Optional

import httpx

from valentia.core.config import settings


class StorageError(Exception):
    pass


class StorageBackend:
    async def upload(self, path: str, content: bytes, content_type: str) -> str:
        raise NotImplementedError

    async def download(self, path: str) -> bytes:
        raise NotImplementedError

    async def remove(self, paths: Iterable[str]) -> None:
        raise NotImplementedError


class LocalStorage(StorageBackend):
    def __init__(self, root):
        self.root = Path(root).resolve()

    def _resolve(self, path: str) -> Path:
        target = (self.root / path).resolve()
        if self.root not in target.parents:
            raise StorageError(f"Path escapes storage root: {path}")
        return target

    async def upload(self, path: str, content: bytes, content_type: str) -> str:
        target = self._resolve(path)
        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_bytes(content)
        except OSError as e:
            raise StorageError(f"Failed to store {path}: {e}") from e
        return path

    async def download(self, path: str) -> bytes:
        target = self._resolve(path)
        if not target.is_file():
            raise StorageError(f"File not found: {path}")
        return target.read_bytes()

    async def remove(self, paths: Iterable[str]) -> None:
        for path in paths:
            target = self._resolve(path)
            if target.is_file():
                target.unlink()
                # drop the per-application folder once it is empty
                if target.parent != self.root and not any(target.parent.iterdir()):
                    target.parent.rmdir()


class SupabaseStorage(StorageBackend):
    def __init__(
        self,
        url: str,
        service_key: str,
        bucket: str,
        timeout: float = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = url.rstrip("/") + "/storage/v1/object"
        self.service_key = service_key
        self.bucket = bucket
        self.timeout = timeout
        self.transport = transport

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(timeout=self.timeout, transport=self.transport)

    def _headers(self, **extra) -> dict:
        headers = {
            "Authorization": f"Bearer {self.service_key}",
            "apikey": self.service_key,
        }
        headers.update(extra)
        return headers

    def _object_url(self, path: str) -> str:
        return f"{self.base_url}/{self.bucket}/{path.lstrip('/')}"

    async def upload(self, path: str, content: bytes, content_type: str) -> str:
        async with self._client() as client:
            resp = await client.post(
                self._object_url(path),
                content=content,
                headers=self._headers(**{"Content-Type": content_type, "x-upsert": "false"}),
            )
        if resp.status_code >= 400:
            raise StorageError(f"Upload failed for {path}: {resp.status_code} {resp.text}")
        return path

    async def download(self, path: str) -> bytes:
        async with self._client() as client:
            resp = await client.get(self._object_url(path), headers=self._headers())
        if resp.status_code >= 400:
            raise StorageError(f"Download failed for {path}: {resp.status_code}")
        return resp.content

    async def remove(self, paths: Iterable[str]) -> None:
        prefixes: List[str] = [p for p in paths if p]
        if not prefixes:
            return
        async with self._client() as client:
            resp = await client.request(
                "DELETE",
                f"{self.base_url}/{self.bucket}",
                json={"prefixes": prefixes},
                headers=self._headers(),
            )
        if resp.status_code >= 400:
            raise StorageError(f"Delete failed: {resp.status_code} {resp.text}")


def get_storage() -> StorageBackend:
    if settings.storage_backend.lower() == "supabase":
        if not (settings.supabase_url and settings.supabase_service_key):
            raise StorageError("SUPABASE_URL and SUPABASE_SERVICE_KEY must be set")
        return SupabaseStorage(
            settings.supabase_url,
            settings.supabase_service_key,
            settings.supabase_bucket,
        )
    return LocalStorage(settings.upload_dir)
