"""
Durable storage hand-off for generated decks.
"""

from __future__ import annotations

import logging
import os
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Protocol

logger = logging.getLogger(__name__)

MAX_TOPIC_CHARS = 50


@dataclass(frozen=True)
class StorageUploadResult:
    url: Optional[str] = None
    path: Optional[str] = None


class StorageClient(Protocol):
    def is_configured(self) -> bool:
        ...

    def upload_file(self, data: bytes, path: str, content_type: str) -> StorageUploadResult:
        ...


def sanitize_topic_name(topic_name: str) -> str:
    cleaned = re.sub(r"[^a-zA-Z0-9]", "_", topic_name or "")
    return cleaned[:MAX_TOPIC_CHARS].lower()


def extension_for(content_type: str) -> str:
    return "pdf" if "pdf" in (content_type or "").lower() else "pptx"


def build_storage_key(language: str, topic_name: str, timestamp_ms: int, content_type: str) -> str:
    return f"{language}/{sanitize_topic_name(topic_name)}_{timestamp_ms}.{extension_for(content_type)}"


class LocalStorageClient:
    """
    Stores decks under a local directory.

    Keys are never overwritten; public URLs are built from public_base_url
    when given, otherwise file:// URIs are returned.
    """

    def __init__(self, root_dir: Optional[str], public_base_url: Optional[str] = None) -> None:
        self.root_dir = Path(root_dir).resolve() if root_dir else None
        self.public_base_url = public_base_url.rstrip("/") if public_base_url else None

    def is_configured(self) -> bool:
        return self.root_dir is not None

    def upload_file(self, data: bytes, path: str, content_type: str) -> StorageUploadResult:
        if not self.is_configured():
            logger.warning("[LocalStorageClient] Not configured, skipping upload")
            return StorageUploadResult()

        target = (self.root_dir / path).resolve()
        if self.root_dir not in target.parents:
            raise ValueError(f"Storage path escapes the storage root: {path}")

        os.makedirs(target.parent, exist_ok=True)
        # "xb" keeps earlier uploads intact.
        with open(target, "xb") as f:
            f.write(data)

        if self.public_base_url:
            url = f"{self.public_base_url}/{path}"
        else:
            url = target.as_uri()
        logger.info(f"[LocalStorageClient] Stored {len(data)} bytes ({content_type}) at {path}")
        return StorageUploadResult(url=url, path=path)


def as_upload_result(value) -> StorageUploadResult:
    """Accept either a StorageUploadResult or a {"url", "path"} mapping from the collaborator."""
    if isinstance(value, StorageUploadResult):
        return value
    if isinstance(value, dict):
        return StorageUploadResult(url=value.get("url"), path=value.get("path"))
    return StorageUploadResult(url=getattr(value, "url", None), path=getattr(value, "path", None))
