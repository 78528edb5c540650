"""Blob storage boundary for providers that return raw video bytes."""

import logging
import os
from pathlib import Path
from typing import Optional, Protocol, runtime_checkable

logger = logging.getLogger(__name__)


@runtime_checkable
class BlobStore(Protocol):
    """Stores bytes and returns a URL the caller can retrieve them from."""

    async def store(self, data: bytes, filename: str, content_type: str = "video/mp4") -> str: ...


class LocalBlobStore:
    """Save videos on disk and return public (or file://) URLs."""

    def __init__(self, base_dir: Path, public_url: Optional[str] = None) -> None:
        self.base_dir = Path(base_dir)
        self.public_url = public_url

    async def store(self, data: bytes, filename: str, content_type: str = "video/mp4") -> str:
        key = f"videos/{os.path.basename(filename) or 'video.mp4'}"
        path = self.base_dir / key
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(data)
        logger.info("Stored %d bytes (%s) at %s", len(data), content_type, path)
        return self._build_url(key, path)

    def _build_url(self, key: str, path: Path) -> str:
        """Build URL using public_url if configured, else a file URI."""
        if self.public_url:
            return f"{self.public_url.rstrip('/')}/{key}"
        return path.resolve().as_uri()
