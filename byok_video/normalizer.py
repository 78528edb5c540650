"""Map provider success payloads onto GenerationResult."""

import logging
from typing import Any, Callable, Optional

from .exceptions import ProviderJobError, StorageError
from .storage import BlobStore
from .types import GenerationResult, ProviderId, RawPayload

logger = logging.getLogger(__name__)


def _first_or_scalar(value: Any) -> Optional[str]:
    if isinstance(value, list):
        return value[0] if value else None
    return value or None


def _runway_url(data: dict[str, Any]) -> Optional[str]:
    return _first_or_scalar(data.get("output")) or data.get("artifactUrl")


def _replicate_url(data: dict[str, Any]) -> Optional[str]:
    return _first_or_scalar(data.get("output"))


def _object(value: Any) -> dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _fal_url(data: dict[str, Any]) -> Optional[str]:
    return _object(data.get("video")).get("url") or _object(data.get("output")).get("url")


def _luma_url(data: dict[str, Any]) -> Optional[str]:
    return _object(data.get("assets")).get("video")


def _luma_thumbnail(data: dict[str, Any]) -> Optional[str]:
    return _object(data.get("assets")).get("image")


# Where each hosted-URL provider puts the video in its final payload
URL_EXTRACTORS: dict[str, Callable[[dict[str, Any]], Optional[str]]] = {
    "runway": _runway_url,
    "replicate": _replicate_url,
    "fal": _fal_url,
    "luma": _luma_url,
}

THUMBNAIL_EXTRACTORS: dict[str, Callable[[dict[str, Any]], Optional[str]]] = {
    "luma": _luma_thumbnail,
}

# Providers that hand back the video itself instead of a hosted URL
BINARY_PROVIDERS = frozenset({"openai", "huggingface"})


class ResultNormalizer:
    """Turn a RawPayload into a GenerationResult, storing raw bytes when needed."""

    def __init__(self, blob_store: BlobStore):
        self.blob_store = blob_store

    async def normalize(
        self,
        provider: ProviderId,
        payload: RawPayload,
        duration_seconds: Optional[float] = None,
    ) -> GenerationResult:
        """
        Build the caller-facing result for a successful job.

        Args:
            provider: The adapter that produced the payload; always stamped on the result
            payload: The adapter's untouched success payload
            duration_seconds: Duration the adapter actually submitted

        Raises:
            ProviderJobError: The payload holds no usable video
            StorageError: Raw bytes could not be stored
        """
        if provider in BINARY_PROVIDERS:
            video_url = await self._store_content(provider, payload)
            thumbnail_url = None
        else:
            data = payload.data or {}
            video_url = URL_EXTRACTORS[provider](data)
            if not video_url or not isinstance(video_url, str):
                raise ProviderJobError(provider, payload.job_id, "job completed but no video URL found")
            thumbnail = THUMBNAIL_EXTRACTORS.get(provider)
            thumbnail_url = thumbnail(data) if thumbnail else None
            if not isinstance(thumbnail_url, str):
                thumbnail_url = None

        return GenerationResult(
            provider=provider,
            video_url=video_url,
            job_id=payload.job_id,
            duration_seconds=duration_seconds,
            thumbnail_url=thumbnail_url,
        )

    async def _store_content(self, provider: str, payload: RawPayload) -> str:
        if not payload.content:
            raise ProviderJobError(provider, payload.job_id, "provider did not return video data")

        filename = payload.filename or f"{provider}-{payload.job_id or 'video'}.mp4"
        content_type = payload.content_type or "video/mp4"
        try:
            url = await self.blob_store.store(payload.content, filename, content_type)
        except Exception as exc:
            raise StorageError(provider, str(exc)) from exc

        logger.info("[BYOK:%s] Stored %d bytes as %s", provider, len(payload.content), filename)
        return url
