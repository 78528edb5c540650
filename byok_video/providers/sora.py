"""OpenAI Sora video generation adapter (via the openai SDK)."""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator, Callable, Optional

import httpx
from openai import APIConnectionError, APIStatusError, AsyncOpenAI, AuthenticationError, OpenAIError

from ..exceptions import ProviderAuthenticationError, ProviderSubmitError, TransientPollError
from ..types import GenerationRequest, JobHandle, PollResult, RawPayload
from .base import VideoProviderAdapter, clamp_duration

logger = logging.getLogger(__name__)


class SoraAdapter(VideoProviderAdapter):
    """Sora job adapter. The finished video is downloaded as bytes."""

    provider_id = "openai"
    BASE_URL = "https://api.openai.com/v1"
    MODEL = "sora-2"
    MAX_DURATION = 10

    # Sora lengths that fit under MAX_DURATION
    SUPPORTED_DURATIONS = [4, 8]

    # 1:1 has no Sora size, so it falls back to landscape
    SIZE_MAP = {
        "16:9": "1280x720",
        "9:16": "720x1280",
        "1:1": "1280x720",
    }

    DOWNLOAD_TIMEOUT = 300.0

    def __init__(
        self,
        http_client: Optional[httpx.AsyncClient] = None,
        timeout: float = 30.0,
        client_factory: Optional[Callable[[str], AsyncOpenAI]] = None,
    ):
        """
        Initialize the Sora adapter.

        Args:
            http_client: Shared httpx client handed to the SDK
            timeout: Request timeout for create/retrieve calls
            client_factory: Builds an SDK client for a secret. Clients from a
                custom factory are not closed by the adapter.
        """
        super().__init__(http_client, timeout)
        self._owns_clients = client_factory is None
        self._client_factory = client_factory or self._default_client

    def _default_client(self, secret: str) -> AsyncOpenAI:
        return AsyncOpenAI(
            api_key=secret,
            base_url=self.BASE_URL,
            max_retries=0,
            timeout=self.timeout,
            http_client=self.http_client,
        )

    @asynccontextmanager
    async def _sdk(self, secret: str) -> AsyncIterator[AsyncOpenAI]:
        client = self._client_factory(secret)
        try:
            yield client
        finally:
            # Closing the SDK client would also close a shared http_client
            if self._owns_clients and self.http_client is None:
                await client.close()

    def _validate_duration(self, duration: float) -> int:
        """Clamp to MAX_DURATION and snap to the closest supported Sora length."""
        clamped = clamp_duration(duration, self.MAX_DURATION)
        return min(self.SUPPORTED_DURATIONS, key=lambda x: abs(x - clamped))

    async def submit(self, secret: str, request: GenerationRequest) -> JobHandle:
        seconds = self._validate_duration(request.effective_duration)
        size = self.SIZE_MAP[request.aspect_ratio]

        async with self._sdk(secret) as client:
            try:
                video = await client.videos.create(
                    model=self.MODEL,
                    prompt=request.prompt,
                    seconds=str(seconds),
                    size=size,
                )
            except AuthenticationError as exc:
                raise ProviderAuthenticationError(self.provider_id, exc.message) from exc
            except APIStatusError as exc:
                raise ProviderSubmitError(self.provider_id, exc.status_code, exc.message) from exc
            except OpenAIError as exc:
                raise ProviderSubmitError(self.provider_id, details=str(exc)) from exc

        logger.info("[BYOK:openai] Video job created: %s", video.id)
        return JobHandle(provider=self.provider_id, job_id=video.id, duration_seconds=seconds)

    async def poll_once(self, secret: str, handle: JobHandle) -> PollResult:
        async with self._sdk(secret) as client:
            try:
                video = await client.videos.retrieve(handle.job_id)
            except APIConnectionError as exc:
                raise TransientPollError(self.provider_id, str(exc)) from exc
            except APIStatusError as exc:
                logger.info(
                    "[BYOK:openai] Status check returned %d, treating as pending", exc.status_code
                )
                return PollResult(status="pending")

            if video.status == "failed":
                error = getattr(video, "error", None)
                return PollResult(status="failed", error=getattr(error, "message", None) or "Unknown")

            if video.status != "completed":
                progress = getattr(video, "progress", None)
                return PollResult(status="pending", progress=f"{video.status} ({progress or 0}%)")

            try:
                content = await client.videos.download_content(
                    handle.job_id, timeout=self.DOWNLOAD_TIMEOUT
                )
            except APIConnectionError as exc:
                raise TransientPollError(self.provider_id, f"download failed: {exc}") from exc
            except APIStatusError as exc:
                logger.info("[BYOK:openai] Download returned %d, retrying next tick", exc.status_code)
                return PollResult(status="pending")

        return PollResult(
            status="succeeded",
            payload=RawPayload(
                provider=self.provider_id,
                job_id=handle.job_id,
                content=content.content,
                content_type="video/mp4",
                filename=f"sora-{handle.job_id}.mp4",
            ),
        )
