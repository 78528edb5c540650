"""Hugging Face Inference API (free tier) video generation adapter."""

import asyncio
import logging
import time
import uuid
from typing import Any, Awaitable, Callable, Optional

import httpx

from ..exceptions import ProviderAuthenticationError, ProviderJobError, ProviderSubmitError
from ..types import GenerationRequest, JobHandle, PollResult, RawPayload
from .base import VideoProviderAdapter, _error_detail, frames_for

logger = logging.getLogger(__name__)


class HuggingFaceAdapter(VideoProviderAdapter):
    """
    Synchronous inference adapter.

    The inference call returns the video bytes directly, so the result is
    attached to the JobHandle at submit time and ``poll_once`` only hands it
    back. A 503 means the model is still loading; the request is retried
    after ``loading_retry_delay`` seconds, at most ``max_loading_retries`` times.
    """

    provider_id = "huggingface"
    BASE_URL = "https://api-inference.huggingface.co/models"
    MODEL = "Lightricks/LTX-Video-0.9.8-13B-distilled"
    MAX_FRAMES = 65

    # Token value meaning "call anonymously"
    FREE_TOKEN = "free"

    def __init__(
        self,
        http_client: Optional[httpx.AsyncClient] = None,
        timeout: float = 300.0,
        loading_retry_delay: float = 30.0,
        max_loading_retries: int = 1,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ):
        super().__init__(http_client, timeout)
        self.loading_retry_delay = loading_retry_delay
        self.max_loading_retries = max_loading_retries
        self._sleep = sleep

    def _get_headers(self, secret: str) -> dict[str, str]:
        headers = {"Content-Type": "application/json"}
        if secret and secret != self.FREE_TOKEN:
            headers["Authorization"] = f"Bearer {secret}"
        return headers

    def build_payload(self, request: GenerationRequest) -> dict[str, Any]:
        return {
            "inputs": request.prompt,
            "parameters": {
                "num_frames": frames_for(request.effective_duration, self.MAX_FRAMES),
                "num_inference_steps": 25,
            },
        }

    async def _infer(self, secret: str, payload: dict[str, Any]) -> httpx.Response:
        url = f"{self.BASE_URL}/{self.MODEL}"
        async with self._client() as client:
            for attempt in range(self.max_loading_retries + 1):
                try:
                    response = await client.post(
                        url, headers=self._get_headers(secret), json=payload, timeout=self.timeout
                    )
                except httpx.HTTPError as exc:
                    raise ProviderSubmitError(self.provider_id, details=str(exc) or type(exc).__name__) from exc

                if response.status_code != 503 or attempt == self.max_loading_retries:
                    return response

                logger.info(
                    "[BYOK:huggingface] Model is loading, waiting %.0fs (retry %d/%d)",
                    self.loading_retry_delay,
                    attempt + 1,
                    self.max_loading_retries,
                )
                await self._sleep(self.loading_retry_delay)
        return response

    async def submit(self, secret: str, request: GenerationRequest) -> JobHandle:
        response = await self._infer(secret, self.build_payload(request))

        if response.status_code == 401:
            raise ProviderAuthenticationError(self.provider_id, _error_detail(response))
        if not response.is_success:
            raise ProviderSubmitError(self.provider_id, response.status_code, _error_detail(response))

        job_id = f"hf-{int(time.time() * 1000)}-{uuid.uuid4().hex[:12]}"
        content_type = response.headers.get("content-type", "")
        if "video" not in content_type and "octet-stream" not in content_type:
            raise ProviderJobError(self.provider_id, job_id, "did not return video data")

        logger.info("[BYOK:huggingface] Received %d bytes of video", len(response.content))
        return JobHandle(
            provider=self.provider_id,
            job_id=job_id,
            duration_seconds=request.effective_duration,
            result=RawPayload(
                provider=self.provider_id,
                content=response.content,
                content_type="video/mp4",
                filename=f"{job_id}.mp4",
            ),
        )

    async def poll_once(self, secret: str, handle: JobHandle) -> PollResult:
        if handle.result is None:
            return PollResult(status="failed", error="no inference result attached to job")
        return PollResult(status="succeeded", payload=handle.result)
