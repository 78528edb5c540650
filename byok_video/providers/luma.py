"""Luma AI Dream Machine video generation adapter."""

import logging
from typing import Any

from ..exceptions import ProviderSubmitError
from ..types import GenerationRequest, JobHandle, PollResult, RawPayload
from .base import VideoProviderAdapter

logger = logging.getLogger(__name__)


class LumaAdapter(VideoProviderAdapter):
    """Generation-based adapter for the Dream Machine API."""

    provider_id = "luma"
    BASE_URL = "https://api.lumalabs.ai/dream-machine/v1"

    # Duration is not configurable here; Dream Machine clips are reported as 5s
    REPORTED_DURATION = 5

    def _get_headers(self, secret: str) -> dict[str, str]:
        return {
            "Authorization": f"Bearer {secret}",
            "Content-Type": "application/json",
        }

    def build_payload(self, request: GenerationRequest) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "prompt": request.prompt,
            "aspect_ratio": "9:16" if request.aspect_ratio == "9:16" else "16:9",
            "loop": False,
        }
        if request.image_url:
            payload["keyframes"] = {"frame0": {"type": "image", "url": request.image_url}}
        return payload

    async def submit(self, secret: str, request: GenerationRequest) -> JobHandle:
        data = await self._post_submit(
            f"{self.BASE_URL}/generations", self._get_headers(secret), self.build_payload(request)
        )
        generation_id = data.get("id")
        if not generation_id:
            raise ProviderSubmitError(self.provider_id, details="response did not include a generation id")
        logger.info("[BYOK:luma] Generation created: %s", generation_id)
        return JobHandle(
            provider=self.provider_id,
            job_id=generation_id,
            duration_seconds=self.REPORTED_DURATION,
        )

    async def poll_once(self, secret: str, handle: JobHandle) -> PollResult:
        data = await self._get_status(
            f"{self.BASE_URL}/generations/{handle.job_id}",
            {"Authorization": f"Bearer {secret}"},
        )
        if data is None:
            return PollResult(status="pending")

        state = data.get("state")
        if state == "completed":
            return PollResult(
                status="succeeded",
                payload=RawPayload(provider=self.provider_id, job_id=handle.job_id, data=data),
            )
        if state == "failed":
            return PollResult(status="failed", error=data.get("failure_reason") or "Unknown")
        return PollResult(status="pending", progress=state)
