"""Runway ML (Gen-4 Turbo) video generation adapter."""

import logging
from typing import Any, Optional

import httpx

from ..exceptions import ProviderSubmitError
from ..types import GenerationRequest, JobHandle, PollResult, RawPayload
from .base import VideoProviderAdapter, clamp_duration

logger = logging.getLogger(__name__)


class RunwayAdapter(VideoProviderAdapter):
    """Task-based adapter for the Runway developer API."""

    provider_id = "runway"
    BASE_URL = "https://api.dev.runwayml.com/v1"
    API_VERSION = "2024-11-06"
    MODEL = "gen4_turbo"
    MAX_DURATION = 10

    RATIO_MAP = {
        "16:9": "1280:720",
        "9:16": "720:1280",
        "1:1": "720:720",
    }

    FAILED_STATUSES = ("FAILED", "CANCELLED")

    def __init__(
        self,
        http_client: Optional[httpx.AsyncClient] = None,
        timeout: float = 30.0,
        require_image: bool = False,
    ):
        super().__init__(http_client, timeout)
        self.require_image = require_image

    def _get_headers(self, secret: str, content_type: str = "application/json") -> dict[str, str]:
        headers = {
            "Authorization": f"Bearer {secret}",
            "X-Runway-Version": self.API_VERSION,
        }
        if content_type:
            headers["Content-Type"] = content_type
        return headers

    def _endpoint(self, request: GenerationRequest) -> str:
        # Text-only requests go to the image-to-video endpoint as well, without
        # a promptImage. Runway expects an image there; see validate().
        if request.image_url:
            return f"{self.BASE_URL}/image_to_video"
        return f"{self.BASE_URL}/image_to_video"

    def validate(self, request: GenerationRequest) -> None:
        if request.image_url:
            return
        if self.require_image:
            raise ProviderSubmitError(
                self.provider_id, details="image_to_video requires a reference image"
            )
        logger.warning(
            "[BYOK:runway] Text-only request submitted to image_to_video without promptImage"
        )

    def build_payload(self, request: GenerationRequest) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "model": self.MODEL,
            "ratio": self.RATIO_MAP[request.aspect_ratio],
            "duration": clamp_duration(request.effective_duration, self.MAX_DURATION),
            "promptText": request.prompt,
        }
        if request.image_url:
            payload["promptImage"] = request.image_url
        return payload

    async def submit(self, secret: str, request: GenerationRequest) -> JobHandle:
        payload = self.build_payload(request)
        data = await self._post_submit(self._endpoint(request), self._get_headers(secret), payload)

        task_id = data.get("id")
        if not task_id:
            raise ProviderSubmitError(self.provider_id, details="response did not include a task id")
        logger.info("[BYOK:runway] Task created: %s", task_id)
        return JobHandle(provider=self.provider_id, job_id=task_id, duration_seconds=payload["duration"])

    async def poll_once(self, secret: str, handle: JobHandle) -> PollResult:
        data = await self._get_status(
            f"{self.BASE_URL}/tasks/{handle.job_id}",
            self._get_headers(secret, content_type=""),
        )
        if data is None:
            return PollResult(status="pending")

        status = data.get("status")
        if status == "SUCCEEDED":
            return PollResult(
                status="succeeded",
                payload=RawPayload(provider=self.provider_id, job_id=handle.job_id, data=data),
            )
        if status in self.FAILED_STATUSES:
            return PollResult(status="failed", error=data.get("failure") or "Unknown error")

        progress = data.get("progress")
        return PollResult(
            status="pending",
            progress=f"{status} ({progress or 0})" if status else None,
        )
