"""fal.ai (HunyuanVideo) queue-based video generation adapter."""

import logging
from typing import Any

from ..exceptions import ProviderSubmitError
from ..types import GenerationRequest, JobHandle, PollResult, RawPayload
from .base import VideoProviderAdapter, frames_for

logger = logging.getLogger(__name__)


class FalAdapter(VideoProviderAdapter):
    """Adapter for the fal.ai queue API: submit, poll status, then fetch the result."""

    provider_id = "fal"
    BASE_URL = "https://queue.fal.run"
    TEXT_MODEL = "fal-ai/hunyuan-video"
    IMAGE_MODEL = "fal-ai/hunyuan-video/image-to-video"
    MAX_FRAMES = 129

    def _get_headers(self, secret: str, content_type: str = "application/json") -> dict[str, str]:
        headers = {"Authorization": f"Key {secret}"}
        if content_type:
            headers["Content-Type"] = content_type
        return headers

    def _model(self, request: GenerationRequest) -> str:
        return self.IMAGE_MODEL if request.image_url else self.TEXT_MODEL

    def build_payload(self, request: GenerationRequest) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "prompt": request.prompt,
            "num_frames": frames_for(request.effective_duration, self.MAX_FRAMES),
            "num_inference_steps": 30,
            "aspect_ratio": "9:16" if request.aspect_ratio == "9:16" else "16:9",
            "resolution": request.resolution,
            "enable_safety_checker": False,
        }
        if request.image_url:
            payload["image_url"] = request.image_url
        return payload

    async def submit(self, secret: str, request: GenerationRequest) -> JobHandle:
        model = self._model(request)
        data = await self._post_submit(
            f"{self.BASE_URL}/{model}", self._get_headers(secret), self.build_payload(request)
        )
        request_id = data.get("request_id")
        if not request_id:
            raise ProviderSubmitError(self.provider_id, details="response did not include a request_id")
        logger.info("[BYOK:fal] Job submitted: %s", request_id)
        return JobHandle(
            provider=self.provider_id,
            job_id=request_id,
            duration_seconds=request.effective_duration,
            metadata={"model": model},
        )

    async def poll_once(self, secret: str, handle: JobHandle) -> PollResult:
        base = f"{self.BASE_URL}/{handle.metadata['model']}/requests/{handle.job_id}"
        headers = self._get_headers(secret, content_type="")

        status_data = await self._get_status(f"{base}/status", headers)
        if status_data is None:
            return PollResult(status="pending")

        status = status_data.get("status")
        if status == "FAILED":
            return PollResult(status="failed", error=status_data.get("error") or "Unknown")
        if status != "COMPLETED":
            return PollResult(status="pending", progress=status)

        result = await self._get_status(base, headers)
        if result is None:
            return PollResult(status="pending", progress="COMPLETED, result not ready")
        return PollResult(
            status="succeeded",
            payload=RawPayload(provider=self.provider_id, job_id=handle.job_id, data=result),
        )
