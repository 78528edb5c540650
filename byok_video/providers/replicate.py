"""Replicate (Wan 2.1) video generation adapter."""

import logging
from typing import Any

from ..exceptions import ProviderSubmitError
from ..types import GenerationRequest, JobHandle, PollResult, RawPayload
from .base import VideoProviderAdapter, frames_for

logger = logging.getLogger(__name__)


class ReplicateAdapter(VideoProviderAdapter):
    """Prediction-based adapter for the Replicate API."""

    provider_id = "replicate"
    BASE_URL = "https://api.replicate.com/v1"
    MODEL = "wan-ai/wan2.1-t2v-14b"
    MAX_FRAMES = 81

    FAILED_STATUSES = ("failed", "canceled")

    def _get_headers(self, secret: str) -> dict[str, str]:
        return {
            "Authorization": f"Bearer {secret}",
            "Content-Type": "application/json",
        }

    def build_payload(self, request: GenerationRequest) -> dict[str, Any]:
        model_input: dict[str, Any] = {
            "prompt": request.prompt,
            "num_frames": frames_for(request.effective_duration, self.MAX_FRAMES),
            "guidance_scale": 5.0,
            "num_inference_steps": 30,
        }
        if request.image_url:
            model_input["image"] = request.image_url
        return {"model": self.MODEL, "input": model_input}

    async def submit(self, secret: str, request: GenerationRequest) -> JobHandle:
        data = await self._post_submit(
            f"{self.BASE_URL}/predictions", self._get_headers(secret), self.build_payload(request)
        )
        prediction_id = data.get("id")
        if not prediction_id:
            raise ProviderSubmitError(self.provider_id, details="response did not include a prediction id")
        logger.info("[BYOK:replicate] Prediction created: %s", prediction_id)
        return JobHandle(
            provider=self.provider_id,
            job_id=prediction_id,
            duration_seconds=request.effective_duration,
        )

    async def poll_once(self, secret: str, handle: JobHandle) -> PollResult:
        data = await self._get_status(
            f"{self.BASE_URL}/predictions/{handle.job_id}",
            {"Authorization": f"Bearer {secret}"},
        )
        if data is None:
            return PollResult(status="pending")

        status = data.get("status")
        if status == "succeeded":
            return PollResult(
                status="succeeded",
                payload=RawPayload(provider=self.provider_id, job_id=handle.job_id, data=data),
            )
        if status in self.FAILED_STATUSES:
            return PollResult(status="failed", error=data.get("error") or "Unknown")
        return PollResult(status="pending", progress=status)
