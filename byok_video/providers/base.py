"""Abstract base class for video generation provider adapters."""

import logging
import math
from abc import ABC, abstractmethod
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, ClassVar, Optional

import httpx

from ..exceptions import ProviderAuthenticationError, ProviderSubmitError, TransientPollError
from ..types import GenerationRequest, JobHandle, PollResult, ProviderId

logger = logging.getLogger(__name__)


def clamp_duration(seconds: float, maximum: int) -> int:
    """Whole seconds in [1, maximum]."""
    return max(1, min(int(round(seconds)), maximum))


def frames_for(seconds: float, max_frames: int, fps: int = 8) -> int:
    """Convert a duration to a frame count in [1, max_frames]."""
    return max(1, min(int(round(seconds * fps)), max_frames))


class VideoProviderAdapter(ABC):
    """
    Translate the canonical request into one provider's wire protocol.

    Adapters hold no per-job state: the secret is passed to every call and
    everything needed to poll lives on the JobHandle. An injected
    ``httpx.AsyncClient`` is used as-is and never closed here; without one,
    a short-lived client is opened for each call.
    """

    provider_id: ClassVar[ProviderId]

    def __init__(self, http_client: Optional[httpx.AsyncClient] = None, timeout: float = 30.0):
        self.http_client = http_client
        self.timeout = timeout

    @asynccontextmanager
    async def _client(self) -> AsyncIterator[httpx.AsyncClient]:
        if self.http_client is not None:
            yield self.http_client
            return
        async with httpx.AsyncClient(timeout=self.timeout) as client:
            yield client

    def validate(self, request: GenerationRequest) -> None:
        """Pre-submission check. Raise ProviderSubmitError to skip this provider."""

    @abstractmethod
    async def submit(self, secret: str, request: GenerationRequest) -> JobHandle:
        """
        Create the generation job.

        Args:
            secret: The caller's credential for this provider
            request: Canonical generation request

        Returns:
            JobHandle identifying the provider job

        Raises:
            ProviderSubmitError: The provider rejected the request
        """
        ...

    @abstractmethod
    async def poll_once(self, secret: str, handle: JobHandle) -> PollResult:
        """
        Check the job once.

        Returns:
            PollResult; ``pending`` for in-flight jobs and non-2xx status responses

        Raises:
            TransientPollError: The status request failed at the transport level
        """
        ...

    async def _post_submit(
        self, url: str, headers: dict[str, str], payload: dict[str, Any]
    ) -> dict[str, Any]:
        """POST a job creation request and return the JSON body."""
        async with self._client() as client:
            try:
                response = await client.post(url, headers=headers, json=payload, timeout=self.timeout)
            except httpx.HTTPError as exc:
                raise ProviderSubmitError(self.provider_id, details=str(exc) or type(exc).__name__) from exc

        self._raise_for_submit(response)
        try:
            data = response.json()
        except ValueError as exc:
            raise ProviderSubmitError(
                self.provider_id, response.status_code, "response was not valid JSON"
            ) from exc
        if not isinstance(data, dict):
            raise ProviderSubmitError(
                self.provider_id, response.status_code, "response was not a JSON object"
            )
        return data

    def _raise_for_submit(self, response: httpx.Response) -> None:
        if response.status_code == 401:
            raise ProviderAuthenticationError(self.provider_id, _error_detail(response))
        if not response.is_success:
            raise ProviderSubmitError(self.provider_id, response.status_code, _error_detail(response))

    async def _get_status(self, url: str, headers: dict[str, str]) -> Optional[dict[str, Any]]:
        """GET a status document. None means the provider answered with a non-2xx status."""
        async with self._client() as client:
            try:
                response = await client.get(url, headers=headers, timeout=self.timeout)
            except httpx.HTTPError as exc:
                raise TransientPollError(self.provider_id, str(exc) or type(exc).__name__) from exc

        if not response.is_success:
            logger.info(
                "[BYOK:%s] Status check returned %d, treating as pending", self.provider_id, response.status_code
            )
            return None
        try:
            data = response.json()
        except ValueError as exc:
            raise TransientPollError(self.provider_id, "status response was not valid JSON") from exc
        if not isinstance(data, dict):
            raise TransientPollError(self.provider_id, "status response was not a JSON object")
        return data


def _error_detail(response: httpx.Response) -> Optional[str]:
    """Best-effort error message from a failed response."""
    try:
        data = response.json()
    except ValueError:
        return response.text or None
    if isinstance(data, dict):
        error = data.get("error")
        if isinstance(error, dict):
            return error.get("message") or str(error)
        if error:
            return str(error)
        detail = data.get("detail") or data.get("message")
        if detail:
            return str(detail)
    return response.text or None
