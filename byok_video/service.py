"""Video generation service: provider selection with sequential fallback."""

import asyncio
import logging
import time
from typing import Awaitable, Callable, Mapping, Optional

import httpx

from .catalog import VIDEO_PROVIDERS
from .config import VideoEngineSettings
from .exceptions import (
    AllProvidersExhaustedError,
    ConfigurationError,
    ProviderSubmitError,
    VideoGenerationError,
)
from .normalizer import ResultNormalizer
from .polling import PollLoop
from .providers import VideoProviderAdapter, build_adapter
from .selector import select_provider
from .storage import BlobStore, LocalBlobStore
from .types import CredentialSet, GenerationRequest, GenerationResult, ProviderAttempt

logger = logging.getLogger(__name__)


class VideoGenerationService:
    """
    Generate one video per call using the caller's own provider keys.

    The selected provider is tried first; when it fails (submit error, job
    failure, timeout, malformed response) the next credentialed provider in
    priority order is tried. Providers are attempted one at a time, never in
    parallel, and no provider is attempted twice within a call.
    """

    def __init__(
        self,
        blob_store: Optional[BlobStore] = None,
        settings: Optional[VideoEngineSettings] = None,
        http_client: Optional[httpx.AsyncClient] = None,
        adapters: Optional[Mapping[str, VideoProviderAdapter]] = None,
        *,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
        clock: Callable[[], float] = time.monotonic,
    ):
        """
        Initialize the video generation service.

        Args:
            blob_store: Storage for providers that return raw bytes.
                Defaults to a LocalBlobStore under settings.storage_dir.
            settings: Engine settings. Uses defaults if not provided.
            http_client: Shared httpx client passed to every adapter
            adapters: Prebuilt adapters keyed by provider id (mainly for tests)
            sleep: Coroutine used by the poll loop to wait between ticks
            clock: Monotonic clock used for the poll deadline
        """
        self.settings = settings or VideoEngineSettings()
        self._http_client = http_client
        self._adapters: dict[str, VideoProviderAdapter] = dict(adapters or {})
        self.blob_store = blob_store or LocalBlobStore(
            self.settings.storage_dir, self.settings.public_url
        )
        self.normalizer = ResultNormalizer(self.blob_store)
        self._sleep = sleep
        self._clock = clock

    def _get_adapter(self, provider: str) -> VideoProviderAdapter:
        """Get or create an adapter instance."""
        if provider not in self._adapters:
            self._adapters[provider] = build_adapter(provider, self.settings, self._http_client)
        return self._adapters[provider]

    async def generate(
        self,
        credentials: CredentialSet,
        request: GenerationRequest,
    ) -> GenerationResult:
        """
        Generate a video, falling back across credentialed providers.

        Args:
            credentials: The caller's provider secrets and preferred provider
            request: Canonical generation request

        Returns:
            GenerationResult stamped with the provider that produced the video

        Raises:
            ConfigurationError: No provider has a usable secret
            AllProvidersExhaustedError: Every credentialed provider failed

        Example:
            service = VideoGenerationService()
            result = await service.generate(
                CredentialSet(keys={"luma": "luma-..."}),
                GenerationRequest(prompt="A cat walking", aspect_ratio="9:16"),
            )
        """
        attempted: set[str] = set()
        attempts: list[ProviderAttempt] = []

        provider = select_provider(credentials, attempted)
        if provider is None:
            raise ConfigurationError([info.name for info in VIDEO_PROVIDERS])

        while provider is not None:
            if attempts:
                logger.info("[BYOK] Falling back to %s...", provider)
            else:
                logger.info("[BYOK] Using provider: %s", provider)

            try:
                return await self._attempt(provider, credentials, request)
            except VideoGenerationError as exc:
                logger.error("[BYOK:%s] Failed: %s", provider, exc.message)
                attempts.append(ProviderAttempt(provider=provider, error=exc.message))
                attempted.add(provider)
            except Exception as exc:
                # Malformed provider data; counts as a failed attempt
                logger.exception("[BYOK:%s] Unexpected error", provider)
                attempts.append(ProviderAttempt(provider=provider, error=f"{type(exc).__name__}: {exc}"))
                attempted.add(provider)

            provider = select_provider(credentials, attempted)

        raise AllProvidersExhaustedError(attempts)

    async def _attempt(
        self,
        provider: str,
        credentials: CredentialSet,
        request: GenerationRequest,
    ) -> GenerationResult:
        """Run validate, submit, poll and normalize for a single provider."""
        adapter = self._get_adapter(provider)
        secret = credentials.secret_for(provider)
        if secret is None:
            raise ProviderSubmitError(provider, details="no usable credential")

        adapter.validate(request)
        handle = await adapter.submit(secret, request)

        if handle.result is not None:
            payload = handle.result
        else:
            poller = PollLoop(
                self.settings.poll_interval_seconds,
                self.settings.poll_timeout_seconds,
                sleep=self._sleep,
                clock=self._clock,
            )
            payload = await poller.run(
                lambda: adapter.poll_once(secret, handle),
                provider=adapter.provider_id,
                job_id=handle.job_id,
            )

        result = await self.normalizer.normalize(adapter.provider_id, payload, handle.duration_seconds)
        logger.info("[BYOK:%s] Video ready: %s", result.provider, result.video_url)
        return result
