"""Custom exceptions for the BYOK video engine."""

from __future__ import annotations

from typing import TYPE_CHECKING, Sequence

if TYPE_CHECKING:
    from .types import ProviderAttempt


class VideoGenerationError(Exception):
    """Base exception for video generation errors."""

    def __init__(self, message: str, provider: str | None = None):
        self.message = message
        self.provider = provider
        super().__init__(message)


class ConfigurationError(VideoGenerationError):
    """Raised when no provider has a usable credential."""

    code = "NO_API_KEY"

    def __init__(self, supported: Sequence[str]):
        self.supported = list(supported)
        super().__init__(
            f"{self.code}: No video generation API key configured. "
            "Add at least one video provider key. "
            f"Supported: {', '.join(self.supported)}."
        )


class ProviderNotFoundError(VideoGenerationError):
    """Raised when an unknown provider is requested."""

    def __init__(self, provider: str):
        super().__init__(f"Unknown video provider: {provider}", provider)


class ProviderSubmitError(VideoGenerationError):
    """Raised when creating a generation job fails."""

    def __init__(self, provider: str, status_code: int | None = None, details: str | None = None):
        message = f"Video generation request failed for {provider}"
        if status_code:
            message += f" (status {status_code})"
        if details:
            message += f": {details}"
        self.status_code = status_code
        self.details = details
        super().__init__(message, provider)


class ProviderAuthenticationError(ProviderSubmitError):
    """Raised when the provider rejects the credential."""

    def __init__(self, provider: str, details: str | None = None):
        super().__init__(provider, 401, f"Authentication failed: {details or 'Invalid API key'}")


class ProviderJobError(VideoGenerationError):
    """Raised when the provider reports a failed job or an unusable result."""

    def __init__(self, provider: str, job_id: str | None = None, details: str | None = None):
        self.job_id = job_id
        self.details = details
        message = f"Video generation job failed for {provider}"
        if job_id:
            message += f" ({job_id})"
        message += f": {details or 'Unknown error'}"
        super().__init__(message, provider)


class VideoGenerationTimeoutError(VideoGenerationError):
    """Raised when video generation times out."""

    def __init__(self, provider: str, job_id: str, timeout_seconds: float):
        self.job_id = job_id
        self.timeout_seconds = timeout_seconds
        super().__init__(
            f"Video generation timed out after {timeout_seconds}s: {job_id} (provider: {provider})",
            provider,
        )


class StorageError(VideoGenerationError):
    """Raised when generated bytes cannot be written to the blob store."""

    def __init__(self, provider: str, details: str):
        super().__init__(f"Failed to store video from {provider}: {details}", provider)


class TransientPollError(VideoGenerationError):
    """A status check failed at the transport level. Absorbed by the poll loop."""

    def __init__(self, provider: str, details: str):
        super().__init__(f"Transient status check error for {provider}: {details}", provider)


class AllProvidersExhaustedError(VideoGenerationError):
    """Raised when every credentialed provider was attempted and failed."""

    def __init__(self, attempts: Sequence[ProviderAttempt]):
        self.attempts = list(attempts)
        last = self.attempts[-1] if self.attempts else None
        self.last_error = last.error if last else "Unknown error"
        super().__init__(
            f"Video generation failed with all providers. Last error: {self.last_error}",
            last.provider if last else None,
        )
