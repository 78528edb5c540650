"""Pydantic models for video generation requests, credentials and results."""

from datetime import datetime, timezone
from typing import Any, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

ProviderId = Literal["runway", "openai", "replicate", "fal", "luma", "huggingface"]

DEFAULT_DURATION_SECONDS = 5


class GenerationRequest(BaseModel):
    """Canonical, provider-independent video generation request."""

    model_config = ConfigDict(frozen=True)

    prompt: str = Field(..., min_length=1, description="Text description for the video model")
    image_url: Optional[str] = Field(None, description="Reference image for image-to-video")
    duration_seconds: Optional[float] = Field(
        None, gt=0, description="Requested duration in seconds (default 5)"
    )
    aspect_ratio: Literal["16:9", "9:16", "1:1"] = Field("16:9", description="Video aspect ratio")
    resolution: Literal["720p", "1080p"] = Field("720p", description="Resolution hint")

    @property
    def effective_duration(self) -> float:
        return self.duration_seconds or DEFAULT_DURATION_SECONDS


class CredentialSet(BaseModel):
    """Caller-owned provider secrets plus an optional preferred provider."""

    model_config = ConfigDict(frozen=True)

    keys: dict[str, Optional[str]] = Field(
        default_factory=dict, repr=False, description="Provider id -> secret"
    )
    preferred: Optional[str] = Field(None, description="Preferred provider id")

    @field_validator("preferred")
    @classmethod
    def _blank_preferred_is_none(cls, value: Optional[str]) -> Optional[str]:
        if value is not None and not value.strip():
            return None
        return value

    def secret_for(self, provider: str) -> Optional[str]:
        """Return the usable secret for a provider, or None if it is missing or blank."""
        secret = self.keys.get(provider)
        if secret is None or not secret.strip():
            return None
        return secret.strip()

    def has_secret(self, provider: str) -> bool:
        return self.secret_for(provider) is not None


class ProviderInfo(BaseModel):
    """Static, human-facing metadata for one provider."""

    model_config = ConfigDict(frozen=True)

    id: ProviderId
    name: str
    short_name: Optional[str] = Field(None, description="Name used in credential messages, defaults to name")
    priority: int = Field(..., ge=1, description="1 is tried first")
    description: str
    key_prefix: str = Field("", description="Expected credential prefix, empty if none")
    signup_url: str
    pricing: str
    models: str


class KeyValidation(BaseModel):
    """Outcome of a credential format check."""

    valid: bool
    message: str


class RawPayload(BaseModel):
    """A provider's success payload, untouched by the adapter."""

    provider: ProviderId
    job_id: Optional[str] = None
    data: Optional[dict[str, Any]] = Field(None, description="JSON body when the provider hosts the video")
    content: Optional[bytes] = Field(None, repr=False, description="Raw video bytes")
    content_type: Optional[str] = None
    filename: Optional[str] = None


class JobHandle(BaseModel):
    """Reference to a submitted job, discarded once polling ends."""

    model_config = ConfigDict(frozen=True)

    provider: ProviderId
    job_id: str
    submitted_at: datetime = Field(default_factory=lambda: datetime.now(tz=timezone.utc))
    duration_seconds: Optional[float] = Field(None, description="Duration actually submitted")
    metadata: dict[str, str] = Field(default_factory=dict)
    result: Optional[RawPayload] = Field(
        None, description="Set when the provider answered synchronously"
    )


class PollResult(BaseModel):
    """Outcome of a single status check."""

    status: Literal["pending", "succeeded", "failed"]
    payload: Optional[RawPayload] = None
    error: Optional[str] = None
    progress: Optional[str] = None


class GenerationResult(BaseModel):
    """The value returned to the caller on success."""

    provider: ProviderId = Field(..., description="Provider whose adapter produced the video")
    video_url: str
    job_id: Optional[str] = None
    duration_seconds: Optional[float] = None
    thumbnail_url: Optional[str] = None


class ProviderAttempt(BaseModel):
    """A failed attempt recorded during fallback."""

    provider: ProviderId
    error: str
