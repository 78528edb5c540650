"""Tests for the pydantic request, credential and result models."""

import pytest
from pydantic import ValidationError

from byok_video import CredentialSet, GenerationRequest, GenerationResult, JobHandle


class TestGenerationRequest:
    """Tests for GenerationRequest."""

    def test_minimal_request(self):
        """Test defaults for a prompt-only request."""
        req = GenerationRequest(prompt="A cat walking")
        assert req.image_url is None
        assert req.duration_seconds is None
        assert req.effective_duration == 5
        assert req.aspect_ratio == "16:9"
        assert req.resolution == "720p"

    def test_full_request(self):
        req = GenerationRequest(
            prompt="A cat walking",
            image_url="https://example.com/cat.jpg",
            duration_seconds=7.5,
            aspect_ratio="1:1",
            resolution="1080p",
        )
        assert req.effective_duration == 7.5
        assert req.aspect_ratio == "1:1"

    def test_request_is_immutable(self):
        req = GenerationRequest(prompt="A cat walking")
        with pytest.raises(ValidationError):
            req.prompt = "A dog running"

    def test_invalid_aspect_ratio(self):
        with pytest.raises(ValidationError):
            GenerationRequest(prompt="test", aspect_ratio="4:3")

    def test_invalid_resolution(self):
        with pytest.raises(ValidationError):
            GenerationRequest(prompt="test", resolution="4k")

    def test_duration_must_be_positive(self):
        with pytest.raises(ValidationError):
            GenerationRequest(prompt="test", duration_seconds=0)
        with pytest.raises(ValidationError):
            GenerationRequest(prompt="test", duration_seconds=-3)

    def test_empty_prompt_rejected(self):
        with pytest.raises(ValidationError):
            GenerationRequest(prompt="")


class TestCredentialSet:
    """Tests for CredentialSet."""

    def test_secret_lookup(self):
        creds = CredentialSet(keys={"runway": "key_abc", "luma": None})
        assert creds.secret_for("runway") == "key_abc"
        assert creds.secret_for("luma") is None
        assert creds.secret_for("fal") is None

    def test_blank_secret_is_unusable(self):
        creds = CredentialSet(keys={"fal": "   ", "replicate": ""})
        assert not creds.has_secret("fal")
        assert not creds.has_secret("replicate")

    def test_secret_is_stripped(self):
        creds = CredentialSet(keys={"openai": "  sk-abc \n"})
        assert creds.secret_for("openai") == "sk-abc"

    def test_blank_preferred_is_none(self):
        assert CredentialSet(preferred="").preferred is None
        assert CredentialSet(preferred="luma").preferred == "luma"

    def test_repr_hides_secrets(self):
        creds = CredentialSet(keys={"openai": "sk-very-secret"}, preferred="openai")
        assert "sk-very-secret" not in repr(creds)


class TestJobHandleAndResult:
    """Tests for JobHandle and GenerationResult."""

    def test_job_handle_timestamp(self):
        handle = JobHandle(provider="runway", job_id="task_1")
        assert handle.submitted_at.tzinfo is not None
        assert handle.result is None
        assert handle.metadata == {}

    def test_result_requires_known_provider(self):
        with pytest.raises(ValidationError):
            GenerationResult(provider="veo", video_url="https://example.com/v.mp4")

    def test_result_optional_fields(self):
        result = GenerationResult(provider="luma", video_url="https://example.com/v.mp4")
        assert result.job_id is None
        assert result.duration_seconds is None
        assert result.thumbnail_url is None
