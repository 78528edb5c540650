"""Pytest configuration and shared fixtures for the video engine tests."""

import json
from pathlib import Path
from typing import Callable, Optional

import httpx
import pytest
from dotenv import load_dotenv

# Load environment variables (used by the integration tests)
env_path = Path(__file__).parent.parent / ".env"
load_dotenv(env_path)

from byok_video import (
    CredentialSet,
    GenerationRequest,
    JobHandle,
    PollResult,
    RawPayload,
    VideoEngineSettings,
    VideoProviderAdapter,
)


# Configure pytest-asyncio
pytest_plugins = ("pytest_asyncio",)


# ============================================================================
# Request Fixtures
# ============================================================================


@pytest.fixture
def text_request() -> GenerationRequest:
    """A text-only request with default duration and aspect ratio."""
    return GenerationRequest(prompt="A lighthouse on a cliff at dusk, slow dolly shot")


@pytest.fixture
def image_request() -> GenerationRequest:
    """An image-conditioned portrait request."""
    return GenerationRequest(
        prompt="The scene comes alive with gentle wind",
        image_url="https://example.com/scene.png",
        duration_seconds=8,
        aspect_ratio="9:16",
        resolution="1080p",
    )


# ============================================================================
# Credential Fixtures
# ============================================================================


ALL_KEYS = {
    "runway": "key_runway_test",
    "openai": "sk-openai-test",
    "replicate": "r8_replicate_test",
    "fal": "fal-test-key",
    "luma": "luma-test-key",
    "huggingface": "hf_test_token",
}


@pytest.fixture
def all_credentials() -> CredentialSet:
    """Credentials for all six providers."""
    return CredentialSet(keys=dict(ALL_KEYS))


@pytest.fixture
def no_credentials() -> CredentialSet:
    return CredentialSet()


# ============================================================================
# Time Fixtures
# ============================================================================


class FakeClock:
    """Monotonic clock advanced only by the paired sleep coroutine."""

    def __init__(self) -> None:
        self.now = 0.0
        self.sleeps: list[float] = []

    def __call__(self) -> float:
        return self.now

    async def sleep(self, seconds: float) -> None:
        self.sleeps.append(seconds)
        self.now += seconds


@pytest.fixture
def fake_clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def fast_settings(tmp_path: Path) -> VideoEngineSettings:
    """Settings with a short deadline, for use with fake_clock."""
    return VideoEngineSettings(
        poll_interval_seconds=5.0,
        poll_timeout_seconds=30.0,
        storage_dir=tmp_path / "videos",
    )


# ============================================================================
# Storage Fixtures
# ============================================================================


class RecordingBlobStore:
    """In-memory blob store that remembers every write."""

    def __init__(self, fail: bool = False) -> None:
        self.stored: list[tuple[bytes, str, str]] = []
        self.fail = fail

    async def store(self, data: bytes, filename: str, content_type: str = "video/mp4") -> str:
        if self.fail:
            raise OSError("bucket unavailable")
        self.stored.append((data, filename, content_type))
        return f"https://blobs.example.com/videos/{filename}"


@pytest.fixture
def blob_store() -> RecordingBlobStore:
    return RecordingBlobStore()


@pytest.fixture
def failing_blob_store() -> RecordingBlobStore:
    return RecordingBlobStore(fail=True)


# ============================================================================
# Adapter Fixtures
# ============================================================================


def success_payload(provider: str, job_id: str) -> RawPayload:
    """A provider-shaped success payload."""
    url = f"https://cdn.example.com/{provider}/{job_id}.mp4"
    if provider == "runway":
        return RawPayload(provider=provider, job_id=job_id, data={"status": "SUCCEEDED", "output": [url]})
    if provider == "replicate":
        return RawPayload(provider=provider, job_id=job_id, data={"status": "succeeded", "output": url})
    if provider == "fal":
        return RawPayload(provider=provider, job_id=job_id, data={"video": {"url": url}})
    if provider == "luma":
        return RawPayload(provider=provider, job_id=job_id, data={"state": "completed", "assets": {"video": url}})
    return RawPayload(
        provider=provider,
        job_id=job_id,
        content=f"video-bytes-from-{provider}".encode(),
        content_type="video/mp4",
        filename=f"{provider}-{job_id}.mp4",
    )


class FakeAdapter(VideoProviderAdapter):
    """Scripted adapter that records every call and never touches the network."""

    def __init__(
        self,
        provider: str,
        submit_error: Optional[Exception] = None,
        poll_results: Optional[list] = None,
        always_pending: bool = False,
    ):
        super().__init__()
        self.provider_id = provider
        self.submit_error = submit_error
        self.poll_results = list(poll_results or [])
        self.always_pending = always_pending
        self.submit_calls: list[tuple[str, GenerationRequest]] = []
        self.poll_calls = 0

    async def submit(self, secret: str, request: GenerationRequest) -> JobHandle:
        self.submit_calls.append((secret, request))
        if self.submit_error is not None:
            raise self.submit_error
        return JobHandle(provider=self.provider_id, job_id=f"{self.provider_id}-job-1", duration_seconds=5)

    async def poll_once(self, secret: str, handle: JobHandle) -> PollResult:
        self.poll_calls += 1
        if self.always_pending:
            return PollResult(status="pending", progress="queued")
        if self.poll_results:
            result = self.poll_results.pop(0)
            if isinstance(result, Exception):
                raise result
            return result
        return PollResult(status="succeeded", payload=success_payload(self.provider_id, handle.job_id))


@pytest.fixture
def make_adapter() -> Callable[..., FakeAdapter]:
    return FakeAdapter


@pytest.fixture
def fake_adapters() -> dict[str, FakeAdapter]:
    """One succeeding fake adapter per provider."""
    return {provider: FakeAdapter(provider) for provider in ALL_KEYS}


# ============================================================================
# HTTP Mock Fixtures
# ============================================================================


class MockAPI:
    """httpx.MockTransport wrapper that records requests and replays responses."""

    def __init__(self, *responses) -> None:
        self.responses = list(responses)
        self.requests: list[httpx.Request] = []

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if not self.responses:
            raise AssertionError(f"Unexpected request: {request.method} {request.url}")
        response = self.responses.pop(0)
        if isinstance(response, Exception):
            raise response
        if callable(response):
            return response(request)
        return response

    def client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=httpx.MockTransport(self.handler))

    def json_body(self, index: int = 0) -> dict:
        return json.loads(self.requests[index].content)


@pytest.fixture
def mock_api() -> Callable[..., MockAPI]:
    return MockAPI
