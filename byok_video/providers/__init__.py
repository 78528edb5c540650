"""Video generation provider adapters."""

from typing import Optional

import httpx

from ..config import VideoEngineSettings
from ..exceptions import ProviderNotFoundError
from .base import VideoProviderAdapter
from .fal import FalAdapter
from .huggingface import HuggingFaceAdapter
from .luma import LumaAdapter
from .replicate import ReplicateAdapter
from .runway import RunwayAdapter
from .sora import SoraAdapter


def build_adapter(
    provider: str,
    settings: Optional[VideoEngineSettings] = None,
    http_client: Optional[httpx.AsyncClient] = None,
) -> VideoProviderAdapter:
    """Create the adapter for a provider id."""
    settings = settings or VideoEngineSettings()
    timeout = settings.request_timeout_seconds

    if provider == "runway":
        return RunwayAdapter(http_client, timeout, require_image=settings.runway_require_image)
    elif provider == "openai":
        return SoraAdapter(http_client, timeout)
    elif provider == "replicate":
        return ReplicateAdapter(http_client, timeout)
    elif provider == "fal":
        return FalAdapter(http_client, timeout)
    elif provider == "luma":
        return LumaAdapter(http_client, timeout)
    elif provider == "huggingface":
        return HuggingFaceAdapter(
            http_client,
            loading_retry_delay=settings.hf_loading_retry_delay_seconds,
            max_loading_retries=settings.hf_max_loading_retries,
        )
    raise ProviderNotFoundError(provider)


__all__ = [
    "VideoProviderAdapter",
    "RunwayAdapter",
    "SoraAdapter",
    "ReplicateAdapter",
    "FalAdapter",
    "LumaAdapter",
    "HuggingFaceAdapter",
    "build_adapter",
]
