"""Bring-your-own-key video generation across Runway, Sora, Replicate, fal.ai, Luma and Hugging Face."""

from .catalog import PRIORITY_ORDER, VIDEO_PROVIDERS, get_provider_info, validate_api_key
from .config import VideoEngineSettings, credentials_from_env
from .exceptions import (
    AllProvidersExhaustedError,
    ConfigurationError,
    ProviderAuthenticationError,
    ProviderJobError,
    ProviderNotFoundError,
    ProviderSubmitError,
    StorageError,
    TransientPollError,
    VideoGenerationError,
    VideoGenerationTimeoutError,
)
from .normalizer import ResultNormalizer
from .polling import PollLoop, PollState
from .providers import (
    FalAdapter,
    HuggingFaceAdapter,
    LumaAdapter,
    ReplicateAdapter,
    RunwayAdapter,
    SoraAdapter,
    VideoProviderAdapter,
    build_adapter,
)
from .selector import available_providers, select_provider
from .service import VideoGenerationService
from .storage import BlobStore, LocalBlobStore
from .types import (
    CredentialSet,
    GenerationRequest,
    GenerationResult,
    JobHandle,
    KeyValidation,
    PollResult,
    ProviderAttempt,
    ProviderId,
    ProviderInfo,
    RawPayload,
)

__all__ = [
    # Service
    "VideoGenerationService",
    # Selection and catalog
    "select_provider",
    "available_providers",
    "VIDEO_PROVIDERS",
    "PRIORITY_ORDER",
    "get_provider_info",
    "validate_api_key",
    # Polling, normalizing, storage
    "PollLoop",
    "PollState",
    "ResultNormalizer",
    "BlobStore",
    "LocalBlobStore",
    # Providers
    "VideoProviderAdapter",
    "RunwayAdapter",
    "SoraAdapter",
    "ReplicateAdapter",
    "FalAdapter",
    "LumaAdapter",
    "HuggingFaceAdapter",
    "build_adapter",
    # Config
    "VideoEngineSettings",
    "credentials_from_env",
    # Types
    "ProviderId",
    "GenerationRequest",
    "CredentialSet",
    "ProviderInfo",
    "KeyValidation",
    "JobHandle",
    "RawPayload",
    "PollResult",
    "GenerationResult",
    "ProviderAttempt",
    # Exceptions
    "VideoGenerationError",
    "ConfigurationError",
    "ProviderNotFoundError",
    "ProviderSubmitError",
    "ProviderAuthenticationError",
    "ProviderJobError",
    "VideoGenerationTimeoutError",
    "StorageError",
    "TransientPollError",
    "AllProvidersExhaustedError",
]
