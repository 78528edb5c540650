"""Environment-backed settings for the video engine."""

import os
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from pydantic import BaseModel, Field

from .types import CredentialSet

# Env var holding each provider's secret
CREDENTIAL_ENV_VARS = {
    "runway": "RUNWAY_API_KEY",
    "openai": "OPENAI_API_KEY",
    "replicate": "REPLICATE_API_TOKEN",
    "fal": "FAL_KEY",
    "luma": "LUMA_API_KEY",
    "huggingface": "HF_TOKEN",
}


def _env_bool(name: str, default: bool = False) -> bool:
    value = os.environ.get(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


class VideoEngineSettings(BaseModel):
    """Tunables for polling, transport and storage."""

    poll_interval_seconds: float = Field(5.0, gt=0, description="Seconds between status checks")
    poll_timeout_seconds: float = Field(600.0, gt=0, description="Per-provider wall-clock budget")
    request_timeout_seconds: float = Field(30.0, gt=0, description="HTTP timeout for one request")
    hf_loading_retry_delay_seconds: float = Field(
        30.0, ge=0, description="Wait before retrying a Hugging Face model that is still loading"
    )
    hf_max_loading_retries: int = Field(1, ge=0)
    runway_require_image: bool = Field(
        False, description="Reject text-only Runway requests before submitting"
    )
    storage_dir: Path = Field(Path("generated_videos"), description="LocalBlobStore root")
    public_url: Optional[str] = Field(None, description="Public base URL for stored videos")

    @classmethod
    def from_env(cls, load_env_file: bool = True) -> "VideoEngineSettings":
        """Build settings from environment variables (and a .env file if present)."""
        if load_env_file:
            load_dotenv()

        values: dict[str, object] = {}
        float_vars = {
            "BYOK_POLL_INTERVAL_SECONDS": "poll_interval_seconds",
            "BYOK_POLL_TIMEOUT_SECONDS": "poll_timeout_seconds",
            "BYOK_REQUEST_TIMEOUT_SECONDS": "request_timeout_seconds",
            "BYOK_HF_LOADING_RETRY_DELAY_SECONDS": "hf_loading_retry_delay_seconds",
        }
        for env_name, field_name in float_vars.items():
            if os.environ.get(env_name):
                values[field_name] = os.environ[env_name]
        if os.environ.get("BYOK_HF_MAX_LOADING_RETRIES"):
            values["hf_max_loading_retries"] = os.environ["BYOK_HF_MAX_LOADING_RETRIES"]
        if os.environ.get("BYOK_STORAGE_DIR"):
            values["storage_dir"] = os.environ["BYOK_STORAGE_DIR"]
        values["runway_require_image"] = _env_bool("BYOK_RUNWAY_REQUIRE_IMAGE")
        values["public_url"] = os.environ.get("PUBLIC_URL") or None
        return cls.model_validate(values)


def credentials_from_env(load_env_file: bool = True) -> CredentialSet:
    """Build a CredentialSet from provider env vars."""
    if load_env_file:
        load_dotenv()
    keys = {provider: os.environ.get(env_name) for provider, env_name in CREDENTIAL_ENV_VARS.items()}
    return CredentialSet(keys=keys, preferred=os.environ.get("BYOK_PREFERRED_PROVIDER"))
