"""Static provider metadata and credential format checks."""

from .exceptions import ProviderNotFoundError
from .types import KeyValidation, ProviderId, ProviderInfo

VIDEO_PROVIDERS: tuple[ProviderInfo, ...] = (
    ProviderInfo(
        id="runway",
        name="Runway ML",
        short_name="Runway",
        priority=1,
        description="Industry-leading AI video generation. Best quality and consistency.",
        key_prefix="key_",
        signup_url="https://app.runwayml.com/settings/api-keys",
        pricing="From $12/mo (Standard). ~$0.05-0.10 per second of video.",
        models="Gen-4 Turbo, Gen-3 Alpha",
    ),
    ProviderInfo(
        id="fal",
        name="fal.ai",
        priority=2,
        description="Fast and affordable. Supports HunyuanVideo, Veo3, LTX-Video.",
        signup_url="https://fal.ai/dashboard/keys",
        pricing="Pay-per-use. ~$0.40 per video clip.",
        models="HunyuanVideo, Google Veo 3, LTX-Video",
    ),
    ProviderInfo(
        id="replicate",
        name="Replicate",
        priority=3,
        description="Run open-source video models in the cloud. Great for Wan2.1.",
        key_prefix="r8_",
        signup_url="https://replicate.com/account/api-tokens",
        pricing="Pay-per-use. Free tier available for some models.",
        models="Wan2.1, CogVideoX, Stable Video Diffusion",
    ),
    ProviderInfo(
        id="openai",
        name="OpenAI (Sora)",
        short_name="OpenAI",
        priority=4,
        description="OpenAI's Sora video model. Requires Plus/Pro subscription.",
        key_prefix="sk-",
        signup_url="https://platform.openai.com/api-keys",
        pricing="Requires OpenAI Plus ($20/mo) or Pro ($200/mo) for Sora access.",
        models="Sora 2, Sora 2 Pro",
    ),
    ProviderInfo(
        id="luma",
        name="Luma AI",
        priority=5,
        description="Dream Machine video generation. Great for cinematic content.",
        signup_url="https://lumalabs.ai/dream-machine/api",
        pricing="Pay-per-use. Free trial credits available.",
        models="Dream Machine 1.5, Dream Machine 2",
    ),
    ProviderInfo(
        id="huggingface",
        name="Hugging Face",
        priority=6,
        description="Free inference API with open-source models. Limited but free.",
        key_prefix="hf_",
        signup_url="https://huggingface.co/settings/tokens",
        pricing="FREE tier: 300 requests/hour. Pro: $9/mo for more.",
        models="LTX-Video, Wan2.1, HunyuanVideo (via providers)",
    ),
)

PRIORITY_ORDER: tuple[ProviderId, ...] = tuple(
    info.id for info in sorted(VIDEO_PROVIDERS, key=lambda info: info.priority)
)

_BY_ID = {info.id: info for info in VIDEO_PROVIDERS}


def is_known_provider(provider: str) -> bool:
    return provider in _BY_ID


def get_provider_info(provider: str) -> ProviderInfo:
    """Look up a provider's metadata.

    Raises:
        ProviderNotFoundError: If the id is not one of the six providers.
    """
    try:
        return _BY_ID[provider]
    except KeyError:
        raise ProviderNotFoundError(provider) from None


def validate_api_key(provider: str, key: str | None) -> KeyValidation:
    """Check a credential's basic format before it is saved.

    This is a prefix check only; it does not contact the provider.
    """
    if not key or not key.strip():
        return KeyValidation(valid=False, message="API key cannot be empty")

    if not is_known_provider(provider):
        return KeyValidation(valid=False, message="Unknown provider")

    info = _BY_ID[provider]
    # fal and luma keys have no consistent prefix
    if info.key_prefix and not key.startswith(info.key_prefix):
        noun = "tokens" if provider == "huggingface" else "keys"
        return KeyValidation(
            valid=False,
            message=f"{info.short_name or info.name} {noun} must start with '{info.key_prefix}'",
        )

    return KeyValidation(valid=True, message="Key format looks valid")
