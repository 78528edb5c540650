"""Provider selection from a credential set."""

from typing import AbstractSet, Optional

from .catalog import PRIORITY_ORDER, is_known_provider
from .types import CredentialSet, ProviderId


def available_providers(credentials: CredentialSet) -> list[ProviderId]:
    """Providers with a usable secret, in priority order."""
    return [provider for provider in PRIORITY_ORDER if credentials.has_secret(provider)]


def select_provider(
    credentials: CredentialSet,
    excluding: AbstractSet[str] = frozenset(),
) -> Optional[ProviderId]:
    """
    Choose the provider to try next.

    The preferred provider wins when it is known, not excluded and has a
    usable secret. Otherwise the first credentialed provider in
    PRIORITY_ORDER that is not excluded is returned.

    Args:
        credentials: The caller's secrets and preferred provider
        excluding: Providers already attempted during this call

    Returns:
        A provider id, or None when no candidate remains
    """
    preferred = credentials.preferred
    if (
        preferred
        and is_known_provider(preferred)
        and preferred not in excluding
        and credentials.has_secret(preferred)
    ):
        return preferred  # type: ignore[return-value]

    for provider in PRIORITY_ORDER:
        if provider not in excluding and credentials.has_secret(provider):
            return provider
    return None
