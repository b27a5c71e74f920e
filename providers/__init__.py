# State Provider Registry
# Maps state codes to provider implementations

from typing import Dict, Optional
from providers.base import LotteryProvider

_REGISTRY: Dict[str, LotteryProvider] = {}

def register_provider(state_code: str, provider: LotteryProvider):
    """Register a provider for a state"""
    _REGISTRY[state_code.upper()] = provider

def get_provider(state_code: str) -> LotteryProvider:
    """Get provider for a state"""
    provider = _REGISTRY.get(state_code.upper())
    if not provider:
        raise ValueError(f"No provider registered for state: {state_code}")
    return provider

def provider_for_url(url: str) -> Optional[LotteryProvider]:
    """Find the provider whose site serves this URL"""
    for provider in _REGISTRY.values():
        if provider.handles(url):
            return provider
    return None

def list_providers() -> list:
    """List all registered state codes"""
    return list(_REGISTRY.keys())


# Auto-register bundled providers
from providers import ca_lottery  # noqa: E402,F401
