# ai_tagger/factory.py
"""
Factory to create a configured provider adapter.
"""

from typing import Optional

from loguru import logger

from .adapters.base import AdapterConfig, ProviderAdapter
from .adapters.providers import get_descriptor
from .adapters.transport import Transport


def create_adapter(config: AdapterConfig, transport: Optional[Transport] = None) -> ProviderAdapter:
    """Look up the provider named in ``config`` and build its adapter."""
    descriptor = get_descriptor(config.provider)
    if config.service_type != descriptor.service_type:
        logger.warning(
            f"Provider '{descriptor.name}' is a {descriptor.service_type} service, "
            f"but service_type is '{config.service_type}'"
        )
    return ProviderAdapter(config, descriptor, transport=transport)
