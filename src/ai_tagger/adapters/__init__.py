# ai_tagger/adapters/__init__.py
"""
Provider adapters: one ProviderAdapter class driven by per-provider descriptors.
"""

from .base import AdapterConfig, ProviderAdapter, ProviderDescriptor
from .providers import PROVIDERS, get_descriptor, list_providers
from .transport import RequestsTransport, Transport

__all__ = [
    'AdapterConfig',
    'ProviderAdapter',
    'ProviderDescriptor',
    'PROVIDERS',
    'get_descriptor',
    'list_providers',
    'RequestsTransport',
    'Transport',
]
