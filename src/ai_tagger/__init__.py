# ai_tagger/__init__.py
"""
LLM-driven tag generation for Markdown notes with YAML frontmatter.
"""

from .adapters import AdapterConfig, ProviderAdapter, ProviderDescriptor, list_providers
from .core.prompts import TaggingMode, TaggingRequest, build_prompt
from .core.extraction import extract_tags
from .core.responses import BaseResponse, ConnectionTestOutcome, ConnectionTestResult, LLMResponse
from .core.tags import merge_tags
from .factory import create_adapter
from .data import FrontmatterNoteStore, TaggerSettings, load_settings
from .processing import BatchTagger, NoteFilter, TaggingPipeline, collect_notes
from .errors import (
    ConfigurationError,
    ExtractionError,
    NetworkError,
    ProviderError,
    ResponseFormatError,
    TaggerError,
    UnsupportedTaggingModeError,
)

__all__ = [
    # Adapters
    'AdapterConfig', 'ProviderAdapter', 'ProviderDescriptor', 'list_providers', 'create_adapter',

    # Prompting and extraction
    'TaggingMode', 'TaggingRequest', 'build_prompt', 'extract_tags', 'merge_tags',
    'BaseResponse', 'LLMResponse', 'ConnectionTestOutcome', 'ConnectionTestResult',

    # Notes and pipeline
    'FrontmatterNoteStore', 'TaggerSettings', 'load_settings',
    'BatchTagger', 'NoteFilter', 'TaggingPipeline', 'collect_notes',

    # Errors
    'TaggerError', 'ConfigurationError', 'NetworkError', 'ProviderError',
    'ResponseFormatError', 'ExtractionError', 'UnsupportedTaggingModeError',
]
