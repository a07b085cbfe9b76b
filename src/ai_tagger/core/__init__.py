# ai_tagger/core/__init__.py
"""
Prompt building, tag extraction and tag list helpers.
"""

from .extraction import ExtractionResult, extract_tags, find_json_object
from .prompts import TaggingMode, TaggingRequest, build_prompt
from .responses import BaseResponse, ConnectionTestOutcome, ConnectionTestResult, LLMResponse
from .tags import merge_tags, normalize_tag

__all__ = [
    'ExtractionResult', 'extract_tags', 'find_json_object',
    'TaggingMode', 'TaggingRequest', 'build_prompt',
    'BaseResponse', 'ConnectionTestOutcome', 'ConnectionTestResult', 'LLMResponse',
    'merge_tags', 'normalize_tag',
]
