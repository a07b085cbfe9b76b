# ai_tagger/adapters/base.py
"""
Provider adapter: one class, configured by a ProviderDescriptor.

Provider differences (body shape, auth headers, where the content sits in
the response) live in the descriptor, so adding a provider means adding a
registry entry rather than a subclass.
"""

import re
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Mapping, Optional, Sequence, Tuple, Union

from loguru import logger

from ..core.extraction import extract_tags
from ..core.prompts import TaggingMode, build_prompt
from ..core.responses import (
    BaseResponse,
    ConnectionTestError,
    ConnectionTestOutcome,
    ConnectionTestResult,
    LLMResponse,
)
from ..errors import ConfigurationError, NetworkError, ProviderError, ResponseFormatError
from .formats import format_body
from .transport import DEFAULT_TIMEOUT, RequestsTransport, Transport

PathStep = Union[str, int]
JsonPath = Tuple[PathStep, ...]

CHOICES_MESSAGE_CONTENT: JsonPath = ('choices', 0, 'message', 'content')
DEFAULT_ERROR_PATHS: Tuple[JsonPath, ...] = (
    ('error', 'message'),
    ('response', 'data', 'error', 'message'),
    ('response', 'data', 'message'),
    ('message',),
)
REQUIRED_FIELDS = ('api_key', 'endpoint', 'model_name')

FIELD_LABELS = {
    'api_key': 'API key',
    'endpoint': 'Endpoint',
    'model_name': 'Model name',
}

PROBE_PROMPT = 'test'

_MISSING = object()


@dataclass(frozen=True)
class AdapterConfig:
    """Connection settings for one provider. Built once, never mutated."""

    provider: str = 'openai'
    service_type: str = 'cloud'
    endpoint: Optional[str] = None
    api_key: Optional[str] = None
    model_name: Optional[str] = None
    language: Optional[str] = None
    timeout: Optional[float] = None
    extras: Mapping[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class ProviderDescriptor:
    """Everything that distinguishes one provider API from another."""

    name: str
    display_name: str
    service_type: str = 'cloud'
    default_endpoint: Optional[str] = None
    default_model: Optional[str] = None
    body_style: str = 'chat'
    body_defaults: Mapping[str, Any] = field(default_factory=dict)
    auth_style: str = 'bearer'
    extra_headers: Mapping[str, str] = field(default_factory=dict)
    required_fields: Tuple[str, ...] = REQUIRED_FIELDS
    content_paths: Tuple[JsonPath, ...] = (CHOICES_MESSAGE_CONTENT,)
    error_paths: Tuple[JsonPath, ...] = DEFAULT_ERROR_PATHS

    @property
    def requires_api_key(self) -> bool:
        return 'api_key' in self.required_fields


def walk_path(data: Any, path: Sequence[PathStep]) -> Any:
    """Follow ``path`` through nested dicts/lists; returns _MISSING on any miss."""
    current = data
    for step in path:
        if isinstance(step, int):
            if not isinstance(current, (list, tuple)) or not -len(current) <= step < len(current):
                return _MISSING
            current = current[step]
        else:
            if not isinstance(current, Mapping) or step not in current:
                return _MISSING
            current = current[step]
    return current


def format_path(path: Sequence[PathStep]) -> str:
    """('choices', 0, 'message') -> 'choices[0].message'"""
    out = ''
    for step in path:
        if isinstance(step, int):
            out += f'[{step}]'
        else:
            out += f'.{step}' if out else step
    return out


def _bearer_headers(api_key: str, adapter: 'ProviderAdapter') -> Dict[str, str]:
    return {'Authorization': f'Bearer {api_key}'}


def _anthropic_headers(api_key: str, adapter: 'ProviderAdapter') -> Dict[str, str]:
    return {'x-api-key': api_key, 'anthropic-version': '2023-06-01'}


def _vertex_headers(api_key: str, adapter: 'ProviderAdapter') -> Dict[str, str]:
    headers = {'Authorization': f'Bearer {api_key}', 'x-goog-api-key': api_key}
    match = re.search(r'projects/([^/]+)', adapter.get_endpoint())
    if match:
        headers['x-goog-user-project'] = match.group(1)
    return headers


AUTH_STYLES: Dict[str, Callable[[str, 'ProviderAdapter'], Dict[str, str]]] = {
    'bearer': _bearer_headers,
    'anthropic': _anthropic_headers,
    'vertex': _vertex_headers,
}


class ProviderAdapter:
    """Talks to one LLM provider through an injected Transport."""

    def __init__(self, config: AdapterConfig, descriptor: ProviderDescriptor,
                 transport: Optional[Transport] = None):
        if descriptor.auth_style not in AUTH_STYLES:
            raise ValueError(f"Unknown auth style: {descriptor.auth_style}")
        self.config = config
        self.descriptor = descriptor
        self.transport = transport or RequestsTransport(timeout=config.timeout or DEFAULT_TIMEOUT)

    def __repr__(self):
        return f"ProviderAdapter(provider={self.descriptor.name!r}, model={self.model_name!r})"

    @property
    def name(self) -> str:
        return self.descriptor.name

    @property
    def display_name(self) -> str:
        return self.descriptor.display_name

    @property
    def model_name(self) -> str:
        return self.config.model_name or self.descriptor.default_model or ''

    def get_endpoint(self) -> str:
        endpoint = self.config.endpoint or self.descriptor.default_endpoint or ''
        if '{model}' in endpoint:
            endpoint = endpoint.replace('{model}', self.model_name)
        return endpoint

    def validate_config(self) -> Optional[str]:
        """Return the first missing-field message, or None when usable."""
        effective = {
            'api_key': self.config.api_key,
            'endpoint': self.config.endpoint or self.descriptor.default_endpoint,
            'model_name': self.model_name,
        }
        for name in self.descriptor.required_fields:
            if not effective.get(name):
                return f"{FIELD_LABELS.get(name, name)} is required for {self.display_name}"
        return None

    def get_headers(self) -> Dict[str, str]:
        headers = {'Content-Type': 'application/json'}
        api_key = self.config.api_key
        if not api_key and self.descriptor.requires_api_key:
            raise ConfigurationError(f"API key is required for {self.display_name}")
        if api_key:
            headers.update(AUTH_STYLES[self.descriptor.auth_style](api_key, self))
        headers.update(self.descriptor.extra_headers)
        return headers

    def format_request(self, prompt: str) -> Dict[str, Any]:
        return format_body(
            self.descriptor.body_style,
            prompt,
            self.model_name,
            self.descriptor.body_defaults,
            self.config.extras,
        )

    def send(self, prompt: str) -> Dict[str, Any]:
        """POST one prompt; returns the raw decoded response body."""
        problem = self.validate_config()
        if problem:
            raise ConfigurationError(problem)
        headers = self.get_headers()
        body = self.format_request(prompt)
        url = self.get_endpoint()

        logger.debug(f"Sending request to {self.display_name} ({url}) with model '{self.model_name}'")
        return self.transport.post(url, headers, body, timeout=self.config.timeout)

    def extract_content(self, raw: Any) -> str:
        """
        Pull the model's text out of a provider response body.

        Raises:
            ProviderError: the body carries an error message.
            ResponseFormatError: none of the content paths resolve.
        """
        if not isinstance(raw, Mapping):
            raise ResponseFormatError(f"Invalid {self.display_name} response: expected a JSON object")

        if raw.get('error') or raw.get('errorMessage'):
            raise ProviderError(
                f"{self.display_name} returned an error: {self.extract_error(raw)}",
                payload=raw,
            )

        for path in self.descriptor.content_paths:
            value = walk_path(raw, path)
            if isinstance(value, str) and value.strip():
                return value

        expected = ' or '.join(format_path(p) for p in self.descriptor.content_paths)
        raise ResponseFormatError(f"Invalid {self.display_name} response: missing {expected}")

    def parse_response(self, raw: Any) -> BaseResponse:
        text = self.extract_content(raw)
        extracted = extract_tags(text)
        return BaseResponse(
            text=text,
            matched_existing_tags=extracted.matched_existing_tags,
            suggested_tags=extracted.suggested_tags,
            strategy=extracted.strategy,
        )

    def extract_error(self, error: Any) -> str:
        """Best human-readable message from an error body or exception."""
        source = error if isinstance(error, Mapping) else getattr(error, 'payload', None)
        if isinstance(source, Mapping):
            for path in self.descriptor.error_paths:
                value = walk_path(source, path)
                if isinstance(value, str) and value:
                    return value
        if isinstance(error, BaseException) and str(error):
            return str(error)
        return 'Unknown error occurred'

    def analyze_tags(self, content: str,
                     candidate_tags=None,
                     mode: TaggingMode = TaggingMode.GENERATE_NEW,
                     max_tags: int = 5,
                     language: Optional[str] = None) -> LLMResponse:
        if language is None:
            language = self.config.language
        prompt = build_prompt(content, candidate_tags, mode, max_tags, language)
        raw = self.send(prompt)
        return LLMResponse.from_base(self.parse_response(raw))

    def test_connection(self) -> ConnectionTestOutcome:
        """
        Send one probe request and report success or a typed failure.

        The reply must carry readable content, the same check tagging applies,
        so a 2xx reply with an error body or empty content is a ``response``
        failure rather than a success.
        """
        try:
            self.extract_content(self.send(PROBE_PROMPT))
        except ConfigurationError as e:
            return self._failed('configuration', str(e))
        except NetworkError as e:
            return self._failed('network', self.extract_error(e))
        except (ProviderError, ResponseFormatError) as e:
            return self._failed('response', str(e))
        except Exception as e:
            return self._failed('unknown', self.extract_error(e))

        logger.info(f"Connection to {self.display_name} succeeded")
        return ConnectionTestOutcome(ConnectionTestResult.SUCCESS)

    def _failed(self, error_type: str, message: str) -> ConnectionTestOutcome:
        logger.error(f"Connection test for {self.display_name} failed ({error_type}): {message}")
        return ConnectionTestOutcome(
            ConnectionTestResult.FAILED,
            ConnectionTestError(type=error_type, message=message),
        )
