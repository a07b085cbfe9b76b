# ai_tagger/data/config.py
"""
Configuration management for the tagger.

Settings come from a JSON file and/or ``AI_TAGGER_*`` environment variables
(a ``.env`` file in the working directory is loaded first). Settings are read
only, never written back.
"""

import json
import os
from dataclasses import asdict, dataclass, field, fields
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from dotenv import load_dotenv
from loguru import logger

from ..adapters.base import AdapterConfig
from ..adapters.providers import PROVIDERS
from ..core.prompts import DEFAULT_LANGUAGE, TaggingMode, parse_tagging_mode
from ..errors import ConfigurationError

ENV_PREFIX = 'AI_TAGGER_'

LIST_FIELDS = {'batch_folders', 'excluded_folders', 'blocked_tags'}
BOOL_FIELDS = {'replace_tags'}
INT_FIELDS = {'max_tags'}
FLOAT_FIELDS = {'timeout'}

TRUE_VALUES = {'1', 'true', 'yes', 'on'}
FALSE_VALUES = {'0', 'false', 'no', 'off', ''}


@dataclass
class TaggerSettings:
    """Tagger settings; local_* and cloud_* fields are kept side by side."""

    service_type: str = 'cloud'
    local_endpoint: str = 'http://localhost:11434/api/chat'
    local_model: str = 'llama'
    local_service_type: str = 'ollama'
    cloud_endpoint: str = 'https://api.openai.com/v1/chat/completions'
    cloud_api_key: str = ''
    cloud_model: str = 'gpt-4.1'
    cloud_service_type: str = 'openai'
    tagging_mode: TaggingMode = TaggingMode.GENERATE_NEW
    language: str = DEFAULT_LANGUAGE
    max_tags: int = 5
    replace_tags: bool = True
    batch_folders: List[str] = field(default_factory=list)
    excluded_folders: List[str] = field(default_factory=list)
    blocked_tags: List[str] = field(default_factory=list)
    timeout: Optional[float] = None

    def __post_init__(self):
        self.tagging_mode = parse_tagging_mode(self.tagging_mode)
        if self.service_type not in ('local', 'cloud'):
            raise ConfigurationError(f"service_type must be 'local' or 'cloud', got '{self.service_type}'")
        if self.max_tags < 1:
            raise ConfigurationError(f"max_tags must be positive, got {self.max_tags}")

    @classmethod
    def from_dict(cls, data: Dict[str, Any], base: Optional['TaggerSettings'] = None) -> 'TaggerSettings':
        """Build settings from a dict, ignoring unknown keys. Values override ``base``."""
        values = asdict(base) if base else {}
        known = {f.name for f in fields(cls)}
        unknown = set(data) - known
        if unknown:
            logger.warning(f"Ignoring unknown settings: {sorted(unknown)}")
        for key, value in data.items():
            if key in known:
                values[key] = _coerce(key, value)
        return cls(**values)

    @classmethod
    def from_file(cls, path: Union[str, Path], base: Optional['TaggerSettings'] = None) -> 'TaggerSettings':
        path = Path(path)
        try:
            with open(path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except FileNotFoundError:
            raise ConfigurationError(f"Settings file not found: {path}")
        except json.JSONDecodeError as e:
            raise ConfigurationError(f"Invalid JSON in settings file {path}: {e}")
        if not isinstance(data, dict):
            raise ConfigurationError(f"Settings file {path} must contain a JSON object")
        logger.debug(f"Loaded settings from {path}")
        return cls.from_dict(data, base=base)

    @classmethod
    def from_env(cls, base: Optional['TaggerSettings'] = None,
                 env: Optional[Dict[str, str]] = None) -> 'TaggerSettings':
        """Override ``base`` with any AI_TAGGER_<FIELD> variables that are set."""
        if env is None:
            load_dotenv()
            env = dict(os.environ)
        data = {}
        for f in fields(cls):
            key = ENV_PREFIX + f.name.upper()
            if key in env:
                data[f.name] = env[key]
        return cls.from_dict(data, base=base)

    def to_adapter_config(self) -> AdapterConfig:
        """
        Pick the local or cloud connection fields by service_type.

        An endpoint or model that is another provider's default is dropped,
        so the chosen provider falls back to its own default.
        """
        if self.service_type == 'local':
            return AdapterConfig(
                provider=self.local_service_type,
                service_type='local',
                endpoint=_own_value(self.local_service_type, 'default_endpoint', self.local_endpoint),
                model_name=_own_value(self.local_service_type, 'default_model', self.local_model),
                language=self.language,
                timeout=self.timeout,
            )
        return AdapterConfig(
            provider=self.cloud_service_type,
            service_type='cloud',
            endpoint=_own_value(self.cloud_service_type, 'default_endpoint', self.cloud_endpoint),
            api_key=self.cloud_api_key or None,
            model_name=_own_value(self.cloud_service_type, 'default_model', self.cloud_model),
            language=self.language,
            timeout=self.timeout,
        )


def _own_value(provider: str, attr: str, value: Optional[str]) -> Optional[str]:
    """Return ``value`` unless it is only some other provider's default."""
    if not value:
        return None
    own = PROVIDERS.get(provider)
    if own is not None and getattr(own, attr) == value:
        return value
    for name, descriptor in PROVIDERS.items():
        if name != provider and getattr(descriptor, attr) == value:
            logger.debug(f"Ignoring {name} {attr} '{value}' for provider '{provider}'")
            return None
    return value


def _split_list(value: Any) -> List[str]:
    if isinstance(value, str):
        return [part.strip() for part in value.split(',') if part.strip()]
    return [str(part).strip() for part in value if str(part).strip()]


def _coerce(key: str, value: Any) -> Any:
    """Convert env/JSON values to the field's type."""
    if value is None:
        return None
    try:
        if key in LIST_FIELDS:
            return _split_list(value)
        if key in BOOL_FIELDS:
            if isinstance(value, bool):
                return value
            text = str(value).strip().lower()
            if text in TRUE_VALUES:
                return True
            if text in FALSE_VALUES:
                return False
            raise ValueError(f"not a boolean: {value!r}")
        if key in INT_FIELDS:
            return int(value)
        if key in FLOAT_FIELDS:
            return float(value) if value != '' else None
    except (TypeError, ValueError) as e:
        raise ConfigurationError(f"Invalid value for {key}: {e}")
    return value


def load_settings(path: Optional[Union[str, Path]] = None,
                  env: Optional[Dict[str, str]] = None) -> TaggerSettings:
    """
    Defaults, then the JSON file (if given), then environment variables.
    """
    settings = TaggerSettings()
    if path:
        settings = TaggerSettings.from_file(path, base=settings)
    return TaggerSettings.from_env(base=settings, env=env)
