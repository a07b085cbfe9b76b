# ai_tagger/core/prompts.py
"""
Builds the instruction sent to the model, using jinja templates from templates/.
"""

from dataclasses import dataclass, field
from enum import Enum
from functools import lru_cache
from pathlib import Path
from typing import List, Optional

from jinja2 import Environment, FileSystemLoader, Template, select_autoescape

from ..errors import UnsupportedTaggingModeError

TAG_SYSTEM_PROMPT = (
    'You are an expert tagging assistant. Your task is to generate tags for a given document. '
    'The tags you create must adhere to the following criteria:\n\n'
    '1. **Relevant**: Each tag should accurately reflect the content or purpose of the document. '
    'Ask yourself, "What is this document about?"\n'
    '2. **Specific (but not too narrow)**: Avoid overly broad tags like "misc" or "stuff," and do not be '
    'so detailed that a tag only applies in one rare case. Choose words that are likely to be reused.\n'
    '3. **Consistent**: Use a uniform style (e.g., lowercase letters, hyphenation if necessary) so that '
    'tags follow an agreed-upon vocabulary.\n'
    '4. **Searchable**: Select tags that contain keywords a person might naturally use when searching '
    'for this document.\n'
    '5. **Multi-dimensional (when needed)**: Include tags that can denote type, topic, status, audience, '
    'or date when relevant (e.g., "report," "finance," "2024").\n'
    '6. **Avoid Redundancy**: Do not include tags that duplicate metadata already provided elsewhere '
    'unless they enhance searchability.\n'
    '7. **Return only tags**: Return your response ONLY as a comma-separated list of tags. Do not include '
    'the # symbol. For example: programming, javascript, web-development, tutorial\n'
    '8. **Avoid dates**: Do not return any tags that include dates. For example: 2024, June, 27th etc.'
)

LANGUAGE_NAMES = {
    'ar': 'Arabic',
    'cs': 'Czech',
    'da': 'Danish',
    'de': 'German',
    'el': 'Greek',
    'en': 'English',
    'es': 'Spanish',
    'fi': 'Finnish',
    'fr': 'French',
    'he': 'Hebrew',
    'hi': 'Hindi',
    'id': 'Indonesian',
    'it': 'Italian',
    'ja': 'Japanese',
    'ko': 'Korean',
    'nl': 'Dutch',
    'no': 'Norwegian',
    'pl': 'Polish',
    'pt': 'Portuguese',
    'ro': 'Romanian',
    'ru': 'Russian',
    'sv': 'Swedish',
    'th': 'Thai',
    'tr': 'Turkish',
    'uk': 'Ukrainian',
    'vi': 'Vietnamese',
    'zh': 'Chinese (Simplified)',
    'zh-TW': 'Chinese (Traditional)',
}

DEFAULT_LANGUAGE = 'default'


class TaggingMode(Enum):
    GENERATE_NEW = 'generateNew'
    # Declared for settings compatibility; not implemented.
    PREDEFINED_TAGS = 'predefinedTags'
    HYBRID = 'hybrid'


SUPPORTED_MODES = {TaggingMode.GENERATE_NEW}

MODE_TEMPLATES = {
    TaggingMode.GENERATE_NEW: 'generate_new.md.jinja',
}


@dataclass
class TaggingRequest:
    """Inputs for one tagging call."""

    content: str
    candidate_tags: List[str] = field(default_factory=list)
    mode: TaggingMode = TaggingMode.GENERATE_NEW
    max_tags: int = 5
    language: Optional[str] = None

    def build_prompt(self) -> str:
        return build_prompt(self.content, self.candidate_tags, self.mode, self.max_tags, self.language)


@lru_cache(maxsize=None)
def load_template(template_name: str) -> Template:
    """Load a Jinja template from the templates directory."""
    templates_dir = Path(__file__).parent.parent / 'templates'
    env = Environment(
        loader=FileSystemLoader(templates_dir),
        autoescape=select_autoescape(['html', 'xml']),
    )
    return env.get_template(template_name)


def get_language_display_name(language: str) -> str:
    return LANGUAGE_NAMES.get(language, language)


def parse_tagging_mode(value) -> TaggingMode:
    """Accept a TaggingMode, its value ('generateNew') or its name ('generate_new')."""
    if isinstance(value, TaggingMode):
        return value
    for mode in TaggingMode:
        if value in (mode.value, mode.name, mode.name.lower()):
            return mode
    raise ValueError(f"Unknown tagging mode: {value}. Available: {[m.value for m in TaggingMode]}")


def build_language_directive(language: Optional[str]) -> str:
    if not language or language == DEFAULT_LANGUAGE:
        return ''
    template = load_template('language_directive.md.jinja')
    return template.render(language_name=get_language_display_name(language)).strip()


def build_prompt(content: str,
                 candidate_tags: Optional[List[str]] = None,
                 mode: TaggingMode = TaggingMode.GENERATE_NEW,
                 max_tags: int = 5,
                 language: Optional[str] = None) -> str:
    """
    Build the user prompt for a tagging request.

    ``candidate_tags`` is only meaningful for the predefined/hybrid modes,
    which are rejected here.

    Raises:
        UnsupportedTaggingModeError: for any mode other than GENERATE_NEW.
    """
    mode = parse_tagging_mode(mode)
    if mode not in SUPPORTED_MODES:
        raise UnsupportedTaggingModeError(
            f"Tagging mode '{mode.value}' is not supported; only '{TaggingMode.GENERATE_NEW.value}' is available"
        )

    body = load_template(MODE_TEMPLATES[mode]).render(content=content, max_tags=max_tags)
    directive = build_language_directive(language)
    if directive:
        return f"{directive}\n\n{body}"
    return body
