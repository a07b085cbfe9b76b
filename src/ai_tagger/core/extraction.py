# ai_tagger/core/extraction.py
"""
Pull tag lists out of free-form model output.

Strategies run in order and the first one that yields a result wins:

1. ``fenced_json``      - a ```json {...}``` block
2. ``bare_json``        - the first {...} span in the text
3. ``hashtags``         - #tag tokens
4. ``quoted_or_listed`` - "quoted" tokens or bullet-list items
5. ``comma_list``       - a short comma separated line (the format the
                          system prompt asks for)

The JSON strategies read ``matchedTags``/``newTags``; the scraping strategies
only ever produce suggested tags. A strategy signals failure by raising
ExtractionError; ``extract_tags`` catches it and moves on, so the caller
always gets a (possibly empty) result.
"""

import json
import re
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional, Tuple

from loguru import logger

from ..errors import ExtractionError
from .tags import clean_tags

FENCED_JSON_RE = re.compile(r'```(?:json)?\s*(\{[\s\S]*?\})\s*```', re.IGNORECASE)
BARE_JSON_RE = re.compile(r'\{[\s\S]*\}')
HASHTAG_RE = re.compile(r'#[\w-]+')
QUOTED_OR_LISTED_RE = re.compile(
    r'["\']([a-zA-Z0-9-]+)["\']|(?:^|\s+)[-*]\s+([a-zA-Z0-9-]+)', re.MULTILINE
)

MATCHED_KEYS = ('matchedExistingTags', 'existingTags')
SUGGESTED_KEYS = ('suggestedTags', 'generatedTags', 'tags')

MAX_COMMA_TAG_WORDS = 4


@dataclass
class ExtractionResult:
    matched_existing_tags: List[str] = field(default_factory=list)
    suggested_tags: List[str] = field(default_factory=list)
    strategy: Optional[str] = None

    @property
    def succeeded(self) -> bool:
        return self.strategy is not None


def _as_list(value: Any) -> List[str]:
    return clean_tags(value) if isinstance(value, list) else []


def tags_from_json(obj: Dict[str, Any]) -> Tuple[List[str], List[str]]:
    """Read (matched, suggested) from a parsed JSON object."""
    if 'matchedTags' in obj or 'newTags' in obj:
        return _as_list(obj.get('matchedTags')), _as_list(obj.get('newTags'))

    matched: List[str] = []
    for key in MATCHED_KEYS:
        if isinstance(obj.get(key), list):
            matched = _as_list(obj[key])
            break
    suggested: List[str] = []
    for key in SUGGESTED_KEYS:
        if isinstance(obj.get(key), list):
            suggested = _as_list(obj[key])
            break
    return matched, suggested


def _parse_object(candidate: str) -> Optional[Dict[str, Any]]:
    try:
        parsed = json.loads(candidate)
    except ValueError:
        return None
    return parsed if isinstance(parsed, dict) else None


def _find_fenced_object(text: str) -> Optional[Dict[str, Any]]:
    for match in FENCED_JSON_RE.finditer(text):
        parsed = _parse_object(match.group(1))
        if parsed is not None:
            return parsed
    return None


def _find_bare_object(text: str) -> Optional[Dict[str, Any]]:
    match = BARE_JSON_RE.search(text)
    if not match:
        return None
    parsed = _parse_object(match.group(0))
    if parsed is not None:
        return parsed

    # greedy span failed (stray braces in prose): decode from each '{' instead
    decoder = json.JSONDecoder()
    start = text.find('{')
    while start != -1:
        try:
            parsed, _ = decoder.raw_decode(text, start)
        except ValueError:
            parsed = None
        if isinstance(parsed, dict):
            return parsed
        start = text.find('{', start + 1)
    return None


def find_json_object(text: str) -> Dict[str, Any]:
    """
    Locate a JSON object in model output, fenced block first.

    Raises:
        ExtractionError: if no JSON object can be parsed.
    """
    obj = _find_fenced_object(text)
    if obj is None:
        obj = _find_bare_object(text)
    if obj is None:
        raise ExtractionError('No JSON object found in response')
    return obj


def _hashtags(text: str) -> List[str]:
    return HASHTAG_RE.findall(text)


def _quoted_or_listed(text: str) -> List[str]:
    found = []
    for match in QUOTED_OR_LISTED_RE.finditer(text):
        tag = match.group(1) or match.group(2)
        if tag:
            found.append(f'#{tag}')
    return found


def _comma_list(text: str) -> List[str]:
    lines = [line.strip() for line in text.strip().splitlines() if line.strip()]
    if not lines:
        return []
    line = lines[-1]
    if ':' in line:
        line = line.split(':', 1)[1]
    if ',' not in line:
        return []
    parts = [p.strip().strip('.').strip() for p in line.split(',')]
    parts = [p for p in parts if p]
    if any(len(p.split()) > MAX_COMMA_TAG_WORDS for p in parts):
        return []
    return parts


def _fenced_json_strategy(text: str) -> ExtractionResult:
    obj = _find_fenced_object(text)
    if obj is None:
        raise ExtractionError('No fenced JSON block')
    return ExtractionResult(*tags_from_json(obj))


def _bare_json_strategy(text: str) -> ExtractionResult:
    obj = _find_bare_object(text)
    if obj is None:
        raise ExtractionError('No JSON object found in response')
    return ExtractionResult(*tags_from_json(obj))


def _scraping_strategy(scraper: Callable[[str], List[str]]) -> Callable[[str], ExtractionResult]:
    def strategy(text: str) -> ExtractionResult:
        tags = clean_tags(scraper(text))
        if not tags:
            raise ExtractionError(f'{scraper.__name__.lstrip("_")} found nothing')
        return ExtractionResult([], tags)
    return strategy


EXTRACTION_STRATEGIES: List[Tuple[str, Callable[[str], ExtractionResult]]] = [
    ('fenced_json', _fenced_json_strategy),
    ('bare_json', _bare_json_strategy),
    ('hashtags', _scraping_strategy(_hashtags)),
    ('quoted_or_listed', _scraping_strategy(_quoted_or_listed)),
    ('comma_list', _scraping_strategy(_comma_list)),
]


def extract_tags(raw_text: Optional[str]) -> ExtractionResult:
    """Run the strategies in order; the first success wins."""
    if not raw_text or not raw_text.strip():
        logger.warning("Empty model output, no tags extracted")
        return ExtractionResult()

    for name, strategy in EXTRACTION_STRATEGIES:
        try:
            result = strategy(raw_text)
        except ExtractionError as e:
            logger.debug(f"Strategy '{name}' failed: {e}")
            continue
        result.strategy = name
        logger.debug(
            f"Extracted tags with strategy '{name}': "
            f"matched={result.matched_existing_tags} suggested={result.suggested_tags}"
        )
        return result

    logger.warning("No tags could be extracted from model output")
    return ExtractionResult()
