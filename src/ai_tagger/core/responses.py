# ai_tagger/core/responses.py
"""
Normalized response types shared by every provider adapter.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional

from .tags import clean_tags


@dataclass
class BaseResponse:
    """What an adapter pulls out of one provider response."""

    text: str = ''
    matched_existing_tags: List[str] = field(default_factory=list)
    suggested_tags: List[str] = field(default_factory=list)
    strategy: Optional[str] = None

    def __post_init__(self):
        self.matched_existing_tags = clean_tags(self.matched_existing_tags)
        self.suggested_tags = clean_tags(self.suggested_tags)


@dataclass
class LLMResponse:
    """Result handed back to the host application."""

    matched_existing_tags: List[str] = field(default_factory=list)
    suggested_tags: List[str] = field(default_factory=list)

    def __post_init__(self):
        self.matched_existing_tags = clean_tags(self.matched_existing_tags)
        self.suggested_tags = clean_tags(self.suggested_tags)

    @property
    def tags(self) -> List[str]:
        return self.matched_existing_tags + self.suggested_tags

    @classmethod
    def from_base(cls, response: BaseResponse) -> 'LLMResponse':
        return cls(
            matched_existing_tags=list(response.matched_existing_tags),
            suggested_tags=list(response.suggested_tags),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            'matchedExistingTags': list(self.matched_existing_tags),
            'suggestedTags': list(self.suggested_tags),
            'tags': self.tags,
        }


class ConnectionTestResult(Enum):
    SUCCESS = 'success'
    FAILED = 'failed'


@dataclass
class ConnectionTestError:
    type: str
    message: str


@dataclass
class ConnectionTestOutcome:
    result: ConnectionTestResult
    error: Optional[ConnectionTestError] = None

    @property
    def ok(self) -> bool:
        return self.result is ConnectionTestResult.SUCCESS
