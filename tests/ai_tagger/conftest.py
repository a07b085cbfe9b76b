# tests/ai_tagger/conftest.py
"""
Fixtures for adapter and pipeline tests. HTTP is never hit.
"""

import pytest

from ai_tagger.factory import create_adapter
from fakes import TAGS_JSON, FakeTransport, chat_completion, make_config


@pytest.fixture
def fake_transport():
    return FakeTransport(chat_completion(TAGS_JSON))


@pytest.fixture
def openai_adapter(fake_transport):
    return create_adapter(make_config('openai'), transport=fake_transport)
