# tests/ai_tagger/test_prompts.py
"""
Tests for prompt building.
"""

import pytest

from ai_tagger.core.prompts import (
    TAG_SYSTEM_PROMPT,
    TaggingMode,
    TaggingRequest,
    build_prompt,
    get_language_display_name,
    parse_tagging_mode,
)
from ai_tagger.errors import UnsupportedTaggingModeError


class TestBuildPrompt:
    """Test the generate-new prompt."""

    def test_contains_content_and_max_tags(self):
        """Test the note content and tag limit are rendered."""
        prompt = build_prompt("Notes about gradient descent.", max_tags=7)

        assert "Notes about gradient descent." in prompt
        assert "up to 7 appropriate tags" in prompt
        assert "fewer than 7 tags" in prompt

    def test_content_is_not_html_escaped(self):
        """Test markdown and angle brackets survive rendering."""
        content = "Use <b>bold</b> & `code`"
        prompt = build_prompt(content)

        assert content in prompt

    def test_default_language_has_no_directive(self):
        """Test no language directive for None or 'default'."""
        assert "IMPORTANT" not in build_prompt("x")
        assert "IMPORTANT" not in build_prompt("x", language='default')

    def test_language_directive_prepended(self):
        """Test a known language code maps to its display name."""
        prompt = build_prompt("Ein Text", language='de')

        assert prompt.startswith("IMPORTANT")
        assert "German" in prompt
        assert prompt.index("German") < prompt.index("Ein Text")

    def test_unknown_language_used_verbatim(self):
        """Test unknown codes are passed through."""
        assert get_language_display_name('tlh') == 'tlh'
        assert "tlh" in build_prompt("x", language='tlh')

    @pytest.mark.parametrize("mode", [TaggingMode.PREDEFINED_TAGS, TaggingMode.HYBRID, 'hybrid'])
    def test_unsupported_modes_raise(self, mode):
        """Test declared-but-unimplemented modes are rejected."""
        with pytest.raises(UnsupportedTaggingModeError):
            build_prompt("x", candidate_tags=['a'], mode=mode)

    def test_is_pure(self):
        """Test identical inputs give identical prompts."""
        assert build_prompt("same", max_tags=3, language='fr') == build_prompt("same", max_tags=3, language='fr')

    def test_tagging_request(self):
        """Test TaggingRequest builds the same prompt."""
        request = TaggingRequest(content="hello", max_tags=2)
        assert request.build_prompt() == build_prompt("hello", max_tags=2)


class TestTaggingMode:
    """Test tagging mode parsing."""

    def test_parse_values_and_names(self):
        assert parse_tagging_mode('generateNew') is TaggingMode.GENERATE_NEW
        assert parse_tagging_mode('generate_new') is TaggingMode.GENERATE_NEW
        assert parse_tagging_mode('PREDEFINED_TAGS') is TaggingMode.PREDEFINED_TAGS
        assert parse_tagging_mode(TaggingMode.HYBRID) is TaggingMode.HYBRID

    def test_parse_unknown(self):
        with pytest.raises(ValueError):
            parse_tagging_mode('magic')


def test_system_prompt_asks_for_plain_comma_list():
    """Test the system prompt asks for comma separated tags without '#'."""
    assert "comma-separated" in TAG_SYSTEM_PROMPT
    assert "# symbol" in TAG_SYSTEM_PROMPT
    assert "dates" in TAG_SYSTEM_PROMPT
