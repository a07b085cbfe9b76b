# tests/ai_tagger/test_tags.py
"""
Tests for tag list helpers and response types.
"""

from ai_tagger.core.responses import BaseResponse, LLMResponse
from ai_tagger.core.tags import clean_tags, coerce_tag_list, filter_blocked, merge_tags, normalize_tag


def test_merge_tags_dedupes_keeping_order():
    """Test existing tags come first and duplicates are dropped."""
    assert merge_tags(['a', 'b'], ['b', 'c']) == ['a', 'b', 'c']


def test_merge_tags_is_case_sensitive():
    assert merge_tags(['ML'], ['ml']) == ['ML', 'ml']


def test_normalize_tag():
    assert normalize_tag('#research') == 'research'
    assert normalize_tag('  machine learning ') == 'machine-learning'
    assert normalize_tag('#') == ''


def test_clean_tags():
    assert clean_tags([' a ', '', None, {'x': 1}, ['y'], 7]) == ['a', '7']


class TestCoerceTagList:
    """Test reading the frontmatter tags value."""

    def test_list(self):
        assert coerce_tag_list(['a', ' b ']) == ['a', 'b']

    def test_string(self):
        assert coerce_tag_list('#a, b c') == ['a', 'b', 'c']

    def test_missing(self):
        assert coerce_tag_list(None) == []


def test_filter_blocked_ignores_case_and_hash():
    assert filter_blocked(['#Todo', 'ml', 'draft'], ['todo', '#DRAFT']) == ['ml']


class TestResponses:
    """Test response invariants."""

    def test_tags_is_matched_plus_suggested(self):
        response = LLMResponse(matched_existing_tags=['a'], suggested_tags=['b', 'c'])

        assert response.tags == ['a', 'b', 'c']

    def test_elements_are_trimmed_and_non_empty(self):
        response = BaseResponse(text='x', matched_existing_tags=[' a ', ''], suggested_tags=['  '])

        assert response.matched_existing_tags == ['a']
        assert response.suggested_tags == []

    def test_to_dict_uses_host_keys(self):
        response = LLMResponse.from_base(BaseResponse(matched_existing_tags=['a'], suggested_tags=['b']))

        assert response.to_dict() == {
            'matchedExistingTags': ['a'],
            'suggestedTags': ['b'],
            'tags': ['a', 'b'],
        }
