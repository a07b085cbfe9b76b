# tests/ai_tagger/test_filters.py
"""
Tests for note selection.
"""

import pytest

from ai_tagger.processing.filters import NoteFilter, collect_notes


class TestNoteFilter:
    """Test pattern matching on vault-relative paths."""

    @pytest.mark.parametrize("pattern,path,expected", [
        ('Projects', 'Projects/Work/report.md', True),
        ('Projects/', 'Projects/Work/report.md', True),
        ('Projects', 'ProjectsOld/x.md', False),
        ('Projects/Work', 'Projects/Home/plan.md', False),
        ('/', 'anything.md', True),
        ('/^daily/\\d{4}-/', 'daily/2024-01-01.md', True),
        ('/^daily/\\d{4}-/', 'Inbox/daily/2024-01-01.md', False),
        ('Archive/*.md', 'Archive/old.md', True),
        ('*.md', 'Inbox/idea.md', True),
        ('Inbox/?dea.md', 'Inbox/idea.md', True),
    ])
    def test_matches_pattern(self, pattern, path, expected):
        assert NoteFilter.matches_pattern(path, pattern) is expected

    def test_defaults(self):
        """Test empty include selects everything."""
        note_filter = NoteFilter()

        assert note_filter.include == []
        assert note_filter.exclude == []
        assert note_filter.matches('any/note.md')

    def test_invalid_regex_is_a_non_match(self):
        assert NoteFilter.matches_pattern('Inbox/idea.md', '/[unclosed/') is False

    def test_exclude_wins(self):
        note_filter = NoteFilter(include=['Projects'], exclude=['Projects/Home'])

        assert note_filter.matches('Projects/Work/report.md')
        assert not note_filter.matches('Projects/Home/plan.md')
        assert not note_filter.matches('Inbox/idea.md')


class TestCollectNotes:
    """Test walking a vault."""

    def test_all_notes_sorted_hidden_skipped(self, vault):
        notes = collect_notes(vault)
        rel = [p.relative_to(vault).as_posix() for p in notes]

        assert rel == sorted(rel)
        assert rel == [
            'Archive/old.md',
            'Inbox/idea.md',
            'Projects/Home/plan.md',
            'Projects/Work/report.md',
            'daily/2024-01-01.md',
        ]

    def test_with_filter(self, vault):
        notes = collect_notes(vault, NoteFilter(include=['Projects', '/^daily/'], exclude=['Projects/Home']))
        rel = [p.relative_to(vault).as_posix() for p in notes]

        assert rel == ['Projects/Work/report.md', 'daily/2024-01-01.md']

    def test_missing_vault(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            collect_notes(tmp_path / 'nope')

    def test_invalid_regex_include_selects_nothing(self, vault):
        """Test a malformed /regex/ is skipped instead of raising."""
        assert collect_notes(vault, NoteFilter(include=['/[unclosed/'])) == []

    def test_invalid_regex_exclude_excludes_nothing(self, vault):
        notes = collect_notes(vault, NoteFilter(exclude=['/(oops/']))

        assert len(notes) == 5
