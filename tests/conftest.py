# tests/conftest.py
"""
Shared test fixtures and configuration.
"""
from pathlib import Path
import sys
PATH=str((Path().cwd() /'src').absolute())
if PATH not in sys.path:
    sys.path.append(PATH)

import pytest
import frontmatter


def write_note(path: Path, body: str, **metadata) -> Path:
    """Write a Markdown note with optional frontmatter."""
    path.parent.mkdir(parents=True, exist_ok=True)
    post = frontmatter.Post(body, **metadata)
    path.write_text(frontmatter.dumps(post) + '\n', encoding='utf-8')
    return path


@pytest.fixture
def make_note(tmp_path):
    """Factory: make_note('folder/name.md', 'body', tags=[...])."""
    def _make(rel_path, body='Some note content.', **metadata):
        return write_note(tmp_path / rel_path, body, **metadata)
    return _make


@pytest.fixture
def vault(make_note, tmp_path):
    """A small vault with nested folders and a hidden config folder."""
    make_note('Inbox/idea.md', 'An idea about gardening.')
    make_note('Projects/Work/report.md', 'Quarterly finance report.', tags=['work'])
    make_note('Projects/Home/plan.md', 'Kitchen renovation plan.')
    make_note('Archive/old.md', 'Old stuff.')
    make_note('daily/2024-01-01.md', 'Daily log.')
    make_note('.obsidian/snippet.md', 'Not a note.')
    (tmp_path / 'Inbox' / 'image.png').write_bytes(b'\x89PNG')
    return tmp_path
