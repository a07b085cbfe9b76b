# ai_tagger/processing/filters.py
"""
Selecting which notes in a vault get tagged.
"""

import fnmatch
import re
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import List, Optional, Union

from loguru import logger

GLOB_CHARS = ('*', '?', '[')


@lru_cache(maxsize=None)
def compile_pattern(expression: str) -> Optional[re.Pattern]:
    """Compile a /regex/ body; an invalid one is logged once and matches nothing."""
    try:
        return re.compile(expression)
    except re.error as e:
        logger.warning(f"Ignoring invalid regex pattern /{expression}/: {e}")
        return None


@dataclass
class NoteFilter:
    """
    Include/exclude patterns over vault-relative note paths.

    A pattern is one of:
      - a folder prefix:  ``Projects/Work``
      - a regex:          ``/^daily/\\d{4}/``
      - a glob:           ``Archive/*.md``

    An empty include list selects every note. Exclude always wins.
    """

    include: List[str] = None
    exclude: List[str] = None

    def __post_init__(self):
        if self.include is None:
            self.include = []
        if self.exclude is None:
            self.exclude = []

    @staticmethod
    def matches_pattern(rel_path: str, pattern: str) -> bool:
        pattern = pattern.strip()
        if len(pattern) > 2 and pattern.startswith('/') and pattern.endswith('/'):
            regex = compile_pattern(pattern[1:-1])
            return regex is not None and regex.search(rel_path) is not None
        if any(c in pattern for c in GLOB_CHARS):
            return fnmatch.fnmatch(rel_path, pattern)

        folder = pattern.strip('/')
        if not folder:
            return True
        return rel_path == folder or rel_path.startswith(folder + '/')

    def matches(self, rel_path: str) -> bool:
        """Check a vault-relative path (posix separators)."""
        if any(self.matches_pattern(rel_path, p) for p in self.exclude):
            return False
        if not self.include:
            return True
        return any(self.matches_pattern(rel_path, p) for p in self.include)


def collect_notes(vault_dir: Union[str, Path], note_filter: Optional[NoteFilter] = None) -> List[Path]:
    """
    Find Markdown notes under ``vault_dir`` that pass ``note_filter``.

    Hidden directories (``.obsidian``, ``.trash``, ...) are skipped.

    Returns:
        Sorted list of note paths
    """
    vault_dir = Path(vault_dir)
    if not vault_dir.is_dir():
        raise FileNotFoundError(f"Vault directory not found: {vault_dir}")

    note_filter = note_filter or NoteFilter()
    notes = []
    for path in vault_dir.rglob('*.md'):
        rel = path.relative_to(vault_dir)
        if any(part.startswith('.') for part in rel.parts):
            continue
        if note_filter.matches(rel.as_posix()):
            notes.append(path)

    logger.info(f"Selected {len(notes)} notes under {vault_dir}")
    return sorted(notes)
