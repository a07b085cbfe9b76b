# ai_tagger/data/loaders.py
"""
Reading and writing notes with YAML frontmatter.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Union

import frontmatter
from loguru import logger

from ..core.tags import coerce_tag_list


@dataclass
class Note:
    """A Markdown note split into frontmatter metadata and body."""

    path: Path
    content: str
    metadata: Dict[str, Any] = field(default_factory=dict)

    @property
    def tags(self) -> List[str]:
        return coerce_tag_list(self.metadata.get('tags'))


class FrontmatterNoteStore:
    """Loads notes and writes their ``tags`` frontmatter key."""

    def __init__(self, encoding: str = 'utf-8'):
        self.encoding = encoding

    def read(self, path: Union[str, Path]) -> Note:
        """
        Load a note.

        Raises:
            FileNotFoundError: If the note doesn't exist
        """
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Note not found: {path}")
        post = frontmatter.load(str(path), encoding=self.encoding)
        return Note(path=path, content=post.content, metadata=dict(post.metadata))

    def write_tags(self, path: Union[str, Path], tags: List[str]) -> None:
        """Replace the note's ``tags`` key and save. Body text is kept as is."""
        path = Path(path)
        post = frontmatter.load(str(path), encoding=self.encoding)
        post['tags'] = list(tags)
        path.write_text(frontmatter.dumps(post) + '\n', encoding=self.encoding)
        logger.debug(f"Wrote {len(tags)} tags to {path}")
