# ai_tagger/data/__init__.py
"""
Settings and note I/O.
"""

from .config import TaggerSettings, load_settings
from .loaders import FrontmatterNoteStore, Note

__all__ = [
    'TaggerSettings',
    'load_settings',
    'FrontmatterNoteStore',
    'Note',
]
