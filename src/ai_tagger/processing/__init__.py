# ai_tagger/processing/__init__.py
"""
Note selection and the single-note / batch tagging pipeline.
"""

from .pipeline import BatchReport, BatchTagger, NoteTaggingResult, TaggingPipeline, TaggingState
from .filters import NoteFilter, collect_notes

__all__ = [
    'BatchReport',
    'BatchTagger',
    'NoteTaggingResult',
    'TaggingPipeline',
    'TaggingState',
    'NoteFilter',
    'collect_notes',
]
