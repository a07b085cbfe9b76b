# ai_tagger/cli/__init__.py
"""
Command-line interface for tagging notes.
"""

from .main import main, create_cli_parser

__all__ = ['main', 'create_cli_parser']
