# ai_tagger/core/tags.py
"""
Small helpers for tag lists: cleaning, normalizing and merging.
"""

import re
from typing import Any, Iterable, List


def clean_tags(values: Iterable[Any]) -> List[str]:
    """Stringify, trim and drop empty entries, keeping order."""
    cleaned = []
    for value in values:
        if value is None or isinstance(value, (dict, list)):
            continue
        tag = str(value).strip()
        if tag:
            cleaned.append(tag)
    return cleaned


def normalize_tag(tag: str) -> str:
    """Frontmatter form of a tag: no leading '#', no inner whitespace."""
    tag = tag.strip().lstrip('#').strip()
    return re.sub(r'\s+', '-', tag)


def coerce_tag_list(value: Any) -> List[str]:
    """
    Read a frontmatter ``tags`` value.

    Accepts a list, a single string (comma or whitespace separated), or None.
    """
    if value is None:
        return []
    if isinstance(value, str):
        parts = re.split(r'[,\s]+', value)
        return [p.lstrip('#') for p in parts if p.strip('#')]
    if isinstance(value, (list, tuple)):
        return clean_tags(value)
    return clean_tags([value])


def merge_tags(existing: Iterable[str], new: Iterable[str]) -> List[str]:
    """Case-sensitive union, existing tags first, then new ones in order."""
    return list(dict.fromkeys(list(existing) + list(new)))


def filter_blocked(tags: Iterable[str], blocked: Iterable[str]) -> List[str]:
    """Drop tags listed in ``blocked`` (compared case-insensitively, '#' ignored)."""
    blocked_set = {normalize_tag(b).lower() for b in blocked}
    if not blocked_set:
        return list(tags)
    return [t for t in tags if normalize_tag(t).lower() not in blocked_set]
