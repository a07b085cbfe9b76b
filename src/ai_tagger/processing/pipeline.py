# ai_tagger/processing/pipeline.py
"""
Tagging pipeline: one note, or a batch of notes, through
prompt -> request -> extraction -> frontmatter update.
"""

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Iterable, List, Optional, Tuple, Union

from loguru import logger

from ..adapters.base import ProviderAdapter
from ..core.prompts import build_prompt
from ..core.tags import filter_blocked, merge_tags, normalize_tag
from ..data.config import TaggerSettings
from ..data.loaders import FrontmatterNoteStore


class TaggingState(Enum):
    IDLE = 'idle'
    PROMPT_BUILT = 'prompt_built'
    REQUEST_SENT = 'request_sent'
    RESPONSE_RECEIVED = 'response_received'
    TAGS_EXTRACTED = 'tags_extracted'
    FRONTMATTER_UPDATED = 'frontmatter_updated'
    FAILED = 'failed'


@dataclass
class NoteTaggingResult:
    """Outcome of tagging one note."""

    path: Path
    state: TaggingState = TaggingState.IDLE
    new_tags: List[str] = field(default_factory=list)
    written_tags: List[str] = field(default_factory=list)
    strategy: Optional[str] = None
    error: Optional[str] = None

    @property
    def updated(self) -> bool:
        return self.state is TaggingState.FRONTMATTER_UPDATED


@dataclass
class BatchReport:
    """Counts for one batch run. ``processed`` includes failed notes."""

    total: int = 0
    processed: int = 0
    failed: int = 0
    updated: int = 0
    failures: List[Tuple[Path, str]] = field(default_factory=list)
    results: List[NoteTaggingResult] = field(default_factory=list)


class TaggingPipeline:
    """Tags single notes with one provider adapter."""

    def __init__(self, adapter: ProviderAdapter,
                 store: Optional[FrontmatterNoteStore] = None,
                 settings: Optional[TaggerSettings] = None):
        self.adapter = adapter
        self.store = store or FrontmatterNoteStore()
        self.settings = settings or TaggerSettings()

    def _advance(self, result: NoteTaggingResult, state: TaggingState):
        logger.debug(f"{result.path.name}: {result.state.value} -> {state.value}")
        result.state = state

    def prepare_tags(self, tags: Iterable[str]) -> List[str]:
        """Drop blocked tags and convert the rest to frontmatter form."""
        allowed = filter_blocked(tags, self.settings.blocked_tags)
        return merge_tags([], [t for t in (normalize_tag(tag) for tag in allowed) if t])

    def tag_note(self, path: Union[str, Path]) -> NoteTaggingResult:
        """
        Tag one note and write the result to its frontmatter.

        Errors are logged, recorded on the result and re-raised.
        """
        result = NoteTaggingResult(path=Path(path))
        try:
            note = self.store.read(result.path)
            prompt = build_prompt(
                note.content,
                mode=self.settings.tagging_mode,
                max_tags=self.settings.max_tags,
                language=self.adapter.config.language or self.settings.language,
            )
            self._advance(result, TaggingState.PROMPT_BUILT)

            self._advance(result, TaggingState.REQUEST_SENT)
            raw = self.adapter.send(prompt)
            self._advance(result, TaggingState.RESPONSE_RECEIVED)

            parsed = self.adapter.parse_response(raw)
            result.strategy = parsed.strategy
            result.new_tags = self.prepare_tags(parsed.matched_existing_tags + parsed.suggested_tags)
            self._advance(result, TaggingState.TAGS_EXTRACTED)

            if not result.new_tags:
                logger.warning(f"No tags generated for {result.path}")
                return result

            if self.settings.replace_tags:
                result.written_tags = list(result.new_tags)
            else:
                result.written_tags = merge_tags(note.tags, result.new_tags)
            self.store.write_tags(result.path, result.written_tags)
            self._advance(result, TaggingState.FRONTMATTER_UPDATED)

        except Exception as e:
            result.error = str(e)
            self._advance(result, TaggingState.FAILED)
            logger.error(f"Error tagging {result.path}: {e}")
            raise

        logger.info(f"Tagged {result.path}: {result.written_tags}")
        return result


class BatchTagger:
    """Runs a TaggingPipeline over many notes, one after another."""

    def __init__(self, pipeline: TaggingPipeline):
        self.pipeline = pipeline

    def run(self, paths: Iterable[Union[str, Path]]) -> BatchReport:
        """
        Tag every note in order. A failing note is counted and skipped.

        Returns:
            BatchReport summary
        """
        paths = [Path(p) for p in paths]
        report = BatchReport(total=len(paths))
        logger.info(f"Starting batch tagging for {report.total} notes")

        for i, path in enumerate(paths, start=1):
            logger.info(f"[{i}/{report.total}] {path}")
            try:
                result = self.pipeline.tag_note(path)
                if result.updated:
                    report.updated += 1
            except Exception as e:
                result = NoteTaggingResult(path=path, state=TaggingState.FAILED, error=str(e))
                report.failed += 1
                report.failures.append((path, str(e)))
            report.processed += 1
            report.results.append(result)

        logger.info(
            f"Batch tagging completed: processed {report.processed}/{report.total}, "
            f"{report.failed} failed, {report.updated} updated"
        )
        return report
