# ai_tagger/cli/main.py
"""
Main CLI interface for tagging notes.
"""

import argparse
import sys
from pathlib import Path
from typing import List, Optional

from loguru import logger

from ..adapters.providers import PROVIDERS, get_descriptor
from ..data.config import TaggerSettings, load_settings
from ..factory import create_adapter
from ..processing.filters import NoteFilter, collect_notes
from ..processing.pipeline import BatchTagger, TaggingPipeline


def create_cli_parser() -> argparse.ArgumentParser:
    """Create the CLI argument parser."""
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument('--provider', help='Provider name (see `ai-tagger providers`)')
    common.add_argument('--endpoint', help='Override the provider endpoint URL')
    common.add_argument('--model', help='Model name')
    common.add_argument('--api-key', help='API key for cloud providers')
    common.add_argument('--language', help="Tag language code, e.g. 'de' (default: content language)")
    common.add_argument('--max-tags', type=int, help='Maximum number of tags to request')
    common.add_argument('--config', help='JSON settings file')
    replace = common.add_mutually_exclusive_group()
    replace.add_argument('--replace', dest='replace_tags', action='store_true', default=None,
                         help='Replace existing tags')
    replace.add_argument('--merge', dest='replace_tags', action='store_false',
                         help='Merge with existing tags')
    common.add_argument('--verbose', '-v', action='store_true', help='Debug logging')

    parser = argparse.ArgumentParser(
        prog='ai-tagger',
        description='Tag Markdown notes with LLM-generated tags',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Tag one note with OpenAI (key from AI_TAGGER_CLOUD_API_KEY)
  ai-tagger tag notes/idea.md

  # Tag a vault folder with a local Ollama model
  ai-tagger batch ~/vault --folder Projects --provider ollama --model llama3

  # Check that the configured provider answers
  ai-tagger test-connection --provider groq --api-key $GROQ_KEY
        """
    )

    subparsers = parser.add_subparsers(dest='command', help='Available commands')

    tag_parser = subparsers.add_parser('tag', parents=[common], help='Tag a single note')
    tag_parser.add_argument('note', help='Path to the note')

    batch_parser = subparsers.add_parser('batch', parents=[common], help='Tag every matching note in a vault')
    batch_parser.add_argument('vault', help='Vault root directory')
    batch_parser.add_argument('--folder', action='append', default=[],
                              help='Include pattern: folder prefix, glob or /regex/ (repeatable)')
    batch_parser.add_argument('--exclude', action='append', default=[],
                              help='Exclude pattern (repeatable)')
    batch_parser.add_argument('--yes', '-y', action='store_true', help='Skip confirmation')

    subparsers.add_parser('test-connection', parents=[common], help='Send a probe request to the provider')
    subparsers.add_parser('providers', parents=[common], help='List supported providers')

    return parser


def setup_logging(verbose: bool = False):
    logger.remove()  # Remove default handler
    logger.add(
        sys.stderr,
        level="DEBUG" if verbose else "INFO",
        format="<level>{level}</level>: {message}",
        colorize=True
    )


def build_settings(args: argparse.Namespace) -> TaggerSettings:
    """Settings file and environment first, then command line overrides."""
    settings = load_settings(args.config)
    overrides = {}

    if args.provider:
        descriptor = get_descriptor(args.provider)
        kind = descriptor.service_type
        current = settings.local_service_type if kind == 'local' else settings.cloud_service_type
        overrides['service_type'] = kind
        overrides[f'{kind}_service_type'] = descriptor.name
        if current != descriptor.name:
            # configured endpoint/model belong to another provider
            overrides[f'{kind}_endpoint'] = ''
            overrides[f'{kind}_model'] = ''

    kind = overrides.get('service_type', settings.service_type)
    if args.endpoint:
        overrides[f'{kind}_endpoint'] = args.endpoint
    if args.model:
        overrides[f'{kind}_model'] = args.model
    if args.api_key:
        overrides['cloud_api_key'] = args.api_key
    if args.language:
        overrides['language'] = args.language
    if args.max_tags is not None:
        overrides['max_tags'] = args.max_tags
    if args.replace_tags is not None:
        overrides['replace_tags'] = args.replace_tags

    return TaggerSettings.from_dict(overrides, base=settings)


def build_pipeline(settings: TaggerSettings) -> TaggingPipeline:
    adapter = create_adapter(settings.to_adapter_config())
    return TaggingPipeline(adapter, settings=settings)


def confirm(message: str) -> bool:
    answer = input(f"{message} [y/N] ")
    return answer.strip().lower() in ('y', 'yes')


def providers_command():
    """List registered providers."""
    print("🔌 Supported providers:")
    for name, descriptor in PROVIDERS.items():
        model = descriptor.default_model or '-'
        print(f"   {name:<18} {descriptor.display_name:<18} {descriptor.service_type:<6} default model: {model}")
    return 0


def tag_command(settings: TaggerSettings, note: str):
    """Tag a single note."""
    try:
        pipeline = build_pipeline(settings)
        result = pipeline.tag_note(note)
    except Exception as e:
        print(f"❌ Tagging failed: {e}")
        return 1

    if result.updated:
        print(f"✅ Tagged {note}: {', '.join(result.written_tags)}")
    else:
        print(f"⚠️  No tags generated for {note}")
    return 0


def batch_command(settings: TaggerSettings, vault: str, folders: List[str],
                  excludes: List[str], assume_yes: bool):
    """Tag all notes under a vault that match the filters."""
    note_filter = NoteFilter(
        include=folders or list(settings.batch_folders),
        exclude=list(settings.excluded_folders) + excludes,
    )
    try:
        notes = collect_notes(vault, note_filter)
    except FileNotFoundError as e:
        print(f"❌ {e}")
        return 1

    if not notes:
        print("❌ No notes match your filters.")
        return 1

    if not assume_yes and not confirm(f"This will tag {len(notes)} notes matching your filters. Continue?"):
        print("Cancelled.")
        return 1

    try:
        pipeline = build_pipeline(settings)
    except Exception as e:
        print(f"❌ Could not create adapter: {e}")
        return 1

    report = BatchTagger(pipeline).run(notes)

    print(f"📈 processed {report.processed}/{report.total}, {report.failed} failed")
    for path, error in report.failures:
        print(f"   ❌ {Path(path).name}: {error}")
    return 1 if report.failed else 0


def test_connection_command(settings: TaggerSettings):
    """Probe the configured provider."""
    try:
        adapter = create_adapter(settings.to_adapter_config())
    except Exception as e:
        print(f"❌ Could not create adapter: {e}")
        return 1

    print(f"🔍 Testing connection to {adapter.display_name} ({adapter.get_endpoint()})")
    outcome = adapter.test_connection()
    if outcome.ok:
        print("✅ Connection successful")
        return 0
    print(f"❌ Connection failed [{outcome.error.type}]: {outcome.error.message}")
    return 1


def main(argv: Optional[List[str]] = None):
    """Main CLI entry point."""
    parser = create_cli_parser()
    args = parser.parse_args(argv)

    setup_logging(getattr(args, 'verbose', False))

    if not args.command:
        parser.print_help()
        return 1

    if args.command == 'providers':
        return providers_command()

    try:
        settings = build_settings(args)
    except Exception as e:
        logger.error(f"Invalid settings: {e}")
        print(f"❌ Invalid settings: {e}")
        return 1

    if args.command == 'tag':
        return tag_command(settings, args.note)

    elif args.command == 'batch':
        return batch_command(settings, args.vault, args.folder, args.exclude, args.yes)

    elif args.command == 'test-connection':
        return test_connection_command(settings)

    else:
        parser.print_help()
        return 1


if __name__ == '__main__':
    sys.exit(main())
