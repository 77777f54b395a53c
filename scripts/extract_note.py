#!/usr/bin/env python3
"""Run entity extraction over a note and print the result.

Usage:
    python scripts/extract_note.py "I'll call Sarah next Friday at 555-123-4567"
    python scripts/extract_note.py --file notes/meeting.txt --ai "Q4 deadline" --json
    python scripts/extract_note.py --config config/config.yaml --verbose --file note.txt
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from rich.console import Console
from rich.table import Table

from noteparse.extraction import (
    EntityParser,
    extract_actionable_items,
    extract_hybrid,
    get_entity_summary,
    serialize_structured_entities,
)
from noteparse.utils.config import Config, load_config
from noteparse.utils.logging import configure_logging

console = Console()


def _read_text(args: argparse.Namespace) -> str:
    if args.file is not None:
        return args.file.read_text(encoding="utf-8")
    if args.text:
        return " ".join(args.text)
    return sys.stdin.read()


def main() -> int:
    parser = argparse.ArgumentParser(
        description="Extract structured entities from a relationship note",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    parser.add_argument("text", nargs="*", help="Note text (default: --file or stdin)")
    parser.add_argument("--file", "-f", type=Path, default=None, help="Read the note from a file")
    parser.add_argument(
        "--config",
        "-c",
        type=Path,
        default=None,
        help="Path to configuration file (default: built-in defaults)",
    )
    parser.add_argument(
        "--ai",
        action="append",
        default=[],
        help="AI-suggested entity string to merge (repeatable)",
    )
    parser.add_argument("--json", action="store_true", help="Print the transport JSON only")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    args = parser.parse_args()

    config = load_config(args.config) if args.config else Config()
    if args.verbose:
        config.logging.level = "DEBUG"
    configure_logging(config.logging)

    text = _read_text(args)
    entity_parser = EntityParser(config.extraction)
    result = extract_hybrid(text, args.ai or None, parser=entity_parser)

    if args.json:
        print(serialize_structured_entities(result.structured))
        return 0

    table = Table(title="Extracted Entities")
    table.add_column("Type", style="cyan")
    table.add_column("Value")
    table.add_column("Normalized", style="dim")
    table.add_column("Confidence")
    table.add_column("Source", style="magenta")
    for entity in result.all_entities:
        table.add_row(
            entity.type,
            entity.value,
            entity.normalized_value or "",
            entity.confidence,
            entity.source,
        )
    console.print(table)

    summary = get_entity_summary(result.structured)
    console.print(f"[bold]Highlights:[/bold] {', '.join(summary.highlights) or 'none'}")

    timezone = config.extraction.dates.timezone
    for item in extract_actionable_items(result.structured, timezone):
        console.print(f"  [green]•[/green] {item}")

    meta = result.metadata
    console.print(
        f"[dim]{meta.total_count} entities "
        f"({meta.deterministic_count} deterministic, {meta.ai_count} ai) "
        f"in {meta.processing_time:.1f} ms[/dim]"
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())
