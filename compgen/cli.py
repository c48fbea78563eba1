"""Command-line interface for compgen."""

from __future__ import annotations

import argparse
import json
import logging
import os
import sys
from typing import Iterator, List

from rich.console import Console
from rich.panel import Panel
from rich.syntax import Syntax
from rich.table import Table

from compgen import ComponentParser
from compgen.core.config import config
from compgen.core.error_handling import CompgenError
from compgen.models.enums import StreamEventType
from compgen.synthesis.strategies import synthesize


def _require_file(path: str, console: Console) -> None:
    if not os.path.exists(path):
        console.print(f"[bold red]File not found:[/bold red] {path}")
        sys.exit(1)


def _chunks(text: str, size: int) -> Iterator[str]:
    for start in range(0, len(text), size):
        yield text[start:start + size]


def _parse(file_path: str, raw_json: bool, fence_aware: bool, console: Console) -> None:
    """Parse a saved model response and print the records."""
    _require_file(file_path, console)
    parser = ComponentParser(fence_aware=fence_aware or None)
    try:
        result = parser.parse(ComponentParser.load_file(file_path))
    except CompgenError as e:
        console.print(f"[bold red]Parse failed:[/bold red] {e}")
        sys.exit(1)
    if raw_json:
        print(json.dumps(result.to_dict(), indent=2, ensure_ascii=False))
        return
    table = Table(title=f"Components ({len(result.components)})")
    table.add_column("ID")
    table.add_column("Name")
    table.add_column("Category")
    table.add_column("Code", justify="right")
    table.add_column("Previews", justify="right")
    for component in result.components:
        table.add_row(
            component.id,
            component.name,
            component.category or "",
            f"{len(component.code.splitlines())} lines" if component.code else "-",
            str(len(component.preview_codes)) if component.preview_codes else ("1" if component.preview_code else "-"),
        )
    console.print(table)
    if result.has_analysis:
        console.print_json(data=result.analysis.model_dump(by_alias=True, exclude_none=True))
    else:
        console.print("[yellow]No analysis block found[/yellow]")


def _preview(file_path: str, definition_only: bool, console: Console) -> None:
    """Synthesize preview code for a code fragment file."""
    _require_file(file_path, console)
    code = ComponentParser.load_file(file_path)
    definition = synthesize(code)
    output = definition.source if definition_only else ComponentParser.preview(code)[0]
    if console.is_terminal:
        console.print(Panel(Syntax(output, "tsx"), title=f"{definition.name} ({definition.strategy})"))
    else:
        print(output)


def _replay(file_path: str, chunk_size: int, ndjson: bool, console: Console) -> None:
    """Feed a saved response through a stream session in fixed-size chunks."""
    _require_file(file_path, console)
    if chunk_size <= 0:
        console.print("[bold red]--chunk-size must be positive[/bold red]")
        sys.exit(2)
    text = ComponentParser.load_file(file_path)
    parser = ComponentParser()
    failed = False
    for event in parser.stream_events(_chunks(text, chunk_size), prompt=file_path):
        if ndjson:
            print(json.dumps(event.to_dict(), ensure_ascii=False))
        elif event.type is StreamEventType.CHUNK:
            ids: List[str] = event.data.component_ids
            console.print(f"[cyan]chunk[/cyan] {len(ids)} component(s): {', '.join(ids)}")
        elif event.type is StreamEventType.DONE:
            console.print(Panel(
                f"{len(event.data.components)} component(s), analysis: {'yes' if event.data.has_analysis else 'no'}",
                title="done", style="green"))
        elif event.type is StreamEventType.ERROR:
            console.print(Panel(event.details or event.error or "", title="error", style="red"))
        failed = failed or event.type is StreamEventType.ERROR
    if failed:
        sys.exit(1)


def main(argv: List[str] | None = None) -> None:
    """Entry point for the ``compgen`` command."""

    console = Console()
    parser = argparse.ArgumentParser(description="Parse streamed component responses and build preview code")
    parser.add_argument("-v", "--verbose", action="store_true", help="Verbose output")
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")
    parser.add_argument("--quiet", action="store_true", help="Reduce logs to errors only")
    sub = parser.add_subparsers(dest="command")

    parse_p = sub.add_parser("parse", help="Parse a saved model response")
    parse_p.add_argument("file", help="Markdown response file")
    parse_p.add_argument("--raw-json", action="store_true", help="Output raw JSON")
    parse_p.add_argument("--fence-aware", action="store_true", help="Do not split on '---' inside code fences")

    preview_p = sub.add_parser("preview", help="Synthesize preview code for a component source file")
    preview_p.add_argument("file", help="Component source file")
    preview_p.add_argument("--definition-only", action="store_true", help="Omit the render call")

    replay_p = sub.add_parser("replay", help="Replay a saved response as a stream")
    replay_p.add_argument("file", help="Markdown response file")
    replay_p.add_argument("--chunk-size", type=int, default=64, help="Characters per chunk")
    replay_p.add_argument("--ndjson", action="store_true", help="Emit one JSON event per line")

    args = parser.parse_args(argv)
    if args.debug:
        log_level = logging.DEBUG
    elif args.quiet:
        log_level = logging.ERROR
    elif args.verbose:
        log_level = logging.INFO
    else:
        log_level = getattr(logging, str(config.get("logging", "level", "WARNING")).upper(), logging.WARNING)
    logging.basicConfig(level=log_level)

    if args.command == "parse":
        _parse(args.file, args.raw_json, args.fence_aware, console)
    elif args.command == "preview":
        _preview(args.file, args.definition_only, console)
    elif args.command == "replay":
        _replay(args.file, args.chunk_size, args.ndjson, console)
    else:
        parser.print_help()


if __name__ == "__main__":
    main()
