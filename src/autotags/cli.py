"""Command-line entry point for suggesting tags from text files or stdin."""

from __future__ import annotations

import argparse
import json
import sys
from dataclasses import replace
from typing import Sequence, TextIO

from .config import ConfigurationError, TaggerSettings
from .observability import ensure_logging
from .tagger import AutoTagger
from .terms import TagSet
from .vocabulary import VocabularyLoadError

_DEBUG_HEADERS = ("Tag", "Freq.", "Score", "Term Type", "In WL.")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="autotags", description="Suggest tags for a block of text")
    subparsers = parser.add_subparsers(dest="command", required=True)

    tag_parser = subparsers.add_parser("tag", help="Suggest tags for a file or stdin")
    tag_parser.add_argument(
        "path",
        nargs="?",
        default="-",
        help="Text file to analyse (default: read from stdin)",
    )
    tag_parser.add_argument("-n", "--limit", type=int, default=None, help="Number of tags to return")
    tag_parser.add_argument("--separator", default=None, help="Joiner for multi-word tags (default: space)")
    tag_parser.add_argument("--no-lowercase", action="store_true", help="Keep the original casing")
    tag_parser.add_argument("--no-stemming", action="store_true", help="Do not merge inflected forms")
    tag_parser.add_argument(
        "--compound-emphasis",
        action="store_true",
        help="Use the compound-emphasis preset (compound 7.0, bigram 5.0)",
    )
    tag_parser.add_argument("--vocabulary", default=None, help="YAML file with white_list/black_list")
    output = tag_parser.add_mutually_exclusive_group()
    output.add_argument("--json", action="store_true", help="Print tags as JSON")
    output.add_argument("--debug", action="store_true", help="Print a table with scores and term types")

    serve_parser = subparsers.add_parser("serve", help="Run the HTTP service")
    serve_parser.add_argument("--host", default="127.0.0.1")
    serve_parser.add_argument("--port", type=int, default=8000)
    return parser


def _settings_from_args(args: argparse.Namespace) -> TaggerSettings:
    settings = TaggerSettings.from_env()
    overrides: dict[str, object] = {}
    if args.separator is not None:
        overrides["separator"] = args.separator
    if args.no_lowercase:
        overrides["lowercase"] = False
    if args.no_stemming:
        overrides["apply_stemming"] = False
    if args.vocabulary:
        overrides["vocabulary_path"] = args.vocabulary
    if overrides:
        settings = replace(settings, **overrides)
    if args.compound_emphasis:
        settings = settings.with_compound_emphasis()
    return settings


def _read_text(path: str) -> str:
    if path == "-":
        return sys.stdin.read()
    with open(path, encoding="utf-8") as handle:
        return handle.read()


def render_debug_table(tag_set: TagSet, tagger: AutoTagger) -> str:
    rows = [list(_DEBUG_HEADERS)]
    for term in tag_set:
        rows.append(
            [
                term.value,
                str(term.frequency),
                f"{term.score:.4f}",
                term.term_type.value,
                "x" if tagger.is_white_listed(term.value) else "",
            ]
        )
    widths = [max(len(row[index]) for row in rows) for index in range(len(_DEBUG_HEADERS))]
    lines = ["  ".join(cell.ljust(width) for cell, width in zip(row, widths)).rstrip() for row in rows]
    return "\n".join(lines)


def run_tag(args: argparse.Namespace, out: TextIO) -> int:
    settings = _settings_from_args(args)
    tagger = AutoTagger(settings)
    text = _read_text(args.path)
    limit = settings.default_max_tags if args.limit is None else args.limit
    tag_set = tagger.analyze(text, limit)

    if args.json:
        json.dump(tag_set.to_dicts(), out, indent=2)
        out.write("\n")
    elif args.debug:
        out.write(render_debug_table(tag_set, tagger) + "\n")
        out.write(
            f"It took {tagger.last_analysis_duration_ms:.2f} ms to generate tags "
            f"from {tagger.last_word_count} words\n"
        )
    else:
        out.write(tag_set.to_string() + "\n")
    return 0


def run_serve(args: argparse.Namespace) -> int:  # pragma: no cover - starts a server
    import uvicorn

    from .app import create_app

    uvicorn.run(create_app(), host=args.host, port=args.port)
    return 0


def main(argv: Sequence[str] | None = None, *, out: TextIO | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    ensure_logging()

    if args.command == "serve":
        return run_serve(args)

    if args.limit is not None and args.limit < 0:
        parser.error("--limit must be zero or greater")
    try:
        return run_tag(args, out or sys.stdout)
    except (ConfigurationError, VocabularyLoadError) as exc:
        parser.error(str(exc))
    except OSError as exc:
        parser.error(f"Cannot read {args.path}: {exc}")
    return 1


if __name__ == "__main__":  # pragma: no cover - CLI entry
    sys.exit(main())
