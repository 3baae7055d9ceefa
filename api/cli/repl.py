"""Command-line entry points: one-shot commands and an interactive REPL.

Usage:
    python -m api.cli                      # REPL
    python -m api.cli search "query"       # Direct search
    python -m api.cli ingest guide.pdf     # Ingest files or URLs
    python -m api.cli status -v            # Store statistics
"""

import argparse
import re
import sys
from typing import List, Optional

from shared.config import RagConfig, load_config
from shared.exceptions import RagError
from shared.log_utils import configure_logging

from ..formatters import ResponseFormatter
from ..service import RagService
from ..use_cases import IngestResult

_URL = re.compile(r"^https?://", re.IGNORECASE)


def print_help() -> None:
    print(
        "\nCommands:\n"
        "  :help                 Show this help\n"
        "  :quit / :q / exit     Quit\n"
        "  :show                 Show current settings\n"
        "  :topk <int>           Set top-k results\n"
        "  :json <on|off>        Toggle JSON output\n"
        "  :status [-v]          Show store statistics\n"
        "  :ingest <path|url>    Ingest a document\n"
        "\nEnter any other text to run a search.\n"
    )


def parse_toggle(value: str) -> bool:
    return value.lower() in ("1", "true", "yes", "y", "on")


def show_settings(config: RagConfig, top_k, as_json) -> None:
    print("Current settings:")
    print(f"  data_dir:    {config.data_dir}")
    print(f"  model:       {config.gemini_model} ({config.embedding_dim} dims)")
    print(f"  top_k:       {top_k}")
    print(f"  json:        {'on' if as_json else 'off'}")


def ingest_targets(service: RagService, targets: List[str]) -> List[IngestResult]:
    results = []
    for target in targets:
        if _URL.match(target):
            results.append(service.ingest_url(target))
        else:
            results.append(service.ingest_file(target))
    return results


def run_search(service: RagService, query: str, top_k: int, as_json: bool) -> str:
    result = service.query(query, top_k)
    if as_json:
        return ResponseFormatter.format_search_results_json(result)
    return ResponseFormatter.format_search_results_text(result)


def run_repl(service: RagService, top_k: int, as_json: bool) -> int:
    print("RAG Search REPL")
    print("Type :help for commands.")

    while True:
        try:
            line = input("> ").strip()
        except (EOFError, KeyboardInterrupt):
            print()
            break

        if not line:
            continue

        cmd = line.split()
        head = cmd[0].lower()

        if head in (":quit", ":q", "exit"):
            break
        if head == ":help":
            print_help()
            continue
        if head == ":show":
            show_settings(service.config, top_k, as_json)
            continue
        if head == ":topk":
            if len(cmd) < 2 or not cmd[1].isdigit():
                print("[error] usage: :topk <int>")
                continue
            top_k = int(cmd[1])
            print(f"[ok] top_k set to {top_k}")
            continue
        if head == ":json":
            if len(cmd) < 2:
                print("[error] usage: :json <on|off>")
                continue
            as_json = parse_toggle(cmd[1])
            print(f"[ok] json {'on' if as_json else 'off'}")
            continue
        if head == ":status":
            try:
                print(ResponseFormatter.format_stats(service.stats(), verbose="-v" in cmd[1:]))
            except RagError as exc:
                print(ResponseFormatter.format_error(exc))
            continue
        if head == ":ingest":
            if len(cmd) < 2:
                print("[error] usage: :ingest <path|url>")
                continue
            try:
                print(ResponseFormatter.format_ingest_results(ingest_targets(service, cmd[1:])))
            except RagError as exc:
                print(ResponseFormatter.format_error(exc))
            continue
        if head.startswith(":"):
            print(f"[error] unknown command {head}; type :help")
            continue

        try:
            print(run_search(service, line, top_k, as_json))
        except RagError as exc:
            print(ResponseFormatter.format_error(exc))

    return 0


def run_cli(args: argparse.Namespace, service: Optional[RagService] = None) -> int:
    config = service.config if service else load_config()
    configure_logging(args.log_level or config.log_level)
    try:
        service = service or RagService.from_config(config)
    except (RagError, ValueError) as exc:
        print(ResponseFormatter.format_error(exc))
        return 1

    top_k = args.top_k if args.top_k is not None else config.top_k
    command = args.command or "repl"

    if command == "repl":
        return run_repl(service, top_k, args.json)

    try:
        if command == "status":
            print(ResponseFormatter.format_stats(service.stats(), verbose=args.verbose))
        elif command == "ingest":
            print(ResponseFormatter.format_ingest_results(ingest_targets(service, args.targets)))
        elif command == "search":
            print(run_search(service, " ".join(args.query), top_k, args.json))
    except RagError as exc:
        print(ResponseFormatter.format_error(exc))
        return 1
    return 0


def create_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Document ingestion and similarity search")
    parser.add_argument(
        "--top-k",
        type=int,
        default=None,
        help="Number of results (default: RAG_TOP_K or 8)",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Output JSON",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        help="Logging level (default: LOG_LEVEL or INFO)",
    )
    sub = parser.add_subparsers(dest="command")

    ingest = sub.add_parser("ingest", help="Ingest files or URLs")
    ingest.add_argument("targets", nargs="+", help="File paths or http(s) URLs")

    search = sub.add_parser("search", help="Run one query")
    search.add_argument("query", nargs="+", help="Query text")
    search.add_argument("--top-k", type=int, default=argparse.SUPPRESS, help="Number of results")
    search.add_argument("--json", action="store_true", default=argparse.SUPPRESS, help="Output JSON")

    status = sub.add_parser("status", help="Show store statistics")
    status.add_argument("-v", "--verbose", action="store_true", help="List document names")

    sub.add_parser("repl", help="Interactive search (default)")
    return parser


if __name__ == "__main__":
    parser = create_parser()
    sys.exit(run_cli(parser.parse_args()))


__all__ = ["create_parser", "run_cli", "run_repl"]
