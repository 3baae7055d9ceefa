"""CLI entry point for running as `python -m api.cli`.

Usage:
    python -m api.cli                 # REPL (search mode)
    python -m api.cli search "query"  # Direct search
    python -m api.cli ingest /path    # Ingest documents
    python -m api.cli status -v       # Store statistics
"""

import sys

from .repl import create_parser, run_cli


def main():
    """Entry point for `python -m api.cli`."""
    parser = create_parser()
    args = parser.parse_args()
    sys.exit(run_cli(args))


if __name__ == "__main__":
    main()
