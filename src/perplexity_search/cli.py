#!/usr/bin/env python3
"""Command-line interface for perplexity-search.

Usage:
    # Single query (calls JigsawStack in-process, same timeout as the API)
    uv run python -m perplexity_search "What is the capital of France?"

    # JSON output (the raw provider reply)
    uv run python -m perplexity_search --format json "How does a quantum computer work?"

    # Run the proxy API
    uv run python -m perplexity_search --serve --port 8000
"""

from __future__ import annotations

import argparse
import asyncio
import json
import os
import sys
from typing import Any, TextIO

from perplexity_search import __version__
from perplexity_search.api.proxy import classify_error, search_with_timeout
from perplexity_search.tools.jigsaw_search import jigsaw_web_search
from perplexity_search.types.search import SearchResponse
from perplexity_search.ui.render import top_results

# =============================================================================
# Output Formatting
# =============================================================================


class Colors:
    """ANSI color codes for terminal output."""

    BLUE = "\033[94m"
    CYAN = "\033[96m"
    GREEN = "\033[92m"
    RED = "\033[91m"
    BOLD = "\033[1m"
    DIM = "\033[2m"
    RESET = "\033[0m"


def supports_color() -> bool:
    """Check if terminal supports colors."""
    return (
        hasattr(sys.stdout, "isatty")
        and sys.stdout.isatty()
        and os.environ.get("TERM") != "dumb"
        and os.environ.get("NO_COLOR") is None
    )


def colorize(text: str, color: str) -> str:
    """Apply color if supported."""
    if supports_color():
        return f"{color}{text}{Colors.RESET}"
    return text


def format_result_pretty(response: SearchResponse, file: TextIO | None = None) -> None:
    """Format a search response for human-readable terminal output."""
    file = file or sys.stdout
    print(colorize("=" * 60, Colors.DIM), file=file)
    print(colorize(f'"{response.query}"', Colors.BOLD), file=file)
    print(colorize("=" * 60, Colors.DIM), file=file)
    print(file=file)

    print(colorize("AI OVERVIEW:", Colors.BOLD), file=file)
    print(colorize("-" * 40, Colors.DIM), file=file)
    print(response.ai_overview, file=file)
    print(file=file)

    results = top_results(response)
    if results:
        print(colorize("TOP RESULTS:", Colors.BOLD), file=file)
        print(colorize("-" * 40, Colors.DIM), file=file)
        for index, item in enumerate(results, start=1):
            print(f"  [{index}] {item.title}", file=file)
            print(colorize(f"       {item.url}", Colors.DIM), file=file)
        print(file=file)

    print(
        colorize(
            f"Sources: {len(response.results)}  Images: {len(response.image_urls)}", Colors.DIM
        ),
        file=file,
    )
    print(colorize("=" * 60, Colors.DIM), file=file)


def format_result_json(data: dict[str, Any], file: TextIO | None = None) -> None:
    """Print the raw provider reply as JSON."""
    file = file or sys.stdout
    print(json.dumps(data, indent=2, default=str), file=file)


# =============================================================================
# Execution Modes
# =============================================================================


def run_single_query(query: str, output_format: str = "pretty", debug: bool = False) -> int:
    """Run a single query and display the result.

    Returns:
        Exit code (0 for success, 1 for error).
    """
    try:
        data = asyncio.run(search_with_timeout(query, jigsaw_web_search))
    except KeyboardInterrupt:
        print("\n\nInterrupted.", file=sys.stderr)
        return 130
    except Exception as e:
        status_code, message = classify_error(e)
        print(colorize(f"Error ({status_code}): {message}", Colors.RED), file=sys.stderr)
        if debug:
            import traceback

            traceback.print_exc()
        return 1

    if output_format == "json":
        format_result_json(data)
    else:
        format_result_pretty(SearchResponse.model_validate(data))
    return 0


def run_server(host: str, port: int) -> int:
    """Serve the proxy API with uvicorn."""
    import uvicorn

    uvicorn.run("perplexity_search.api.server:app", host=host, port=port)
    return 0


# =============================================================================
# Main Entry Point
# =============================================================================


def main(argv: list[str] | None = None) -> int:
    """Main CLI entry point.

    Args:
        argv: Command-line arguments (defaults to sys.argv[1:]).

    Returns:
        Exit code.
    """
    parser = argparse.ArgumentParser(
        prog="perplexity-search",
        description="Perplexity Search: AI-powered web search via JigsawStack",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s "What is the capital of France?"
  %(prog)s --format json "How does a quantum computer work?" > result.json
  %(prog)s --serve --port 8000
        """,
    )

    parser.add_argument("query", nargs="?", help="Question to search for")

    parser.add_argument(
        "--serve",
        action="store_true",
        help="Run the proxy API server instead of a single query",
    )
    parser.add_argument("--host", default="127.0.0.1", help="Server host (default: 127.0.0.1)")
    parser.add_argument("--port", type=int, default=8000, help="Server port (default: 8000)")

    parser.add_argument(
        "-f",
        "--format",
        choices=["pretty", "json"],
        default="pretty",
        help="Output format (default: pretty)",
    )

    parser.add_argument("--debug", action="store_true", help="Enable debug output")

    parser.add_argument(
        "--version",
        action="version",
        version=f"perplexity-search {__version__}",
    )

    args = parser.parse_args(argv)

    if args.serve:
        return run_server(args.host, args.port)
    if args.query and args.query.strip():
        return run_single_query(args.query.strip(), output_format=args.format, debug=args.debug)

    # No query provided, show help
    parser.print_help()
    return 0


if __name__ == "__main__":
    sys.exit(main())
