"""
Entry point for the imgx command-line interface.

Usage examples::

    # One-shot analysis of one or more images (last argument is the prompt)
    imgx analyze photo.jpg "What is in this picture?"
    imgx analyze before.png after.png "What changed?" --verbose

    # Piped screenshot, generated plots saved under ./out
    screencapture -c && imgx analyze clipboard "Plot the colour histogram" --images out

    # Interactive session about a remote image
    imgx chat https://example.com/chart.png "Summarise this chart"

Requires GEMINI_API_KEY in the environment (or in a .env file).
This is the only place where errors become exit codes: 0 on success,
1 for generation failures, 2 for input failures.
"""

from __future__ import annotations

import argparse
import asyncio
import sys
from typing import Sequence

from imgx import __version__
from imgx.bootstrap.components import Components
from imgx.commands.analyze import analyze_command, split_analyze_args
from imgx.commands.chat import chat_command
from imgx.components.configuration.configuration import ConfigurationError
from imgx.entities.options import ImgxOptions
from imgx.errors import (
    EXIT_INPUT_ERROR,
    EXIT_SUCCESS,
    InputError,
    ServiceError,
)
from imgx.dependencies.components import get_components
from imgx.dependencies.services import (
    get_default_model,
    get_default_timeout,
    get_generation_service,
    get_image_service,
    get_source_service,
)

EXIT_INTERRUPTED = 130


def _add_global_options(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Show all response parts (thinking, code, results).",
    )
    parser.add_argument(
        "--code", action="store_true", help="Print only generated code blocks."
    )
    parser.add_argument(
        "--images",
        default=".",
        metavar="DIR",
        help="Save generated images to this directory (default: current directory).",
    )
    parser.add_argument(
        "--json", action="store_true", help="Full structured JSON output."
    )
    parser.add_argument(
        "-q",
        "--quiet",
        action="store_true",
        help="Suppress text output, only save images.",
    )
    parser.add_argument(
        "--model",
        default=None,
        help="Model to use (default from env IMGX_MODEL or gemini-3-flash-preview).",
    )
    parser.add_argument("--system", default=None, help="System instruction.")
    parser.add_argument(
        "--timeout",
        type=float,
        default=None,
        metavar="SECONDS",
        help="Request timeout in seconds (default from env IMGX_TIMEOUT or 120).",
    )
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        type=str.upper,
        default=None,
        help="Logging verbosity on stderr (default from env IMGX_LOG_LEVEL or WARNING).",
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="imgx", description="CLI for Gemini vision with code execution."
    )
    parser.add_argument("--version", action="version", version=f"imgx {__version__}")
    subparsers = parser.add_subparsers(dest="command", required=True)

    analyze = subparsers.add_parser("analyze", help="Analyze image(s) with a prompt.")
    analyze.add_argument(
        "args",
        nargs="+",
        metavar="ARG",
        help="Image path(s)/URL(s), '-' or 'clipboard', followed by the prompt (last arg).",
    )
    _add_global_options(analyze)

    chat = subparsers.add_parser(
        "chat", help="Interactive multi-turn chat about an image."
    )
    chat.add_argument("image", help="Image file, URL, '-', or 'clipboard'.")
    chat.add_argument("prompt", nargs="?", default=None, help="Initial prompt (optional).")
    _add_global_options(chat)

    return parser


def build_options(args: argparse.Namespace, components: Components) -> ImgxOptions:
    return ImgxOptions(
        verbose=args.verbose,
        code=args.code,
        quiet=args.quiet,
        json=args.json,
        images=args.images,
        model=args.model or get_default_model(components),
        system=args.system,
        timeout=args.timeout if args.timeout is not None else get_default_timeout(components),
        log_level=args.log_level,
    )


async def run_command(
    args: argparse.Namespace, options: ImgxOptions, components: Components
) -> None:
    if args.command == "analyze":
        # Reject malformed positionals before asking for credentials.
        split_analyze_args(args.args)

    generation = get_generation_service(components, options)
    sources = get_source_service(components)
    images = get_image_service(components)
    try:
        if args.command == "analyze":
            await analyze_command(args.args, options, generation, sources, images)
        else:
            await chat_command(args.image, args.prompt, options, generation, sources, images)
    finally:
        await sources.aclose()


def main(argv: Sequence[str] | None = None) -> int:
    """Parse arguments, run the selected command and return an exit code."""
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        components = get_components(log_level=args.log_level)
        options = build_options(args, components)
        asyncio.run(run_command(args, options, components))
    except InputError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return exc.exit_code
    except ConfigurationError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return EXIT_INPUT_ERROR
    except ServiceError as exc:
        print(f"API Error: {exc}", file=sys.stderr)
        return exc.exit_code
    except KeyboardInterrupt:
        return EXIT_INTERRUPTED

    return EXIT_SUCCESS


def run() -> None:
    """Console-script wrapper around :func:`main`."""
    raise SystemExit(main(sys.argv[1:]))


if __name__ == "__main__":  # pragma: no cover
    run()
