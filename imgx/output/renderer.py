"""
Terminal rendering of classified fragments.

Exactly one mode applies per call. Each emitted item is written to the
stream as a single ``write`` of its text plus a newline.
"""

from __future__ import annotations

import enum
import json
import sys
from collections.abc import Sequence
from typing import TextIO

from imgx.entities.fragment import (
    Code,
    ExecutionResult,
    Image,
    Narration,
    Reasoning,
    ResponseFragment,
)
from imgx.entities.options import ImgxOptions

THINKING_BANNER = "--- Thinking ---"
RESULT_BANNER = "--- Execution Result ---"
IMAGE_NOTICE = "[Generated image saved]"
CODE_LANGUAGE = "python"


class OutputMode(enum.Enum):
    JSON = "json"
    QUIET = "quiet"
    CODE = "code"
    VERBOSE = "verbose"
    DEFAULT = "default"


def select_output_mode(options: ImgxOptions) -> OutputMode:
    if options.json:
        return OutputMode.JSON
    if options.quiet:
        return OutputMode.QUIET
    if options.code:
        return OutputMode.CODE
    if options.verbose:
        return OutputMode.VERBOSE
    return OutputMode.DEFAULT


def format_verbose(fragment: ResponseFragment) -> str:
    if isinstance(fragment, Reasoning):
        return f"\n{THINKING_BANNER}\n{fragment.content}"
    if isinstance(fragment, Narration):
        return fragment.content
    if isinstance(fragment, Code):
        return f"\n```{CODE_LANGUAGE}\n{fragment.content}\n```"
    if isinstance(fragment, ExecutionResult):
        return f"\n{RESULT_BANNER}\n{fragment.content}"
    if isinstance(fragment, Image):
        return IMAGE_NOTICE
    raise TypeError(f"Unknown fragment type: {type(fragment).__name__}")


def _emit(stream: TextIO, text: str) -> None:
    stream.write(f"{text}\n")


def render(
    fragments: Sequence[ResponseFragment],
    mode: OutputMode,
    stream: TextIO | None = None,
) -> None:
    out = stream if stream is not None else sys.stdout

    if mode is OutputMode.JSON:
        _emit(out, json.dumps([f.to_dict() for f in fragments], indent=2))
    elif mode is OutputMode.QUIET:
        return
    elif mode is OutputMode.CODE:
        for fragment in fragments:
            if isinstance(fragment, Code):
                _emit(out, fragment.content)
    elif mode is OutputMode.VERBOSE:
        for fragment in fragments:
            _emit(out, format_verbose(fragment))
    else:
        for fragment in fragments:
            if isinstance(fragment, Narration):
                _emit(out, fragment.content)
