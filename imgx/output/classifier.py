"""
Projection of a generation response onto typed fragments.

Only the first candidate is considered. Each part yields at most one
fragment and parts of an unknown shape are dropped.
"""

from __future__ import annotations

import base64
import logging
from typing import Any

from imgx.entities.fragment import (
    Code,
    ExecutionResult,
    Image,
    Narration,
    Reasoning,
    ResponseFragment,
)

_logger = logging.getLogger(__name__)


def _encode(data: bytes | str) -> str:
    # The SDK decodes inline data to bytes; raw dict responses keep base64 text.
    if isinstance(data, str):
        return data
    return base64.b64encode(data).decode("ascii")


def classify_part(part: Any) -> ResponseFragment | None:
    """Map a single response part to a fragment, first matching rule wins."""
    text = getattr(part, "text", None)
    if text and getattr(part, "thought", None):
        return Reasoning(content=text)
    if text:
        return Narration(content=text)

    executable_code = getattr(part, "executable_code", None)
    if executable_code is not None and getattr(executable_code, "code", None):
        return Code(content=executable_code.code)

    execution_result = getattr(part, "code_execution_result", None)
    if execution_result is not None:
        return ExecutionResult(content=getattr(execution_result, "output", None) or "")

    inline_data = getattr(part, "inline_data", None)
    if inline_data is not None and getattr(inline_data, "data", None):
        return Image(
            mime_type=getattr(inline_data, "mime_type", None),
            data=_encode(inline_data.data),
        )

    return None


def classify_response(response: Any) -> list[ResponseFragment]:
    candidates = getattr(response, "candidates", None)
    if not candidates:
        return []

    content = getattr(candidates[0], "content", None)
    parts = getattr(content, "parts", None) or []

    fragments: list[ResponseFragment] = []
    for index, part in enumerate(parts):
        fragment = classify_part(part)
        if fragment is None:
            _logger.debug("Skipping unrecognised response part #%d", index)
            continue
        fragments.append(fragment)
    return fragments
