"""
Typed fragments of a generation response.

A response is projected onto an ordered list of fragments. The five
fragment classes form a closed union (``ResponseFragment``); consumers
dispatch on the concrete class and treat anything else as a programming
error.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, ClassVar, Literal, Union

FragmentType = Literal["text", "thought", "code", "result", "image"]


@dataclass(frozen=True)
class Narration:
    """Plain answer text."""

    content: str
    type: ClassVar[FragmentType] = "text"

    def to_dict(self) -> dict[str, Any]:
        return {"type": self.type, "content": self.content}


@dataclass(frozen=True)
class Reasoning:
    """Thought summary returned when thoughts are included."""

    content: str
    type: ClassVar[FragmentType] = "thought"

    def to_dict(self) -> dict[str, Any]:
        return {"type": self.type, "content": self.content}


@dataclass(frozen=True)
class Code:
    """Source generated by the model for the code execution tool."""

    content: str
    type: ClassVar[FragmentType] = "code"

    def to_dict(self) -> dict[str, Any]:
        return {"type": self.type, "content": self.content}


@dataclass(frozen=True)
class ExecutionResult:
    """Captured output of a code execution; empty string when none was reported."""

    content: str = ""
    type: ClassVar[FragmentType] = "result"

    def to_dict(self) -> dict[str, Any]:
        return {"type": self.type, "content": self.content}


@dataclass(frozen=True)
class Image:
    """Inline image produced by the model, kept base64-encoded."""

    mime_type: str | None
    data: str
    content: str = ""
    type: ClassVar[FragmentType] = "image"

    def to_dict(self) -> dict[str, Any]:
        return {
            "type": self.type,
            "content": self.content,
            "mimeType": self.mime_type,
            "data": self.data,
        }


ResponseFragment = Union[Narration, Reasoning, Code, ExecutionResult, Image]
