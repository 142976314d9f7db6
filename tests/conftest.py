"""
Pytest configuration and fixtures for the test suite.

Responses are built from real google-genai types so the classifier sees
the same shapes the SDK produces.
"""

import base64
import logging
from collections.abc import Callable

import pytest
from google.genai import types

# Smallest valid PNG: 1x1 transparent pixel.
MINIMAL_PNG = base64.b64decode(
    "iVBORw0KGgoAAAANSUhEUgAAAAEAAAABCAYAAAAfFcSJAAAADUlEQVR42mNkYPhfDwAChwGA60e6kgAAAABJRU5ErkJggg=="
)

# Keep library loggers quiet regardless of IMGX_LOG_LEVEL in the shell.
logging.getLogger("httpx").setLevel(logging.WARNING)
logging.getLogger("google_genai").setLevel(logging.WARNING)


@pytest.fixture
def logger() -> logging.Logger:
    return logging.getLogger("ImgxTest")


@pytest.fixture
def png_bytes() -> bytes:
    return MINIMAL_PNG


@pytest.fixture
def make_response() -> Callable[..., types.GenerateContentResponse]:
    """Build a GenerateContentResponse whose first candidate holds ``parts``."""

    def _make(*parts: types.Part) -> types.GenerateContentResponse:
        return types.GenerateContentResponse(
            candidates=[
                types.Candidate(content=types.Content(role="model", parts=list(parts)))
            ]
        )

    return _make
