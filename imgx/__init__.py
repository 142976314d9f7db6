"""
imgx: a command-line client for Gemini vision with code execution.

Images are loaded from files, URLs, stdin or the clipboard, sent to the
generation API together with a prompt, and the response is split into
typed fragments (narration, thinking, code, execution results, images)
that are saved and rendered according to the selected output mode.
"""

__version__ = "0.1.0"

__all__ = ["__version__"]
