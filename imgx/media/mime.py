"""
Media type detection for image sources.

``sniff_mime_type`` looks only at magic numbers in the leading bytes and
returns ``None`` when nothing matches. ``mime_from_extension`` is the
fallback used when the bytes are not recognised.
"""

from pathlib import PurePath

DEFAULT_FALLBACK_MIME_TYPE = "image/jpeg"

MIME_EXTENSIONS: dict[str, str] = {
    ".jpg": "image/jpeg",
    ".jpeg": "image/jpeg",
    ".png": "image/png",
    ".webp": "image/webp",
    ".gif": "image/gif",
    ".heic": "image/heic",
    ".heif": "image/heif",
    ".bmp": "image/bmp",
    ".tiff": "image/tiff",
    ".tif": "image/tiff",
    ".svg": "image/svg+xml",
}

_PNG_MAGIC = b"\x89PNG"
_JPEG_MAGIC = b"\xff\xd8\xff"
_GIF_MAGIC = b"GIF8"
_RIFF_MAGIC = b"RIFF"
_WEBP_MARKER = b"WEBP"
_BMP_MAGIC = b"BM"


def sniff_mime_type(data: bytes) -> str | None:
    """Return the image MIME type encoded in the leading bytes, or None."""
    if data.startswith(_PNG_MAGIC):
        return "image/png"
    if data.startswith(_JPEG_MAGIC):
        return "image/jpeg"
    if data.startswith(_GIF_MAGIC):
        return "image/gif"
    if data.startswith(_RIFF_MAGIC) and data[8:12] == _WEBP_MARKER:
        return "image/webp"
    if data.startswith(_BMP_MAGIC):
        return "image/bmp"
    return None


def file_extension(path: str) -> str:
    """Lower-cased final dot-extension of the last path component, or ''."""
    name = PurePath(path).name.lower()
    index = name.rfind(".")
    if index < 0:
        return ""
    return name[index:]


def mime_from_extension(
    path: str, default: str = DEFAULT_FALLBACK_MIME_TYPE
) -> str:
    return MIME_EXTENSIONS.get(file_extension(path), default)


def extension_for_mime(mime_type: str | None) -> str:
    """File extension (without dot) used when saving an image of this type."""
    if not mime_type or "/" not in mime_type:
        return "png"
    subtype = mime_type.split("/", 1)[1]
    if not subtype:
        return "png"
    return "jpg" if subtype == "jpeg" else subtype
