import base64
from dataclasses import dataclass

from google.genai import types


@dataclass(frozen=True)
class MediaPayload:
    """Image bytes encoded as base64 together with their detected MIME type."""

    encoded_bytes: str
    mime_type: str

    @classmethod
    def from_bytes(cls, data: bytes, mime_type: str) -> "MediaPayload":
        return cls(
            encoded_bytes=base64.b64encode(data).decode("ascii"),
            mime_type=mime_type,
        )

    def to_part(self) -> types.Part:
        """Build the inline-data part sent to the generation service."""
        return types.Part.from_bytes(
            data=base64.b64decode(self.encoded_bytes), mime_type=self.mime_type
        )
