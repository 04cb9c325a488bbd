"""
datauri.py
----------
Embedded image values: ``data:<mime>;base64,<payload>`` strings inlined in the
emoji dataset.

• ``EmbeddedImage.parse`` turns such a string into (mime_type, payload bytes)
• ``EmbeddedImage.to_uri`` does the reverse
• Anything not starting with ``data:image`` is not an embedded image
"""

import base64
import re
from dataclasses import dataclass
from typing import Optional

PREFIX = "data:image"

_NOT_BASE64 = re.compile(r"[^A-Za-z0-9+/\-_]")


def is_embedded_image(value) -> bool:
    return isinstance(value, str) and value.startswith(PREFIX)


def decode_base64(text: str) -> bytes:
    """Decode base64 leniently: stray characters are dropped, padding is optional."""
    cleaned = _NOT_BASE64.sub("", text).replace("-", "+").replace("_", "/")
    cleaned += "=" * (-len(cleaned) % 4)
    return base64.b64decode(cleaned)


@dataclass(frozen=True)
class EmbeddedImage:
    mime_type: str
    payload: bytes

    @classmethod
    def parse(cls, value) -> Optional["EmbeddedImage"]:
        """Return the decoded image, or None if *value* is not an embedded image.

        Raises ``binascii.Error`` when the payload is not decodable base64.
        """
        if not is_embedded_image(value):
            return None
        header, _, body = value.partition(",")
        mime_type = header[len("data:"):].split(";", 1)[0]
        return cls(mime_type, decode_base64(body))

    def to_uri(self) -> str:
        encoded = base64.b64encode(self.payload).decode("ascii")
        return f"data:{self.mime_type};base64,{encoded}"
