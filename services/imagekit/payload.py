"""
Wire values and overlay payload encoding.

Overlay text and overlay input paths are written either inline (``i-``) or
as percent-encoded base64 (``ie-``). In ``auto`` mode the inline form is used
only when every character is in a small allow-list that survives both the
path and the query part of a URL unchanged.
"""

import base64
import re
from enum import Enum
from typing import Any
from urllib.parse import quote

from .models import PayloadEncoding

# Character sets verified against the live API. The hyphen after 0-9 is a
# literal "-", not a range.
SIMPLE_OVERLAY_PATH_REGEX = re.compile(r"[a-zA-Z0-9-._/ ]*")
SIMPLE_OVERLAY_TEXT_REGEX = re.compile(r"[a-zA-Z0-9-._ ]*")

CHAIN_TRANSFORM_DELIMITER = ":"
TRANSFORM_DELIMITER = ","
TRANSFORM_KEY_VALUE_DELIMITER = "-"

INLINE_PREFIX = "i-"
ENCODED_PREFIX = "ie-"

# Characters encodeURIComponent leaves untouched besides alphanumerics and "_.-~"
_URI_COMPONENT_SAFE = "!*'()"


def to_wire_value(value: Any) -> str:
    """Render a transformation value as text, the way the API documents it."""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, Enum):
        return to_wire_value(value.value)
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, (list, tuple)):
        return ",".join(to_wire_value(item) for item in value)
    return str(value)


def encode_uri_component(value: str) -> str:
    """Percent-encode a value the way browsers' encodeURIComponent does."""
    return quote(value, safe=_URI_COMPONENT_SAFE)


def safe_b64encode(value: str) -> str:
    """Base64 of the UTF-8 bytes of ``value``."""
    return base64.b64encode(value.encode("utf-8")).decode("ascii")


def _strip_slashes(value: str) -> str:
    if value.startswith("/"):
        value = value[1:]
    if value.endswith("/"):
        value = value[:-1]
    return value


def _encoded(value: str) -> str:
    return f"{ENCODED_PREFIX}{encode_uri_component(safe_b64encode(value))}"


def encode_input_path(value: str, encoding: str = PayloadEncoding.AUTO) -> str:
    """
    Encode the ``input`` of an image, video or subtitle overlay.

    One leading and one trailing slash are dropped. Inline paths use ``@@``
    in place of ``/`` because a slash would end the URL path segment.
    """
    value = _strip_slashes(value)
    if encoding == PayloadEncoding.BASE64:
        return _encoded(value)
    if encoding == PayloadEncoding.PLAIN or SIMPLE_OVERLAY_PATH_REGEX.fullmatch(value):
        return f"{INLINE_PREFIX}{value.replace('/', '@@')}"
    return _encoded(value)


def encode_text(value: str, encoding: str = PayloadEncoding.AUTO) -> str:
    """Encode the ``text`` of a text overlay."""
    if encoding == PayloadEncoding.BASE64:
        return _encoded(value)
    if encoding == PayloadEncoding.PLAIN or SIMPLE_OVERLAY_TEXT_REGEX.fullmatch(value):
        return f"{INLINE_PREFIX}{encode_uri_component(value)}"
    return _encoded(value)
