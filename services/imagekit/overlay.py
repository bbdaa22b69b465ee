"""
Overlay layer encoding.

A layer is written as a self-contained token group::

    l-<type>,<payload>[,position][,timing][,<nested transformation>],l-end

Nested transformations may contain overlays again, so this module and
``transformation`` call each other. An overlay that lacks the field its type
requires produces nothing at all instead of raising.
"""

from typing import Any, Mapping, Optional

from loguru import logger
from pydantic import BaseModel, ValidationError

from config import settings

from .models import (
    OVERLAY_ADAPTER,
    ImageOverlay,
    SolidColorOverlay,
    SubtitleOverlay,
    TextOverlay,
    VideoOverlay,
)
from .payload import TRANSFORM_DELIMITER, encode_input_path, encode_text, to_wire_value
from .supported_transforms import SUPPORTED_TRANSFORMS

LAYER_END = "l-end"
SOLID_COLOR_CANVAS = "i-ik_canvas"

_LAYER_TAGS = {
    "text": "l-text",
    "image": "l-image",
    "video": "l-video",
    "subtitle": "l-subtitle",
    "solidColor": "l-image",
}

_POSITION_PREFIXES = (("x", "lx"), ("y", "ly"), ("focus", "lfo"))
_TIMING_PREFIXES = (("start", "lso"), ("end", "leo"), ("duration", "ldu"))


def _coerce_overlay(overlay: Any) -> Optional[BaseModel]:
    """Accept an overlay model or a plain dict with a ``type`` field."""
    if isinstance(overlay, BaseModel):
        return overlay if getattr(overlay, "type", None) else None
    if not isinstance(overlay, dict) or not overlay.get("type"):
        return None
    try:
        return OVERLAY_ADAPTER.validate_python(overlay)
    except ValidationError as e:
        logger.debug(f"Dropping invalid {overlay.get('type')} overlay: {e.error_count()} error(s)")
        return None


def _payload_tokens(overlay: BaseModel) -> Optional[list]:
    """Layer declaration plus payload, or None when the required field is missing."""
    if isinstance(overlay, TextOverlay):
        if not overlay.text:
            return None
        return [_LAYER_TAGS["text"], encode_text(overlay.text, overlay.encoding)]

    if isinstance(overlay, (ImageOverlay, VideoOverlay, SubtitleOverlay)):
        if not overlay.input:
            return None
        return [_LAYER_TAGS[overlay.type], encode_input_path(overlay.input, overlay.encoding)]

    if isinstance(overlay, SolidColorOverlay):
        if not overlay.color:
            return None
        return [_LAYER_TAGS["solidColor"], SOLID_COLOR_CANVAS, f"bg-{overlay.color}"]

    return None


def build_overlay_string(
    overlay: Any,
    table: Mapping[str, str] = SUPPORTED_TRANSFORMS,
    depth: int = 0,
) -> Optional[str]:
    """
    Encode one overlay layer.

    Args:
        overlay: Overlay model or dict
        table: Key table used for the nested transformation
        depth: Nesting level of the transformation holding this overlay

    Returns:
        The comma-joined layer tokens, or None when nothing should be emitted
    """
    from .transformation import build_transformation_string

    if depth >= settings.MAX_TRANSFORMATION_DEPTH:
        logger.warning(f"Overlay nested deeper than {settings.MAX_TRANSFORMATION_DEPTH} levels dropped")
        return None

    model = _coerce_overlay(overlay)
    if model is None:
        return None

    entries = _payload_tokens(model)
    if entries is None:
        logger.debug(f"Dropping {model.type} overlay without its required field")
        return None

    for field, prefix in _POSITION_PREFIXES:
        value = getattr(model.position, field)
        if value:
            entries.append(f"{prefix}-{to_wire_value(value)}")

    for field, prefix in _TIMING_PREFIXES:
        value = getattr(model.timing, field)
        if value:
            entries.append(f"{prefix}-{to_wire_value(value)}")

    nested = build_transformation_string(model.transformation, table=table, depth=depth + 1)
    if nested and nested.strip():
        entries.append(nested)

    entries.append(LAYER_END)
    return TRANSFORM_DELIMITER.join(entries)
