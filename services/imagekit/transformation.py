"""
Transformation String Builder
=============================
Serializes chained transformation steps into the ImageKit wire format.

    [{"height": 300, "width": 400}, {"rotation": 90}]  ->  "h-300,w-400:rt-90"

Steps are joined with ":", tokens inside a step with ",", and a resolved key
with its value by "-". Keys are emitted in the order the caller inserted
them. Invalid or disabled keys are skipped; they never abort the whole string.
"""

from typing import Any, Mapping

from loguru import logger
from pydantic import BaseModel

from .overlay import build_overlay_string
from .payload import (
    CHAIN_TRANSFORM_DELIMITER,
    TRANSFORM_DELIMITER,
    TRANSFORM_KEY_VALUE_DELIMITER,
    to_wire_value,
)
from .supported_transforms import SUPPORTED_TRANSFORMS, resolve_transform_key

OVERLAY_KEY = "overlay"
RAW_KEY = "raw"

# Effects that are either applied or not; they never carry a value
BARE_FLAG_EFFECTS = frozenset({
    "e-grayscale",
    "e-contrast",
    "e-removedotbg",
    "e-bgremove",
    "e-upscale",
    "e-retouch",
    "e-genvar",
})

# Effects whose parameter is optional; true or blank means API defaults
OPTIONAL_VALUE_EFFECTS = frozenset({
    "e-sharpen",
    "e-shadow",
    "e-gradient",
    "e-usm",
    "e-dropshadow",
})

DEFAULT_IMAGE_KEY = "di"
STREAMING_RESOLUTIONS_KEY = "sr"
TRIM_KEY = "t"


def _is_enabled_flag(value: Any) -> bool:
    return value is True or value == "-" or value == "true"


def _is_default_value(value: Any) -> bool:
    return value is True or value == "true" or to_wire_value(value).strip() == ""


def _normalize_value(transform_key: str, value: Any) -> str:
    if transform_key == DEFAULT_IMAGE_KEY:
        path = to_wire_value(value or "")
        if path.startswith("/"):
            path = path[1:]
        if path.endswith("/"):
            path = path[:-1]
        return path.replace("/", "@@")

    if transform_key == STREAMING_RESOLUTIONS_KEY and isinstance(value, (list, tuple)):
        return "_".join(to_wire_value(item) for item in value)

    text = to_wire_value(value)
    if transform_key == TRIM_KEY and text.strip() == "":
        return "true"
    return text


def _build_step(step: Mapping[str, Any], table: Mapping[str, str], depth: int) -> list:
    tokens = []
    for key, value in step.items():
        if value is None or not isinstance(key, str):
            continue

        if key == OVERLAY_KEY and isinstance(value, (BaseModel, dict)):
            layer = build_overlay_string(value, table=table, depth=depth)
            if layer and layer.strip():
                tokens.append(layer)
            continue

        transform_key = resolve_transform_key(key, table) or key
        if not transform_key:
            continue

        if transform_key in BARE_FLAG_EFFECTS:
            if _is_enabled_flag(value):
                tokens.append(transform_key)
            else:
                logger.debug(f"Skipping disabled effect {key}={value!r}")
        elif transform_key in OPTIONAL_VALUE_EFFECTS and _is_default_value(value):
            tokens.append(transform_key)
        elif key == RAW_KEY:
            raw = to_wire_value(value)
            if raw:
                tokens.append(raw)
        else:
            tokens.append(
                f"{transform_key}{TRANSFORM_KEY_VALUE_DELIMITER}{_normalize_value(transform_key, value)}"
            )
    return tokens


def build_transformation_string(
    transformation: Any,
    table: Mapping[str, str] = SUPPORTED_TRANSFORMS,
    depth: int = 0,
) -> str:
    """
    Build the transformation string for a chain of steps.

    Args:
        transformation: List of step dicts; anything else yields ""
        table: Key table, injectable for tests
        depth: Overlay nesting level, used internally

    Returns:
        Wire-format transformation string, "" when nothing is emittable

    Example:
        >>> build_transformation_string([{"width": 300}, {"rt": 90}])
        'w-300:rt-90'
    """
    if not isinstance(transformation, (list, tuple)):
        return ""

    steps = []
    for step in transformation:
        if not isinstance(step, Mapping):
            continue
        tokens = _build_step(step, table, depth)
        if tokens:
            steps.append(TRANSFORM_DELIMITER.join(tokens))

    return CHAIN_TRANSFORM_DELIMITER.join(steps)
