"""
Supported Transforms
====================
Maps semantic transformation names to the short codes used in ImageKit URLs.

Names follow the vendor SDK spelling (camelCase). Every multi-word name also
has a snake_case alias so Python callers can write ``aspect_ratio`` as well as
``aspectRatio``. Unknown names are not an error: the encoder passes them
through verbatim, which keeps newly released transformations usable.

Reference: https://imagekit.io/docs/transformations
"""

import re
from types import MappingProxyType
from typing import Dict, Mapping


_CAMEL_TRANSFORMS: Dict[str, str] = {
    # Resize, crop and layout
    "width": "w",
    "height": "h",
    "aspectRatio": "ar",
    "crop": "c",
    "cropMode": "cm",
    "focus": "fo",
    "x": "x",
    "y": "y",
    "xCenter": "xc",
    "yCenter": "yc",
    "zoom": "z",
    "dpr": "dpr",

    # Appearance
    "background": "bg",
    "border": "b",
    "radius": "r",
    "rotation": "rt",
    "blur": "bl",
    "flip": "fl",
    "opacity": "o",
    "quality": "q",
    "format": "f",
    "named": "n",
    "progressive": "pr",
    "lossless": "lo",
    "trim": "t",
    "metadata": "md",
    "colorProfile": "cp",
    "defaultImage": "di",
    "original": "orig",
    "page": "pg",
    "colorReplace": "cr",

    # Video
    "videoCodec": "vc",
    "audioCodec": "ac",
    "startOffset": "so",
    "endOffset": "eo",
    "duration": "du",
    "streamingResolutions": "sr",

    # Effects
    "grayscale": "e-grayscale",
    "contrastStretch": "e-contrast",
    "shadow": "e-shadow",
    "sharpen": "e-sharpen",
    "unsharpMask": "e-usm",
    "gradient": "e-gradient",
    "distort": "e-distort",

    # AI transformations
    "aiRemoveBackground": "e-bgremove",
    "aiRemoveBackgroundExternal": "e-removedotbg",
    "aiUpscale": "e-upscale",
    "aiRetouch": "e-retouch",
    "aiVariation": "e-genvar",
    "aiDropShadow": "e-dropshadow",
    "aiChangeBackground": "e-changebg",
    "aiEdit": "e-edit",

    # Text and subtitle layer styling
    "fontSize": "fs",
    "fontFamily": "ff",
    "fontColor": "co",
    "color": "co",
    "innerAlignment": "ia",
    "padding": "pa",
    "alpha": "al",
    "typography": "tg",
    "lineHeight": "lh",
    "fontOutline": "fol",
    "fontShadow": "fsh",

    # Deprecated spellings still accepted by the API
    "rotate": "rt",
    "effectSharpen": "e-sharpen",
    "effectUSM": "e-usm",
    "effectContrast": "e-contrast",
    "effectGray": "e-grayscale",
    "effectShadow": "e-shadow",
    "effectGradient": "e-gradient",

    # Verbatim passthrough, handled by the encoder
    "raw": "raw",
}


def _snake_case(name: str) -> str:
    """aiRemoveBackground -> ai_remove_background, effectUSM -> effect_usm."""
    name = re.sub(r"([A-Z]+)([A-Z][a-z])", r"\1_\2", name)
    return re.sub(r"([a-z0-9])([A-Z])", r"\1_\2", name).lower()


def _with_snake_case_aliases(transforms: Dict[str, str]) -> Dict[str, str]:
    table = dict(transforms)
    for name, code in transforms.items():
        table.setdefault(_snake_case(name), code)
    return table


SUPPORTED_TRANSFORMS: Mapping[str, str] = MappingProxyType(_with_snake_case_aliases(_CAMEL_TRANSFORMS))


def resolve_transform_key(name: str, table: Mapping[str, str] = SUPPORTED_TRANSFORMS) -> str:
    """
    Resolve a semantic transformation name to its wire code.

    Lookup is exact first, then case-insensitive on the lower-cased name.

    Args:
        name: Transformation name as given by the caller
        table: Lookup table, injectable for tests

    Returns:
        The wire code, or "" when the name is unknown or empty
    """
    if not name:
        return ""
    return table.get(name) or table.get(name.lower()) or ""
