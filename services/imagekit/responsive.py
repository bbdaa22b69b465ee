"""
Responsive Image Attributes
===========================
Computes ``src``, ``srcset`` and ``sizes`` for an <img> element.

Candidate widths come from two pools: device breakpoints (full-width layouts)
and image breakpoints (small, fixed-size images). Every candidate URL asks the
CDN to resize with ``c-at_max`` so an image is never upscaled.
"""

import re
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Tuple

from config import settings

from .models import Transformation
from .url import build_src

_VW_TOKEN = re.compile(r"(^|\s)(1?\d{1,2})vw")


@dataclass
class ResponsiveImageAttributes:
    """Attributes to spread on an <img> element."""
    src: str
    src_set: Optional[str] = None
    sizes: Optional[str] = None
    width: Optional[int] = None

    def to_dict(self) -> Dict[str, Any]:
        attributes = {"src": self.src}
        if self.src_set is not None:
            attributes["srcSet"] = self.src_set
        if self.sizes is not None:
            attributes["sizes"] = self.sizes
        if self.width is not None:
            attributes["width"] = self.width
        return attributes


def compute_candidate_widths(
    all_breakpoints: List[int],
    device_breakpoints: List[int],
    explicit_width: Optional[int] = None,
    sizes: Optional[str] = None,
) -> Tuple[List[int], str]:
    """
    Pick the widths to offer in ``srcset``.

    Returns:
        (candidate widths, descriptor kind) where the kind is "w" for width
        descriptors and "x" for pixel-density descriptors
    """
    if sizes:
        vw_percents = [int(match.group(2)) for match in _VW_TOKEN.finditer(sizes)]
        if vw_percents:
            smallest_ratio = min(vw_percents) / 100
            min_required_px = device_breakpoints[0] * smallest_ratio
            return [w for w in all_breakpoints if w >= min_required_px], "w"
        # no vw units, offer everything
        return list(all_breakpoints), "w"

    if explicit_width is None:
        return list(device_breakpoints), "w"

    def nearest(target: float) -> int:
        return next((w for w in all_breakpoints if w >= target), all_breakpoints[-1])

    # 1x and 2x
    candidates = []
    for w in (nearest(explicit_width), nearest(explicit_width * 2)):
        if w not in candidates:
            candidates.append(w)
    return candidates, "x"


def get_responsive_image_attributes(
    src: str,
    url_endpoint: str,
    width: Optional[int] = None,
    sizes: Optional[str] = None,
    device_breakpoints: Optional[List[int]] = None,
    image_breakpoints: Optional[List[int]] = None,
    transformation: Optional[Transformation] = None,
    query_parameters: Optional[Dict[str, Any]] = None,
    transformation_position: Optional[str] = None,
) -> ResponsiveImageAttributes:
    """
    Build responsive image attributes for an ImageKit asset.

    Args:
        src: Relative path or absolute URL of the image
        url_endpoint: ImageKit URL endpoint
        width: Rendered CSS width; enables the 1x/2x strategy when sizes is absent
        sizes: HTML ``sizes`` value; vw units prune small candidates
        device_breakpoints: Override of the device breakpoint pool
        image_breakpoints: Override of the image breakpoint pool
        transformation: Caller transformation, kept ahead of the resize step
        query_parameters: Extra query parameters for every URL
        transformation_position: "path" or "query"

    Returns:
        ResponsiveImageAttributes
    """
    device_breakpoints = list(device_breakpoints or settings.DEFAULT_DEVICE_BREAKPOINTS)
    image_breakpoints = list(image_breakpoints or settings.DEFAULT_IMAGE_BREAKPOINTS)
    all_breakpoints = sorted(image_breakpoints + device_breakpoints)

    candidates, descriptor_kind = compute_candidate_widths(
        all_breakpoints,
        device_breakpoints,
        explicit_width=width,
        sizes=sizes,
    )

    def build_url(candidate_width: Optional[int]) -> str:
        steps = list(transformation or [])
        if candidate_width is not None:
            steps.append({"width": candidate_width, "crop": "at_max"})
        return build_src(
            src=src,
            url_endpoint=url_endpoint,
            query_parameters=query_parameters,
            transformation_position=transformation_position,
            transformation=steps,
        )

    if descriptor_kind == "w":
        entries = [f"{build_url(w)} {w}w" for w in candidates]
    else:
        entries = [f"{build_url(w)} {i + 1}x" for i, w in enumerate(candidates)]

    return ResponsiveImageAttributes(
        src=build_url(candidates[-1] if candidates else None),
        src_set=", ".join(entries) or None,
        sizes=sizes if sizes is not None else ("100vw" if descriptor_kind == "w" else None),
        width=width,
    )
