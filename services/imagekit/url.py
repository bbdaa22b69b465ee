"""
URL Builder
===========
Assembles ImageKit delivery URLs.

Usage:
    from services.imagekit import build_src

    build_src(
        src="/default-image.jpg",
        url_endpoint="https://ik.imagekit.io/demo",
        transformation=[{"height": 300, "width": 400}],
        transformation_position="path",
    )
    # https://ik.imagekit.io/demo/tr:h-300,w-400/default-image.jpg

A relative ``src`` is resolved under the endpoint (keeping the endpoint's own
path prefix). An absolute ``src`` is used as-is and always receives its
transformation as the ``tr`` query parameter.
"""

import re
from typing import Any, Dict, List, Optional, Union
from urllib.parse import SplitResult, quote, quote_plus, urlencode, urlsplit, urlunsplit

from loguru import logger
from pydantic import ValidationError

from .models import SrcOptions, TransformationPosition
from .payload import CHAIN_TRANSFORM_DELIMITER, to_wire_value
from .transformation import build_transformation_string

TRANSFORMATION_PARAMETER = "tr"

# Characters kept as-is in the path; everything else is percent-encoded
_PATH_SAFE = "/:@!$&'()*+,;=%[]^|~"


def _form_quote(value, safe="", encoding=None, errors=None) -> str:
    """Form-encode like the browser's URLSearchParams: only "*-._" stay literal."""
    return quote_plus(value, safe="*", encoding=encoding, errors=errors).replace("~", "%7E")


def _path_join(parts: List[str]) -> str:
    """Join with "/" and collapse repeated slashes."""
    return re.sub(r"/+", "/", "/".join(parts))


def _parse_absolute_url(value: str) -> SplitResult:
    parts = urlsplit(value)
    if not parts.scheme or not parts.netloc:
        raise ValueError(f"Invalid URL: {value!r}")
    # Raises ValueError for a malformed port
    parts.port
    return parts


def _coerce_options(opts: Union[SrcOptions, Dict[str, Any], None], overrides: Dict[str, Any]) -> SrcOptions:
    if isinstance(opts, SrcOptions):
        return opts.model_copy(update=overrides) if overrides else opts
    return SrcOptions(**{**(opts or {}), **overrides})


def build_src(opts: Optional[Union[SrcOptions, Dict[str, Any]]] = None, **kwargs) -> str:
    """
    Build a complete ImageKit URL.

    Args:
        opts: SrcOptions, or a dict of its fields (snake_case or camelCase)
        **kwargs: Fields overriding ``opts``

    Returns:
        Absolute URL, or "" when src is missing or the URL cannot be parsed
    """
    try:
        options = _coerce_options(opts, kwargs)
    except ValidationError as e:
        logger.error(f"Invalid URL options: {e}")
        return ""

    url_endpoint = options.url_endpoint or ""
    src = options.src or ""
    position = options.transformation_position or TransformationPosition.QUERY

    if not src:
        return ""

    is_absolute_src = src.startswith("http://") or src.startswith("https://")
    endpoint_path = None

    try:
        if is_absolute_src:
            target = _parse_absolute_url(src)
        else:
            endpoint = _parse_absolute_url(url_endpoint)
            endpoint_path = endpoint.path or "/"
            target = urlsplit(f"{endpoint.scheme}://{endpoint.netloc}/{src}")
    except ValueError as e:
        logger.error(f"Unable to build URL for src={src!r}, urlEndpoint={url_endpoint!r}: {e}")
        return ""

    query = target.query
    if options.query_parameters:
        extra = urlencode(
            [(str(key), to_wire_value(value)) for key, value in options.query_parameters.items()],
            quote_via=_form_quote,
        )
        query = f"{query}&{extra}" if query else extra

    transformation_string = build_transformation_string(options.transformation)
    use_query = position == TransformationPosition.QUERY or is_absolute_src

    path = target.path
    if transformation_string and not use_query:
        path = _path_join([
            f"{TRANSFORMATION_PARAMETER}{CHAIN_TRANSFORM_DELIMITER}{transformation_string}",
            path,
        ])

    if endpoint_path is not None:
        path = _path_join([endpoint_path, path])
    else:
        path = _path_join([path])
    if not path.startswith("/"):
        path = f"/{path}"

    href = urlunsplit((target.scheme, target.netloc, quote(path, safe=_PATH_SAFE), query, ""))

    if transformation_string and use_query:
        separator = "&" if query else "?"
        href = f"{href}{separator}{TRANSFORMATION_PARAMETER}={transformation_string}"

    if target.fragment:
        href = f"{href}#{target.fragment}"

    return href
