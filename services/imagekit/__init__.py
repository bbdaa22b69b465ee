"""
ImageKit Media Client
=====================
URL generation, overlays, responsive images and uploads for ImageKit.

Usage:
    from services.imagekit import ImageKit

    imagekit = ImageKit(url_endpoint="https://ik.imagekit.io/demo")
    url = imagekit.url(
        "/default-image.jpg",
        transformation=[{"height": 300, "width": 400}],
    )
"""

from .client import ImageKit, ImageKitConfig
from .errors import (
    ConfigurationError,
    ErrorMessages,
    ImageKitError,
    InvalidRequestError,
    ServerError,
    UploadAbortError,
    UploadNetworkError,
)
from .models import (
    ImageOverlay,
    OverlayPosition,
    OverlayTiming,
    PayloadEncoding,
    ResponseMetadata,
    SolidColorOverlay,
    SrcOptions,
    SubtitleOverlay,
    TextOverlay,
    Transformation,
    TransformationPosition,
    UploadOptions,
    UploadResponse,
    VideoOverlay,
)
from .overlay import build_overlay_string
from .responsive import ResponsiveImageAttributes, get_responsive_image_attributes
from .supported_transforms import SUPPORTED_TRANSFORMS, resolve_transform_key
from .transformation import build_transformation_string
from .upload import upload
from .url import build_src


__all__ = [
    # Client
    "ImageKit",
    "ImageKitConfig",

    # URL generation
    "build_src",
    "build_transformation_string",
    "build_overlay_string",
    "resolve_transform_key",
    "SUPPORTED_TRANSFORMS",
    "get_responsive_image_attributes",
    "ResponsiveImageAttributes",

    # Upload
    "upload",

    # Models
    "SrcOptions",
    "Transformation",
    "TransformationPosition",
    "PayloadEncoding",
    "OverlayPosition",
    "OverlayTiming",
    "TextOverlay",
    "ImageOverlay",
    "VideoOverlay",
    "SubtitleOverlay",
    "SolidColorOverlay",
    "UploadOptions",
    "UploadResponse",
    "ResponseMetadata",

    # Errors
    "ImageKitError",
    "ConfigurationError",
    "InvalidRequestError",
    "UploadAbortError",
    "UploadNetworkError",
    "ServerError",
    "ErrorMessages",
]
