"""
ImageKit Client
===============
Facade that remembers the endpoint, public key and default transformation
position so callers only pass what changes per request.
"""

import asyncio
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Union

import httpx
from loguru import logger

from config import settings

from .errors import ConfigurationError, ErrorMessages, InvalidRequestError
from .models import Transformation, TransformationPosition, UploadOptions, UploadResponse
from .responsive import ResponsiveImageAttributes, get_responsive_image_attributes
from .upload import ProgressCallback, upload
from .url import build_src

_VALID_POSITIONS = {p.value for p in TransformationPosition}


@dataclass
class ImageKitConfig:
    """Configuration for the ImageKit client."""
    url_endpoint: str = ""
    public_key: Optional[str] = None
    transformation_position: str = TransformationPosition.PATH.value

    @classmethod
    def from_env(cls) -> "ImageKitConfig":
        """Load configuration from environment variables."""
        return cls(
            url_endpoint=settings.IMAGEKIT_URL_ENDPOINT,
            public_key=settings.IMAGEKIT_PUBLIC_KEY or None,
            transformation_position=settings.IMAGEKIT_TRANSFORMATION_POSITION,
        )


class ImageKit:
    """
    ImageKit client.

    Usage:
        imagekit = ImageKit(url_endpoint="https://ik.imagekit.io/demo")
        imagekit.url("/default-image.jpg", transformation=[{"width": 400}])
        # https://ik.imagekit.io/demo/tr:w-400/default-image.jpg
    """

    def __init__(
        self,
        url_endpoint: Optional[str] = None,
        public_key: Optional[str] = None,
        transformation_position: Optional[str] = None,
        config: Optional[ImageKitConfig] = None,
        http_client: Optional[httpx.AsyncClient] = None,
    ):
        config = config or ImageKitConfig()
        self.url_endpoint = url_endpoint or config.url_endpoint
        self.public_key = public_key or config.public_key
        position = transformation_position or config.transformation_position
        self.transformation_position = str(getattr(position, "value", position))
        self._http_client = http_client

        if not self.url_endpoint:
            raise ConfigurationError(ErrorMessages.MANDATORY_INITIALIZATION_MISSING)
        if self.transformation_position not in _VALID_POSITIONS:
            raise ConfigurationError(ErrorMessages.INVALID_TRANSFORMATION_POSITION)

        logger.debug(f"ImageKit client ready for {self.url_endpoint} ({self.transformation_position})")

    @classmethod
    def from_env(cls, http_client: Optional[httpx.AsyncClient] = None) -> "ImageKit":
        return cls(config=ImageKitConfig.from_env(), http_client=http_client)

    def url(
        self,
        src: str,
        transformation: Optional[Transformation] = None,
        query_parameters: Optional[Dict[str, Any]] = None,
        url_endpoint: Optional[str] = None,
        transformation_position: Optional[str] = None,
    ) -> str:
        """Build a delivery URL; per-call values override the client's."""
        return build_src(
            src=src,
            url_endpoint=url_endpoint or self.url_endpoint,
            transformation=transformation,
            query_parameters=query_parameters,
            transformation_position=transformation_position or self.transformation_position,
        )

    def responsive_image_attributes(
        self,
        src: str,
        width: Optional[int] = None,
        sizes: Optional[str] = None,
        device_breakpoints: Optional[List[int]] = None,
        image_breakpoints: Optional[List[int]] = None,
        transformation: Optional[Transformation] = None,
        query_parameters: Optional[Dict[str, Any]] = None,
    ) -> ResponsiveImageAttributes:
        return get_responsive_image_attributes(
            src=src,
            url_endpoint=self.url_endpoint,
            width=width,
            sizes=sizes,
            device_breakpoints=device_breakpoints,
            image_breakpoints=image_breakpoints,
            transformation=transformation,
            query_parameters=query_parameters,
            transformation_position=self.transformation_position,
        )

    async def upload(
        self,
        options: Union[UploadOptions, Dict[str, Any]],
        on_progress: Optional[ProgressCallback] = None,
        abort_event: Optional[asyncio.Event] = None,
    ) -> UploadResponse:
        """
        Upload a file, filling in the client's public key when unset.

        Raises:
            InvalidRequestError: No public key on the options or the client
        """
        if options is None:
            raise InvalidRequestError(ErrorMessages.INVALID_UPLOAD_OPTIONS)
        if isinstance(options, dict):
            options = UploadOptions(**options)

        if not options.public_key:
            if not self.public_key:
                raise InvalidRequestError(ErrorMessages.MISSING_PUBLIC_KEY)
            options = options.model_copy(update={"public_key": self.public_key})

        return await upload(
            options,
            client=self._http_client,
            on_progress=on_progress,
            abort_event=abort_event,
        )
