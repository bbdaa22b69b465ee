"""
ImageKit Data Models
====================
Schemas for URL generation (overlays, source options) and for the upload API.

A transformation is a plain ``list`` of ``dict`` steps. Each step maps a
semantic key (``width``, ``aiRemoveBackground``, ...) to its value and keeps
insertion order, which is significant on the wire. Overlays are the only
structured value and live under the reserved ``overlay`` key.
"""

from enum import Enum
from typing import Annotated, Any, Dict, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter


TransformationStep = Dict[str, Any]
Transformation = List[TransformationStep]


class TransformationPosition(str, Enum):
    """Where the transformation string is placed in the URL."""
    PATH = "path"
    QUERY = "query"


class PayloadEncoding(str, Enum):
    """How overlay text/input payloads are serialized."""
    AUTO = "auto"
    PLAIN = "plain"
    BASE64 = "base64"


EncodingName = Literal["auto", "plain", "base64"]
OverlayValue = Union[int, float, str]


# =============================================================================
# OVERLAYS
# =============================================================================

class OverlayPosition(BaseModel):
    """Placement of a layer relative to the base asset."""
    x: Optional[OverlayValue] = Field(None, description="Horizontal offset, number or expression")
    y: Optional[OverlayValue] = Field(None, description="Vertical offset, number or expression")
    focus: Optional[str] = Field(None, description="Anchor, e.g. 'center', 'top_left'")


class OverlayTiming(BaseModel):
    """When a layer is visible on a video base asset."""
    start: Optional[OverlayValue] = Field(None, description="Start offset in seconds")
    end: Optional[OverlayValue] = Field(None, description="End offset in seconds")
    duration: Optional[OverlayValue] = Field(None, description="Duration in seconds")


class BaseOverlay(BaseModel):
    """Fields shared by every overlay variant."""
    model_config = ConfigDict(coerce_numbers_to_str=True)

    position: OverlayPosition = Field(default_factory=OverlayPosition)
    timing: OverlayTiming = Field(default_factory=OverlayTiming)
    transformation: List[Any] = Field(
        default_factory=list,
        description="Transformation steps applied to the layer itself",
    )


class TextOverlay(BaseOverlay):
    type: Literal["text"] = "text"
    text: str = Field(..., description="Text rendered on the layer")
    encoding: EncodingName = "auto"


class ImageOverlay(BaseOverlay):
    type: Literal["image"] = "image"
    input: str = Field(..., description="Path of the image in the media library")
    encoding: EncodingName = "auto"


class VideoOverlay(BaseOverlay):
    type: Literal["video"] = "video"
    input: str = Field(..., description="Path of the video in the media library")
    encoding: EncodingName = "auto"


class SubtitleOverlay(BaseOverlay):
    type: Literal["subtitle"] = "subtitle"
    input: str = Field(..., description="Path of the subtitle file in the media library")
    encoding: EncodingName = "auto"


class SolidColorOverlay(BaseOverlay):
    type: Literal["solidColor"] = "solidColor"
    color: str = Field(..., description="RGB/RGBA hex code or color name")


Overlay = Annotated[
    Union[TextOverlay, ImageOverlay, VideoOverlay, SubtitleOverlay, SolidColorOverlay],
    Field(discriminator="type"),
]

OVERLAY_ADAPTER: TypeAdapter = TypeAdapter(Overlay)


# =============================================================================
# URL OPTIONS
# =============================================================================

class SrcOptions(BaseModel):
    """Input of the URL assembler."""
    model_config = ConfigDict(populate_by_name=True)

    src: Optional[str] = Field(None, description="Relative path or absolute URL of the resource")
    url_endpoint: Optional[str] = Field(None, alias="urlEndpoint", description="ImageKit URL endpoint")
    transformation: Optional[Any] = Field(
        None, description="Chained transformation steps; malformed steps are skipped when encoding"
    )
    query_parameters: Optional[Dict[str, Any]] = Field(
        None, alias="queryParameters", description="Extra query parameters, in order"
    )
    transformation_position: Optional[str] = Field(
        None, alias="transformationPosition", description="'path' or 'query' (default)"
    )


# =============================================================================
# UPLOAD
# =============================================================================

class ResponseMetadata(BaseModel):
    """HTTP details of an upload API response."""
    status_code: int = Field(..., description="HTTP status code")
    headers: Dict[str, str] = Field(default_factory=dict, description="Lower-cased response headers")
    request_id: Optional[str] = Field(None, description="Value of the x-request-id header")


class UploadOptions(BaseModel):
    """
    Options for the upload API.

    Field aliases are the multipart form field names the API expects.
    Required fields are optional here so that the transport can report each
    missing one with its own message.
    """
    model_config = ConfigDict(populate_by_name=True, arbitrary_types_allowed=True)

    file: Optional[Any] = Field(None, description="bytes, binary file object, base64 string or URL")
    file_name: Optional[str] = Field(None, alias="fileName")
    public_key: Optional[str] = Field(None, alias="publicKey")
    signature: Optional[str] = None
    token: Optional[str] = None
    expire: Optional[Union[int, str]] = None
    use_unique_file_name: Optional[bool] = Field(None, alias="useUniqueFileName")
    tags: Optional[Union[str, List[str]]] = None
    folder: Optional[str] = None
    is_private_file: Optional[bool] = Field(None, alias="isPrivateFile")
    is_published: Optional[bool] = Field(None, alias="isPublished")
    custom_coordinates: Optional[str] = Field(None, alias="customCoordinates")
    response_fields: Optional[Union[str, List[str]]] = Field(None, alias="responseFields")
    extensions: Optional[List[Dict[str, Any]]] = None
    webhook_url: Optional[str] = Field(None, alias="webhookUrl")
    overwrite_file: Optional[bool] = Field(None, alias="overwriteFile")
    overwrite_ai_tags: Optional[bool] = Field(None, alias="overwriteAITags")
    overwrite_tags: Optional[bool] = Field(None, alias="overwriteTags")
    overwrite_custom_metadata: Optional[bool] = Field(None, alias="overwriteCustomMetadata")
    custom_metadata: Optional[Union[str, Dict[str, Any]]] = Field(None, alias="customMetadata")
    transformation: Optional[Dict[str, Any]] = Field(
        None, description="Upload-time transformation with 'pre' and/or 'post' keys"
    )
    checks: Optional[str] = Field(None, description="Server-side checks expression")
    description: Optional[str] = None


class UploadResponse(BaseModel):
    """Successful upload API response. Unknown fields are kept as extras."""
    model_config = ConfigDict(populate_by_name=True, extra="allow")

    file_id: Optional[str] = Field(None, alias="fileId")
    name: Optional[str] = None
    url: Optional[str] = None
    thumbnail_url: Optional[str] = Field(None, alias="thumbnailUrl")
    height: Optional[float] = None
    width: Optional[float] = None
    size: Optional[float] = None
    file_path: Optional[str] = Field(None, alias="filePath")
    file_type: Optional[str] = Field(None, alias="fileType")
    tags: Optional[List[str]] = None
    ai_tags: Optional[List[Dict[str, Any]]] = Field(None, alias="AITags")
    is_private_file: Optional[bool] = Field(None, alias="isPrivateFile")
    custom_coordinates: Optional[str] = Field(None, alias="customCoordinates")
    custom_metadata: Optional[Dict[str, Any]] = Field(None, alias="customMetadata")
    embedded_metadata: Optional[Dict[str, Any]] = Field(None, alias="embeddedMetadata")
    extension_status: Optional[Dict[str, str]] = Field(None, alias="extensionStatus")
    version_info: Optional[Dict[str, Any]] = Field(None, alias="versionInfo")
    metadata: Optional[Dict[str, Any]] = None
    response_metadata: Optional[ResponseMetadata] = Field(None, exclude=True)
