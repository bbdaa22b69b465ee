"""
ImageKit Upload
===============
Client-side file upload to the ImageKit upload API (V1).

The caller obtains ``token``, ``signature`` and ``expire`` from its own
backend; this module only validates the options, sends the multipart request
and maps the response to ``UploadResponse`` or a typed error.

Usage:
    from services.imagekit import UploadOptions, upload

    result = await upload(UploadOptions(
        file=open("photo.jpg", "rb"),
        file_name="photo.jpg",
        public_key="public_...",
        token=token, signature=signature, expire=expire,
    ))
    print(result.url)
"""

import asyncio
import json
from contextlib import suppress
from typing import Any, AsyncIterator, Callable, Dict, Optional, Tuple, Union

import httpx
from loguru import logger

from config import settings

from .errors import (
    ErrorMessages,
    InvalidRequestError,
    ServerError,
    UploadAbortError,
    UploadNetworkError,
)
from .models import ResponseMetadata, UploadOptions, UploadResponse

ProgressCallback = Callable[[int, int], None]

_JOINED_LIST_FIELDS = {"tags", "response_fields"}
_JSON_FIELDS = {"extensions", "transformation"}


class _ProgressStream(httpx.AsyncByteStream):
    """Reports bytes handed to the transport while the body streams."""

    def __init__(self, stream: httpx.AsyncByteStream, total: int, callback: ProgressCallback):
        self._stream = stream
        self._total = total
        self._callback = callback

    async def __aiter__(self) -> AsyncIterator[bytes]:
        sent = 0
        async for chunk in self._stream:
            sent += len(chunk)
            self._callback(sent, self._total)
            yield chunk

    async def aclose(self) -> None:
        await self._stream.aclose()


def _validate_transformation(transformation: Dict[str, Any]) -> None:
    if "pre" not in transformation and "post" not in transformation:
        raise InvalidRequestError(ErrorMessages.INVALID_TRANSFORMATION)

    if "pre" in transformation and not transformation["pre"]:
        raise InvalidRequestError(ErrorMessages.INVALID_PRE_TRANSFORMATION)

    if "post" in transformation:
        post = transformation["post"]
        if not isinstance(post, list):
            raise InvalidRequestError(ErrorMessages.INVALID_POST_TRANSFORMATION)
        for step in post:
            step_type = step.get("type") if isinstance(step, dict) else None
            if step_type == "abs" and not (step.get("protocol") or step.get("value")):
                raise InvalidRequestError(ErrorMessages.INVALID_POST_TRANSFORMATION)
            if step_type == "transformation" and not step.get("value"):
                raise InvalidRequestError(ErrorMessages.INVALID_POST_TRANSFORMATION)


def validate_upload_options(options: UploadOptions) -> None:
    """
    Check the options the API rejects before any request is made.

    Raises:
        InvalidRequestError: For the first problem found
    """
    if not options.file:
        raise InvalidRequestError(ErrorMessages.MISSING_UPLOAD_FILE_PARAMETER)
    if not options.file_name:
        raise InvalidRequestError(ErrorMessages.MISSING_UPLOAD_FILENAME_PARAMETER)
    if not options.public_key:
        raise InvalidRequestError(ErrorMessages.MISSING_PUBLIC_KEY)
    if not options.token:
        raise InvalidRequestError(ErrorMessages.MISSING_TOKEN)
    if not options.signature:
        raise InvalidRequestError(ErrorMessages.MISSING_SIGNATURE)
    if not options.expire:
        raise InvalidRequestError(ErrorMessages.MISSING_EXPIRE)
    if options.transformation is not None:
        _validate_transformation(options.transformation)


def _form_value(field_name: str, value: Any) -> str:
    if field_name in _JOINED_LIST_FIELDS and isinstance(value, list):
        return ",".join(value)
    if field_name in _JSON_FIELDS or (field_name == "custom_metadata" and isinstance(value, dict)):
        return json.dumps(value, separators=(",", ":"))
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def build_form_fields(options: UploadOptions) -> Dict[str, Tuple[Optional[str], Any]]:
    """
    Multipart fields for the upload request, keyed by API field name.

    Binary content becomes a file part named after ``file_name``; every other
    field is a plain form part. Unset fields are left out.
    """
    fields: Dict[str, Tuple[Optional[str], Any]] = {}
    for name, info in UploadOptions.model_fields.items():
        value = getattr(options, name)
        if value is None:
            continue
        form_name = info.alias or name
        if name == "file" and not isinstance(value, str):
            fields[form_name] = (options.file_name, value)
        else:
            fields[form_name] = (None, _form_value(name, value))
    return fields


def _response_metadata(response: httpx.Response) -> ResponseMetadata:
    headers = {key.lower(): value for key, value in response.headers.items()}
    return ResponseMetadata(
        status_code=response.status_code,
        headers=headers,
        request_id=headers.get("x-request-id"),
    )


def _error_message(response: httpx.Response, default: str) -> str:
    try:
        body = response.json()
    except ValueError:
        return default
    if isinstance(body, dict) and body.get("message"):
        return body["message"]
    return default


def parse_upload_response(response: httpx.Response) -> UploadResponse:
    """
    Map an upload API response to a result or a typed error.

    Raises:
        InvalidRequestError: 4xx
        ServerError: any other non-2xx status
    """
    metadata = _response_metadata(response)

    if 200 <= response.status_code < 300:
        body = response.json()
        return UploadResponse.model_validate({**body, "response_metadata": metadata})

    if 400 <= response.status_code < 500:
        raise InvalidRequestError(
            _error_message(response, ErrorMessages.INVALID_REQUEST_DEFAULT),
            response_metadata=metadata,
        )

    raise ServerError(
        _error_message(response, ErrorMessages.SERVER_ERROR_DEFAULT),
        response_metadata=metadata,
    )


async def _send(
    client: httpx.AsyncClient,
    request: httpx.Request,
    abort_event: Optional[asyncio.Event],
) -> httpx.Response:
    if abort_event is None:
        return await client.send(request)

    send_task = asyncio.ensure_future(client.send(request))
    abort_task = asyncio.ensure_future(abort_event.wait())
    try:
        await asyncio.wait({send_task, abort_task}, return_when=asyncio.FIRST_COMPLETED)
    finally:
        abort_task.cancel()

    if not send_task.done():
        send_task.cancel()
        with suppress(asyncio.CancelledError):
            await send_task
        raise UploadAbortError()

    return send_task.result()


async def upload(
    options: Union[UploadOptions, Dict[str, Any], None],
    client: Optional[httpx.AsyncClient] = None,
    on_progress: Optional[ProgressCallback] = None,
    abort_event: Optional[asyncio.Event] = None,
) -> UploadResponse:
    """
    Upload a file to ImageKit.

    Args:
        options: UploadOptions, or a dict of its fields
        client: Optional shared httpx.AsyncClient; a private one is used otherwise
        on_progress: Called with (bytes_sent, total_bytes) while uploading
        abort_event: Setting this event aborts the upload

    Returns:
        UploadResponse with ``response_metadata`` attached

    Raises:
        InvalidRequestError: Invalid options or 4xx response
        UploadAbortError: abort_event was set
        UploadNetworkError: The endpoint could not be reached
        ServerError: 5xx response
    """
    if options is None:
        raise InvalidRequestError(ErrorMessages.INVALID_UPLOAD_OPTIONS)
    if isinstance(options, dict):
        options = UploadOptions(**options)

    validate_upload_options(options)

    if abort_event is not None and abort_event.is_set():
        raise UploadAbortError()

    owns_client = client is None
    if owns_client:
        client = httpx.AsyncClient(
            headers={"User-Agent": f"{settings.SERVICE_NAME}/{settings.SERVICE_VERSION}"},
            timeout=httpx.Timeout(settings.UPLOAD_TIMEOUT, connect=10.0),
        )

    try:
        request = client.build_request("POST", settings.UPLOAD_ENDPOINT, files=build_form_fields(options))
        if on_progress is not None:
            total = int(request.headers.get("content-length", 0))
            request.stream = _ProgressStream(request.stream, total, on_progress)

        logger.info(f"Uploading {options.file_name} to {settings.UPLOAD_ENDPOINT}")
        try:
            response = await _send(client, request, abort_event)
        except httpx.TransportError as e:
            logger.error(f"Upload of {options.file_name} failed: {e}")
            raise UploadNetworkError(ErrorMessages.UPLOAD_ENDPOINT_NETWORK_ERROR) from e

        result = parse_upload_response(response)
        logger.info(f"Uploaded {options.file_name}: {result.file_id} ({result.url})")
        return result
    finally:
        if owns_client:
            await client.aclose()
