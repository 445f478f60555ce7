#!/usr/bin/env python
"""Multipart/form-data photo upload request.

The body layout and literals are fixed: one file part named ``uploadedfile``
with filename ``abc.png`` and content type ``application/octet-stream``,
wrapped in a constant boundary.
"""

from __future__ import annotations

from adconnect.core.request_builder import build_request
from adconnect.core.types import HttpMethod, RequestDescriptor
from adconnect.utils.config import (
    CONTENT_TYPE_HEADER,
    MULTIPART_BOUNDARY,
    MULTIPART_FIELD_NAME,
    MULTIPART_FILE_CONTENT_TYPE,
    MULTIPART_FILE_NAME,
)

__all__ = [
    "build_photo_upload",
    "encode_photo_body",
]

CRLF = "\r\n"


def encode_photo_body(image: bytes) -> bytes:
    """Encode ``image`` as the single file part of a multipart body."""
    if not isinstance(image, bytes | bytearray) or not image:
        raise ValueError("image must be non-empty bytes")

    parts = [
        f"{CRLF}--{MULTIPART_BOUNDARY}{CRLF}".encode(),
        (
            f'Content-Disposition: form-data; name="{MULTIPART_FIELD_NAME}"; filename="{MULTIPART_FILE_NAME}"{CRLF}'
        ).encode(),
        f"Content-Type: {MULTIPART_FILE_CONTENT_TYPE}{CRLF}{CRLF}".encode(),
        bytes(image),
        f"{CRLF}--{MULTIPART_BOUNDARY}--{CRLF}".encode(),
    ]
    return b"".join(parts)


def build_photo_upload(descriptor: RequestDescriptor, image: bytes) -> RequestDescriptor:
    """Turn ``descriptor`` into a POST carrying ``image`` as multipart/form-data.

    URL, timeout and headers are kept; ``Content-Type`` and ``Content-Length``
    are replaced.

    Raises:
        ValueError: If ``image`` is empty or not bytes
    """
    body = encode_photo_body(image)
    headers = {key: value for key, value in descriptor.headers.items() if key.lower() != CONTENT_TYPE_HEADER.lower()}
    headers[CONTENT_TYPE_HEADER] = f"multipart/form-data; boundary={MULTIPART_BOUNDARY}"
    return build_request(
        descriptor.url,
        headers=headers,
        body=body,
        method=HttpMethod.POST,
        timeout_seconds=descriptor.timeout_seconds,
    )
