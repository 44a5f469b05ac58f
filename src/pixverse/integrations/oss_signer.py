"""
Request signing for Aliyun OSS header-authenticated uploads.

Pure functions with no I/O: the string-to-sign built here must be
byte-identical to what OSS reconstructs from the request, otherwise the
upload is rejected with SignatureDoesNotMatch.

Reference: https://www.alibabacloud.com/help/en/oss/developer-reference/include-signatures-in-the-authorization-header
"""

import base64
import hashlib
import hmac
import uuid
from collections.abc import Mapping
from datetime import datetime, timezone
from email.utils import format_datetime

from pixverse.schemas.media import MediaType


def build_object_name(file_name: str) -> str:
    """
    Generate a random object name that keeps the original extension.

    ``clip.MOV`` becomes ``<uuid>.MOV``; a name without an extension
    (or ending in a bare dot) becomes ``<uuid>``.
    """
    object_name = str(uuid.uuid4())
    _, dot, extension = file_name.rpartition(".")
    if dot and extension:
        object_name = f"{object_name}.{extension}"
    return object_name


def build_canonical_resource(bucket: str, object_key: str) -> str:
    return f"/{bucket}/{object_key.lstrip('/')}"


def canonicalize_oss_headers(headers: Mapping[str, str]) -> str:
    """
    Render ``x-oss-*`` headers as sorted ``key:value`` lines.

    Keys are lower-cased and every line, including the last, is
    newline-terminated.
    """
    canonical = sorted((key.lower(), value) for key, value in headers.items())
    return "".join(f"{key}:{value}\n" for key, value in canonical)


def build_string_to_sign(
    method: str,
    content_type: str,
    date: str,
    oss_headers: Mapping[str, str],
    canonical_resource: str,
    content_md5: str = "",
) -> str:
    """
    Build the OSS string-to-sign.

    Layout::

        VERB\\n
        Content-MD5\\n
        Content-Type\\n
        Date\\n
        CanonicalizedOSSHeaders
        CanonicalizedResource
    """
    return "\n".join(
        [
            method.upper(),
            content_md5,
            content_type,
            date,
            canonicalize_oss_headers(oss_headers) + canonical_resource,
        ]
    )


def sign(string_to_sign: str, secret_key: str) -> str:
    """Base64-encoded HMAC-SHA1 of the string-to-sign."""
    digest = hmac.new(
        secret_key.encode("utf-8"),
        string_to_sign.encode("utf-8"),
        hashlib.sha1,
    ).digest()
    return base64.b64encode(digest).decode("ascii")


def authorization_header(access_key: str, signature: str) -> str:
    return f"OSS {access_key}:{signature}"


def http_date(now: datetime | None = None) -> str:
    """
    Format a timestamp as an RFC 1123 HTTP-date in GMT.

    Args:
        now: Timezone-aware timestamp (defaults to the current UTC time)
    """
    now = now or datetime.now(timezone.utc)
    return format_datetime(now.astimezone(timezone.utc), usegmt=True)


def classify_media_type(content_type: str | None) -> MediaType:
    return MediaType.from_content_type(content_type)
