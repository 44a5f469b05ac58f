"""
Tests for OSS request signing helpers.
"""

import uuid
from datetime import datetime, timedelta, timezone

import pytest

from pixverse.integrations import oss_signer
from pixverse.schemas.media import MediaType

DATE = "Sun, 18 Oct 2026 12:00:00 GMT"
OSS_HEADERS = {
    "x-oss-date": DATE,
    "x-oss-security-token": "sts-token",
    "x-oss-forbid-overwrite": "true",
    "x-oss-user-agent": "aliyun-sdk-js/6.22.0 Firefox 136.0 on OS X 10.15",
}
RESOURCE = "/pixverse-fe-upload/upload/a.mp4"


class TestCanonicalization:
    """Tests for the string-to-sign building blocks."""

    def test_headers_sorted_lowercased_newline_terminated(self) -> None:
        canonical = oss_signer.canonicalize_oss_headers(
            {"X-OSS-Security-Token": "t", "x-oss-date": "d", "x-oss-forbid-overwrite": "true"}
        )
        assert canonical == (
            "x-oss-date:d\n"
            "x-oss-forbid-overwrite:true\n"
            "x-oss-security-token:t\n"
        )

    def test_canonical_resource(self) -> None:
        assert (
            oss_signer.build_canonical_resource("pixverse-fe-upload", "upload/a.mp4")
            == RESOURCE
        )

    def test_string_to_sign_layout(self) -> None:
        string_to_sign = oss_signer.build_string_to_sign(
            method="PUT",
            content_type="video/mp4",
            date=DATE,
            oss_headers=OSS_HEADERS,
            canonical_resource=RESOURCE,
        )
        assert string_to_sign == (
            "PUT\n"
            "\n"
            "video/mp4\n"
            f"{DATE}\n"
            f"x-oss-date:{DATE}\n"
            "x-oss-forbid-overwrite:true\n"
            "x-oss-security-token:sts-token\n"
            "x-oss-user-agent:aliyun-sdk-js/6.22.0 Firefox 136.0 on OS X 10.15\n"
            "/pixverse-fe-upload/upload/a.mp4"
        )


class TestSignature:
    """Tests for HMAC-SHA1 signing."""

    def test_known_vector(self) -> None:
        assert oss_signer.sign("hello", "key") == "s0zqxFFv8joUPmHXnQ+npPvl8mY="

    def test_signature_is_deterministic(self) -> None:
        string_to_sign = oss_signer.build_string_to_sign(
            "PUT", "video/mp4", DATE, OSS_HEADERS, RESOURCE
        )
        first = oss_signer.sign(string_to_sign, "secret-key")
        second = oss_signer.sign(string_to_sign, "secret-key")

        assert first == second == "Snfrb0PfxjJzXCEa+PljIKS6zQQ="

    def test_signature_depends_on_secret(self) -> None:
        string_to_sign = oss_signer.build_string_to_sign(
            "PUT", "video/mp4", DATE, OSS_HEADERS, RESOURCE
        )
        assert oss_signer.sign(string_to_sign, "other-secret") != oss_signer.sign(
            string_to_sign, "secret-key"
        )

    def test_authorization_header(self) -> None:
        assert oss_signer.authorization_header("AK", "SIG=") == "OSS AK:SIG="


class TestObjectNaming:
    """Tests for generated object names."""

    def test_extension_is_preserved(self) -> None:
        name = oss_signer.build_object_name("clip.MOV")
        stem, _, extension = name.partition(".")

        assert extension == "MOV"
        uuid.UUID(stem)

    def test_only_last_extension_is_kept(self) -> None:
        assert oss_signer.build_object_name("backup.tar.gz").endswith(".gz")
        assert ".tar" not in oss_signer.build_object_name("backup.tar.gz")

    @pytest.mark.parametrize("file_name", ["README", "archive.", ""])
    def test_no_extension(self, file_name: str) -> None:
        name = oss_signer.build_object_name(file_name)

        assert "." not in name
        uuid.UUID(name)

    def test_names_are_unique(self) -> None:
        names = {oss_signer.build_object_name("a.mp4") for _ in range(50)}
        assert len(names) == 50


class TestHttpDate:
    def test_format(self) -> None:
        now = datetime(2026, 10, 18, 12, 0, 0, tzinfo=timezone.utc)
        assert oss_signer.http_date(now) == DATE

    def test_converts_to_gmt(self) -> None:
        local = datetime(2026, 10, 18, 14, 0, 0, tzinfo=timezone(timedelta(hours=2)))
        assert oss_signer.http_date(local) == DATE

    def test_defaults_to_now(self) -> None:
        assert oss_signer.http_date().endswith(" GMT")


class TestMediaClassification:
    @pytest.mark.parametrize(
        ("content_type", "expected"),
        [
            ("video/mp4", MediaType.VIDEO),
            ("audio/mpeg", MediaType.OTHER),
            ("video/quicktime", MediaType.OTHER),
            ("image/png", MediaType.OTHER),
            (None, MediaType.OTHER),
        ],
    )
    def test_only_mp4_is_video(self, content_type: str | None, expected: MediaType) -> None:
        assert oss_signer.classify_media_type(content_type) == expected

    def test_type_codes(self) -> None:
        assert oss_signer.classify_media_type("video/mp4") == 1
        assert oss_signer.classify_media_type("audio/mpeg") == 2
