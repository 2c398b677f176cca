"""Unit tests for external image mirroring."""

from __future__ import annotations

import re

import pytest

from core.types import CommitteeMemberRecord, GalleryImageRecord
from tests.sheets_fakes import FakeResponse, FakeSession, build_config
from transforms.image_resolver import (
    DRIVE_URL_PATTERNS,
    ImageResolver,
    extract_content_id,
    local_image_name,
)

_DOWNLOAD_URL = "https://lh3.googleusercontent.com/d/abc123"


@pytest.mark.parametrize(
    "url",
    [
        "https://drive.google.com/file/d/abc123/view?usp=sharing",
        "https://drive.google.com/open?id=abc123",
        "https://drive.google.com/uc?export=view&id=abc123",
    ],
)
def test_extract_content_id_recognizes_drive_shapes(url: str) -> None:
    """All supported Drive URL shapes should yield the file id."""
    assert extract_content_id(url) == "abc123"


@pytest.mark.parametrize(
    "value",
    ["event-cultural-day", "https://example.org/photo.jpg", "", None],
)
def test_extract_content_id_ignores_other_values(value) -> None:
    """Symbolic ids and foreign URLs should not match."""
    assert extract_content_id(value) is None


def test_extract_content_id_accepts_additional_patterns() -> None:
    """Callers can extend the recognized shapes."""
    patterns = DRIVE_URL_PATTERNS + (re.compile(r"photos\.example\.org/p/(\w+)"),)

    assert extract_content_id("https://photos.example.org/p/xyz9", patterns) == "xyz9"


def test_local_image_name_defaults_to_jpg() -> None:
    """Drive URLs without a usable suffix should map to ``.jpg``."""
    assert local_image_name("abc123", "https://drive.google.com/open?id=abc123") == "abc123.jpg"


def test_resolve_records_downloads_and_rewrites_field(tmp_path) -> None:
    """Recognized references should be mirrored and rewritten."""
    config = build_config(tmp_path)
    session = FakeSession({_DOWNLOAD_URL: [FakeResponse(200, body=b"jpeg-bytes")]})
    resolver = ImageResolver(config, session=session)
    records = [
        GalleryImageRecord(id=1, imageurl="https://drive.google.com/open?id=abc123", alt="A")
    ]

    resolution = resolver.resolve_records(records, "imageurl")

    assert resolution.records[0].imageurl == "cms/abc123.jpg"
    assert (config.images_dir / "abc123.jpg").read_bytes() == b"jpeg-bytes"


def test_resolve_records_is_idempotent_by_content_id(tmp_path) -> None:
    """A second resolution of the same id should not hit the network."""
    config = build_config(tmp_path)
    session = FakeSession({_DOWNLOAD_URL: [FakeResponse(200, body=b"jpeg-bytes")]})
    resolver = ImageResolver(config, session=session)
    records = [
        CommitteeMemberRecord(
            id=1, name="Reema", photourl="https://drive.google.com/file/d/abc123/view"
        )
    ]

    first = resolver.resolve_records(records, "photourl")
    second = resolver.resolve_records(records, "photourl")

    assert session.requested == [_DOWNLOAD_URL]
    assert first.records == second.records and second.reused == 1


def test_resolve_records_leaves_unrecognized_values_untouched(tmp_path) -> None:
    """Symbolic ids and foreign URLs should pass through without I/O."""
    session = FakeSession()
    resolver = ImageResolver(build_config(tmp_path), session=session)
    records = [
        GalleryImageRecord(id=1, imageurl="event-cultural-day", alt="A"),
        GalleryImageRecord(id=2, imageurl="https://example.org/teej.jpg", alt="B"),
    ]

    resolution = resolver.resolve_records(records, "imageurl")

    assert resolution.records == records and session.requested == []


def test_resolve_records_follows_relative_redirects(tmp_path) -> None:
    """Redirect locations should be resolved against the current URL."""
    config = build_config(tmp_path)
    session = FakeSession(
        {
            _DOWNLOAD_URL: [FakeResponse(302, headers={"Location": "/media/abc123"})],
            "https://lh3.googleusercontent.com/media/abc123": [
                FakeResponse(200, body=b"redirected")
            ],
        }
    )
    resolver = ImageResolver(config, session=session)
    records = [GalleryImageRecord(id=1, imageurl="https://drive.google.com/open?id=abc123")]

    resolution = resolver.resolve_records(records, "imageurl")

    assert resolution.downloaded == 1
    assert (config.images_dir / "abc123.jpg").read_bytes() == b"redirected"


def test_resolve_records_keeps_original_on_redirect_loop(tmp_path) -> None:
    """Exceeding the redirect bound should keep the remote URL."""
    config = build_config(tmp_path)
    loop = [FakeResponse(302, headers={"Location": _DOWNLOAD_URL}) for _ in range(10)]
    session = FakeSession({_DOWNLOAD_URL: loop})
    resolver = ImageResolver(config, session=session, max_redirects=5)
    original = GalleryImageRecord(id=1, imageurl="https://drive.google.com/open?id=abc123")

    resolution = resolver.resolve_records([original], "imageurl")

    assert resolution.records == [original] and resolution.failures == 1
    assert len(session.requested) == 6


def test_resolve_records_continues_after_failed_download(tmp_path) -> None:
    """One failed image should not stop the rest of the batch."""
    config = build_config(tmp_path)
    session = FakeSession(
        {"https://lh3.googleusercontent.com/d/good1": [FakeResponse(200, body=b"ok")]}
    )
    resolver = ImageResolver(config, session=session)
    failing = GalleryImageRecord(id=1, imageurl="https://drive.google.com/open?id=missing")
    working = GalleryImageRecord(id=2, imageurl="https://drive.google.com/open?id=good1")

    resolution = resolver.resolve_records([failing, working], "imageurl")

    assert [record.imageurl for record in resolution.records] == [
        "https://drive.google.com/open?id=missing",
        "cms/good1.jpg",
    ]
    assert not list(config.images_dir.glob("*.part"))


@pytest.mark.parametrize(
    "url",
    [
        "https://drive.google.com/open?id=../../../../escaped",
        "https://drive.google.com/uc?export=view&id=..%2F..%2Fescaped",
        "https://drive.google.com/file/d/../escaped/view",
    ],
)
def test_resolve_records_ignores_path_like_drive_ids(tmp_path, url: str) -> None:
    """Drive ids with path characters should not be mirrored anywhere."""
    config = build_config(tmp_path)
    session = FakeSession({_DOWNLOAD_URL: [FakeResponse(200, body=b"jpeg-bytes")]})
    resolver = ImageResolver(config, session=session)
    original = GalleryImageRecord(id=1, imageurl=url)

    resolution = resolver.resolve_records([original], "imageurl")

    assert resolution.records == [original] and session.requested == []
    assert not list(tmp_path.rglob("escaped*"))


def test_resolve_records_rejects_file_names_outside_mirror(tmp_path) -> None:
    """Custom patterns capturing path segments should fail without writing."""
    config = build_config(tmp_path)
    session = FakeSession()
    patterns = (re.compile(r"photos\.example\.org/(.+)"),)
    resolver = ImageResolver(config, session=session, patterns=patterns)
    original = GalleryImageRecord(id=1, imageurl="https://photos.example.org/../../escaped")

    resolution = resolver.resolve_records([original], "imageurl")

    assert resolution.records == [original] and resolution.failures == 1
    assert session.requested == []
    assert not list(tmp_path.rglob("escaped*"))


def test_resolve_records_follows_any_3xx_with_location(tmp_path) -> None:
    """Any 3xx response carrying ``Location`` should be followed."""
    config = build_config(tmp_path)
    session = FakeSession(
        {
            _DOWNLOAD_URL: [FakeResponse(300, headers={"Location": "/media/abc123"})],
            "https://lh3.googleusercontent.com/media/abc123": [
                FakeResponse(200, body=b"chosen")
            ],
        }
    )
    resolver = ImageResolver(config, session=session)
    records = [GalleryImageRecord(id=1, imageurl="https://drive.google.com/open?id=abc123")]

    resolution = resolver.resolve_records(records, "imageurl")

    assert resolution.records[0].imageurl == "cms/abc123.jpg"
    assert (config.images_dir / "abc123.jpg").read_bytes() == b"chosen"
