"""External image mirroring for CMS records.

This module detects Google Drive image references in record fields,
downloads each referenced file once into the local mirror directory,
and rewrites the field to the ``cms/<file>`` form used by the site.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, replace
from pathlib import Path, PurePosixPath
from typing import Any, Pattern, Sequence, TypeVar
from urllib.parse import urljoin, urlparse

import requests

from core.config import CmsConfig
from core.constants import (
    DEFAULT_IMAGE_EXTENSION,
    IMAGE_DOWNLOAD_CHUNK_SIZE,
    IMAGE_DOWNLOAD_URL_TEMPLATE,
    IMAGE_DOWNLOAD_USER_AGENT,
    LOCAL_IMAGE_PREFIX,
    MAX_IMAGE_REDIRECTS,
    PARTIAL_DOWNLOAD_SUFFIX,
    SUPPORTED_IMAGE_EXTENSIONS,
)
from core.errors import CmsImageError
from core.logging_config import get_logger

_LOGGER = get_logger(__name__)

DRIVE_URL_PATTERNS: tuple[Pattern[str], ...] = (
    re.compile(r"drive\.google\.com/file/d/([A-Za-z0-9_-]+)"),
    re.compile(r"drive\.google\.com/open\?id=([A-Za-z0-9_-]+)"),
    re.compile(r"drive\.google\.com/uc\?.*?\bid=([A-Za-z0-9_-]+)"),
)

RecordT = TypeVar("RecordT")


def extract_content_id(
    value: object,
    patterns: Sequence[Pattern[str]] = DRIVE_URL_PATTERNS,
) -> str | None:
    """Extract the provider content id from an image reference.

    Args:
        value: Field value to inspect.
        patterns: Recognized URL shapes; group 1 captures the id.

    Returns:
        Content id, or ``None`` when no shape matches.
    """
    if not isinstance(value, str) or not value:
        return None
    for pattern in patterns:
        match = pattern.search(value)
        if match:
            return match.group(1)
    return None


def local_image_name(content_id: str, source_url: str) -> str:
    """Build the mirror file name for a content id.

    The extension comes from the source URL path when it names a known
    image type, otherwise the default ``.jpg`` is used.
    """
    suffix = PurePosixPath(urlparse(source_url).path).suffix.lower()
    if suffix not in SUPPORTED_IMAGE_EXTENSIONS:
        suffix = DEFAULT_IMAGE_EXTENSION
    return f"{content_id}{suffix}"


@dataclass(frozen=True)
class ImageResolution:
    """Resolver output for one record batch."""

    records: list[Any]
    downloaded: int
    reused: int
    failures: int


class ImageResolver:
    """Mirror recognized external images into the local asset directory."""

    def __init__(
        self,
        config: CmsConfig,
        session: Any | None = None,
        patterns: Sequence[Pattern[str]] = DRIVE_URL_PATTERNS,
        max_redirects: int = MAX_IMAGE_REDIRECTS,
    ) -> None:
        """Create a resolver.

        Args:
            config: Runtime configuration with mirror directory and timeout.
            session: Optional HTTP session; a ``requests.Session`` by default.
            patterns: Recognized external URL shapes.
            max_redirects: Redirect hops followed per download.
        """
        self._images_dir = config.images_dir
        self._timeout = config.request_timeout_seconds
        self._patterns = tuple(patterns)
        self._max_redirects = max_redirects
        self._session = session if session is not None else _build_session()
        self._images_dir.mkdir(parents=True, exist_ok=True)

    def resolve_records(self, records: Sequence[RecordT], field_name: str) -> ImageResolution:
        """Rewrite recognized image references in ``field_name``.

        Args:
            records: Typed records to process, in order.
            field_name: Record attribute holding the image reference.

        Returns:
            New record list plus download statistics.
        """
        resolved: list[Any] = []
        downloaded = reused = failures = 0
        for record in records:
            source_url = getattr(record, field_name)
            content_id = extract_content_id(source_url, self._patterns)
            if content_id is None:
                resolved.append(record)
                continue
            file_name = local_image_name(content_id, source_url)
            try:
                if self._mirror_path(file_name).exists():
                    reused += 1
                else:
                    self._download(content_id, file_name)
                    downloaded += 1
            except (CmsImageError, requests.RequestException, OSError) as error:
                failures += 1
                _LOGGER.warning(
                    "image_download_failed",
                    content_id=content_id,
                    record_id=getattr(record, "id", None),
                    error=str(error),
                )
                resolved.append(record)
                continue
            resolved.append(replace(record, **{field_name: f"{LOCAL_IMAGE_PREFIX}{file_name}"}))
        return ImageResolution(
            records=resolved, downloaded=downloaded, reused=reused, failures=failures
        )

    def _download(self, content_id: str, file_name: str) -> Path:
        """Download one image into the mirror directory.

        Raises:
            CmsImageError: On redirect overflow or non-200 responses.
            requests.RequestException: On network failures.
            OSError: On file write failures.
        """
        destination = self._mirror_path(file_name)
        partial = destination.with_name(destination.name + PARTIAL_DOWNLOAD_SUFFIX)
        url = IMAGE_DOWNLOAD_URL_TEMPLATE.format(content_id=content_id)
        _LOGGER.info("image_download_started", content_id=content_id, url=url)
        response = self._follow_redirects(url)
        try:
            with partial.open("wb") as handle:
                for chunk in response.iter_content(chunk_size=IMAGE_DOWNLOAD_CHUNK_SIZE):
                    if chunk:
                        handle.write(chunk)
            partial.replace(destination)
        except (requests.RequestException, OSError):
            partial.unlink(missing_ok=True)
            raise
        finally:
            response.close()
        _LOGGER.info("image_downloaded", content_id=content_id, path=str(destination))
        return destination

    def _mirror_path(self, file_name: str) -> Path:
        """Return the mirror file path, rejecting names outside the mirror directory.

        Raises:
            CmsImageError: If ``file_name`` escapes the mirror directory.
        """
        destination = self._images_dir / file_name
        if destination.resolve().parent != self._images_dir.resolve():
            raise CmsImageError(
                f"Image file name {file_name!r} resolves outside {self._images_dir}. "
                "Use a plain content id in the sheet."
            )
        return destination

    def _follow_redirects(self, url: str) -> Any:
        """Issue GET requests until a non-redirect response arrives."""
        current_url = url
        for _ in range(self._max_redirects + 1):
            response = self._session.get(
                current_url,
                allow_redirects=False,
                stream=True,
                timeout=self._timeout,
            )
            location = response.headers.get("Location")
            if 300 <= response.status_code < 400 and location:
                response.close()
                current_url = urljoin(current_url, location)
                continue
            if response.status_code != 200:
                response.close()
                raise CmsImageError(
                    f"Image request to {current_url} failed with HTTP {response.status_code}."
                )
            return response
        raise CmsImageError(
            f"Image request to {url} exceeded {self._max_redirects} redirects."
        )


def _build_session() -> requests.Session:
    session = requests.Session()
    session.headers.update({"User-Agent": IMAGE_DOWNLOAD_USER_AGENT})
    return session
