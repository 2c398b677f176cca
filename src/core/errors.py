"""sheets-cms exception hierarchy.

This module defines traceable domain errors with clear boundaries.
Each subsystem raises a specific error type for debuggability.
"""

from __future__ import annotations


class CmsError(Exception):
    """Base exception for all sheets-cms failures."""


class CmsConfigError(CmsError):
    """Raised for invalid runtime configuration."""


class CmsCredentialError(CmsError):
    """Raised when the service-account credential is unusable."""


class CmsSourceError(CmsError):
    """Raised for spreadsheet read and write failures."""


class CmsImageError(CmsError):
    """Raised when an external image cannot be mirrored locally."""


class CmsStoreError(CmsError):
    """Raised for snapshot persistence failures."""


class CmsSeedError(CmsError):
    """Raised for invalid or unreadable seed dataset files."""


class CmsDependencyError(CmsError):
    """Raised when an optional runtime dependency is missing."""
