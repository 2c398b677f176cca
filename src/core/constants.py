"""Core constants used across sheets-cms modules.

This module centralizes paths, names, and network limits.
Keeping values here avoids magic literals in business logic.
"""

from __future__ import annotations

from pathlib import Path

DEFAULT_SPREADSHEET_ID = "1twV7lZqXy_rAnLW9lzddLyEvmNpwHsiDW6lwnfggMrc"
DEFAULT_CREDENTIALS_FILE_NAME = "service-account-key.json"
DEFAULT_SEED_FILE_NAME = "cms_seed.yaml"
DATA_DIR_RELATIVE_PATH = Path("src") / "data"
IMAGES_DIR_RELATIVE_PATH = Path("src") / "assets" / "images" / "cms"
LOCAL_IMAGE_PREFIX = "cms/"
DEFAULT_IMAGE_EXTENSION = ".jpg"
SUPPORTED_IMAGE_EXTENSIONS = (".jpg", ".jpeg", ".png", ".gif", ".webp", ".avif")
IMAGE_DOWNLOAD_URL_TEMPLATE = "https://lh3.googleusercontent.com/d/{content_id}"
IMAGE_DOWNLOAD_USER_AGENT = "Mozilla/5.0 (compatible; sheets-cms/0.1)"
IMAGE_DOWNLOAD_CHUNK_SIZE = 64 * 1024
PARTIAL_DOWNLOAD_SUFFIX = ".part"
DEFAULT_REQUEST_TIMEOUT_SECONDS = 30.0
MAX_IMAGE_REDIRECTS = 5
SHEET_FETCH_COLUMNS = "A:Z"
SHEET_WRITE_MAX_ROW = 100
SHEETS_READONLY_SCOPE = "https://www.googleapis.com/auth/spreadsheets.readonly"
SHEETS_WRITE_SCOPE = "https://www.googleapis.com/auth/spreadsheets"
SEED_SPEC_VERSION = 1
SNAPSHOT_JSON_INDENT = 2
