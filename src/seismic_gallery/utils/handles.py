"""
Handle normalization and storage key helpers.

Handles are X (Twitter) usernames. They are stored with exactly one leading
'@'. Image objects are keyed by upload time plus the original file name,
and on deletion the key is recovered from the public URL.
"""

from pathlib import PurePosixPath, PureWindowsPath
from urllib.parse import unquote, urlsplit

HANDLE_PREFIX = "@"
PROFILE_BASE_URL = "https://x.com/"


def is_blank(text: str | None) -> bool:
    """True when text is None, empty or whitespace only."""
    return text is None or not text.strip()


def normalize_handle(handle: str) -> str:
    """
    Normalize a handle so it starts with '@'.

    A handle already starting with '@' is returned unchanged; any other
    handle gets a single '@' prepended. The text is otherwise kept as typed.

    Args:
        handle: Non-blank handle as typed by the user

    Returns:
        str: Normalized handle

    Raises:
        ValueError: If the handle is blank
    """
    if is_blank(handle):
        raise ValueError("Handle must not be empty")

    if handle.startswith(HANDLE_PREFIX):
        return handle
    return f"{HANDLE_PREFIX}{handle}"


def profile_url(handle: str) -> str:
    """Build the X profile link for a stored handle."""
    return f"{PROFILE_BASE_URL}{handle.replace(HANDLE_PREFIX, '', 1)}"


def safe_filename(filename: str) -> str:
    """
    Strip directory components from a client-supplied file name.

    Both '/' and '\\' separators are removed so a key never contains a path
    separator and the last URL segment always equals the key.
    """
    name = PureWindowsPath(PurePosixPath(filename).name).name
    return name or "upload"


def build_storage_key(filename: str, timestamp_ms: int) -> str:
    """
    Derive the object key for an upload.

    Args:
        filename: Original file name
        timestamp_ms: Upload time in milliseconds since the epoch

    Returns:
        str: '<timestamp_ms>-<file name>'
    """
    return f"{timestamp_ms}-{safe_filename(filename)}"


def object_key_from_url(image_url: str) -> str | None:
    """
    Recover the object key from a public image URL.

    The key is the final path segment after the last '/', percent-decoded.

    Returns:
        str | None: Object key, or None when the URL has no final segment
    """
    path = urlsplit(image_url).path if "://" in image_url else image_url
    segment = path.rsplit("/", 1)[-1]
    if not segment:
        return None
    return unquote(segment)
