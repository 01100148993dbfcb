"""Loading of schema documents from files and URLs.

Both sources produce the decoded JSON document and a description of
where it came from. Every failure surfaces as SchemaLoadError.
"""

import json
from pathlib import Path
from typing import Any, Optional, Tuple, Union
from urllib.parse import urlparse

import requests

from .logging_config import get_logger

logger = get_logger(__name__)


class SchemaLoadError(Exception):
    """A schema document could not be read or decoded."""

    pass


def load_json_from_file(file_path: Union[str, Path]) -> Tuple[str, Any]:
    """Read a schema document from a local file.

    Args:
        file_path: Path to the schema file.

    Returns:
        Tuple of (source description, decoded document).

    Raises:
        SchemaLoadError: If the file is missing, unreadable or not valid JSON.
    """
    file_path = Path(file_path)
    logger.debug("Reading schema file %s", file_path)

    if not file_path.is_file():
        logger.error("Schema file not found: %s", file_path)
        raise SchemaLoadError(f"File not found: {file_path}")

    try:
        document = json.loads(file_path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        logger.error("Schema file %s is not valid JSON: %s", file_path, e)
        raise SchemaLoadError(f"Invalid JSON in file {file_path}: {e}") from e
    except OSError as e:
        logger.error("Cannot read schema file %s: %s", file_path, e)
        raise SchemaLoadError(f"Error reading file {file_path}: {e}") from e

    logger.info("Loaded schema from %s", file_path)
    return str(file_path), document


def load_json_from_url(url: str, timeout: int = 30) -> Tuple[str, Any]:
    """Fetch a schema document over HTTP(S).

    Args:
        url: Absolute URL of the document.
        timeout: Request timeout in seconds.

    Returns:
        Tuple of (source description, decoded document).

    Raises:
        SchemaLoadError: If the URL is not absolute, the request fails or
            the body is not JSON.
    """
    parsed_url = urlparse(url)
    if not parsed_url.scheme or not parsed_url.netloc:
        logger.error("Not an absolute URL: %s", url)
        raise SchemaLoadError(f"Invalid URL: {url}")

    logger.debug("Fetching schema from %s (timeout %ss)", url, timeout)
    try:
        response = requests.get(url, timeout=timeout)
        response.raise_for_status()
        document = response.json()
    except requests.exceptions.JSONDecodeError as e:
        logger.error("Response from %s is not JSON: %s", url, e)
        raise SchemaLoadError(f"Invalid JSON response from URL {url}: {e}") from e
    except requests.exceptions.Timeout as e:
        logger.error("Timed out fetching %s", url)
        raise SchemaLoadError(f"Request timeout for URL: {url}") from e
    except requests.exceptions.ConnectionError as e:
        logger.error("Cannot connect to %s: %s", url, e)
        raise SchemaLoadError(f"Connection error for URL: {url}") from e
    except requests.exceptions.HTTPError as e:
        status = e.response.status_code if e.response is not None else "?"
        logger.error("HTTP %s fetching %s", status, url)
        raise SchemaLoadError(f"HTTP error {status} for URL: {url}") from e
    except requests.exceptions.RequestException as e:
        logger.error("Request for %s failed: %s", url, e)
        raise SchemaLoadError(f"Request error for URL {url}: {e}") from e

    logger.info("Loaded schema from %s", url)
    return url, document


def load_json(
    file_path: Optional[Union[str, Path]] = None,
    url: Optional[str] = None,
    timeout: int = 30,
) -> Tuple[str, Any]:
    """Load a schema document from exactly one of a file or a URL.

    Raises:
        SchemaLoadError: If neither or both sources are given, or loading fails.
    """
    if not file_path and not url:
        raise SchemaLoadError("Either file_path or url must be provided")
    if file_path and url:
        raise SchemaLoadError("Cannot specify both file_path and url")

    if file_path:
        return load_json_from_file(file_path)
    return load_json_from_url(url, timeout)
