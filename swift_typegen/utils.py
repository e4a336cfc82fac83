"""Utility functions for loading type models and writing generated code.

This module provides functions for loading JSON from files and URLs with
proper error handling, turning it into a type collection, and writing
generation results.
"""

import json
from pathlib import Path
from typing import Any
from urllib.parse import urlparse

import requests

from .codegen.core.generator import GenerationResult
from .codegen.core.schema import SchemaError, TypeCollection, load_type_collection
from .logging_config import get_logger

logger = get_logger(__name__)


class TypeModelLoaderError(Exception):
    """Raised when a type model cannot be loaded or output cannot be written."""

    pass


def load_json_from_file(file_path: str | Path) -> tuple[str, Any]:
    """Load JSON data from a local file.

    Args:
        file_path: Path to the JSON file.

    Returns:
        Tuple of (source description, parsed JSON data).

    Raises:
        FileNotFoundError: If file doesn't exist.
        TypeModelLoaderError: If file cannot be read or JSON is invalid.
    """
    file_path = Path(file_path)
    logger.debug(f"Loading type model from file: {file_path}")

    if not file_path.exists():
        logger.error(f"File not found: {file_path}")
        raise FileNotFoundError(f"File not found: {file_path}")

    if file_path.suffix.lower() != ".json":
        logger.warning(f"File does not have .json extension: {file_path}")

    try:
        with file_path.open("r", encoding="utf-8") as f:
            data = json.load(f)
        logger.info(f"Loaded JSON from {file_path}")
        return str(file_path), data
    except json.JSONDecodeError as e:
        logger.error(f"Invalid JSON in file {file_path}: {e}")
        raise TypeModelLoaderError(f"Invalid JSON in file {file_path}: {e}") from e
    except OSError as e:
        logger.error(f"Error reading file {file_path}: {e}")
        raise TypeModelLoaderError(f"Error reading file {file_path}: {e}") from e


def load_json_from_url(url: str, timeout: int = 30) -> tuple[str, Any]:
    """Load JSON data from a URL.

    Args:
        url: URL to fetch JSON from.
        timeout: Request timeout in seconds.

    Returns:
        Tuple of (source description, parsed JSON data).

    Raises:
        TypeModelLoaderError: If URL is invalid, request fails, or response isn't valid JSON.
    """
    logger.debug(f"Loading type model from URL: {url}")

    parsed_url = urlparse(url)
    if not all([parsed_url.scheme, parsed_url.netloc]):
        logger.error(f"Invalid URL format: {url}")
        raise TypeModelLoaderError(f"Invalid URL: {url}")

    try:
        response = requests.get(url, timeout=timeout)
        response.raise_for_status()

        content_type = response.headers.get("content-type", "").lower()
        if "application/json" not in content_type and not url.endswith(".json"):
            logger.warning(f"URL {url} does not have JSON content type: {content_type}")

        data = response.json()
        logger.info(f"Loaded JSON from {url}")
        return url, data

    except requests.exceptions.Timeout as e:
        logger.error(f"Request timeout for URL: {url}")
        raise TypeModelLoaderError(f"Request timeout for URL: {url}") from e
    except requests.exceptions.ConnectionError as e:
        logger.error(f"Connection error for URL {url}: {e}")
        raise TypeModelLoaderError(f"Connection error for URL: {url}") from e
    except requests.exceptions.HTTPError as e:
        logger.error(f"HTTP error {e.response.status_code} for URL: {url}")
        raise TypeModelLoaderError(
            f"HTTP error {e.response.status_code} for URL: {url}"
        ) from e
    except requests.exceptions.RequestException as e:
        logger.error(f"Request error for URL {url}: {e}")
        raise TypeModelLoaderError(f"Request error for URL {url}: {e}") from e
    except ValueError as e:
        # requests raises a ValueError subclass for undecodable bodies
        logger.error(f"Invalid JSON response from URL {url}: {e}")
        raise TypeModelLoaderError(f"Invalid JSON response from URL {url}: {e}") from e


def load_json(
    file_path: str | Path | None = None,
    url: str | None = None,
    timeout: int = 30,
) -> tuple[str, Any]:
    """Load JSON data from either a file or URL.

    Args:
        file_path: Path to local JSON file (mutually exclusive with url).
        url: URL to fetch JSON from (mutually exclusive with file_path).
        timeout: Request timeout in seconds (only used for URLs).

    Returns:
        Tuple of (source description, parsed JSON data).

    Raises:
        TypeModelLoaderError: If neither or both parameters are provided, or loading fails.
        FileNotFoundError: If file doesn't exist.
    """
    if not file_path and not url:
        raise TypeModelLoaderError("Either file_path or url must be provided")

    if file_path and url:
        raise TypeModelLoaderError("Cannot specify both file_path and url")

    if file_path:
        return load_json_from_file(file_path)
    return load_json_from_url(url, timeout)


def load_types(
    file_path: str | Path | None = None,
    url: str | None = None,
    timeout: int = 30,
) -> tuple[str, TypeCollection]:
    """Load a type collection from a JSON type-model document.

    Returns:
        Tuple of (source description, TypeCollection).

    Raises:
        TypeModelLoaderError: If loading fails or the document is malformed.
        FileNotFoundError: If file doesn't exist.
    """
    source, data = load_json(file_path, url, timeout)
    try:
        types = load_type_collection(data)
    except SchemaError as e:
        logger.error(f"Malformed type model in {source}: {e}")
        raise TypeModelLoaderError(f"Malformed type model in {source}: {e}") from e

    logger.info(f"Loaded {len(types)} types from {source}")
    return source, types


def write_output(result: GenerationResult, path: str | Path) -> Path:
    """Write a successful generation result to ``path``.

    Failed results are never written, so a previous good file survives a
    failed export.

    Raises:
        TypeModelLoaderError: If the result failed or the file cannot be written.
    """
    path = Path(path)
    if not result.success:
        raise TypeModelLoaderError(
            f"Refusing to write failed generation result: {result.error_message}"
        )

    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        # newline="" keeps the configured line endings
        with path.open("w", encoding="utf-8", newline="") as f:
            f.write(result.code)
    except OSError as e:
        logger.error(f"Error writing {path}: {e}")
        raise TypeModelLoaderError(f"Error writing {path}: {e}") from e

    logger.info(f"Wrote generated code to {path}")
    return path
