"""Fetch a single manifest over HTTP."""

import logging

import httpx

from sce.domain import ManifestFormat
from sce.manifest.exceptions import ManifestError, ManifestFetchError
from sce.manifest.feed import InterceptedManifest, classify_manifest

logger = logging.getLogger(__name__)

DEFAULT_FETCH_TIMEOUT = 15.0


def fetch_manifest(
    url: str,
    timeout: float = DEFAULT_FETCH_TIMEOUT,
    manifest_format: ManifestFormat | None = None,
) -> InterceptedManifest:
    """Download a manifest and classify it.

    Args:
        url: Manifest URL.
        timeout: Request timeout in seconds.
        manifest_format: Force a format instead of classifying the response.

    Returns:
        The fetched manifest record.

    Raises:
        ManifestFetchError: If the request fails or returns an error status.
        ManifestError: If the response is not recognizable as a manifest.
    """
    logger.debug("Fetching manifest %s (timeout=%.1fs)", url, timeout)
    try:
        with httpx.Client(timeout=timeout, follow_redirects=True) as client:
            response = client.get(url)
            response.raise_for_status()
    except httpx.ConnectError as e:
        raise ManifestFetchError(f"Cannot connect to {url}: {e}") from e
    except httpx.TimeoutException as e:
        raise ManifestFetchError(f"Timed out fetching {url}: {e}") from e
    except httpx.HTTPStatusError as e:
        raise ManifestFetchError(f"HTTP error fetching {url}: {e}") from e
    except httpx.HTTPError as e:
        raise ManifestFetchError(f"Request for {url} failed: {e}") from e

    if manifest_format is None:
        manifest_format = classify_manifest(
            url, response.headers.get("content-type")
        )
    if manifest_format is None:
        raise ManifestError(
            f"Cannot determine manifest format for {url}; pass an explicit type"
        )

    logger.info("Fetched %s manifest from %s", manifest_format.value, url)
    return InterceptedManifest(
        url=url, body=response.text, manifest_format=manifest_format
    )
