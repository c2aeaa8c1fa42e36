"""Tests for fetching manifests over HTTP."""

from unittest.mock import MagicMock, patch

import httpx
import pytest

from sce.domain import ManifestFormat
from sce.manifest import ManifestError, ManifestFetchError, fetch_manifest

URL = "https://cdn.example.com/vod/master.m3u8"


def _mock_client(response=None, side_effect=None) -> MagicMock:
    client = MagicMock()
    client.__enter__.return_value = client
    client.__exit__.return_value = False
    if side_effect is not None:
        client.get.side_effect = side_effect
    else:
        client.get.return_value = response
    return client


def _response(text: str, content_type: str | None = None) -> MagicMock:
    response = MagicMock()
    response.text = text
    response.headers = {"content-type": content_type} if content_type else {}
    response.raise_for_status.return_value = None
    return response


class TestFetchManifest:
    """Tests for fetch_manifest."""

    def test_fetches_and_classifies_by_url(self) -> None:
        """A .m3u8 URL is classified as HLS."""
        client = _mock_client(_response("#EXTM3U"))
        with patch("sce.manifest.fetch.httpx.Client", return_value=client) as cls:
            record = fetch_manifest(URL, timeout=5.0)

        cls.assert_called_once_with(timeout=5.0, follow_redirects=True)
        client.get.assert_called_once_with(URL)
        assert record.url == URL
        assert record.body == "#EXTM3U"
        assert record.manifest_format == ManifestFormat.HLS

    def test_classifies_by_content_type(self) -> None:
        """The Content-Type header classifies extensionless URLs."""
        client = _mock_client(_response("<MPD/>", "application/dash+xml"))
        with patch("sce.manifest.fetch.httpx.Client", return_value=client):
            record = fetch_manifest("https://cdn.example.com/manifest")
        assert record.manifest_format == ManifestFormat.DASH

    def test_forced_format(self) -> None:
        """An explicit format skips classification."""
        client = _mock_client(_response("<MPD/>"))
        with patch("sce.manifest.fetch.httpx.Client", return_value=client):
            record = fetch_manifest(
                "https://cdn.example.com/manifest", manifest_format=ManifestFormat.DASH
            )
        assert record.manifest_format == ManifestFormat.DASH

    def test_unknown_format(self) -> None:
        """An unclassifiable response raises ManifestError, not a fetch error."""
        client = _mock_client(_response("hello", "text/plain"))
        with patch("sce.manifest.fetch.httpx.Client", return_value=client):
            with pytest.raises(ManifestError) as exc:
                fetch_manifest("https://cdn.example.com/manifest")
        assert not isinstance(exc.value, ManifestFetchError)

    def test_connect_error(self) -> None:
        """Connection failures become ManifestFetchError."""
        client = _mock_client(side_effect=httpx.ConnectError("refused"))
        with patch("sce.manifest.fetch.httpx.Client", return_value=client):
            with pytest.raises(ManifestFetchError, match="Cannot connect"):
                fetch_manifest(URL)

    def test_timeout(self) -> None:
        """Timeouts become ManifestFetchError."""
        client = _mock_client(side_effect=httpx.ReadTimeout("slow"))
        with patch("sce.manifest.fetch.httpx.Client", return_value=client):
            with pytest.raises(ManifestFetchError, match="Timed out"):
                fetch_manifest(URL)

    def test_http_status_error(self) -> None:
        """Error statuses become ManifestFetchError."""
        request = httpx.Request("GET", URL)
        error_response = httpx.Response(404, request=request)
        response = MagicMock()
        response.raise_for_status.side_effect = httpx.HTTPStatusError(
            "404 Not Found", request=request, response=error_response
        )
        client = _mock_client(response)
        with patch("sce.manifest.fetch.httpx.Client", return_value=client):
            with pytest.raises(ManifestFetchError, match="HTTP error"):
                fetch_manifest(URL)
