"""Exception hierarchy for manifest loading.

Parsers never raise on malformed manifest text; these errors cover the
layers around them (capture files, HTTP fetches, format detection).
"""


class ManifestError(Exception):
    """Base error for manifest loading failures."""


class CaptureFileError(ManifestError):
    """Raised when a manifest capture file is unreadable or invalid."""

    def __init__(self, message: str, path: str | None = None) -> None:
        self.message = message
        self.path = path
        super().__init__(message)


class ManifestFetchError(ManifestError):
    """Raised when a manifest cannot be fetched over HTTP."""
