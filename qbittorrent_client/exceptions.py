"""
Exception hierarchy for the qBittorrent client.

Every failure is raised to the caller as a subclass of QBittorrentError:
- TransportError: the service could not be reached or timed out
- AuthError: login was rejected
- BadStatusError: a response status fell outside the 2xx range
- DecodeError: a response body could not be decoded into the expected shape
- LocalFileError: a torrent file or magnet link could not be parsed locally
"""

from typing import Optional


class QBittorrentError(Exception):
    """Base exception for all qBittorrent client errors."""
    pass


class TransportError(QBittorrentError):
    """Raised when the connection fails, times out or cannot be resolved."""
    pass


class AuthError(QBittorrentError):
    """Raised when login is rejected or cannot be completed."""
    pass


class BadStatusError(QBittorrentError):
    """Raised when the service answers with a non-success HTTP status."""

    def __init__(self, status_code: int, endpoint: Optional[str] = None):
        self.status_code = status_code
        self.endpoint = endpoint
        where = f" from {endpoint}" if endpoint else ""
        super().__init__(f"Bad status {status_code}{where}")


class DecodeError(QBittorrentError):
    """Raised when a response body is not the JSON shape that was expected."""

    def __init__(self, raw: bytes, cause: Exception):
        self.raw = raw
        self.cause = cause
        super().__init__(f"Could not decode response: {cause} (raw: {raw[:200]!r})")


class LocalFileError(QBittorrentError):
    """Raised when a torrent file or magnet link cannot be parsed before upload."""
    pass
