"""
qBittorrent Client - Control a qBittorrent instance through its Web API.

Provides an authenticated client for listing, adding, pausing, resuming,
deleting and categorising torrents, plus a local prefix search helper.
"""

from .client import QBittorrentClient
from .config import Config
from .exceptions import (
    AuthError,
    BadStatusError,
    DecodeError,
    LocalFileError,
    QBittorrentError,
    TransportError,
)
from .matcher import match_by_prefix
from .models import Torrent, TorrentFilter, TorrentTracker

__version__ = "0.1.0"
__all__ = [
    "QBittorrentClient",
    "Config",
    "Torrent",
    "TorrentFilter",
    "TorrentTracker",
    "match_by_prefix",
    "QBittorrentError",
    "TransportError",
    "AuthError",
    "BadStatusError",
    "DecodeError",
    "LocalFileError",
]
