"""
Python client for the qBittorrent Web API.

Provides programmatic access to:
- Cookie-based login
- Torrent listing, filtering and prefix search
- Tracker status for a torrent
- Adding torrents from .torrent files or magnet links
- Delete, pause, resume and re-announce
- Categories and tags

Every method raises a QBittorrentError subclass on failure and never
retries. Operations other than login() need a prior successful login; the
service rejects them otherwise, which surfaces as BadStatusError(403).

Usage:
    from qbittorrent_client import QBittorrentClient

    client = QBittorrentClient("localhost:8080", username="admin", password="secret")
    client.login()
    for torrent in client.get_torrents(filter="downloading"):
        print(torrent.hash, torrent.name)
"""

from typing import Dict, Iterable, List, Optional, Union

import requests

from .config import Config
from .decoder import check_status, decode, decode_text
from .logger import logger
from .magnet_link import MagnetLink
from .matcher import match_by_prefix
from .models import Torrent, TorrentFilter, TorrentTracker
from .session import QBittorrentSession, encode_hashes
from .torrent_file import TorrentFile


class QBittorrentClient:
    def __init__(
        self,
        hostname: Optional[str] = None,
        username: Optional[str] = None,
        password: Optional[str] = None,
        ssl: Optional[bool] = None,
        timeout: Optional[float] = None,
        http: Optional[requests.Session] = None,
    ):
        self.username = Config.QBITTORRENT_USERNAME if username is None else username
        self.password = Config.QBITTORRENT_PASSWORD if password is None else password
        self.session = QBittorrentSession(
            hostname=hostname or Config.QBITTORRENT_HOSTNAME,
            ssl=Config.QBITTORRENT_SSL if ssl is None else ssl,
            timeout=Config.REQUEST_TIMEOUT if timeout is None else timeout,
            http=http,
        )

    # -------------------------------------------------------------------------
    # Auth Methods
    # -------------------------------------------------------------------------

    def login(self) -> None:
        """Login with the configured credentials, establishing a session."""
        self.session.login(self.username, self.password)

    # -------------------------------------------------------------------------
    # Torrent Queries
    # -------------------------------------------------------------------------

    def get_torrents(
        self,
        filter: Optional[Union[TorrentFilter, str]] = None,
        category: Optional[str] = None,
    ) -> List[Torrent]:
        """
        List torrents in the order the service returns them.

        Args:
            filter: Restrict to a TorrentFilter state (optional)
            category: Restrict to a category (optional)
        """
        params = {}
        if filter is not None:
            params["filter"] = TorrentFilter(filter).value
        if category is not None:
            params["category"] = category

        torrents = decode(self.session.get("torrents/info", params), Torrent.from_dict, many=True)
        logger.debug(f"Fetched {len(torrents)} torrents")
        return torrents

    def get_torrents_raw(self) -> str:
        """List all torrents as the unprocessed JSON text."""
        return decode_text(self.session.get("torrents/info"))

    def get_torrent_by_hash(self, info_hash: str) -> str:
        """Fetch one torrent's record as the unprocessed JSON text."""
        return decode_text(self.session.get("torrents/info", {"hashes": info_hash}))

    def get_torrents_by_prefixes(
        self,
        terms: Iterable[str],
        hashes: bool = True,
        names: bool = True,
    ) -> List[Torrent]:
        """
        Search all torrents for hashes and/or names starting with any term.

        The result is deduplicated by hash and unordered.
        """
        return match_by_prefix(self.get_torrents(), terms, match_hashes=hashes, match_names=names)

    def get_torrent_trackers(self, info_hash: str) -> List[TorrentTracker]:
        """
        Fetch tracker status for one torrent.

        An unknown hash may come back as an empty list or as BadStatusError,
        depending on the service version.
        """
        response = self.session.get("torrents/trackers", {"hash": info_hash})
        return decode(response, TorrentTracker.from_dict, many=True)

    # -------------------------------------------------------------------------
    # Adding Torrents
    # -------------------------------------------------------------------------

    def add_torrent_from_file(self, path: str, options: Optional[Dict[str, str]] = None) -> str:
        """
        Upload a .torrent file.

        The file is parsed locally first so its info hash can be returned;
        the service's add response does not include it.

        Args:
            path: Path to the .torrent file
            options: Extra form fields passed verbatim, e.g. category or savepath

        Returns:
            Lowercase hex info hash of the added torrent
        """
        torrent = TorrentFile(path)
        info_hash = torrent.info_hash()

        check_status(self.session.post_multipart("torrents/add", path, dict(options or {})))
        logger.info(f"Added torrent {info_hash} ({torrent.name()}) from {path}")
        return info_hash

    def add_torrent_from_magnet(self, uri: str, options: Optional[Dict[str, str]] = None) -> str:
        """
        Add a torrent by magnet URI.

        Args:
            uri: Magnet URI starting with "magnet:?xt=urn:btih:..."
            options: Extra form fields passed verbatim, e.g. category or savepath

        Returns:
            Lowercase hex info hash taken from the magnet's btih topic
        """
        magnet = MagnetLink(uri)
        info_hash = magnet.info_hash

        fields = dict(options or {})
        fields["urls"] = uri
        check_status(self.session.post_form("torrents/add", fields))
        logger.info(f"Added torrent {info_hash} ({magnet.name or 'unnamed'}) from magnet link")
        return info_hash

    # -------------------------------------------------------------------------
    # Torrent Actions
    # -------------------------------------------------------------------------

    def delete_torrents(self, hashes: Iterable[str], delete_files: bool = False) -> None:
        """Remove torrents, and their downloaded data when delete_files is set."""
        params = {
            "hashes": encode_hashes(hashes),
            "deleteFiles": "true" if delete_files else "false",
        }
        check_status(self.session.get("torrents/delete", params))
        logger.info(f"Deleted torrents {params['hashes']} (deleteFiles={params['deleteFiles']})")

    def reannounce_torrents(self, hashes: Iterable[str]) -> None:
        self._hashes_action("torrents/reannounce", hashes)

    def pause(self, hashes: Iterable[str]) -> None:
        self._hashes_action("torrents/pause", hashes)

    def resume(self, hashes: Iterable[str]) -> None:
        self._hashes_action("torrents/resume", hashes)

    def set_category(self, hashes: Iterable[str], category: str) -> None:
        """Assign a category. An empty category clears it."""
        self._hashes_action("torrents/setCategory", hashes, category=category)

    def set_tag(self, hashes: Iterable[str], tag: str) -> None:
        """Add a tag, keeping the torrents' existing tags."""
        self._hashes_action("torrents/addTags", hashes, tags=tag)

    def _hashes_action(self, endpoint: str, hashes: Iterable[str], **params: str) -> None:
        params = {"hashes": encode_hashes(hashes), **params}
        check_status(self.session.get(endpoint, params))
        logger.info(f"{endpoint} {params['hashes']}")
