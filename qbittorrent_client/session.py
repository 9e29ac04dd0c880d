"""
Authenticated HTTP session for the qBittorrent Web API.

QBittorrentSession holds the service's base address and the cookie jar
populated by login(), and issues the three request shapes the API uses:
GET with query parameters, POST with a form body and POST with a
multipart torrent file. Every request carries the session cookies.

The session is only written during login(). Other requests may be issued
from several threads once login has completed; login itself must not run
concurrently with anything else.
"""

import os
from typing import Any, Dict, Iterable, Optional

import requests

from .config import Config
from .exceptions import AuthError, LocalFileError, TransportError
from .logger import logger


QBITTORRENT_API_PATH = Config.QBITTORRENT_API_PATH
REQUEST_TIMEOUT = Config.REQUEST_TIMEOUT

SESSION_COOKIE = "SID"
LOGIN_FAILED_BODY = "Fails."


def encode_hashes(hashes: Iterable[str]) -> str:
    """
    Join torrent hashes with '|', the separator the Web API expects.

    Input order is preserved. An empty collection encodes as an empty string.
    """
    return "|".join(hashes)


class QBittorrentSession:
    def __init__(
        self,
        hostname: str,
        ssl: bool = False,
        api_path: str = QBITTORRENT_API_PATH,
        timeout: Optional[float] = REQUEST_TIMEOUT,
        http: Optional[requests.Session] = None,
    ):
        self.hostname = hostname.rstrip('/')
        self.scheme = "https" if ssl else "http"
        self.base_url = f"{self.scheme}://{self.hostname}{api_path.rstrip('/')}"
        self.timeout = timeout
        self.http = http or requests.Session()
        self._authenticated = False

    @property
    def sid(self) -> Optional[str]:
        """The session cookie issued by the service, or None before login."""
        return self.http.cookies.get(SESSION_COOKIE)

    @property
    def is_authenticated(self) -> bool:
        return self._authenticated

    def url(self, path: str) -> str:
        return f"{self.base_url}/{path.lstrip('/')}"

    def login(self, username: str, password: str) -> None:
        """
        Authenticate and keep the returned session cookie for later requests.

        Raises:
            AuthError: On a non-success status, a rejected login or a transport failure.
        """
        # Cookies set by a rejected login must not survive it
        saved_cookies = self.http.cookies.copy()
        try:
            response = self.post_form("auth/login", {"username": username, "password": password})
        except TransportError as e:
            self.http.cookies = saved_cookies
            raise AuthError(f"Could not reach qBittorrent at {self.base_url}: {e}") from e

        if not 200 <= response.status_code < 300:
            self.http.cookies = saved_cookies
            raise AuthError(f"Login failed with status {response.status_code}")

        # qBittorrent answers 200 "Fails." for bad credentials
        if response.text.strip() == LOGIN_FAILED_BODY:
            self.http.cookies = saved_cookies
            raise AuthError(f"Login rejected for user {username!r}")

        self._authenticated = True
        logger.info(f"Logged in to qBittorrent at {self.base_url} as {username}")

    def get(self, path: str, query: Optional[Dict[str, Any]] = None) -> requests.Response:
        return self._request("GET", path, params=query)

    def post_form(self, path: str, fields: Optional[Dict[str, Any]] = None) -> requests.Response:
        return self._request("POST", path, data=fields)

    def post_multipart(
        self,
        path: str,
        file_path: str,
        fields: Optional[Dict[str, Any]] = None,
    ) -> requests.Response:
        """Upload a local torrent file as the 'torrents' part, with fields as extra parts."""
        try:
            with open(file_path, 'rb') as f:
                content = f.read()
        except OSError as e:
            raise LocalFileError(f"Failed to read torrent file {file_path}: {e}") from e

        files = {'torrents': (os.path.basename(file_path), content, 'application/x-bittorrent')}
        return self._request("POST", path, data=fields, files=files)

    def _request(self, method: str, path: str, **kwargs) -> requests.Response:
        url = self.url(path)
        logger.debug(f"{method} {url}")
        try:
            return self.http.request(method, url, timeout=self.timeout, **kwargs)
        except requests.exceptions.RequestException as e:
            raise TransportError(f"{method} {url} failed: {e}") from e
