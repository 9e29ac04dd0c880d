"""
Tests for the authenticated session and request executor.
"""

import pytest
import requests

from qbittorrent_client.exceptions import AuthError, LocalFileError, TransportError
from qbittorrent_client.session import QBittorrentSession, encode_hashes


HOSTNAME = "qbit.local:8080"
BASE_URL = f"http://{HOSTNAME}/api/v2"


@pytest.fixture
def session(http):
    return QBittorrentSession(HOSTNAME, ssl=False, timeout=5, http=http)


class TestEncodeHashes:
    def test_joins_with_pipe(self):
        assert encode_hashes(["aaa", "bbb", "ccc"]) == "aaa|bbb|ccc"

    def test_preserves_input_order(self):
        assert encode_hashes(["ccc", "aaa", "bbb"]) == "ccc|aaa|bbb"

    def test_single_hash(self):
        assert encode_hashes(["abc"]) == "abc"

    def test_empty(self):
        assert encode_hashes([]) == ""

    def test_accepts_generators(self):
        assert encode_hashes(h for h in ("a", "b")) == "a|b"


class TestBaseAddress:
    def test_http(self, session):
        assert session.base_url == BASE_URL
        assert session.url("torrents/info") == f"{BASE_URL}/torrents/info"

    def test_https(self, http):
        session = QBittorrentSession("qbit.example.com", ssl=True, http=http)
        assert session.base_url == "https://qbit.example.com/api/v2"

    def test_trailing_slashes(self, http):
        session = QBittorrentSession("qbit.local/", api_path="/api/v2/", http=http)
        assert session.url("/auth/login") == "http://qbit.local/api/v2/auth/login"


class TestLogin:
    def test_success_posts_credentials(self, session, http):
        assert not session.is_authenticated

        session.login("admin", "secret")

        assert session.is_authenticated
        http.request.assert_called_once_with(
            "POST",
            f"{BASE_URL}/auth/login",
            timeout=5,
            data={"username": "admin", "password": "secret"},
        )

    def test_bad_status(self, session, http, make_response):
        http.request.return_value = make_response(403, "Forbidden")

        with pytest.raises(AuthError, match="403"):
            session.login("admin", "secret")

        assert not session.is_authenticated

    def test_rejected_credentials(self, session, http, make_response):
        http.request.return_value = make_response(200, "Fails.")

        with pytest.raises(AuthError):
            session.login("admin", "wrong")

        assert not session.is_authenticated

    def test_transport_failure(self, session, http):
        http.request.side_effect = requests.exceptions.ConnectionError("refused")

        with pytest.raises(AuthError) as exc_info:
            session.login("admin", "secret")

        assert isinstance(exc_info.value.__cause__, TransportError)
        assert not session.is_authenticated


class TestLoginCookies:
    """Login against a local HTTP server, so cookies go through requests' own handling."""

    @pytest.fixture
    def live_session(self, qbit_server):
        return QBittorrentSession(qbit_server.hostname, ssl=False, timeout=5)

    def test_success_installs_cookie(self, qbit_server, live_session):
        qbit_server.routes["/api/v2/auth/login"] = (200, b"Ok.", {"Set-Cookie": "SID=abc123; HttpOnly; path=/"})

        assert live_session.sid is None

        live_session.login("admin", "secret")

        assert live_session.sid == "abc123"
        assert live_session.is_authenticated
        login = qbit_server.requests[0]
        assert (login["method"], login["path"]) == ("POST", "/api/v2/auth/login")
        assert login["body"] == b"username=admin&password=secret"

    def test_cookie_replayed_on_later_requests(self, qbit_server, live_session):
        qbit_server.routes["/api/v2/auth/login"] = (200, b"Ok.", {"Set-Cookie": "SID=abc123; HttpOnly; path=/"})
        qbit_server.routes["/api/v2/torrents/info"] = (200, b"[]", {"Content-Type": "application/json"})

        live_session.login("admin", "secret")
        response = live_session.get("torrents/info")

        assert response.status_code == 200
        assert "SID=abc123" in qbit_server.requests[1]["headers"].get("Cookie", "")

    @pytest.mark.parametrize("status, body", [
        (403, b"Forbidden"),
        (200, b"Fails."),
    ])
    def test_rejected_login_keeps_no_cookie(self, qbit_server, live_session, status, body):
        qbit_server.routes["/api/v2/auth/login"] = (status, body, {"Set-Cookie": "SID=leaked; HttpOnly; path=/"})
        qbit_server.routes["/api/v2/torrents/info"] = (403, b"Forbidden", {})

        with pytest.raises(AuthError):
            live_session.login("admin", "secret")

        assert live_session.sid is None
        assert not live_session.is_authenticated

        live_session.get("torrents/info")
        assert "Cookie" not in qbit_server.requests[1]["headers"]

    def test_rejected_login_keeps_earlier_cookie(self, qbit_server, live_session):
        qbit_server.routes["/api/v2/auth/login"] = (200, b"Ok.", {"Set-Cookie": "SID=good; HttpOnly; path=/"})
        live_session.login("admin", "secret")

        qbit_server.routes["/api/v2/auth/login"] = (200, b"Fails.", {"Set-Cookie": "SID=leaked; HttpOnly; path=/"})
        with pytest.raises(AuthError):
            live_session.login("admin", "wrong")

        assert live_session.sid == "good"

class TestRequests:
    def test_get_with_query(self, session, http):
        session.get("torrents/info", {"filter": "seeding"})

        http.request.assert_called_once_with(
            "GET", f"{BASE_URL}/torrents/info", timeout=5, params={"filter": "seeding"}
        )

    def test_post_form(self, session, http):
        session.post_form("torrents/add", {"urls": "magnet:?xt=urn:btih:abc"})

        http.request.assert_called_once_with(
            "POST", f"{BASE_URL}/torrents/add", timeout=5, data={"urls": "magnet:?xt=urn:btih:abc"}
        )

    def test_post_multipart(self, session, http, torrent_path):
        with open(torrent_path, "rb") as f:
            content = f.read()

        session.post_multipart("torrents/add", torrent_path, {"category": "linux"})

        args, kwargs = http.request.call_args
        assert args == ("POST", f"{BASE_URL}/torrents/add")
        assert kwargs["data"] == {"category": "linux"}
        assert kwargs["files"] == {
            "torrents": ("debian.torrent", content, "application/x-bittorrent")
        }

    def test_post_multipart_missing_file(self, session, http, tmp_path):
        with pytest.raises(LocalFileError):
            session.post_multipart("torrents/add", str(tmp_path / "missing.torrent"))

        http.request.assert_not_called()

    @pytest.mark.parametrize("error", [
        requests.exceptions.ConnectionError("refused"),
        requests.exceptions.Timeout("timed out"),
    ])
    def test_transport_errors(self, session, http, error):
        http.request.side_effect = error

        with pytest.raises(TransportError):
            session.get("torrents/info")

    def test_returns_response_for_any_status(self, session, http, make_response):
        http.request.return_value = make_response(500, "boom")

        response = session.get("torrents/info")

        assert response.status_code == 500
