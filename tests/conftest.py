import hashlib
import threading
from http.server import BaseHTTPRequestHandler, HTTPServer
from unittest.mock import MagicMock

import bencodepy
import pytest
import requests

from qbittorrent_client.client import QBittorrentClient


HOSTNAME = "qbit.local:8080"
BASE_URL = f"http://{HOSTNAME}/api/v2"


def _make_response(status_code=200, body=b"", url=None):
    response = requests.Response()
    response.status_code = status_code
    response._content = body.encode("utf-8") if isinstance(body, str) else body
    response.encoding = "utf-8"
    response.url = url
    return response


@pytest.fixture
def make_response():
    return _make_response


@pytest.fixture
def http():
    """A real requests.Session whose network call is mocked."""
    session = requests.Session()
    session.request = MagicMock(return_value=_make_response(200, b"Ok."))
    return session


@pytest.fixture
def client(http):
    return QBittorrentClient(HOSTNAME, username="admin", password="secret", ssl=False, timeout=5, http=http)


@pytest.fixture
def torrent_info():
    return {
        b"name": b"debian-12.6.0-amd64-netinst.iso",
        b"length": 661651456,
        b"piece length": 262144,
        b"pieces": b"\x01" * 40,
    }


@pytest.fixture
def torrent_path(tmp_path, torrent_info):
    data = {
        b"announce": b"http://bttracker.debian.org:6969/announce",
        b"comment": b"Debian CD from cdimage.debian.org",
        b"info": torrent_info,
    }
    path = tmp_path / "debian.torrent"
    path.write_bytes(bencodepy.encode(data))
    return str(path)


@pytest.fixture
def torrent_hash(torrent_info):
    return hashlib.sha1(bencodepy.encode(torrent_info)).hexdigest()


class _QBittorrentHandler(BaseHTTPRequestHandler):
    """Answers from server.routes and records every request in server.requests."""

    def _respond(self):
        length = int(self.headers.get("Content-Length") or 0)
        body = self.rfile.read(length) if length else b""
        path = self.path.split("?", 1)[0]
        self.server.requests.append({
            "method": self.command,
            "path": self.path,
            "headers": dict(self.headers),
            "body": body,
        })

        status, payload, headers = self.server.routes.get(path, (404, b"Not Found", {}))
        self.send_response(status)
        for name, value in headers.items():
            self.send_header(name, value)
        self.send_header("Content-Length", str(len(payload)))
        self.end_headers()
        self.wfile.write(payload)

    do_GET = _respond
    do_POST = _respond

    def log_message(self, format, *args):
        pass


@pytest.fixture
def qbit_server():
    """A local HTTP server standing in for qBittorrent, reached through a real requests.Session."""
    server = HTTPServer(("127.0.0.1", 0), _QBittorrentHandler)
    server.routes = {}
    server.requests = []
    server.hostname = f"127.0.0.1:{server.server_address[1]}"
    thread = threading.Thread(target=server.serve_forever, daemon=True)
    thread.start()
    yield server
    server.shutdown()
    server.server_close()
    thread.join()
