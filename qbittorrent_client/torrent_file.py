"""
Torrent file parser used before uploading a torrent.

Provides the TorrentFile class for reading a bencoded .torrent file and
computing its info hash locally, so the hash of an uploaded torrent is
known even though the service's add response does not carry it.

Custom exceptions:
- TorrentFileError: Base exception for all torrent file errors
- InvalidTorrentFileError: Raised when file is not valid bencode format
- MissingRequiredKeyError: Raised when required keys are missing
"""

import hashlib

import bencodepy

from .exceptions import LocalFileError


class TorrentFileError(LocalFileError):
    """Base exception for torrent file parsing errors."""
    pass


class InvalidTorrentFileError(TorrentFileError):
    """Raised when torrent file is not valid bencode format."""
    pass


class MissingRequiredKeyError(TorrentFileError):
    """Raised when torrent file is missing required keys."""
    pass


class TorrentFile:
    def __init__(self, torrent_path):
        self.path = torrent_path
        try:
            with open(torrent_path, 'rb') as f:
                file_content = f.read()
        except FileNotFoundError:
            raise TorrentFileError(f"Torrent file not found: {torrent_path}")
        except PermissionError:
            raise TorrentFileError(f"Permission denied reading torrent file: {torrent_path}")
        except OSError as e:
            raise TorrentFileError(f"Failed to read torrent file: {e}") from e

        try:
            torrent_data = bencodepy.decode(file_content)
        except (bencodepy.BencodeDecodeError, KeyError, IndexError, TypeError, ValueError) as e:
            raise InvalidTorrentFileError(f"Invalid bencode format: {e}") from e

        if not isinstance(torrent_data, dict):
            raise InvalidTorrentFileError("Torrent data is not a dictionary")

        if b'info' not in torrent_data:
            raise MissingRequiredKeyError("Torrent file missing required 'info' dictionary")

        # Keep the raw info dict, the hash is taken over its exact bencoding
        self._raw_info = torrent_data[b'info']
        if not isinstance(self._raw_info, dict):
            raise InvalidTorrentFileError("'info' field is not a dictionary")

        if b'name' not in self._raw_info:
            raise MissingRequiredKeyError("Torrent 'info' dictionary missing 'name'")

    @staticmethod
    def _text(value):
        return value.decode('utf-8', errors='replace') if isinstance(value, bytes) else str(value)

    def info_hash(self):
        """Lowercase hex SHA-1 of the bencoded info dictionary."""
        return hashlib.sha1(bencodepy.encode(self._raw_info)).hexdigest()

    def name(self):
        return self._text(self._raw_info[b'name'])

