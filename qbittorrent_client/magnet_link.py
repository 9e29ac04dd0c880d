"""
Magnet link parsing.

Provides the MagnetLink class for parsing magnet URIs into components
(info hash and display name). The info hash is taken from the
'urn:btih:' topic and normalised to lowercase hex, converting the
32-character base32 form when needed.
"""

import base64
import binascii
import re
from urllib.parse import parse_qs

from .exceptions import LocalFileError


BTIH_PREFIX = "urn:btih:"
HEX_HASH = re.compile(r'^[a-fA-F0-9]{40}$')
BASE32_HASH = re.compile(r'^[a-zA-Z2-7]{32}$')


class MagnetLinkError(LocalFileError):
    """Raised when a magnet URI cannot be parsed."""
    pass


class MagnetLink:
    def __init__(self, magnet_uri):
        self.magnet_uri = magnet_uri
        self.parse_magnet_uri()

    def parse_magnet_uri(self):
        if not self.magnet_uri.startswith("magnet:?"):
            raise MagnetLinkError(f"Not a magnet URI: {self.magnet_uri}")

        params = parse_qs(self.magnet_uri.split('?', 1)[1])

        topics = [xt for xt in params.get('xt', []) if xt.lower().startswith(BTIH_PREFIX)]
        if not topics:
            raise MagnetLinkError(f"Magnet URI has no {BTIH_PREFIX} topic: {self.magnet_uri}")

        self.info_hash = self._normalise_hash(topics[0][len(BTIH_PREFIX):])
        self.name = params.get('dn', [None])[0]

    @staticmethod
    def _normalise_hash(value):
        if HEX_HASH.match(value):
            return value.lower()
        if BASE32_HASH.match(value):
            try:
                return base64.b32decode(value.upper()).hex()
            except binascii.Error as e:
                raise MagnetLinkError(f"Invalid base32 info hash {value}: {e}") from e
        raise MagnetLinkError(f"Invalid info hash in magnet URI: {value!r}")

