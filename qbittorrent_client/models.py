"""
Records returned by the qBittorrent Web API.

Torrent and TorrentTracker are built fresh from the service's JSON on every
call and never cached. Only the fields listed as required are checked; the
full service record is kept in `raw` so nothing the service reports is lost.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Optional, Tuple


class TorrentFilter(str, Enum):
    """Filter values accepted by torrents/info."""
    ALL = "all"
    DOWNLOADING = "downloading"
    SEEDING = "seeding"
    COMPLETED = "completed"
    PAUSED = "paused"
    ACTIVE = "active"
    INACTIVE = "inactive"
    RESUMED = "resumed"
    STALLED = "stalled"
    STALLED_UPLOADING = "stalled_uploading"
    STALLED_DOWNLOADING = "stalled_downloading"
    ERRORED = "errored"


def _parse_tags(value: Any) -> Tuple[str, ...]:
    # The service sends tags as one comma-separated string
    if not value:
        return ()
    if isinstance(value, str):
        return tuple(tag.strip() for tag in value.split(",") if tag.strip())
    return tuple(value)


@dataclass(frozen=True)
class Torrent:
    """A torrent tracked by the service. Identity is the info hash."""
    hash: str
    name: str
    category: str = ""
    tags: Tuple[str, ...] = ()
    state: Optional[str] = None
    size: Optional[int] = None
    progress: Optional[float] = None
    save_path: Optional[str] = None
    raw: Dict[str, Any] = field(default_factory=dict, compare=False, hash=False, repr=False)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Torrent":
        """Build a Torrent from one torrents/info record. Raises KeyError on missing hash or name."""
        if not isinstance(data, dict):
            raise TypeError(f"Expected a torrent object, got {type(data).__name__}")
        return cls(
            hash=data["hash"],
            name=data["name"],
            category=data.get("category") or "",
            tags=_parse_tags(data.get("tags")),
            state=data.get("state"),
            size=data.get("size"),
            progress=data.get("progress"),
            save_path=data.get("save_path"),
            raw=dict(data),
        )


@dataclass(frozen=True)
class TorrentTracker:
    """Announce status of one tracker for one torrent."""
    url: str
    status: int
    msg: str
    tier: Optional[int] = None
    num_peers: Optional[int] = None
    raw: Dict[str, Any] = field(default_factory=dict, compare=False, hash=False, repr=False)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "TorrentTracker":
        if not isinstance(data, dict):
            raise TypeError(f"Expected a tracker object, got {type(data).__name__}")
        return cls(
            url=data["url"],
            status=data["status"],
            msg=data["msg"],
            tier=data.get("tier"),
            num_peers=data.get("num_peers"),
            raw=dict(data),
        )
