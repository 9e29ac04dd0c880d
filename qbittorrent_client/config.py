import os

import dotenv


dotenv.load_dotenv()


# Defaults
VERBOSE = False
LOG_PATH = ""
LOG_LEVEL = "INFO"
LOG_ROTATION = "1 week"
LOG_RETENTION = "1 month"

# qBittorrent Web UI
QBITTORRENT_HOSTNAME = "localhost:8080"
QBITTORRENT_SSL = False
QBITTORRENT_USERNAME = "admin"
QBITTORRENT_PASSWORD = ""
QBITTORRENT_API_PATH = "/api/v2"

REQUEST_TIMEOUT = 30


class Config:
    VERBOSE = os.getenv("VERBOSE", str(VERBOSE)).lower() == "true"

    LOG_PATH = os.getenv("LOG_PATH", LOG_PATH)
    LOG_LEVEL = os.getenv("LOG_LEVEL", LOG_LEVEL)
    LOG_ROTATION = os.getenv("LOG_ROTATION", LOG_ROTATION)
    LOG_RETENTION = os.getenv("LOG_RETENTION", LOG_RETENTION)

    # qBittorrent Configuration
    QBITTORRENT_HOSTNAME = os.getenv("QBITTORRENT_HOSTNAME", QBITTORRENT_HOSTNAME)
    QBITTORRENT_SSL = os.getenv("QBITTORRENT_SSL", str(QBITTORRENT_SSL)).lower() == "true"
    QBITTORRENT_USERNAME = os.getenv("QBITTORRENT_USERNAME", QBITTORRENT_USERNAME)
    QBITTORRENT_PASSWORD = os.getenv("QBITTORRENT_PASSWORD", QBITTORRENT_PASSWORD)
    QBITTORRENT_API_PATH = os.getenv("QBITTORRENT_API_PATH", QBITTORRENT_API_PATH).rstrip('/')

    # Transport timeout in seconds, handed straight to requests
    REQUEST_TIMEOUT = float(os.getenv("REQUEST_TIMEOUT", REQUEST_TIMEOUT))
