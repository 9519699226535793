"""
Configuration & Endpoint Registry
=================================
This module serves as the central registry for the render server address,
endpoint paths and global constants.

Why is this file needed?
------------------------
1. Abstraction: It prevents hardcoded URLs (e.g., "http://10.0.0.5:8000/...")
   scattered throughout the clients.
2. Deployment: The server address can be overridden from the environment when
   the client points at a deployed render service instead of a local one.

Exports:
    SERVER_URL (str): Base URL of the render service.
    SCENARIOS_ENDPOINT (str): Path of the scenario discovery endpoint.
    RENDER_ENDPOINT (str): Path template of the render endpoint.
"""
import os
from typing import Optional

DEFAULT_SERVER_URL: str = "http://localhost:8000"


def get_server_url() -> str:
    """
    Base URL of the render service, without a trailing slash.
    """
    url = os.environ.get("RENDERCLIENT_SERVER_URL", "").strip() or DEFAULT_SERVER_URL
    return url.rstrip("/")


# Global Constants
SERVER_URL: str = get_server_url()
SCENARIOS_ENDPOINT: str = "/scenarios"
RENDER_ENDPOINT: str = "/render/{scenario_id}"

# The server only returns PNG canvases
IMAGE_MEDIA_TYPE: str = "image/png"

# No client-side bound: the server's own timeout is the only limit
REQUEST_TIMEOUT: Optional[float] = None

LOG_FILE: Optional[str] = os.environ.get("RENDERCLIENT_LOG_FILE") or None
