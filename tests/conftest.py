import base64
import json
from typing import Optional

import pytest
import requests
from PySide6.QtCore import QCoreApplication

from renderclient.model.fields import field_key

# 8-byte PNG signature followed by padding; enough for the client, which
# never inspects pixels.
PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00" * 8
PNG_BASE64 = base64.b64encode(PNG_BYTES).decode("ascii")


@pytest.fixture(scope="session", autouse=True)
def qapp():
    app = QCoreApplication.instance() or QCoreApplication([])
    yield app


def make_response(status: int = 200, body=None, text: Optional[str] = None) -> requests.Response:
    """A real requests.Response carrying `body` as JSON (or raw `text`)."""
    response = requests.Response()
    response.status_code = status
    response.encoding = "utf-8"
    if text is None:
        text = json.dumps(body)
    response._content = text.encode("utf-8")
    return response


def fields_from(light, eye, target, up) -> dict:
    """Raw form texts for the four vectors given as (x, y, z) tuples."""
    raw = {}
    for role, vec in (("light", light), ("from", eye), ("to", target), ("up", up)):
        for axis, value in zip("xyz", vec):
            raw[field_key(role, axis)] = str(value)
    return raw
