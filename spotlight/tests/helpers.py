"""
Test doubles shared by the gnome-spotlight test modules.
"""

import json
import unittest.mock

import requests

from spotlight.errors import ConfigWriteError

ASSET_URL = "https://img-s-msn-com.akamaized.net/tenant/amp/entityid/AA1spotlight.jpg"


class RecordingStore:
    """
    Stand-in for the dconf backed ConfigStore that remembers every write. Writing
    fail_on raises ConfigWriteError the way DconfStore would.
    """

    def __init__(self, fail_on: str = None):
        self.writes = []
        self.fail_on = fail_on

    def write(self, key: str, value: str) -> None:
        if key == self.fail_on:
            raise ConfigWriteError(f"execute dconf write {key}", stderr="error: boom")
        self.writes.append((key, value))


def make_envelope(asset: str = ASSET_URL) -> dict:
    """
    Build a metadata payload shaped like the real API response. Note the inner item is a
    JSON document serialized into a string.
    """

    item = json.dumps({"ad": {"landscapeImage": {"asset": asset}}})
    return {"batchrsp": {"ver": "1.0", "items": [{"item": item}]}}


def make_response(status_code: int = 200, payload=None, chunks=None):
    """
    Return a MagicMock standing in for requests.Response.
    """

    response = unittest.mock.MagicMock(spec=requests.Response)
    response.status_code = status_code
    response.json.return_value = payload
    response.iter_content.return_value = chunks if chunks is not None else []
    return response
