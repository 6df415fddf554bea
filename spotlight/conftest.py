"""
conftest.py

Test configuration for gnome-spotlight tests.

Defines Pytest fixtures for supplying test data to tests across the entire
test suite. Fixtures used within only a single module are defined
directly in that module. Conftest.py should only be used for universal
fixtures to avoid unnecessary performance hit.

No test in the suite talks to the network or to the real dconf database: requests.get
is patched with unittest.mock and desktop settings go to a RecordingStore.
"""

import io

import pytest
from PIL import Image

from spotlight.config import IMAGE_PREFIX
from spotlight.spotlight_handler import SpotlightClient
from spotlight.tests.helpers import RecordingStore
from spotlight.tests.helpers import make_envelope
from spotlight.tests.helpers import make_response


@pytest.fixture(scope="session")
def test_image() -> bytes:
    """
    A small but valid JPEG generated with Pillow.
    """

    buffer = io.BytesIO()
    Image.new("RGB", (64, 36), color=(30, 90, 160)).save(buffer, format="JPEG")
    return buffer.getvalue()


@pytest.fixture
def image_dir(tmp_path):
    """
    Empty directory to download images into.
    """

    directory = tmp_path / "backgrounds"
    directory.mkdir()
    return directory


@pytest.fixture
def store() -> RecordingStore:
    return RecordingStore()


@pytest.fixture
def fake_get(test_image):
    """
    Side effect for a patched requests.get: answer the metadata endpoint with an envelope
    pointing at ASSET_URL and anything else with the test image, delivered in two chunks.
    """

    def get(url, *args, **kwargs):
        if url == SpotlightClient.BASE_URL:
            return make_response(payload=make_envelope())

        half = len(test_image) // 2
        return make_response(chunks=[test_image[:half], test_image[half:]])

    return get


@pytest.fixture
def managed_name() -> str:
    """Managed file name the pipeline derives from ASSET_URL."""

    return IMAGE_PREFIX + "AA1spotlight.jpg"
