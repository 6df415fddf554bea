"""
Tests for image_handler.py

Validate that images are downloaded into the target directory under their managed name
and that existing files are never overwritten.

*** Fixtures ***
- test_image, image_dir (defined in conftest.py)
- tmp_path (defined by Pytest)

*** MOCKING REQUEST CALLS ***

requests.get is patched with unittest.mock so that no network call is executed during
test. The mocked response hands out the test image through iter_content(), the same way
a streamed requests.Response would.
"""

import unittest.mock

import pytest
from requests.exceptions import ChunkedEncodingError
from requests.exceptions import ConnectionError

from spotlight.config import IMAGE_PREFIX
from spotlight.tests.helpers import make_response

# following entities are tested in this module:
from spotlight.image_handler import download_image
from spotlight.image_handler import image_file_name
from spotlight.image_handler import describe_image
from spotlight.errors import AlreadyExistsError
from spotlight.errors import AssetNameError
from spotlight.errors import DirectoryMissingError
from spotlight.errors import FileCreateError
from spotlight.errors import NotADirectoryPathError
from spotlight.errors import TransportError
from spotlight.errors import UnexpectedStatusError
from spotlight.errors import WriteError

IMG_URL = "https://img-s-msn-com.akamaized.net/tenant/amp/entityid/img.jpg"


@pytest.mark.parametrize(
    "img_url, expected",
    [
        ("http://x/img.jpg", IMAGE_PREFIX + "img.jpg"),
        ("https://example.com/a/b/c/photo.png?w=1920&h=1080", IMAGE_PREFIX + "photo.png"),
        ("https://example.com/AA1bXyZ#fragment", IMAGE_PREFIX + "AA1bXyZ"),
    ],
)
def test_image_file_name(img_url, expected):
    assert image_file_name(img_url, IMAGE_PREFIX) == expected


@pytest.mark.parametrize("img_url", ["https://example.com", "https://example.com/", ""])
def test_image_file_name_failure(img_url):
    with pytest.raises(AssetNameError):
        image_file_name(img_url, IMAGE_PREFIX)


@unittest.mock.patch("spotlight.image_handler.requests.get", autospec=True)
def test_download_image_success(mock_get, image_dir, test_image):
    """
    The body is written to <prefix><basename> and the number of bytes written is reported.
    """

    half = len(test_image) // 2
    mock_get.return_value = make_response(chunks=[test_image[:half], test_image[half:]])

    result = download_image(IMG_URL, image_dir, IMAGE_PREFIX)

    assert result.path == (image_dir / f"{IMAGE_PREFIX}img.jpg").resolve()
    assert result.path.read_bytes() == test_image
    assert result.size == len(test_image)
    assert describe_image(result.path).startswith("JPEG")
    mock_get.return_value.close.assert_called_once()


@unittest.mock.patch("spotlight.image_handler.requests.get", autospec=True)
def test_download_image_any_content_type(mock_get, image_dir):
    """
    The service decides what it serves. Content that isn't a recognisable image is still saved.
    """

    mock_get.return_value = make_response(chunks=[b"definitely not a jpeg"])

    result = download_image(IMG_URL, image_dir, IMAGE_PREFIX)

    assert result.path.read_bytes() == b"definitely not a jpeg"
    assert describe_image(result.path) is None


@unittest.mock.patch("spotlight.image_handler.requests.get", autospec=True)
def test_download_image_file_exists_failure(mock_get, image_dir, test_image):
    """
    Verify that download_image does not overwrite a file with the same managed name.
    The existing file must stay untouched and no request is made.
    """

    existing = image_dir / f"{IMAGE_PREFIX}img.jpg"
    existing.write_bytes(b"yesterday")
    mock_get.return_value = make_response(chunks=[test_image])

    with pytest.raises(AlreadyExistsError):
        download_image("http://x/img.jpg", image_dir, IMAGE_PREFIX)

    assert existing.read_bytes() == b"yesterday"
    mock_get.assert_not_called()


@unittest.mock.patch("spotlight.image_handler.requests.get", autospec=True)
def test_download_image_missing_directory(mock_get, tmp_path):
    with pytest.raises(DirectoryMissingError):
        download_image(IMG_URL, tmp_path / "nope", IMAGE_PREFIX)

    assert not (tmp_path / "nope").exists()
    mock_get.assert_not_called()


@unittest.mock.patch("spotlight.image_handler.requests.get", autospec=True)
def test_download_image_not_a_directory(mock_get, tmp_path):
    not_a_dir = tmp_path / "backgrounds"
    not_a_dir.write_text("I am a file")

    with pytest.raises(NotADirectoryPathError):
        download_image(IMG_URL, not_a_dir, IMAGE_PREFIX)

    mock_get.assert_not_called()


@unittest.mock.patch("spotlight.image_handler.requests.get", autospec=True)
def test_download_image_transport_failure(mock_get, image_dir):
    mock_get.side_effect = ConnectionError("connection reset by peer")

    with pytest.raises(TransportError):
        download_image(IMG_URL, image_dir, IMAGE_PREFIX)

    assert list(image_dir.iterdir()) == []


@pytest.mark.parametrize("status_code", [403, 404, 500])
@unittest.mock.patch("spotlight.image_handler.requests.get", autospec=True)
def test_download_image_unexpected_status(mock_get, image_dir, test_image, status_code):
    """
    Non-200 responses are errors and no file is created.
    """

    mock_get.return_value = make_response(status_code=status_code, chunks=[test_image])

    with pytest.raises(UnexpectedStatusError) as excinfo:
        download_image(IMG_URL, image_dir, IMAGE_PREFIX)

    assert excinfo.value.status_code == status_code
    assert list(image_dir.iterdir()) == []


@unittest.mock.patch("spotlight.image_handler.requests.get", autospec=True)
def test_download_image_interrupted(mock_get, image_dir, test_image):
    """
    A body that breaks off mid-transfer raises WriteError and leaves no partial file behind.
    """

    def broken_stream(*args, **kwargs):
        yield test_image[:100]
        raise ChunkedEncodingError("connection broken")

    response = make_response()
    response.iter_content.side_effect = broken_stream
    mock_get.return_value = response

    with pytest.raises(WriteError):
        download_image(IMG_URL, image_dir, IMAGE_PREFIX)

    assert list(image_dir.iterdir()) == []


@unittest.mock.patch(
    "spotlight.image_handler.open", create=True, side_effect=PermissionError("denied")
)
@unittest.mock.patch("spotlight.image_handler.requests.get", autospec=True)
def test_download_image_create_failure(mock_get, mock_open, image_dir, test_image):
    mock_get.return_value = make_response(chunks=[test_image])

    with pytest.raises(FileCreateError):
        download_image(IMG_URL, image_dir, IMAGE_PREFIX)
