"""
Image Handler

Utilities for downloading images. Supports only plain GET requests for image files
specified by url, with no expectation of authentication or other API requests (looking up
which image to fetch etc). Such activities should be performed by the specific source
handler, see spotlight_handler.

Downloaded files are named "<prefix><basename of the url path>" so that the retention
handler can recognise them later on.
"""

import logging
from pathlib import Path
from typing import NamedTuple
from urllib.parse import urlparse

import requests
from PIL import Image, UnidentifiedImageError

from spotlight.errors import AlreadyExistsError
from spotlight.errors import AssetNameError
from spotlight.errors import DirectoryMissingError
from spotlight.errors import FileCreateError
from spotlight.errors import NotADirectoryPathError
from spotlight.errors import TransportError
from spotlight.errors import UnexpectedStatusError
from spotlight.errors import WriteError

CHUNK_SIZE = 64 * 1024


class DownloadResult(NamedTuple):
    path: Path
    size: int


def image_file_name(url: str, prefix: str) -> str:
    """
    Derive the managed file name for url, e.g.

        https://example.com/img/landscape.jpg  ->  <prefix>landscape.jpg

    Query strings and fragments are not part of the name.
    """

    name = Path(urlparse(url).path).name
    if not name:
        raise AssetNameError(f"cannot derive a file name from image url {url!r}")

    return prefix + name


def check_directory(directory: Path) -> Path:
    """
    Make sure the target directory exists and really is a directory. Nothing is created
    on the user's behalf.
    """

    directory = Path(directory).expanduser()

    if not directory.exists():
        raise DirectoryMissingError(f"image directory {directory} does not exist")

    if not directory.is_dir():
        raise NotADirectoryPathError(f"{directory} exists but is not a directory")

    return directory.resolve()


def download_image(
    url: str, directory: Path, prefix: str, logger: logging.Logger = None
) -> DownloadResult:
    """
    Download the image at url into directory and return where it was saved and how many
    bytes were written.

    An existing file with the same name is never overwritten, the collision is reported
    as AlreadyExistsError.
    """

    logger = logger or logging.getLogger(__name__)

    directory = check_directory(directory)
    destination_path = directory / image_file_name(url, prefix)

    if destination_path.exists():
        raise AlreadyExistsError(f"image already exists at {destination_path}")

    try:
        r = requests.get(url, stream=True)

    except requests.exceptions.RequestException as error:
        raise TransportError(f"failed to fetch image from {url}: {error}") from error

    try:
        if r.status_code != 200:
            raise UnexpectedStatusError(
                f"received non-ok response code when fetching image: {r.status_code}",
                status_code=r.status_code,
            )

        logger.info("downloading image from %s", url)
        size = _save_response(r, destination_path)

    finally:
        r.close()

    logger.info("wrote image to file: %s (%d bytes)", destination_path, size)

    image_format = describe_image(destination_path)
    if image_format is None:
        logger.warning("%s does not appear to be an image", destination_path.name)
    else:
        logger.debug("identified image %s as %s", destination_path.name, image_format)

    return DownloadResult(path=destination_path, size=size)


def _save_response(r: requests.Response, destination_path: Path) -> int:
    """
    Stream the response body into a newly created file and return the number of bytes
    written. The file is opened in exclusive mode so a file that showed up after the
    existence check is still never overwritten. A partially written file is removed again.
    """

    try:
        file = open(destination_path, "xb")

    except FileExistsError as error:
        raise AlreadyExistsError(f"image already exists at {destination_path}") from error

    except OSError as error:
        raise FileCreateError(f"create image file {destination_path}: {error}") from error

    size = 0
    try:
        with file:
            for chunk in r.iter_content(chunk_size=CHUNK_SIZE):
                if chunk:
                    file.write(chunk)
                    size += len(chunk)

    except (OSError, requests.exceptions.RequestException) as error:
        destination_path.unlink(missing_ok=True)
        raise WriteError(f"write image file {destination_path}: {error}") from error

    return size


def describe_image(path: Path):
    """
    Identify the image at path with Pillow and return a short description such as
    "JPEG 1920x1080", or None if the content is not a recognised image.
    """

    try:
        with Image.open(path) as image:
            return f"{image.format} {image.width}x{image.height}"

    except (UnidentifiedImageError, OSError):
        return None
