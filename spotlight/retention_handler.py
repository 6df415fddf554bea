"""
Retention Handler

Keep the image directory from growing without bound. Only managed images, files whose
name starts with the gnome-spotlight prefix, are ever considered. Anything else the user
keeps in the same directory is left alone.
"""

import logging
import os
from pathlib import Path

from spotlight.errors import DirectoryReadError
from spotlight.errors import FileDeleteError
from spotlight.errors import FileStatError


def managed_images(directory: Path, prefix: str) -> list[tuple[Path, int]]:
    """
    Return (path, modification time in ns) for every regular file in directory whose
    name starts with prefix, in directory listing order.
    """

    try:
        entries = list(os.scandir(directory))

    except OSError as error:
        raise DirectoryReadError(f"read dir {directory}: {error}") from error

    images = []
    for entry in entries:
        if not entry.name.startswith(prefix):
            continue

        try:
            if not entry.is_file():
                continue
            mtime = entry.stat().st_mtime_ns

        except OSError as error:
            raise FileStatError(f"get file info for {entry.path}: {error}") from error

        images.append((Path(entry.path), mtime))

    return images


def prune_images(
    directory: Path,
    prefix: str,
    preserve: int,
    keep: Path = None,
    logger: logging.Logger = None,
) -> list[Path]:
    """
    Delete the oldest managed images so that at most `preserve` of them remain and return
    the paths that were deleted. preserve=0 means keep everything.

    keep is the image that was just set as wallpaper. It is never deleted, no matter its
    modification time, and takes up one of the `preserve` slots.

    Images are ordered by modification time, oldest first. The sort is stable so images
    with identical timestamps keep their directory listing order. The first failed delete
    aborts the cleanup, images deleted before that stay deleted.
    """

    logger = logger or logging.getLogger(__name__)

    if preserve == 0:
        logger.debug("preserve is 0, keeping all images")
        return []

    images = managed_images(directory, prefix)
    for path, _ in images:
        logger.debug("found managed image %s", path.name)

    if len(images) <= preserve:
        return []

    logger.info(
        "found more images than target amount, deleting oldest (current=%d target=%d)",
        len(images),
        preserve,
    )

    candidates = images
    if keep is not None:
        keep = Path(keep).resolve()
        candidates = [image for image in images if image[0].resolve() != keep]

    candidates.sort(key=lambda image: image[1])

    deleted = []
    for path, _ in candidates[: len(images) - preserve]:
        logger.info("deleting image %s", path.name)

        try:
            path.unlink()
        except OSError as error:
            raise FileDeleteError(f"delete image {path}: {error}") from error

        deleted.append(path)

    return deleted
