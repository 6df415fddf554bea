"""
Gnome Wallpaper Handler

This module handles updates to the Gnome desktop background and screensaver image by
writing keys in the dconf database, the storage backend behind GSettings. Writes go
through the dconf command line tool:

    $ dconf write /org/gnome/desktop/background/picture-uri "'file:///path/to/image.jpg'"

dconf expects values in the GVariant text format. A bare path is not a valid GVariant so
the uri has to be written as a quoted string literal.

Settings for desktop backgrounds are defined under the schema: org.gnome.desktop.background
More information on this schema can be found at:
https://github.com/GNOME/gsettings-desktop-schemas/blob/master/schemas/org.gnome.desktop.background.gschema.xml.in
"""

import logging
import subprocess
from pathlib import Path
from typing import Protocol

from spotlight.errors import ConfigWriteError

# written in this order. a failure part way through leaves earlier keys updated.
WALLPAPER_KEYS = (
    "/org/gnome/desktop/background/picture-uri",
    "/org/gnome/desktop/background/picture-uri-dark",
    "/org/gnome/desktop/screensaver/picture-uri",
)


class ConfigStore(Protocol):
    """Anything that can persist a single key/value pair of desktop settings."""

    def write(self, key: str, value: str) -> None:
        ...


class DconfStore:
    """
    ConfigStore backed by the dconf executable.
    """

    def __init__(self, executable: str = "dconf"):
        self.executable = executable

    def write(self, key: str, value: str) -> None:
        try:
            subprocess.run(
                [self.executable, "write", key, value],
                capture_output=True,
                text=True,
                check=True,
            )

        except FileNotFoundError as error:
            raise ConfigWriteError(
                f"execute {self.executable} write: {self.executable} is not installed"
            ) from error

        except subprocess.CalledProcessError as error:
            raise ConfigWriteError(
                f"execute {self.executable} write {key} (exit status {error.returncode})",
                stderr=(error.stderr or "").strip(),
            ) from error


def gvariant_string(value: str) -> str:
    """
    Quote value as a GVariant string literal, e.g. file:///a/b.jpg -> 'file:///a/b.jpg'
    """

    escaped = value.replace("\\", "\\\\").replace("'", "\\'")
    return f"'{escaped}'"


def update_wallpaper(
    img_path: Path, store: ConfigStore = None, logger: logging.Logger = None
) -> str:
    """
    Point the desktop background (light and dark variant) and the screensaver at
    img_path. Returns the value that was written. ConfigWriteError from the store is
    propagated unchanged.
    """

    store = store or DconfStore()
    logger = logger or logging.getLogger(__name__)

    value = gvariant_string(f"file://{Path(img_path).resolve()}")

    for key in WALLPAPER_KEYS:
        logger.info("writing dconf entry %s = %s", key, value)
        store.write(key, value)

    return value
