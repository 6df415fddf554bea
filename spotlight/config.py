"""
gnome-spotlight Configuration Management

The runtime configuration is a SpotlightConfig dataclass that is built exactly once at
startup (in the CLI) and then handed to the pipeline. Nothing reads settings from global
state after that point.

Users may optionally keep persistent defaults in a "config.json" file. For Ubuntu (current
development target) this lives at ~/.config/gnome-spotlight/config.json as per modern Linux
app conventions. The location can be moved with the SPOTLIGHT_CONFIG_DIR environment variable.
The file is flat and only knows about the same names as the command line options, e.g.

    {
        "dir": "~/Pictures/spotlight",
        "preserve": 7
    }

Values from the file become click defaults, so anything passed on the command line wins.
"""

import json
import os
from dataclasses import dataclass
from dataclasses import field
from pathlib import Path

from spotlight.errors import SpotlightConfigError

# prefix prepended to every downloaded image. used to tell which files in the
# target directory are managed (and therefore may be cleaned up) by this tool.
IMAGE_PREFIX = "gnome-spotlight_"

DEFAULT_PRESERVE = 3

# config.json key -> name of the matching command line parameter
CONFIG_FILE_KEYS = {"dir": "directory", "preserve": "preserve"}


def default_wallpaper_dir() -> Path:
    """
    Gnome desktop stores images that users add through the settings GUI in
    ~/.local/share/backgrounds. Images found in this directory show up in the GUI so
    it is the natural default. Resolved from $HOME at call time.
    """

    return Path("~/.local/share/backgrounds").expanduser()


def default_config_dir() -> Path:
    try:
        return Path(os.environ["SPOTLIGHT_CONFIG_DIR"]).expanduser()

    except KeyError:
        return Path("~/.config/gnome-spotlight").expanduser()


@dataclass
class SpotlightConfig:
    """
    Settings for a single gnome-spotlight run.

    directory: where images are saved and cleaned up
    preserve: number of managed images to keep, 0 keeps all of them
    lang: raw locale string (usually $LANG) used to localize the image request
    """

    directory: Path = field(default_factory=default_wallpaper_dir)
    preserve: int = DEFAULT_PRESERVE
    lang: str = ""
    debug: bool = False
    quiet: bool = False
    prefix: str = IMAGE_PREFIX

    def __post_init__(self):
        """
        Values can arrive as plain strings from the command line or from JSON, so make
        sure the types match what the rest of the application expects.
        """

        self.directory = Path(self.directory).expanduser()

        try:
            self.preserve = int(self.preserve)
        except (TypeError, ValueError):
            raise SpotlightConfigError(
                f"preserve must be an integer, got {self.preserve!r}"
            )

        if self.preserve < 0:
            raise SpotlightConfigError(
                f"preserve must not be negative, got {self.preserve}"
            )

        if self.lang is None:
            self.lang = ""


def load_config_defaults(config_dir: Path = None) -> dict:
    """
    Load config.json from config_dir (default: see default_config_dir) and return the
    values keyed by parameter name, ready to be used as a click default_map. A missing
    file simply means there are no user defaults. Raise SpotlightConfigError if the file
    can't be read or does not contain a JSON object with known keys.
    """

    if config_dir is None:
        config_dir = default_config_dir()

    config_src = Path(config_dir) / "config.json"

    try:
        with config_src.open("r", encoding="utf-8") as file:
            from_json = json.loads(file.read())

    except FileNotFoundError:
        return {}

    except (json.JSONDecodeError, UnicodeDecodeError) as error:
        raise SpotlightConfigError(
            f"There was an issue reading the config at {config_src}: {error}"
        ) from error

    except OSError as error:
        raise SpotlightConfigError(
            f"There was an issue opening the config at {config_src}: {error}"
        ) from error

    if not isinstance(from_json, dict):
        raise SpotlightConfigError(
            f"The config at {config_src} must contain a JSON object."
        )

    unknown = set(from_json) - set(CONFIG_FILE_KEYS)
    if unknown:
        raise SpotlightConfigError(
            f"Unknown keys in {config_src}: {', '.join(sorted(unknown))}"
        )

    return {CONFIG_FILE_KEYS[key]: value for key, value in from_json.items()}
