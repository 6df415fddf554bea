"""
gnome-spotlight

Set the Gnome desktop wallpaper to the Windows Spotlight image of the day.

This module defines the entry point to the gnome-spotlight CLI. Options are collected into a
single SpotlightConfig which is then handed to the pipeline:

    resolve locale -> fetch metadata -> acquire image -> write setting -> clean images

Meant to be run once a day, e.g. from a systemd user timer or cron:

    $ gnome-spotlight --preserve 7
"""

from pathlib import Path

import click

from spotlight.config import DEFAULT_PRESERVE
from spotlight.config import SpotlightConfig
from spotlight.config import default_wallpaper_dir
from spotlight.config import load_config_defaults
from spotlight.pipeline import Pipeline
from spotlight.cli_utils.console import confirm_success
from spotlight.cli_utils.console import describe
from spotlight.cli_utils.console import setup_logging
from spotlight.cli_utils.decorators import catch_errors


@click.command(name="gnome-spotlight")
@catch_errors
@click.option("--debug", is_flag=True, default=False, help="Enable debug logging.")
@click.option(
    "--dir",
    "directory",
    type=click.Path(path_type=Path),  # make sure that file paths are always Path objects.
    default=default_wallpaper_dir,
    show_default="~/.local/share/backgrounds",
    help="Directory for saving images. Must already exist.",
)
@click.option(
    "--preserve",
    type=click.IntRange(min=0),
    default=DEFAULT_PRESERVE,
    show_default=True,
    help=(
        "Number of previous images to preserve. If the number of saved images would "
        "exceed this amount, the oldest images are deleted. 0 preserves all images."
    ),
)
@click.option(
    "--lang",
    envvar="LANG",
    show_envvar=True,
    default="",
    help="Locale used to localize the image, e.g. en_US.UTF-8.",
)
@click.option(
    "--quiet",
    is_flag=True,
    default=False,
    help="Silence all output except errors.",
)
@click.version_option(package_name="gnome-spotlight")
def cli(debug, directory, preserve, lang, quiet):
    """
    Download today's Windows Spotlight image and set it as the Gnome desktop
    background and screensaver image.
    """

    config = SpotlightConfig(
        directory=directory, preserve=preserve, lang=lang, debug=debug, quiet=quiet
    )
    logger = setup_logging(debug=config.debug, quiet=config.quiet)

    result = Pipeline(config, logger=logger).run()

    confirm_success(f"wallpaper updated to {result.path}")
    if result.deleted:
        describe(f"removed {len(result.deleted)} old image(s) from {config.directory}")


@catch_errors
def main():
    cli(default_map=load_config_defaults())


if __name__ == "__main__":
    main()
