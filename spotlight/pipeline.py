"""
gnome-spotlight Pipeline

One run of gnome-spotlight is a fixed sequence of stages:

    resolve locale -> fetch metadata -> acquire image -> write setting -> cleanup

There is no branching, looping or retrying. If a stage fails the run stops right there,
the failing stage is recorded and the exception is re-raised unchanged. Side effects of
the stages that already completed (a downloaded file, some dconf keys) are not undone.
"""

import logging
from enum import Enum
from pathlib import Path
from typing import NamedTuple

from spotlight import image_handler
from spotlight import retention_handler
from spotlight import wallpaper_handler
from spotlight.config import SpotlightConfig
from spotlight.errors import SpotlightError
from spotlight.locale_handler import resolve_locale
from spotlight.spotlight_handler import SpotlightClient
from spotlight.wallpaper_handler import ConfigStore
from spotlight.wallpaper_handler import DconfStore


class Stage(Enum):
    RESOLVE = "resolve locale"
    FETCH_METADATA = "fetch metadata"
    ACQUIRE_IMAGE = "acquire image"
    WRITE_SETTING = "write setting"
    CLEANUP = "clean images"
    DONE = "done"
    FAILED = "failed"


class RunResult(NamedTuple):
    path: Path
    size: int
    deleted: list


class Pipeline:
    """
    Runs the stages above against a SpotlightConfig. The metadata client and the
    configuration store can be swapped out, which is how the tests avoid touching the
    network and the user's desktop settings.
    """

    def __init__(
        self,
        config: SpotlightConfig,
        client: SpotlightClient = None,
        store: ConfigStore = None,
        logger: logging.Logger = None,
    ):
        self.config = config
        self.logger = logger or logging.getLogger(__name__)
        self.client = client or SpotlightClient(logger=self.logger)
        self.store = store or DconfStore()

        self.state = None
        self.failed_stage = None

    def _enter(self, stage: Stage):
        self.logger.debug("entering stage: %s", stage.value)
        self.state = stage

    def run(self) -> RunResult:
        self.failed_stage = None

        try:
            self._enter(Stage.RESOLVE)
            locale = resolve_locale(self.config.lang, logger=self.logger)

            self._enter(Stage.FETCH_METADATA)
            url = self.client.get_image_url(locale)
            self.logger.info("fetched new image from api")
            self.logger.debug("extracted image url from response: %s", url)

            self._enter(Stage.ACQUIRE_IMAGE)
            download = image_handler.download_image(
                url,
                directory=self.config.directory,
                prefix=self.config.prefix,
                logger=self.logger,
            )

            self._enter(Stage.WRITE_SETTING)
            wallpaper_handler.update_wallpaper(
                download.path, store=self.store, logger=self.logger
            )

            self._enter(Stage.CLEANUP)
            deleted = retention_handler.prune_images(
                self.config.directory,
                prefix=self.config.prefix,
                preserve=self.config.preserve,
                keep=download.path,
                logger=self.logger,
            )

        except Exception as error:
            self.failed_stage = self.state
            self.state = Stage.FAILED
            if isinstance(error, SpotlightError):
                error.stage = self.failed_stage.value
            self.logger.debug("stage %s failed", self.failed_stage.value)
            raise

        self.state = Stage.DONE
        return RunResult(path=download.path, size=download.size, deleted=deleted)
