"""
Windows Spotlight API Handler

This module is a wrapper around the public, unauthenticated image selection endpoint that
serves the Windows Spotlight lock screen images. A single GET request localized by country
and locale returns metadata for the featured image of the day. The actual download of the
image is left to the image handler.

The response is a JSON envelope whose items each hold *another* JSON document encoded as a
string, e.g.

    {"batchrsp": {"items": [{"item": "{\"ad\": {\"landscapeImage\": {\"asset\": \"https://...\"}}}"}]}}

The two layers are decoded in two separate steps (decode_envelope, decode_item) so that each
one fails with its own error message.
"""

import json
import logging

import requests

from spotlight.errors import TransportError
from spotlight.errors import UnexpectedStatusError
from spotlight.errors import DecodeError
from spotlight.errors import EmptyResultError
from spotlight.locale_handler import Locale


class SpotlightClient:
    """
    Fetch the url of the current Spotlight image for a given locale.
    """

    BASE_URL = "https://fd.api.iris.microsoft.com/v4/api/selection"

    # identifies the Spotlight desktop placement. bcnt is the number of images requested.
    PLACEMENT = "88000820"
    BATCH_COUNT = 1

    def __init__(self, logger: logging.Logger = None):
        self.logger = logger or logging.getLogger(__name__)

    def build_params(self, locale: Locale) -> dict:
        return {
            "placement": self.PLACEMENT,
            "bcnt": self.BATCH_COUNT,
            "country": locale.country,
            "locale": locale.locale,
            "fmt": "json",
        }

    def get_image_url(self, locale: Locale) -> str:
        """
        Query the API and return the direct url of the landscape image asset.
        """

        payload = self.fetch_envelope(locale)
        item = self.decode_envelope(payload)

        self.logger.debug("decoded image metadata: %s", item)

        return self.decode_item(item)

    def fetch_envelope(self, locale: Locale) -> dict:
        """
        Perform the GET request and return the parsed outer JSON envelope.
        """

        params = self.build_params(locale)
        self.logger.debug("calling api %s with %s", self.BASE_URL, params)

        try:
            r = requests.get(self.BASE_URL, params=params)

        except requests.exceptions.RequestException as error:
            raise TransportError(
                f"invalid response when querying spotlight api: {error}"
            ) from error

        self.logger.debug("received api response (status code %s)", r.status_code)

        if r.status_code != 200:
            raise UnexpectedStatusError(
                f"received non-ok response code when querying spotlight api: {r.status_code}",
                status_code=r.status_code,
            )

        try:
            return r.json()

        except ValueError as error:
            # requests raises its own JSONDecodeError, which is a ValueError subclass
            raise DecodeError(f"decode spotlight api response body: {error}") from error

    @staticmethod
    def decode_envelope(payload) -> str:
        """
        Return the JSON string held by the first item of the envelope. An envelope without
        items means the service has nothing for us, which is reported as EmptyResultError.
        """

        if not isinstance(payload, dict):
            raise DecodeError("decode spotlight api response body: expected a JSON object")

        batch = payload.get("batchrsp", {})
        if not isinstance(batch, dict):
            raise DecodeError("decode spotlight api response body: 'batchrsp' is not an object")

        items = batch.get("items", [])
        if not isinstance(items, list):
            raise DecodeError("decode spotlight api response body: 'items' is not a list")

        if len(items) == 0:
            raise EmptyResultError("spotlight api response body contains no images")

        first = items[0]
        item = first.get("item") if isinstance(first, dict) else None
        if not isinstance(item, str):
            raise DecodeError("decode spotlight api response body: 'item' is not a string")

        return item

    @staticmethod
    def decode_item(item: str) -> str:
        """
        Decode the embedded metadata document and return ad.landscapeImage.asset.
        """

        try:
            metadata = json.loads(item)

        except json.JSONDecodeError as error:
            raise DecodeError(f"decode spotlight api image metadata: {error}") from error

        try:
            asset = metadata["ad"]["landscapeImage"]["asset"]

        except (KeyError, TypeError) as error:
            raise DecodeError(
                f"decode spotlight api image metadata: missing field {error}"
            ) from error

        if not isinstance(asset, str) or not asset:
            raise DecodeError("decode spotlight api image metadata: empty image asset url")

        return asset
