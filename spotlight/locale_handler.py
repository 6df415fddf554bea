"""
Locale Handler

Derive the locale and country that the Spotlight service expects from a POSIX style
locale string such as the value of $LANG, e.g.

    en_US.UTF-8  ->  locale "en-US", country "US"
    de_DE@euro   ->  locale "de-DE", country "DE"
"""

import logging
from typing import NamedTuple

from spotlight.errors import LocaleParseError
from spotlight.errors import CountryParseError


class Locale(NamedTuple):
    locale: str
    country: str


def resolve_locale(lang: str, logger: logging.Logger = None) -> Locale:
    """
    Parse a locale string of the form language_REGION.encoding[@modifier].

    The encoding and modifier are discarded and underscores become dashes to give the
    locale. The country is the last dash separated segment of the locale. Raise
    LocaleParseError if nothing is left after dropping the encoding or the language is
    missing, and CountryParseError if no region can be found, which includes locales
    like "C" or "POSIX" that carry no region at all.
    """

    logger = logger or logging.getLogger(__name__)
    logger.debug("read locale string: %r", lang)

    if not isinstance(lang, str):
        raise LocaleParseError(f"failed to parse locale from {lang!r}: not a string")

    locale = lang.split(".")[0].split("@")[0].strip().replace("_", "-")
    if not locale:
        raise LocaleParseError(f"failed to parse locale from {lang!r}")

    segments = locale.split("-")
    if not segments[0]:
        raise LocaleParseError(f"failed to parse language from locale {locale!r}")

    country = segments[-1]
    if len(segments) < 2 or not country:
        raise CountryParseError(f"failed to parse country code from locale {locale!r}")

    logger.debug("determined localization: locale=%s country=%s", locale, country)

    return Locale(locale=locale, country=country)
