"""
gnome-spotlight Errors

Every failure raised by the pipeline derives from SpotlightError so that the CLI can
report it in one place. Low-level exceptions (requests, OSError, json) are always
wrapped into one of the types below with "raise ... from error" so the original
cause stays attached for debugging.
"""


class SpotlightError(Exception):
    """
    Base exception for gnome-spotlight. The pipeline fills in `stage` with the name of
    the stage that failed before re-raising.
    """

    stage = None


class SpotlightConfigError(SpotlightError):
    """Raise when an issue occurs with handling gnome-spotlight configuration."""

    pass


"""
Parsing
"""


class ParseError(SpotlightError):
    """Raised when a value needed by the pipeline cannot be extracted from its input."""

    pass


class LocaleParseError(ParseError):
    pass


class CountryParseError(ParseError):
    pass


class AssetNameError(ParseError):
    """Raised when no file name can be derived from an image url."""

    pass


"""
Network
"""


class TransportError(SpotlightError):
    """Raised when a request fails before any response is received."""

    pass


class UnexpectedStatusError(SpotlightError):
    """
    Raised when a server answers with anything other than 200 OK. The status code is
    kept on the exception for callers that want to inspect it.
    """

    def __init__(self, message: str, status_code: int):
        super().__init__(message)
        self.status_code = status_code


class DecodeError(SpotlightError):
    """Raised when a response payload is malformed or missing required fields."""

    pass


class EmptyResultError(SpotlightError):
    """Raised when the metadata service answers without any image."""

    pass


"""
Filesystem
"""


class FilesystemError(SpotlightError):
    pass


class DirectoryMissingError(FilesystemError):
    pass


class NotADirectoryPathError(FilesystemError):
    pass


class FileCreateError(FilesystemError):
    pass


class WriteError(FilesystemError):
    pass


class DirectoryReadError(FilesystemError):
    pass


class FileStatError(FilesystemError):
    pass


class FileDeleteError(FilesystemError):
    pass


class AlreadyExistsError(SpotlightError):
    """
    Raised when an image with the same managed name is already present. Existing files
    are never overwritten.
    """

    pass


"""
Desktop settings
"""


class ConfigWriteError(SpotlightError):
    """
    Raised when the desktop configuration store rejects a write. The diagnostic output
    of the store (stderr for dconf) is kept on the exception when available.
    """

    def __init__(self, message: str, stderr: str = ""):
        if stderr:
            message = f"{message}: {stderr}"
        super().__init__(message)
        self.stderr = stderr
