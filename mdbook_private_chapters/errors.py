"""Exceptions raised by the private-chapters preprocessor."""

from __future__ import annotations


class PrivateChaptersError(Exception):
    """Base class for fatal preprocessor errors."""


class InputDecodeError(PrivateChaptersError):
    """stdin is not valid JSON or not a preprocessor request."""


class VersionParseError(PrivateChaptersError):
    """A version or version requirement could not be parsed."""


class OutputEncodeError(PrivateChaptersError):
    """The response could not be serialized or written."""


class VersionMismatchWarning(UserWarning):
    """mdbook's version is outside the range this preprocessor was built for.

    Never raised; its message is logged and processing continues.
    """

    def __init__(self, plugin: str, requirement: str, version: str) -> None:
        self.plugin = plugin
        self.requirement = requirement
        self.version = version
        super().__init__(
            f"The {plugin} plugin was built against version {requirement} of mdbook, "
            f"but we're being called from version {version}"
        )
