"""mdbook-private-chapters - an mdbook preprocessor that hides chapters whose files start with "_"."""

from .schema import NAME, SUPPORTED_RENDERERS, Request
from .errors import (
    InputDecodeError,
    OutputEncodeError,
    PrivateChaptersError,
    VersionMismatchWarning,
    VersionParseError,
)
from .codec import decode_request, encode_response
from .compat import check_compatibility
from .policy import filter_sections, should_export_private, should_keep_chapter
from .preprocessor import main, supports_renderer, transform

__all__ = [
    "NAME",
    "SUPPORTED_RENDERERS",
    "Request",
    "PrivateChaptersError",
    "InputDecodeError",
    "VersionParseError",
    "OutputEncodeError",
    "VersionMismatchWarning",
    "decode_request",
    "encode_response",
    "check_compatibility",
    "filter_sections",
    "should_export_private",
    "should_keep_chapter",
    "transform",
    "supports_renderer",
    "main",
]

__version__ = "0.1.0"
