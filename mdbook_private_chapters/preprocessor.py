"""mdbook preprocessor entry point.

Invoked by mdbook as:
    mdbook-private-chapters supports <renderer>   # exit 0 if supported, 1 if not
    mdbook-private-chapters                       # [context, book] on stdin, book on stdout

Enable in book.toml with::

    [preprocessor.private-chapters]
    export-private = false
"""

from __future__ import annotations

import argparse
import io
import logging
import os
import sys
from typing import IO, Mapping

from .codec import read_request, write_response
from .compat import check_compatibility
from .errors import PrivateChaptersError
from .policy import filter_sections, should_export_private
from .schema import LOG_LEVEL_ENV, NAME, SUPPORTED_RENDERERS, Request

logger = logging.getLogger(__name__)


def supports_renderer(renderer: str) -> bool:
    """Return True if ``renderer`` is one this preprocessor runs for."""
    return renderer in SUPPORTED_RENDERERS


def transform(request: Request, environ: Mapping[str, str] | None = None) -> Request:
    """Apply the preprocessor to a decoded request.

    Checks version compatibility (warning only), then drops private
    chapters from the top-level sections unless private export is enabled.
    The input request is left untouched.

    Raises:
        VersionParseError: If mdbook's version or the declared requirement is invalid.
    """
    check_compatibility(request.mdbook_version)

    if should_export_private(request.context, environ):
        logger.info("Exporting private chapters")
        return request.with_sections(list(request.sections))

    sections = filter_sections(request.sections)
    logger.info(
        "Removed %d private chapter(s)", len(request.sections) - len(sections)
    )
    return request.with_sections(sections)


def run(
    stdin: IO[str] | None = None,
    stdout: IO[str] | None = None,
    environ: Mapping[str, str] | None = None,
) -> None:
    """Read a request, transform it and write the response."""
    if stdin is None:
        stdin = sys.stdin
    if stdout is None:
        stdout = sys.stdout

    request = read_request(stdin)
    write_response(transform(request, environ), stdout)


def use_utf8(*streams: IO[str]) -> None:
    """Switch real text streams to UTF-8, the encoding mdbook speaks."""
    for stream in streams:
        if isinstance(stream, io.TextIOWrapper):
            stream.reconfigure(encoding="utf-8")


def configure_logging(environ: Mapping[str, str] | None = None) -> None:
    """Send diagnostics to stderr; stdout carries the book."""
    if environ is None:
        environ = os.environ

    level_name = environ.get(LOG_LEVEL_ENV, "WARNING").upper()
    level = logging.getLevelName(level_name)
    if not isinstance(level, int):
        level = logging.WARNING

    package_logger = logging.getLogger(__package__)
    for handler in package_logger.handlers[:]:
        package_logger.removeHandler(handler)

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter("%(levelname)s: %(message)s"))
    package_logger.addHandler(handler)
    package_logger.setLevel(level)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog=f"mdbook-{NAME}",
        description="A mdbook preprocessor that removes chapters whose files begin with an underscore",
    )
    subparsers = parser.add_subparsers(dest="command")

    supports_parser = subparsers.add_parser(
        "supports", help="Check whether a renderer is supported by this preprocessor"
    )
    supports_parser.add_argument("renderer", help="Renderer name (e.g., html)")

    return parser


def main(argv: list[str] | None = None) -> None:
    """CLI entry point."""
    args = build_parser().parse_args(argv)

    if args.command == "supports":
        sys.exit(0 if supports_renderer(args.renderer) else 1)

    configure_logging()
    use_utf8(sys.stdin, sys.stdout)
    try:
        run()
    except PrivateChaptersError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
