"""Decides which chapters make it into the rendered book.

A chapter is private when the file it was loaded from starts with an
underscore (``src/_notes.md``). Private chapters are dropped unless
``export-private`` is set in book.toml or MDBOOK_EXPORT_PRIVATE is truthy.
"""

from __future__ import annotations

import logging
import os
from pathlib import PureWindowsPath
from typing import Any, Mapping

from .schema import (
    EXPORT_PRIVATE_ENV,
    EXPORT_PRIVATE_KEY,
    NAME,
    TRUTHY_ENV_VALUES,
    chapter_of,
    chapter_source_path,
)

logger = logging.getLogger(__name__)


def config_export_private(context: Mapping[str, Any]) -> bool:
    """Read ``[preprocessor.private-chapters] export-private`` from the context config.

    Only a real boolean counts; a missing table, a missing key, or a string
    such as ``"true"`` all resolve to False.
    """
    config = context.get("config")
    if not isinstance(config, dict):
        return False
    preprocessors = config.get("preprocessor")
    if not isinstance(preprocessors, dict):
        return False
    settings = preprocessors.get(NAME)
    if not isinstance(settings, dict):
        return False
    return settings.get(EXPORT_PRIVATE_KEY) is True


def env_export_private(environ: Mapping[str, str] | None = None) -> bool:
    """Check MDBOOK_EXPORT_PRIVATE against the accepted spellings (case-sensitive)."""
    if environ is None:
        environ = os.environ
    return environ.get(EXPORT_PRIVATE_ENV) in TRUTHY_ENV_VALUES


def should_export_private(
    context: Mapping[str, Any],
    environ: Mapping[str, str] | None = None,
) -> bool:
    """Return True if private chapters should be kept in the output.

    Args:
        context: The preprocessor context from the request
        environ: Override for os.environ (for testing)
    """
    return config_export_private(context) or env_export_private(environ)


def should_keep_chapter(source_path: str | None) -> bool:
    """Return False only for chapters whose file name starts with ``_``."""
    if source_path is None:
        return True
    # PureWindowsPath splits on both "/" and "\"
    return not PureWindowsPath(source_path).name.startswith("_")


def filter_sections(sections: list[Any]) -> list[Any]:
    """Drop private chapters from the top-level book items.

    Separators, part titles and draft chapters are always kept, and the
    order of kept items is unchanged. Nested ``sub_items`` are not inspected:
    a private chapter below a public one stays in the book.
    """
    kept = []
    for item in sections:
        chapter = chapter_of(item)
        if chapter is None:
            kept.append(item)
            continue
        source_path = chapter_source_path(chapter)
        if should_keep_chapter(source_path):
            kept.append(item)
        else:
            logger.debug("Dropping private chapter %r (%s)", chapter.get("name"), source_path)
    return kept
