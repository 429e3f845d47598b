"""Constants and data structures for the private-chapters preprocessor."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any

# Name under which mdbook knows this preprocessor ([preprocessor.private-chapters])
NAME = "private-chapters"

SUPPORTED_RENDERERS = frozenset({"html", "pdf", "epub"})

# The mdbook release this preprocessor targets. Cargo requirement syntax:
# a bare version is a caret requirement.
MDBOOK_VERSION_REQ = "0.4.40"

EXPORT_PRIVATE_KEY = "export-private"
EXPORT_PRIVATE_ENV = "MDBOOK_EXPORT_PRIVATE"
TRUTHY_ENV_VALUES = frozenset({"1", "true", "TRUE", "yes", "YES"})

LOG_LEVEL_ENV = "MDBOOK_PRIVATE_CHAPTERS_LOG"


@dataclass
class Request:
    """A preprocessor request as received from mdbook.

    Attributes:
        context: The preprocessor context (root, config, renderer,
            mdbook_version, ...). Passed through untouched.
        book: The book object; ``book["sections"]`` is the top-level list
            of book items.
        envelope: The top-level JSON object the request arrived in, or None
            when it arrived as mdbook's native ``[context, book]`` pair.
    """

    context: dict[str, Any]
    book: dict[str, Any]
    envelope: dict[str, Any] | None = field(default=None)

    @property
    def mdbook_version(self) -> str:
        return self.context["mdbook_version"]

    @property
    def sections(self) -> list[Any]:
        return self.book["sections"]

    def with_sections(self, sections: list[Any]) -> Request:
        """Return a copy of this request whose book holds ``sections``."""
        return replace(self, book={**self.book, "sections": sections})


def chapter_of(item: Any) -> dict[str, Any] | None:
    """Return the chapter body of a book item, or None for separators and part titles."""
    if isinstance(item, dict):
        chapter = item.get("Chapter")
        if isinstance(chapter, dict):
            return chapter
    return None


def chapter_source_path(chapter: dict[str, Any]) -> str | None:
    """Return the file a chapter was loaded from.

    ``source_path`` wins when the chapter carries one at all; older payloads
    only have ``path``. Draft chapters have neither.
    """
    if "source_path" in chapter:
        value = chapter["source_path"]
    else:
        value = chapter.get("path")
    return value if isinstance(value, str) else None
