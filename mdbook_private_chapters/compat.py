"""Version compatibility check between mdbook and this preprocessor.

A mismatch is only reported: minor version skew between mdbook and its
preprocessors should never block a book build.
"""

from __future__ import annotations

import logging

from semantic_version import SimpleSpec, Version

from .errors import VersionMismatchWarning, VersionParseError
from .schema import MDBOOK_VERSION_REQ, NAME

logger = logging.getLogger(__name__)


def parse_version(text: str) -> Version:
    """Parse a semantic version such as ``0.4.40``.

    Raises:
        VersionParseError: If ``text`` is not a valid semantic version.
    """
    try:
        return Version(text.strip())
    except ValueError as e:
        raise VersionParseError(f"Invalid version {text!r}: {e}") from e


def _normalize_comparator(comparator: str) -> str:
    # Cargo: "1.2.3" means "^1.2.3" and "=1.2.3" means an exact match
    if comparator[:1].isdigit():
        return "^" + comparator
    if comparator.startswith("=") and not comparator.startswith("=="):
        return "=" + comparator
    return comparator


def parse_requirement(text: str) -> SimpleSpec:
    """Parse a Cargo-style version requirement such as ``0.4.40`` or ``>=0.4, <0.5``.

    Raises:
        VersionParseError: If ``text`` is not a valid requirement.
    """
    comparators = [c.strip() for c in text.split(",")]
    if not all(comparators):
        raise VersionParseError(f"Invalid version requirement {text!r}")
    try:
        return SimpleSpec(",".join(_normalize_comparator(c) for c in comparators))
    except ValueError as e:
        raise VersionParseError(f"Invalid version requirement {text!r}: {e}") from e


def check_compatibility(mdbook_version: str, requirement: str = MDBOOK_VERSION_REQ) -> bool:
    """Warn if ``mdbook_version`` does not satisfy ``requirement``.

    Returns:
        True if the version satisfies the requirement.

    Raises:
        VersionParseError: If either string cannot be parsed.
    """
    version = parse_version(mdbook_version)
    spec = parse_requirement(requirement)

    if spec.match(version):
        logger.debug("mdbook %s satisfies %s", version, requirement)
        return True

    logger.warning("%s", VersionMismatchWarning(NAME, requirement, mdbook_version))
    return False
