"""Tests for mdbook_private_chapters.compat module."""

from __future__ import annotations

import logging

import pytest

from mdbook_private_chapters.compat import (
    check_compatibility,
    parse_requirement,
    parse_version,
)
from mdbook_private_chapters.errors import VersionMismatchWarning, VersionParseError


class TestParseVersion:
    """Tests for parse_version()."""

    def test_valid(self):
        """A full semantic version parses into its parts."""
        version = parse_version("0.4.40")
        assert (version.major, version.minor, version.patch) == (0, 4, 40)

    def test_prerelease(self):
        """Pre-release identifiers are kept."""
        assert parse_version("0.5.0-alpha.1").prerelease == ("alpha", "1")

    @pytest.mark.parametrize("text", ["", "latest", "0.4", "0.4.x", "v0.4.40"])
    def test_invalid(self, text: str):
        """Partial, prefixed or empty versions are rejected."""
        with pytest.raises(VersionParseError):
            parse_version(text)


class TestParseRequirement:
    """Tests for parse_requirement() and its Cargo semantics."""

    def test_bare_version_is_caret(self):
        """A bare version behaves like a caret requirement."""
        spec = parse_requirement("0.4.40")
        assert spec.match(parse_version("0.4.40"))
        assert spec.match(parse_version("0.4.52"))
        assert not spec.match(parse_version("0.4.39"))
        assert not spec.match(parse_version("0.5.0"))

    def test_exact(self):
        """A single "=" means an exact match."""
        spec = parse_requirement("=0.4.40")
        assert spec.match(parse_version("0.4.40"))
        assert not spec.match(parse_version("0.4.41"))

    def test_range(self):
        """Comma-separated comparators must all hold."""
        spec = parse_requirement(">=0.4.0, <0.6.0")
        assert spec.match(parse_version("0.5.3"))
        assert not spec.match(parse_version("0.6.0"))

    @pytest.mark.parametrize("text", ["", "not a version", "0.4.40,", ">>0.4"])
    def test_invalid(self, text: str):
        """Malformed requirements raise VersionParseError."""
        with pytest.raises(VersionParseError):
            parse_requirement(text)


class TestCheckCompatibility:
    """Tests for check_compatibility()."""

    def test_matching_version(self, caplog: pytest.LogCaptureFixture):
        """A version inside the range logs nothing."""
        with caplog.at_level(logging.WARNING, logger="mdbook_private_chapters.compat"):
            assert check_compatibility("0.4.42", "0.4.40") is True

        assert caplog.records == []

    def test_mismatch_warns_once(self, caplog: pytest.LogCaptureFixture):
        """A version outside the range logs exactly one warning."""
        with caplog.at_level(logging.WARNING, logger="mdbook_private_chapters.compat"):
            assert check_compatibility("0.5.0", "0.4.40") is False

        assert len(caplog.records) == 1
        message = caplog.records[0].getMessage()
        assert "private-chapters" in message
        assert "0.4.40" in message
        assert "0.5.0" in message

    def test_default_requirement(self):
        """The built-in requirement accepts the targeted release."""
        assert check_compatibility("0.4.40") is True

    def test_invalid_version(self):
        """An unparseable mdbook version is fatal."""
        with pytest.raises(VersionParseError):
            check_compatibility("nightly", "0.4.40")

    def test_invalid_requirement(self):
        """An unparseable requirement is fatal."""
        with pytest.raises(VersionParseError):
            check_compatibility("0.4.40", "whatever")


class TestVersionMismatchWarning:
    """Tests for the VersionMismatchWarning message."""

    def test_message(self):
        """The message names the plugin, the requirement and the caller version."""
        warning = VersionMismatchWarning("private-chapters", "0.4.40", "0.3.7")
        assert str(warning) == (
            "The private-chapters plugin was built against version 0.4.40 of mdbook, "
            "but we're being called from version 0.3.7"
        )

    def test_is_user_warning(self):
        """The mismatch is a warning category, not an error."""
        assert issubclass(VersionMismatchWarning, UserWarning)
