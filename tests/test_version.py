"""
Unit tests for version tokens and the concurrency check.
"""

import pytest

from films.errors import InvalidVersionError, VersionOutdatedError
from films.service.version import check_version, format_version, parse_version


class TestParseVersion:
    """Tests for parse_version and format_version."""

    @pytest.mark.parametrize("token", ['"0"', '"1"', '"42"', '"1000"'])
    def test_round_trip(self, token):
        """Valid tokens survive parse and format unchanged."""
        assert format_version(parse_version(token)) == token

    def test_parse_value(self):
        assert parse_version('"3"') == 3

    @pytest.mark.parametrize(
        "token", [None, "", '"-1"', '"abc"', "3", '"3', '3"', '""', '"03"', '"3"\n', 3]
    )
    def test_invalid_tokens(self, token):
        """Missing, unquoted, negative or non-numeric tokens are rejected."""
        with pytest.raises(InvalidVersionError):
            parse_version(token)

    def test_format(self):
        assert format_version(7) == '"7"'


class TestCheckVersion:
    """Tests for check_version."""

    @pytest.mark.parametrize("claimed,stored", [(0, 0), (3, 3), (4, 3), (10, 0)])
    def test_current_or_newer_is_accepted(self, claimed, stored):
        check_version(claimed, stored)

    @pytest.mark.parametrize("claimed,stored", [(0, 1), (2, 3), (0, 10)])
    def test_older_is_rejected(self, claimed, stored):
        with pytest.raises(VersionOutdatedError) as exc_info:
            check_version(claimed, stored)
        assert exc_info.value.claimed == claimed
        assert exc_info.value.stored == stored
