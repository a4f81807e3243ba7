"""
Version tokens for optimistic concurrency control.

The film version travels as an entity-tag: a non-negative integer in double
quotes, e.g. "3". Clients echo the tag they read in If-Match; the server
answers with the tag of the new version in ETag.
"""

import re
from typing import Optional

from films.errors import InvalidVersionError, VersionOutdatedError

# canonical form only, so that format_version(parse_version(s)) == s
VERSION_PATTERN = re.compile(r'"(0|[1-9][0-9]*)"')


def parse_version(raw: Optional[str]) -> int:
    if not raw or not isinstance(raw, str):
        raise InvalidVersionError(raw)
    match = VERSION_PATTERN.fullmatch(raw)
    if match is None:
        raise InvalidVersionError(raw)
    return int(match.group(1))


def format_version(version: int) -> str:
    return f'"{version}"'


def check_version(claimed: int, stored: int) -> None:
    """Reject an update based on a version older than the stored one.

    A claimed version ahead of the stored one is accepted.
    """
    if claimed < stored:
        raise VersionOutdatedError(claimed, stored)
