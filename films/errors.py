"""
Error types of the film service.

Every failure the service core can produce is a subclass of FilmError and
carries a machine readable code plus details. The REST layer maps the codes
to status codes; nothing in the core knows about HTTP.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional, Tuple


class FilmError(Exception):
    """Base exception for all film service errors.

    Attributes:
        message: Error message
        code: Error code for programmatic handling
        details: Additional error context
    """

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.code = code or "FILM_ERROR"
        self.details = details or {}


class NotFoundError(FilmError):
    """No film for an id, a title or a set of search criteria."""

    def __init__(self, message: str, **details: Any) -> None:
        super().__init__(message, code="NOT_FOUND", details=details)


class TitleExistsError(FilmError):
    """A film with the same title already exists."""

    def __init__(self, titel: str) -> None:
        super().__init__(
            f"Der Titel {titel} existiert bereits.",
            code="TITEL_EXISTS",
            details={"titel": titel},
        )
        self.titel = titel


class InvalidVersionError(FilmError):
    """The version token is missing or malformed."""

    def __init__(self, raw: Optional[str]) -> None:
        super().__init__(
            f"Die Versionsnummer {raw} ist ungueltig.",
            code="INVALID_VERSION",
            details={"version": raw},
        )
        self.raw = raw


class VersionOutdatedError(FilmError):
    """The client updated from a version older than the stored one."""

    def __init__(self, claimed: int, stored: Optional[int] = None) -> None:
        super().__init__(
            f"Die Versionsnummer {claimed} ist nicht aktuell.",
            code="VERSION_OUTDATED",
            details={"claimed": claimed, "stored": stored},
        )
        self.claimed = claimed
        self.stored = stored


class IdMissingError(FilmError):
    """An update was requested without a film id."""

    def __init__(self) -> None:
        super().__init__("Keine gueltige Film-ID.", code="ID_MISSING")


class DeliveryError(FilmError):
    """The notification could not be delivered."""

    def __init__(self, message: str, url: Optional[str] = None) -> None:
        super().__init__(message, code="DELIVERY_ERROR", details={"url": url})
        self.url = url


class FilmValidationError(FilmError):
    """Input data violates one or more constraints.

    Attributes:
        errors: (field path, message) pairs, one per violation
    """

    def __init__(self, errors: List[Tuple[str, str]]) -> None:
        super().__init__(
            f"{len(errors)} invalid field(s)",
            code="VALIDATION_ERROR",
            details={"fields": [path for path, _ in errors]},
        )
        self.errors = errors

    @property
    def messages(self) -> List[str]:
        return [f"{path} {message}" for path, message in self.errors]
