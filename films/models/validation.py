"""
Validation of incoming film data.

The constraints live on the FilmCreate/FilmUpdate models. This module turns
pydantic errors into (field path, message) pairs, e.g.
("titel.titel", "Value error, must start with a letter or a digit"), so a
client sees every violation at once.
"""

from typing import Any, Iterable, List, Mapping, Tuple

from pydantic import ValidationError

from .schemas import FilmCreate, FilmUpdate

Errors = List[Tuple[str, str]]

# leading loc entries FastAPI adds for request errors
REQUEST_LOCATIONS = {"body", "path", "query", "header"}


def _path(loc: Iterable[Any]) -> str:
    path = ""
    for part in loc:
        if isinstance(part, int):
            path += f"[{part}]"
        else:
            path += f".{part}" if path else str(part)
    return path


def error_pairs(errors: Iterable[Mapping[str, Any]]) -> Errors:
    """Convert pydantic error dicts into (path, message) pairs."""
    pairs: Errors = []
    for error in errors:
        loc = list(error.get("loc", ()))
        if loc and loc[0] in REQUEST_LOCATIONS:
            loc = loc[1:]
        pairs.append((_path(loc), error["msg"]))
    return pairs


def validate_film_update(payload: Mapping[str, Any]) -> Errors:
    """Validate the scalar fields of a film."""
    try:
        FilmUpdate.model_validate(payload)
    except ValidationError as e:
        return error_pairs(e.errors())
    return []


def validate_film(payload: Mapping[str, Any]) -> Errors:
    """Validate a complete new film including its title and actors."""
    try:
        FilmCreate.model_validate(payload)
    except ValidationError as e:
        return error_pairs(e.errors())
    return []
