from datetime import date
from typing import Any, Callable, Dict, Mapping
import logging

from sqlmodel import select, col

from films.models.films import MAX_INT, MIN_INT, Film, Genre, Titel
from films.errors import NotFoundError

logger = logging.getLogger(__name__)

# criteria keys that switch on a "genres contains ..." filter
GENRE_FLAGS: Dict[str, Genre] = {
    "action": Genre.ACTION,
    "horror": Genre.HORROR,
    "romance": Genre.ROMANCE,
}

TITLE_KEY = "titel"


def _to_int(value: str) -> int:
    number = int(value)
    if not MIN_INT <= number <= MAX_INT:
        raise ValueError(f"{value} is out of range")
    return number


def _escape_like(value: str) -> str:
    return value.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


# criteria values arrive as strings
COERCE: Dict[str, Callable[[str], Any]] = {
    "id": _to_int,
    "version": _to_int,
    "rating": _to_int,
    "dauer": _to_int,
    "filmstart": date.fromisoformat,
}


class QueryBuilder:
    """Turns search criteria into SELECT statements over films and titles."""

    def __init__(self, logger: logging.Logger = logger):
        self.logger = logger

    def build_id(self, film_id: int):
        return (
            select(Film, Titel)
            .join(Titel, col(Titel.film_id) == col(Film.id))
            .where(col(Film.id) == film_id)
        )

    def build(self, criteria: Mapping[str, str]):
        """All filters are AND-ed; no criteria selects every film."""
        statement = select(Film, Titel).join(Titel, col(Titel.film_id) == col(Film.id))

        titel = criteria.get(TITLE_KEY)
        if titel is not None:
            pattern = f"%{_escape_like(titel)}%"
            statement = statement.where(col(Titel.titel).ilike(pattern, escape="\\"))

        for key, genre in GENRE_FLAGS.items():
            if criteria.get(key) == "true":
                statement = statement.where(col(Film.genres).like(f"%{genre.value}%"))

        for key, value in criteria.items():
            if key == TITLE_KEY or key in GENRE_FLAGS:
                continue
            statement = statement.where(col(getattr(Film, key)) == self._coerce(key, value))

        statement = statement.order_by(col(Film.id))
        self.logger.debug(f"build: criteria={dict(criteria)}, sql={statement}")
        return statement

    @staticmethod
    def _coerce(key: str, value: str) -> Any:
        convert = COERCE.get(key)
        if convert is None:
            return value
        try:
            return convert(value)
        except (TypeError, ValueError):
            raise NotFoundError("Ungueltige Suchkriterien", **{key: value}) from None
