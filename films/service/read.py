from typing import List, Mapping, Optional
import logging

from films.database.query import GENRE_FLAGS, TITLE_KEY
from films.database.store import FilmStore
from films.errors import NotFoundError
from films.models.films import SEARCHABLE_FIELDS, FilmAggregate

logger = logging.getLogger(__name__)

VALID_KEYS = SEARCHABLE_FIELDS | set(GENRE_FLAGS) | {TITLE_KEY}


class FilmReadService:
    """Reads films by id or by search criteria."""

    def __init__(self, store: FilmStore, logger: logging.Logger = logger):
        self.store = store
        self.logger = logger

    async def find_by_id(self, film_id: int, with_actors: bool = False) -> FilmAggregate:
        self.logger.debug(f"find_by_id: id={film_id}, with_actors={with_actors}")
        try:
            return self.store.find_by_id(film_id, with_actors=with_actors)
        except NotFoundError:
            self.logger.warning(f"A non-existent movie ID was requested {film_id}")
            raise

    async def find(self, criteria: Optional[Mapping[str, str]] = None) -> List[FilmAggregate]:
        """Search films.

        Without criteria every film is returned. Unknown criteria keys and
        searches without a match raise NotFoundError.
        """
        if not criteria:
            films = self.store.query({})
            self.logger.info(f"A list of films was requested, {len(films)} entries were found")
            return films

        invalid = sorted(key for key in criteria if key not in VALID_KEYS)
        if invalid:
            self.logger.debug(f"find: invalid search criteria {invalid}")
            raise NotFoundError("Ungueltige Suchkriterien", keys=invalid)

        films = self.store.query(criteria)
        if not films:
            raise NotFoundError(f"Keine Filme gefunden: {dict(criteria)}", criteria=dict(criteria))
        self.logger.info(f"Films searched with {dict(criteria)}, {len(films)} entries were found")
        return films
