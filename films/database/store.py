"""
Persistence gateway for film aggregates.

The service core talks to the database only through FilmStore. A film is
always read and written together with the title and actors it owns, and
every write is a single transaction.
"""

from abc import ABC, abstractmethod
from typing import List, Mapping

from films.models.films import FilmAggregate


class FilmStore(ABC):

    @abstractmethod
    def find_by_id(self, film_id: int, with_actors: bool = False) -> FilmAggregate:
        """Return the film with its title, raise NotFoundError if absent."""

    @abstractmethod
    def find_by_title(self, titel: str) -> FilmAggregate:
        """Return the film with exactly this title, raise NotFoundError if absent."""

    @abstractmethod
    def save(self, aggregate: FilmAggregate) -> FilmAggregate:
        """Insert a new film or update an existing one.

        On insert the store assigns id, version 0 and the timestamps and
        stores title and actors in the same transaction. On update it
        replaces the mutable fields and increments the version by one.
        Raises TitleExistsError when another film already holds the title.
        """

    @abstractmethod
    def delete(self, film_id: int) -> bool:
        """Delete a film with its title and actors. True if the film existed."""

    @abstractmethod
    def query(self, criteria: Mapping[str, str]) -> List[FilmAggregate]:
        """Return the films matching the criteria, without actors."""
