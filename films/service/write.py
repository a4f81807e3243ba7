"""
Write operations on films.

Create checks that the title is still free, update runs the optimistic
concurrency check on the client's version token, delete removes the film
with everything it owns. Persistence and atomicity are left to the store.
"""

from typing import Optional
import logging

from films.database.store import FilmStore
from films.errors import DeliveryError, IdMissingError, NotFoundError, TitleExistsError
from films.models.films import MUTABLE_FIELDS, Film, FilmAggregate
from films.service.mail import Notifier
from films.service.version import check_version, parse_version

logger = logging.getLogger(__name__)


class FilmWriteService:

    def __init__(self, store: FilmStore, notifier: Notifier, logger: logging.Logger = logger):
        self.store = store
        self.notifier = notifier
        self.logger = logger

    async def create(self, aggregate: FilmAggregate) -> int:
        """Store a new film with its title and actors and return its id.

        Raises:
            TitleExistsError: If a film with the same title exists
        """
        titel = aggregate.titel.titel
        try:
            self.store.find_by_title(titel)
        except NotFoundError:
            pass
        else:
            self.logger.warning(f"Attempt to add a movie with an existing title: {titel}")
            raise TitleExistsError(titel)

        saved = self.store.save(aggregate)
        film_id = saved.film.id
        self.logger.info(f"A new movie has been added: ID {film_id}, {titel}")

        await self._send_mail(film_id, titel)
        return film_id

    async def _send_mail(self, film_id: int, titel: str) -> None:
        subject = f"Neuer Film {film_id}"
        body = f"Der Film mit dem Titel <strong>{titel}</strong> ist angelegt"
        try:
            await self.notifier.send(subject, body)
        except DeliveryError as e:
            # the film is already committed
            self.logger.warning(f"Notification for movie ID {film_id} failed: {e.message}")

    async def update(self, film_id: Optional[int], film: Film, version: Optional[str]) -> int:
        """Replace the mutable fields of a film and return the new version.

        Args:
            film_id: Id of the film to update
            film: Carrier of the new field values
            version: Version token the client read, e.g. '"3"'

        Raises:
            IdMissingError: If no id was given
            InvalidVersionError: If the token is malformed
            NotFoundError: If no film has this id
            VersionOutdatedError: If the token is older than the stored version
        """
        if film_id is None:
            raise IdMissingError()
        claimed = parse_version(version)

        try:
            stored = self.store.find_by_id(film_id)
        except NotFoundError:
            self.logger.warning(f"Attempt to update a non-existent movie ID {film_id}")
            raise

        check_version(claimed, stored.film.version)

        for name in MUTABLE_FIELDS:
            setattr(stored.film, name, getattr(film, name))
        updated = self.store.save(stored)

        new_version = updated.film.version
        self.logger.info(f"Updated movie ID {film_id} to version {new_version}")
        return new_version

    async def delete(self, film_id: int) -> bool:
        try:
            aggregate = self.store.find_by_id(film_id, with_actors=True)
        except NotFoundError:
            self.logger.warning(f"Attempt to delete a non-existent movie ID {film_id}")
            return False

        deleted = self.store.delete(film_id)
        self.logger.info(
            f"Deleted movie ID {film_id}: {aggregate.titel.titel} "
            f"with {len(aggregate.schauspielers or [])} actor(s)"
        )
        return deleted
