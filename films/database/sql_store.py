from datetime import datetime, timezone
from typing import List, Mapping, Optional
import logging

from sqlalchemy import delete, update
from sqlalchemy.engine import Engine
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlmodel import Session, select, col

from films.database.query import QueryBuilder
from films.database.store import FilmStore
from films.errors import NotFoundError, TitleExistsError, VersionOutdatedError
from films.models.films import (
    MAX_INT,
    MIN_INT,
    MUTABLE_FIELDS,
    Film,
    FilmAggregate,
    Schauspieler,
    Titel,
)

logger = logging.getLogger(__name__)


def _now() -> datetime:
    return datetime.now(timezone.utc)


class SqlFilmStore(FilmStore):
    """FilmStore on top of SQLModel sessions.

    Each call opens its own session; writes commit once at the end and roll
    back on any SQLAlchemy error.
    """

    def __init__(
        self,
        engine: Engine,
        query_builder: Optional[QueryBuilder] = None,
        logger: logging.Logger = logger,
    ):
        self.engine = engine
        self.query_builder = query_builder or QueryBuilder()
        self.logger = logger

    def _session(self) -> Session:
        return Session(self.engine, expire_on_commit=False)

    def find_by_id(self, film_id: int, with_actors: bool = False) -> FilmAggregate:
        if not MIN_INT <= film_id <= MAX_INT:
            raise NotFoundError(f"Es gibt keinen Film mit der ID {film_id}.", id=film_id)
        with self._session() as session:
            row = session.exec(self.query_builder.build_id(film_id)).first()
            if row is None:
                raise NotFoundError(f"Es gibt keinen Film mit der ID {film_id}.", id=film_id)
            film, titel = row
            schauspielers = None
            if with_actors:
                schauspielers = list(
                    session.exec(
                        select(Schauspieler)
                        .where(col(Schauspieler.film_id) == film_id)
                        .order_by(col(Schauspieler.id))
                    ).all()
                )
        return FilmAggregate(film=film, titel=titel, schauspielers=schauspielers)

    def find_by_title(self, titel: str) -> FilmAggregate:
        with self._session() as session:
            row = session.exec(
                select(Film, Titel)
                .join(Titel, col(Titel.film_id) == col(Film.id))
                .where(col(Titel.titel) == titel)
            ).first()
        if row is None:
            raise NotFoundError(f"Es gibt keinen Film mit dem Titel {titel}.", titel=titel)
        film, found = row
        return FilmAggregate(film=film, titel=found)

    def query(self, criteria: Mapping[str, str]) -> List[FilmAggregate]:
        statement = self.query_builder.build(criteria)
        with self._session() as session:
            rows = session.exec(statement).all()
        return [FilmAggregate(film=film, titel=titel) for film, titel in rows]

    def save(self, aggregate: FilmAggregate) -> FilmAggregate:
        is_new = aggregate.film.id is None
        with self._session() as session:
            try:
                if is_new:
                    saved = self._insert(session, aggregate)
                else:
                    saved = self._update(session, aggregate)
                session.commit()
            except IntegrityError as e:
                session.rollback()
                if not is_new:
                    self.logger.error(f"Error when saving a film: {str(e)}")
                    raise
                # a concurrent create took the title after the caller's check
                aggregate.film.id = None
                titel = aggregate.titel.titel
                self.logger.warning(f"Title already stored when adding a movie: {titel}")
                raise TitleExistsError(titel) from e
            except SQLAlchemyError as e:
                session.rollback()
                self.logger.error(f"Error when saving a film: {str(e)}")
                raise
        return saved

    def _insert(self, session: Session, aggregate: FilmAggregate) -> FilmAggregate:
        film = aggregate.film
        now = _now()
        film.version = 0
        film.erzeugt = now
        film.aktualisiert = now
        session.add(film)
        session.flush()

        titel = aggregate.titel
        titel.film_id = film.id
        session.add(titel)
        schauspielers = list(aggregate.schauspielers or [])
        for schauspieler in schauspielers:
            schauspieler.film_id = film.id
            session.add(schauspieler)
        session.flush()
        return FilmAggregate(film=film, titel=titel, schauspielers=schauspielers)

    def _update(self, session: Session, aggregate: FilmAggregate) -> FilmAggregate:
        film = aggregate.film
        values = {name: getattr(film, name) for name in MUTABLE_FIELDS}
        # the version read by the caller must still be current
        result = session.execute(
            update(Film)
            .where(col(Film.id) == film.id, col(Film.version) == film.version)
            .values(**values, version=col(Film.version) + 1, aktualisiert=_now())
            .execution_options(synchronize_session=False)
        )
        if result.rowcount == 0:
            stored = session.get(Film, film.id)
            if stored is None:
                raise NotFoundError(f"Es gibt keinen Film mit der ID {film.id}.", id=film.id)
            raise VersionOutdatedError(film.version, stored.version)
        updated = session.get(Film, film.id, populate_existing=True)
        return FilmAggregate(
            film=updated, titel=aggregate.titel, schauspielers=aggregate.schauspielers
        )

    def delete(self, film_id: int) -> bool:
        if not MIN_INT <= film_id <= MAX_INT:
            return False
        with self._session() as session:
            try:
                session.execute(delete(Schauspieler).where(col(Schauspieler.film_id) == film_id))
                session.execute(delete(Titel).where(col(Titel.film_id) == film_id))
                result = session.execute(delete(Film).where(col(Film.id) == film_id))
                session.commit()
            except SQLAlchemyError as e:
                session.rollback()
                self.logger.error(f"Error when deleting film ID {film_id}: {str(e)}")
                raise
        return result.rowcount > 0
