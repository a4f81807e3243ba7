"""
Shared fixtures: an in-memory SQLite store and a recording notifier.
"""

from datetime import date
from typing import List, Optional, Tuple

import pytest
from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel, create_engine

from films.database.sql_store import SqlFilmStore
from films.models.films import Film, FilmAggregate, Schauspieler, Titel, join_genres
from films.service.mail import Notifier


class RecordingNotifier(Notifier):
    """Remembers every message instead of sending it."""

    def __init__(self, error: Optional[Exception] = None):
        self.sent: List[Tuple[str, str]] = []
        self.error = error

    async def send(self, subject: str, body: str) -> None:
        if self.error is not None:
            raise self.error
        self.sent.append((subject, body))


def make_film(
    titel: str,
    direktor: str = "James Cameron",
    genres: Optional[List[str]] = None,
    rating: int = 4,
    actors: int = 0,
) -> FilmAggregate:
    return FilmAggregate(
        film=Film(
            rating=rating,
            filmstart=date(2022, 1, 31),
            dauer=120,
            sprache="Englisch",
            direktor=direktor,
            genres=join_genres(genres),
        ),
        titel=Titel(titel=titel, originaltitel=f"Original {titel}", serienname=None),
        schauspielers=[
            Schauspieler(vorname=f"Vorname{i}", nachname=f"Nachname{i}", geschlecht="divers")
            for i in range(actors)
        ],
    )


@pytest.fixture
def engine():
    """Fresh in-memory database with all tables."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    SQLModel.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def store(engine):
    return SqlFilmStore(engine)


@pytest.fixture
def notifier():
    return RecordingNotifier()


@pytest.fixture
def catalog(store):
    """A handful of stored films, keyed by title."""
    films = [
        make_film("The Ring 3", direktor="Tom Alder", genres=["HORROR"], actors=2),
        make_film("Boring Story", direktor="Tom Alder", genres=["ACTION", "ROMANCE"]),
        make_film("Speed", direktor="Tom Alder", genres=["ACTION"], rating=5),
        make_film("Heat", direktor="Michael Mann", genres=["ACTION"]),
        make_film("Notting Hill", direktor="Roger Michell", genres=["ROMANCE"], rating=3),
    ]
    return {aggregate.titel.titel: store.save(aggregate) for aggregate in films}
