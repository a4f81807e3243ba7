from dataclasses import dataclass
from datetime import date, datetime
from enum import Enum
from typing import List, Optional

from sqlmodel import SQLModel, Field


class Genre(str, Enum):
    ACTION = "ACTION"
    HORROR = "HORROR"
    ROMANCE = "ROMANCE"


class Film(SQLModel, table=True):
    id: Optional[int] = Field(default=None, primary_key=True)
    version: int = Field(default=0)
    rating: int
    filmstart: Optional[date] = None
    dauer: Optional[int] = None
    sprache: Optional[str] = Field(default=None, max_length=40)
    direktor: Optional[str] = Field(default=None, max_length=40)
    # comma separated genre tags, e.g. "ACTION,HORROR"
    genres: Optional[str] = Field(default=None, max_length=64)
    erzeugt: Optional[datetime] = None
    aktualisiert: Optional[datetime] = None


class Titel(SQLModel, table=True):
    id: Optional[int] = Field(default=None, primary_key=True)
    titel: str = Field(max_length=40, index=True, unique=True)
    originaltitel: Optional[str] = Field(default=None, max_length=40)
    serienname: Optional[str] = Field(default=None, max_length=40)
    film_id: Optional[int] = Field(default=None, foreign_key="film.id", unique=True)


class Schauspieler(SQLModel, table=True):
    id: Optional[int] = Field(default=None, primary_key=True)
    vorname: str = Field(max_length=40)
    nachname: str = Field(max_length=40)
    geschlecht: Optional[str] = Field(default=None, max_length=20)
    email: Optional[str] = Field(default=None, max_length=40)
    telefonnummer: Optional[str] = Field(default=None, max_length=40)
    film_id: Optional[int] = Field(default=None, foreign_key="film.id", index=True)


# ids and integer criteria must fit a signed 64 bit column
MIN_INT = -(2**63)
MAX_INT = 2**63 - 1

# Film columns a client may replace on update
MUTABLE_FIELDS = ("rating", "filmstart", "dauer", "sprache", "direktor", "genres")

# Film columns usable as equality criteria in a search
SEARCHABLE_FIELDS = frozenset(
    {"id", "version", "rating", "filmstart", "dauer", "sprache", "direktor", "genres"}
)


def join_genres(genres: Optional[List[str]]) -> Optional[str]:
    if not genres:
        return None
    return ",".join(Genre(g).value for g in genres)


def split_genres(genres: Optional[str]) -> List[str]:
    if not genres:
        return []
    return genres.split(",")


@dataclass
class FilmAggregate:
    """A film together with the records it owns.

    schauspielers is None when the actors were not loaded.
    """

    film: Film
    titel: Titel
    schauspielers: Optional[List[Schauspieler]] = None
