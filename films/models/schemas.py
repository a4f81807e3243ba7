from datetime import date, datetime
from typing import List, Optional

from pydantic import field_validator
from sqlmodel import SQLModel, Field

from .films import Film, FilmAggregate, Genre, Schauspieler, Titel, join_genres, split_genres

MAX_RATING = 5
MAX_DAUER = 2**31 - 1


class TitelCreate(SQLModel):
    titel: str = Field(min_length=1, max_length=40)
    originaltitel: Optional[str] = Field(default=None, max_length=40)
    serienname: Optional[str] = Field(default=None, max_length=40)

    @field_validator("titel")
    @classmethod
    def starts_with_letter_or_digit(cls, value: str) -> str:
        if not value[0].isalnum():
            raise ValueError("must start with a letter or a digit")
        return value


class SchauspielerCreate(SQLModel):
    vorname: str = Field(min_length=1, max_length=40)
    nachname: str = Field(min_length=1, max_length=40)
    geschlecht: Optional[str] = Field(default=None, max_length=20)
    email: Optional[str] = Field(default=None, max_length=40)
    telefonnummer: Optional[str] = Field(default=None, max_length=40)


class FilmUpdate(SQLModel):
    """Scalar fields of a film, as sent for an update."""

    rating: int = Field(ge=0, le=MAX_RATING)
    filmstart: Optional[date] = None
    dauer: Optional[int] = Field(default=None, gt=0, le=MAX_DAUER)
    sprache: Optional[str] = Field(default=None, max_length=40)
    direktor: Optional[str] = Field(default=None, max_length=40)
    genres: List[Genre] = Field(default_factory=list)

    @field_validator("genres")
    @classmethod
    def no_duplicates(cls, value: List[Genre]) -> List[Genre]:
        if len(set(value)) != len(value):
            raise ValueError("must not contain duplicates")
        return value


class FilmCreate(FilmUpdate):
    """A new film with its title and actors."""

    titel: TitelCreate
    schauspielers: List[SchauspielerCreate] = Field(default_factory=list)


class TitelRead(SQLModel):
    titel: str
    originaltitel: Optional[str] = None
    serienname: Optional[str] = None


class SchauspielerRead(SQLModel):
    vorname: str
    nachname: str
    geschlecht: Optional[str] = None
    email: Optional[str] = None
    telefonnummer: Optional[str] = None


class FilmRead(SQLModel):
    id: int
    version: int
    rating: int
    filmstart: Optional[date] = None
    dauer: Optional[int] = None
    sprache: Optional[str] = None
    direktor: Optional[str] = None
    genres: List[str] = []
    titel: TitelRead
    schauspielers: Optional[List[SchauspielerRead]] = None
    erzeugt: Optional[datetime] = None
    aktualisiert: Optional[datetime] = None


class CreatePayload(SQLModel):
    id: int


def to_film_read(aggregate: FilmAggregate) -> FilmRead:
    film = aggregate.film
    schauspielers = None
    if aggregate.schauspielers is not None:
        schauspielers = [
            SchauspielerRead.model_validate(s, from_attributes=True)
            for s in aggregate.schauspielers
        ]
    return FilmRead(
        id=film.id,
        version=film.version,
        rating=film.rating,
        filmstart=film.filmstart,
        dauer=film.dauer,
        sprache=film.sprache,
        direktor=film.direktor,
        genres=split_genres(film.genres),
        titel=TitelRead.model_validate(aggregate.titel, from_attributes=True),
        schauspielers=schauspielers,
        erzeugt=film.erzeugt,
        aktualisiert=film.aktualisiert,
    )


def film_from_update(data: FilmUpdate) -> Film:
    """Build an unsaved Film from validated scalar fields."""
    return Film(
        rating=data.rating,
        filmstart=data.filmstart,
        dauer=data.dauer,
        sprache=data.sprache,
        direktor=data.direktor,
        genres=join_genres(data.genres),
    )


def aggregate_from_create(data: FilmCreate) -> FilmAggregate:
    """Build an unsaved film with its title and actors."""
    return FilmAggregate(
        film=film_from_update(data),
        titel=Titel(**data.titel.model_dump()),
        schauspielers=[Schauspieler(**s.model_dump()) for s in data.schauspielers],
    )
