from .films import Film, FilmAggregate, Genre, Schauspieler, Titel

__all__ = ["Film", "FilmAggregate", "Genre", "Schauspieler", "Titel"]
