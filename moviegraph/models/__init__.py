"""Records mapped to and from nodes of the movies graph."""

from .movie_models import (
    Movie,
    Person,
    ActorMovie,
    ActorFilmography,
    JointFilmography,
)

__all__ = [
    "Movie",
    "Person",
    "ActorMovie",
    "ActorFilmography",
    "JointFilmography",
]
