"""Movie graph node records and result rows."""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional


def _optional_int(value: Any) -> Optional[int]:
    if value is None:
        return None
    return int(value)


@dataclass
class Movie:
    """Movie node."""

    title: str
    released: Optional[int] = None
    tagline: Optional[str] = None

    @classmethod
    def from_properties(cls, props: Mapping[str, Any]) -> "Movie":
        """Build a movie from node properties."""
        return cls(
            title=props.get("title"),
            released=_optional_int(props.get("released")),
            tagline=props.get("tagline"),
        )

    def to_properties(self) -> Dict[str, Any]:
        """Node properties, without unset fields."""
        props = {
            "title": self.title,
            "released": self.released,
            "tagline": self.tagline,
        }
        return {k: v for k, v in props.items() if v is not None}


@dataclass
class Person:
    """Person node."""

    name: str
    born: Optional[int] = None

    @classmethod
    def from_properties(cls, props: Mapping[str, Any]) -> "Person":
        """Build a person from node properties."""
        return cls(name=props.get("name"), born=_optional_int(props.get("born")))

    def to_properties(self) -> Dict[str, Any]:
        """Node properties, without unset fields."""
        props = {"name": self.name, "born": self.born}
        return {k: v for k, v in props.items() if v is not None}


@dataclass
class ActorMovie:
    """One actor and one movie they acted in."""

    actor: Person
    movie: Movie


@dataclass
class ActorFilmography:
    """An actor with every movie they acted in."""

    actor: Person
    movies: List[Movie] = field(default_factory=list)


@dataclass
class JointFilmography:
    """Two actors and the movies they both acted in."""

    actor: Person
    co_actor: Person
    movies: List[Movie] = field(default_factory=list)
    movie_count: int = 0
