"""Queries against the Neo4j movies dataset."""

from typing import Dict, List

from ..models import (
    Movie,
    Person,
    ActorMovie,
    ActorFilmography,
    JointFilmography,
)
from ..utils.logger import get_logger
from .neo4j_client import Neo4jClient
from .returns import node_as, collect_as, count_of


logger = get_logger(__name__)

DEMO_MOVIE = Movie(
    title="Really New",
    released=2020,
    tagline="Should be interesting...",
)


class MovieGraph:
    """Read and update movies, people and ACTED_IN relationships."""

    def __init__(self, neo4j_client: Neo4jClient):
        """Initialize with a connected Neo4j client."""
        self.client = neo4j_client

    # Reads

    def sample_movies(self, limit: int = 10) -> List[Movie]:
        """Return up to ``limit`` arbitrary movies."""
        return (
            self.client.cypher.match("(m:Movie)")
            .return_(m=node_as("m", Movie))
            .limit(limit)
            .results()
        )

    def sample_persons(self, limit: int = 10) -> List[Person]:
        """Return up to ``limit`` arbitrary people."""
        return (
            self.client.cypher.match("(p:Person)")
            .return_(p=node_as("p", Person))
            .limit(limit)
            .results()
        )

    def actor_movies(self, actor_name: str) -> List[ActorMovie]:
        """One row per movie the actor acted in, without aggregation."""
        return (
            self.client.cypher.match(
                "(actor:Person {name: $actorName})-[:ACTED_IN]->(actorMovies)"
            )
            .with_param("actorName", actor_name)
            .return_(
                row_type=ActorMovie,
                actor=node_as("actor", Person),
                movie=node_as("actorMovies", Movie),
            )
            .results()
        )

    def actor_filmography(self, actor_name: str) -> List[ActorFilmography]:
        """The actor with all their movies collected into one row."""
        return (
            self.client.cypher.match(
                "(actor:Person {name: $actorName})-[:ACTED_IN]->(actorMovies)"
            )
            .with_param("actorName", actor_name)
            .return_(
                row_type=ActorFilmography,
                actor=node_as("actor", Person),
                movies=collect_as("actorMovies", Movie),
            )
            .results()
        )

    def joint_movies(
        self, actor_name: str, co_actor_name: str
    ) -> List[JointFilmography]:
        """Movies both actors acted in, collected and counted."""
        return (
            self.client.cypher.match(
                "(actor:Person {name: $actorName})-[:ACTED_IN]->(jointMovies)"
                "<-[:ACTED_IN]-(actor2:Person {name: $actorName2})"
            )
            .with_param("actorName", actor_name)
            .with_param("actorName2", co_actor_name)
            .return_(
                row_type=JointFilmography,
                actor=node_as("actor", Person),
                co_actor=node_as("actor2", Person),
                movies=collect_as("jointMovies", Movie),
                movie_count=count_of("jointMovies"),
            )
            .results()
        )

    # Updates

    def create_movie(self, movie: Movie) -> Dict[str, int]:
        """Create a movie node from the record's properties."""
        logger.info(f"Creating movie '{movie.title}'")
        return (
            self.client.cypher.create("(nm:Movie $newMovie)")
            .with_param("newMovie", movie)
            .execute_without_results()
        )

    def add_actor(self, actor_name: str, movie_title: str) -> Dict[str, int]:
        """Create an ACTED_IN relationship from the actor to the movie."""
        logger.info(f"Linking '{actor_name}' -[:ACTED_IN]-> '{movie_title}'")
        return (
            self.client.cypher.match(
                "(tom:Person {name: $actorName})",
                "(nm:Movie {title: $movieTitle})",
            )
            .with_param("actorName", actor_name)
            .with_param("movieTitle", movie_title)
            .create("(tom)-[:ACTED_IN]->(nm)")
            .execute_without_results()
        )

    def remove_actor(
        self, actor_name: str, movie_title: str
    ) -> Dict[str, int]:
        """Delete the actor's ACTED_IN relationship to the movie."""
        logger.info(f"Unlinking '{actor_name}' from '{movie_title}'")
        return (
            self.client.cypher.match(
                "(tom:Person {name: $actorName})-[r:ACTED_IN]->"
                "(nm:Movie {title: $movieTitle})"
            )
            .with_param("actorName", actor_name)
            .with_param("movieTitle", movie_title)
            .delete("r")
            .execute_without_results()
        )

    def delete_movie(self, movie_title: str) -> Dict[str, int]:
        """Delete a movie node; fails while it still has relationships."""
        logger.info(f"Deleting movie '{movie_title}'")
        return (
            self.client.cypher.match("(nm:Movie {title: $movieTitle})")
            .with_param("movieTitle", movie_title)
            .delete("nm")
            .execute_without_results()
        )

    def cleanup_movie(
        self, movie_title: str = DEMO_MOVIE.title
    ) -> Dict[str, int]:
        """Delete a movie along with any relationships left on it."""
        logger.info(f"Cleaning up movie '{movie_title}'")
        return (
            self.client.cypher.match("(nm:Movie {title: $movieTitle})")
            .with_param("movieTitle", movie_title)
            .detach_delete("nm")
            .execute_without_results()
        )
