"""Graph database operations for Neo4j."""

from .neo4j_client import Neo4jClient
from .cypher_query import CypherQuery
from .returns import node_as, collect_as, count_of
from .movie_graph import MovieGraph, DEMO_MOVIE

__all__ = [
    "Neo4jClient",
    "CypherQuery",
    "node_as",
    "collect_as",
    "count_of",
    "MovieGraph",
    "DEMO_MOVIE",
]
