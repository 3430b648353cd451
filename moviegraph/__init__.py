"""MovieGraph: typed Cypher queries against the Neo4j movies dataset."""

__version__ = "0.1.0"
