"""Neo4j database client."""

from typing import Dict, Any, List, Optional
from neo4j import GraphDatabase, Driver, Session
from ..config import Settings
from ..utils.logger import get_logger
from .cypher_query import CypherQuery

logger = get_logger(__name__)

COUNTER_NAMES = (
    "nodes_created",
    "nodes_deleted",
    "relationships_created",
    "relationships_deleted",
    "properties_set",
)


class Neo4jClient:
    """Neo4j database connection and query execution."""

    def __init__(self, settings: Settings):
        """Initialize Neo4j client with settings."""
        self.settings = settings
        self.driver: Optional[Driver] = None

    def connect(self) -> None:
        """Establish connection to Neo4j and check the server answers."""
        self.driver = GraphDatabase.driver(
            self.settings.neo4j_uri,
            auth=(self.settings.neo4j_user, self.settings.neo4j_password),
        )
        self.driver.verify_connectivity()
        logger.info(f"Connected to Neo4j at {self.settings.neo4j_uri}")

    def close(self) -> None:
        """Close Neo4j connection."""
        if self.driver:
            self.driver.close()
            self.driver = None

    def __enter__(self) -> "Neo4jClient":
        """Context manager entry."""
        self.connect()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        """Context manager exit."""
        self.close()

    @property
    def cypher(self) -> CypherQuery:
        """Start a new fluent query bound to this client."""
        return CypherQuery(self)

    def session(self) -> Session:
        """Open a session on the configured database."""
        if self.driver is None:
            raise RuntimeError("Neo4j client is not connected")
        if self.settings.neo4j_database:
            return self.driver.session(database=self.settings.neo4j_database)
        return self.driver.session()

    def run_read(
        self, query: str, parameters: Optional[Dict[str, Any]] = None
    ) -> List[Dict[str, Any]]:
        """Run a read query and return its records as dicts."""
        with self.session() as session:
            return session.execute_read(
                lambda tx: tx.run(query, parameters or {}).data()
            )

    def run_write_returning(
        self, query: str, parameters: Optional[Dict[str, Any]] = None
    ) -> List[Dict[str, Any]]:
        """Run an updating query that has a RETURN clause."""
        with self.session() as session:
            return session.execute_write(
                lambda tx: tx.run(query, parameters or {}).data()
            )

    def run_write(
        self, query: str, parameters: Optional[Dict[str, Any]] = None
    ) -> Dict[str, int]:
        """Run an updating query and return its update counters."""
        with self.session() as session:
            counters = session.execute_write(
                lambda tx: self._consume_counters(
                    tx.run(query, parameters or {})
                )
            )
        logger.info(f"Write completed: {format_counters(counters)}")
        return counters

    @staticmethod
    def _consume_counters(result) -> Dict[str, int]:
        """Drain a result and pick the update counters off its summary."""
        summary = result.consume()
        return {
            name: getattr(summary.counters, name, 0) for name in COUNTER_NAMES
        }


def format_counters(counters: Dict[str, int]) -> str:
    """Render non-zero update counters, e.g. ``nodes_created=1``."""
    changed = [f"{k}={v}" for k, v in counters.items() if v]
    return ", ".join(changed) or "no changes"
