"""Shared fixtures: settings and an in-memory stand-in for Neo4jClient."""

from typing import Any, Dict, List, Optional

import pytest

from moviegraph.config import Settings
from moviegraph.graph_db import CypherQuery


class RecordingClient:
    """Records every query it is asked to run and replays canned rows."""

    def __init__(self, rows: Optional[List[Dict[str, Any]]] = None):
        self.rows = rows or []
        self.counters = {"nodes_created": 0}
        self.calls = []

    @property
    def cypher(self) -> CypherQuery:
        return CypherQuery(self)

    def run_read(self, query, parameters=None):
        self.calls.append(("read", query, parameters))
        return self.rows

    def run_write_returning(self, query, parameters=None):
        self.calls.append(("write_returning", query, parameters))
        return self.rows

    def run_write(self, query, parameters=None):
        self.calls.append(("write", query, parameters))
        return self.counters

    @property
    def last_call(self):
        return self.calls[-1]


@pytest.fixture
def settings():
    return Settings(
        neo4j_uri="bolt://graph.test:7687",
        neo4j_user="neo4j",
        neo4j_password="movietest",
    )


@pytest.fixture
def client():
    return RecordingClient()
