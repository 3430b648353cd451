"""Fluent Cypher query builder with typed result mapping."""

import re
from typing import Any, Dict, List, Mapping, Optional, Set, TYPE_CHECKING

from .returns import Projection, ReturnSpec
from ..utils.logger import get_logger

if TYPE_CHECKING:
    from .neo4j_client import Neo4jClient


logger = get_logger(__name__)

# Literals, quoted names and comments are matched first so a $ inside them
# is skipped; only the last alternative captures a parameter name.
_PARAM_REF = re.compile(
    r"'(?:[^'\\]|\\.)*'"
    r'|"(?:[^"\\]|\\.)*"'
    r"|`[^`]*`"
    r"|//[^\n]*"
    r"|/\*.*?\*/"
    r"|\$([A-Za-z_][A-Za-z0-9_]*)",
    re.DOTALL,
)


class CypherQuery:
    """
    Build a Cypher query clause by clause, bind parameters, and run it.

    Clauses are emitted in call order. Terminal calls are ``results()``
    for queries with a RETURN clause and ``execute_without_results()``
    for pure updates.

    Usage:
        movies = (
            client.cypher
            .match("(m:Movie)")
            .return_(m=node_as("m", Movie))
            .limit(10)
            .results()
        )
    """

    def __init__(self, client: Optional["Neo4jClient"] = None):
        self.client = client
        self._clauses: List[str] = []
        self._parameters: Dict[str, Any] = {}
        self._return: Optional[ReturnSpec] = None
        self._updates = False

    # Reading clauses

    def match(self, *patterns: str) -> "CypherQuery":
        """Add a MATCH clause over one or more comma-separated patterns."""
        return self._add("MATCH", _join_patterns(patterns))

    def optional_match(self, *patterns: str) -> "CypherQuery":
        """Add an OPTIONAL MATCH clause."""
        return self._add("OPTIONAL MATCH", _join_patterns(patterns))

    def where(self, condition: str) -> "CypherQuery":
        """Add a WHERE clause."""
        return self._add("WHERE", _require_text(condition, "WHERE"))

    def with_(self, *items: str) -> "CypherQuery":
        """Add a WITH clause."""
        return self._add("WITH", _join_patterns(items))

    # Updating clauses

    def create(self, *patterns: str) -> "CypherQuery":
        """Add a CREATE clause."""
        return self._add("CREATE", _join_patterns(patterns), updating=True)

    def merge(self, pattern: str) -> "CypherQuery":
        """Add a MERGE clause."""
        return self._add("MERGE", _require_text(pattern, "MERGE"), updating=True)

    def set(self, *assignments: str) -> "CypherQuery":
        """Add a SET clause."""
        return self._add("SET", _join_patterns(assignments), updating=True)

    def delete(self, *identities: str) -> "CypherQuery":
        """Add a DELETE clause."""
        return self._add("DELETE", _join_patterns(identities), updating=True)

    def detach_delete(self, *identities: str) -> "CypherQuery":
        """Add a DETACH DELETE clause."""
        return self._add(
            "DETACH DELETE", _join_patterns(identities), updating=True
        )

    # Parameters

    def with_param(self, name: str, value: Any) -> "CypherQuery":
        """Bind ``value`` to the ``$name`` placeholder."""
        if not isinstance(name, str) or not name.isidentifier():
            raise ValueError(f"Invalid parameter name: {name!r}")
        if name in self._parameters:
            raise ValueError(f"Parameter already bound: {name}")
        self._parameters[name] = _serialize_value(value)
        return self

    def with_params(self, params: Mapping[str, Any]) -> "CypherQuery":
        """Bind every entry of ``params``."""
        for name, value in params.items():
            self.with_param(name, value)
        return self

    # Projection

    def return_(
        self,
        *items: Projection,
        row_type: Optional[type] = None,
        **aliased_items: Projection,
    ) -> "CypherQuery":
        """Add the RETURN clause and record how to map its rows."""
        if self._return is not None:
            raise ValueError("Query already has a RETURN clause")
        self._return = ReturnSpec.build(items, aliased_items, row_type)
        self._clauses.append(self._return.clause())
        return self

    def order_by(self, *items: str) -> "CypherQuery":
        """Add an ORDER BY clause."""
        return self._add("ORDER BY", _join_patterns(items))

    def skip(self, count: int) -> "CypherQuery":
        """Add a SKIP clause."""
        return self._add("SKIP", str(_check_count(count, "SKIP")))

    def limit(self, count: int) -> "CypherQuery":
        """Add a LIMIT clause."""
        return self._add("LIMIT", str(_check_count(count, "LIMIT")))

    # Inspection

    @property
    def query_text(self) -> str:
        """The Cypher text built so far."""
        return "\n".join(self._clauses)

    @property
    def parameters(self) -> Dict[str, Any]:
        """A copy of the bound parameters."""
        return dict(self._parameters)

    @property
    def is_updating(self) -> bool:
        """Whether the query contains an updating clause."""
        return self._updates

    # Execution

    def results(self) -> List[Any]:
        """Run the query and return its rows mapped to the projected types."""
        if self._return is None:
            raise ValueError("results() requires a RETURN clause")
        query, params = self._prepare()

        if self._updates:
            rows = self._require_client().run_write_returning(query, params)
        else:
            rows = self._require_client().run_read(query, params)
        return self._return.map_rows(rows)

    def execute_without_results(self) -> Dict[str, int]:
        """Run an update and return the server's update counters."""
        if self._return is not None:
            raise ValueError(
                "Query has a RETURN clause; use results() instead"
            )
        query, params = self._prepare()
        return self._require_client().run_write(query, params)

    def __str__(self) -> str:
        return self.query_text

    def _add(
        self, keyword: str, body: str, updating: bool = False
    ) -> "CypherQuery":
        if self._return is not None and keyword not in (
            "ORDER BY",
            "SKIP",
            "LIMIT",
        ):
            raise ValueError(f"{keyword} cannot follow RETURN")
        self._clauses.append(f"{keyword} {body}")
        if updating:
            self._updates = True
        return self

    def _prepare(self):
        if not self._clauses:
            raise ValueError("Query is empty")
        query = self.query_text
        missing = sorted(
            _referenced_parameters(query) - set(self._parameters)
        )
        if missing:
            raise ValueError(f"Unbound parameters: {', '.join(missing)}")
        logger.debug(f"Cypher: {query} params={self._parameters}")
        return query, self.parameters

    def _require_client(self) -> "Neo4jClient":
        if self.client is None:
            raise RuntimeError("Query is not bound to a client")
        return self.client


def _require_text(text: str, keyword: str) -> str:
    if not isinstance(text, str) or not text.strip():
        raise ValueError(f"{keyword} needs a non-empty argument")
    return text.strip()


def _join_patterns(patterns) -> str:
    if not patterns:
        raise ValueError("At least one pattern is required")
    return ", ".join(_require_text(p, "Clause") for p in patterns)


def _referenced_parameters(query: str) -> Set[str]:
    """Names of the $parameters used outside literals and comments."""
    return {m.group(1) for m in _PARAM_REF.finditer(query) if m.group(1)}


def _check_count(count: int, keyword: str) -> int:
    if isinstance(count, bool) or not isinstance(count, int) or count < 0:
        raise ValueError(f"{keyword} needs a non-negative int, got {count!r}")
    return count


def _serialize_value(value: Any) -> Any:
    """Turn records into property maps the driver can send."""
    to_properties = getattr(value, "to_properties", None)
    if callable(to_properties):
        return to_properties()
    if isinstance(value, Mapping):
        return {k: _serialize_value(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_serialize_value(v) for v in value]
    return value
