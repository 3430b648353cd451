"""Typed projections for the RETURN clause of a Cypher query."""

from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional, Sequence, Union


@dataclass(frozen=True)
class ReturnItem:
    """A single RETURN projection and how to map its value back."""

    identity: str
    model: Optional[type] = None
    aggregate: Optional[str] = None  # None, "collect" or "count"

    def expression(self) -> str:
        """Cypher expression for this projection."""
        if self.aggregate:
            return f"{self.aggregate}({self.identity})"
        return self.identity

    def convert(self, value: Any) -> Any:
        """Map a raw record value onto the projected type."""
        if self.aggregate == "count":
            return int(value or 0)
        if self.model is None or value is None:
            return value
        if self.aggregate == "collect":
            return [self._to_model(item) for item in value]
        return self._to_model(value)

    def _to_model(self, value: Any) -> Any:
        from_properties: Callable = getattr(
            self.model, "from_properties", None
        )
        if from_properties is not None:
            return from_properties(value)
        return self.model(**dict(value))


def node_as(identity: str, model: type) -> ReturnItem:
    """Return ``identity`` mapped onto ``model``."""
    return ReturnItem(_check_identity(identity), model=model)


def collect_as(identity: str, model: type) -> ReturnItem:
    """Return ``collect(identity)`` mapped onto a list of ``model``."""
    return ReturnItem(_check_identity(identity), model=model, aggregate="collect")


def count_of(identity: str) -> ReturnItem:
    """Return ``count(identity)`` as an int."""
    return ReturnItem(_check_identity(identity), aggregate="count")


def _check_identity(identity: str) -> str:
    if not identity or not identity.isidentifier():
        raise ValueError(f"Invalid identity: {identity!r}")
    return identity


Projection = Union[str, ReturnItem]


@dataclass
class ReturnSpec:
    """Ordered set of aliased projections plus the row shape."""

    items: Dict[str, ReturnItem]
    row_type: Optional[type] = None

    @classmethod
    def build(
        cls,
        positional: Sequence[Projection],
        aliased: Dict[str, Projection],
        row_type: Optional[type] = None,
    ) -> "ReturnSpec":
        """Normalise positional and keyword projections into aliases."""
        items: Dict[str, ReturnItem] = {}
        for item in positional:
            item = _as_item(item)
            if not item.identity.isidentifier():
                raise ValueError(
                    f"Expression {item.identity!r} needs an alias"
                )
            if item.aggregate:
                raise ValueError(
                    f"Aggregate over {item.identity!r} needs an alias"
                )
            cls._add(items, item.identity, item)
        for alias, item in aliased.items():
            cls._add(items, alias, _as_item(item))
        if not items:
            raise ValueError("RETURN needs at least one item")
        return cls(items=items, row_type=row_type)

    @staticmethod
    def _add(items: Dict[str, ReturnItem], alias: str, item: ReturnItem):
        if alias in items:
            raise ValueError(f"Duplicate RETURN alias: {alias}")
        items[alias] = item

    def clause(self) -> str:
        """Text of the RETURN clause."""
        parts = []
        for alias, item in self.items.items():
            expression = item.expression()
            if expression == alias:
                parts.append(expression)
            else:
                parts.append(f"{expression} AS {alias}")
        return "RETURN " + ", ".join(parts)

    def map_rows(self, rows: List[Dict[str, Any]]) -> List[Any]:
        """Convert raw record dicts into the requested row shape."""
        mapped = []
        for row in rows:
            values = {
                alias: item.convert(row.get(alias))
                for alias, item in self.items.items()
            }
            if self.row_type is not None:
                mapped.append(self.row_type(**values))
            elif len(values) == 1:
                mapped.append(next(iter(values.values())))
            else:
                mapped.append(values)
        return mapped


def _as_item(item: Projection) -> ReturnItem:
    if isinstance(item, ReturnItem):
        return item
    if isinstance(item, str) and item.strip():
        return ReturnItem(item.strip())
    raise ValueError(f"Invalid RETURN item: {item!r}")
