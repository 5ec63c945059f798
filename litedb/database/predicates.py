"""Filter vocabulary for queries: field equality and substring containment."""

from dataclasses import dataclass
from enum import Enum
from typing import Any


class Operator(str, Enum):
    """Supported comparison operators."""

    EQ = "eq"
    CONTAINS = "contains"


@dataclass(frozen=True)
class Condition:
    """A single translatable filter on one column."""

    column: str
    operator: Operator
    value: Any


class FieldRef:
    """Reference to an entity field, used to build conditions.

    >>> field("name") == "Alice"
    Condition(column='name', operator=<Operator.EQ: 'eq'>, value='Alice')
    """

    __slots__ = ("name",)

    def __init__(self, name: str) -> None:
        self.name = name

    def __eq__(self, value: Any) -> Condition:  # type: ignore[override]
        return Condition(self.name, Operator.EQ, value)

    __hash__ = None  # type: ignore[assignment]

    def contains(self, value: str) -> Condition:
        """Case-sensitive substring match."""
        return Condition(self.name, Operator.CONTAINS, value)

    def __repr__(self) -> str:
        return f"field({self.name!r})"


def field(name: str) -> FieldRef:
    """Create a field reference for use in ``Query.where``."""
    return FieldRef(name)
