"""SQL fragment helpers shared by the SQLite builders."""

import sqlite3
from collections.abc import Sequence
from typing import Any

from litedb.database.predicates import Condition, Operator
from litedb.types import SortDirection


def quote_identifier(name: str) -> str:
    """Quote a table or column name for SQLite.

    Example:
        >>> quote_identifier("order")
        '"order"'
    """
    return '"' + name.replace('"', '""') + '"'


def build_where_clause(conditions: dict[str, Any]) -> tuple[str, dict[str, Any]]:
    """Build WHERE clause from an equality conditions dictionary.

    Args:
        conditions: Dictionary of column-value pairs

    Returns:
        Tuple of (where_clause, parameters_dict)

    Example:
        >>> build_where_clause({"id": 3})
        ('WHERE "id" = :where_id', {'where_id': 3})
    """
    if not conditions:
        return "", {}

    clauses: list[str] = []
    params: dict[str, Any] = {}

    for column, value in conditions.items():
        param_name = f"where_{column}"
        clauses.append(f"{quote_identifier(column)} = :{param_name}")
        params[param_name] = value

    return f"WHERE {' AND '.join(clauses)}", params


def build_condition_clause(
    conditions: Sequence[Condition],
) -> tuple[str, dict[str, Any]]:
    """Build WHERE clause from query conditions joined with AND.

    Containment uses ``instr`` so it is case-sensitive and treats ``%`` and
    ``_`` literally.

    Example:
        >>> build_condition_clause([Condition("name", Operator.CONTAINS, "Al")])
        ('WHERE instr("name", :p0) > 0', {'p0': 'Al'})
    """
    if not conditions:
        return "", {}

    clauses: list[str] = []
    params: dict[str, Any] = {}

    for i, condition in enumerate(conditions):
        param_name = f"p{i}"
        column = quote_identifier(condition.column)
        if condition.operator == Operator.EQ:
            if condition.value is None:
                clauses.append(f"{column} IS NULL")
                continue
            clauses.append(f"{column} = :{param_name}")
        elif condition.operator == Operator.CONTAINS:
            clauses.append(f"instr({column}, :{param_name}) > 0")
        else:
            raise ValueError(f"Unsupported operator: {condition.operator}")
        params[param_name] = condition.value

    return f"WHERE {' AND '.join(clauses)}", params


def build_order_by_clause(order_by: Sequence[tuple[str, SortDirection]]) -> str:
    """Build ORDER BY clause from (column, direction) pairs.

    Example:
        >>> build_order_by_clause([("price", SortDirection.DESC)])
        'ORDER BY "price" DESC'
    """
    if not order_by:
        return ""

    terms = [
        f"{quote_identifier(column)} {SortDirection(direction).value}"
        for column, direction in order_by
    ]
    return f"ORDER BY {', '.join(terms)}"


def build_limit_clause(limit: int | None, offset: int | None = None) -> str:
    """Build LIMIT clause with optional OFFSET.

    SQLite only accepts OFFSET after LIMIT, so an offset alone becomes
    ``LIMIT -1 OFFSET n``.
    """
    if limit is None and offset is None:
        return ""

    clause = f"LIMIT {-1 if limit is None else int(limit)}"
    if offset is not None:
        clause += f" OFFSET {int(offset)}"

    return clause


SCHEMA_MISMATCH_MESSAGES = ("no such table", "no such column", "has no column named")


def is_schema_mismatch(error: sqlite3.Error) -> bool:
    """Whether a driver error means the table lacks the expected shape.

    Example:
        >>> is_schema_mismatch(sqlite3.OperationalError("no such table: users"))
        True
        >>> is_schema_mismatch(sqlite3.OperationalError("no such savepoint: sp_1"))
        False
    """
    message = str(error)
    return any(text in message for text in SCHEMA_MISMATCH_MESSAGES)
