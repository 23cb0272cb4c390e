"""
JsValidation Presence Verifiers
===============================

Database lookups behind the `unique` and `exists` rules.

The verifier is async; those rules only take effect through
`Validator.passes_async()`.
"""

from __future__ import annotations

import re
from abc import ABC, abstractmethod
from typing import Any, Dict, Iterable, List, Optional


_IDENTIFIER = re.compile(r"^[A-Za-z_][A-Za-z0-9_.]*$")


class PresenceVerifier(ABC):
    """Counts matching records for presence rules."""

    @abstractmethod
    async def get_count(
        self,
        collection: str,
        column: str,
        value: Any,
        exclude_id: Optional[Any] = None,
        id_column: Optional[str] = None,
        extra: Optional[Dict[str, Any]] = None,
    ) -> int:
        """Count records where `column` equals `value`."""
        ...

    @abstractmethod
    async def get_multi_count(
        self,
        collection: str,
        column: str,
        values: List[Any],
        extra: Optional[Dict[str, Any]] = None,
    ) -> int:
        """Count records where `column` is one of `values`."""
        ...


class DatabasePresenceVerifier(PresenceVerifier):
    """
    Presence verifier running SQL through an async database handle.

    The handle must expose `await fetch_one(query, params)` returning a
    mapping, with `?` placeholders.

    Example:
        verifier = DatabasePresenceVerifier(db)
        factory = Factory(presence_verifier=verifier)
    """

    def __init__(self, database: Any) -> None:
        self.database = database

    async def get_count(
        self,
        collection: str,
        column: str,
        value: Any,
        exclude_id: Optional[Any] = None,
        id_column: Optional[str] = None,
        extra: Optional[Dict[str, Any]] = None,
    ) -> int:
        query = f"SELECT COUNT(*) as count FROM {_identifier(collection)} WHERE {_identifier(column)} = ?"
        params: List[Any] = [value]

        if exclude_id is not None:
            query += f" AND {_identifier(id_column or 'id')} != ?"
            params.append(exclude_id)

        query, params = self._add_conditions(query, params, extra)
        return await self._count(query, params)

    async def get_multi_count(
        self,
        collection: str,
        column: str,
        values: List[Any],
        extra: Optional[Dict[str, Any]] = None,
    ) -> int:
        if not values:
            return 0

        placeholders = ", ".join("?" for _ in values)
        query = (
            f"SELECT COUNT(DISTINCT {_identifier(column)}) as count FROM {_identifier(collection)} "
            f"WHERE {_identifier(column)} IN ({placeholders})"
        )
        query, params = self._add_conditions(query, list(values), extra)
        return await self._count(query, params)

    @staticmethod
    def _add_conditions(query: str, params: List[Any], extra: Optional[Dict[str, Any]]) -> tuple:
        for column, value in (extra or {}).items():
            if value == "NULL":
                query += f" AND {_identifier(column)} IS NULL"
            elif value == "NOT_NULL":
                query += f" AND {_identifier(column)} IS NOT NULL"
            else:
                query += f" AND {_identifier(column)} = ?"
                params.append(value)
        return query, params

    async def _count(self, query: str, params: List[Any]) -> int:
        result = await self.database.fetch_one(query, params)
        return int(result["count"]) if result else 0


class InMemoryPresenceVerifier(PresenceVerifier):
    """
    Presence verifier over in-memory rows.

    Example:
        verifier = InMemoryPresenceVerifier({"users": [{"id": 1, "email": "a@b.c"}]})
    """

    def __init__(self, tables: Optional[Dict[str, Iterable[Dict[str, Any]]]] = None) -> None:
        self.tables: Dict[str, List[Dict[str, Any]]] = {
            name: list(rows) for name, rows in (tables or {}).items()
        }

    async def get_count(
        self,
        collection: str,
        column: str,
        value: Any,
        exclude_id: Optional[Any] = None,
        id_column: Optional[str] = None,
        extra: Optional[Dict[str, Any]] = None,
    ) -> int:
        count = 0
        for row in self._rows(collection, extra):
            if str(row.get(column)) != str(value):
                continue
            if exclude_id is not None and str(row.get(id_column or "id")) == str(exclude_id):
                continue
            count += 1
        return count

    async def get_multi_count(
        self,
        collection: str,
        column: str,
        values: List[Any],
        extra: Optional[Dict[str, Any]] = None,
    ) -> int:
        wanted = {str(v) for v in values}
        found = {str(row.get(column)) for row in self._rows(collection, extra)}
        return len(wanted & found)

    def _rows(self, collection: str, extra: Optional[Dict[str, Any]]) -> Iterable[Dict[str, Any]]:
        for row in self.tables.get(collection, []):
            if all(_matches(row.get(column), value) for column, value in (extra or {}).items()):
                yield row


def _matches(actual: Any, expected: Any) -> bool:
    if expected == "NULL":
        return actual is None
    if expected == "NOT_NULL":
        return actual is not None
    return str(actual) == str(expected)


def _identifier(name: str) -> str:
    if not _IDENTIFIER.match(name):
        raise ValueError(f"Invalid SQL identifier: {name!r}")
    return name
