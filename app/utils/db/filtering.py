"""Translate simple filter dicts into SQLAlchemy criteria."""

from __future__ import annotations

from typing import Any, Dict

from sqlalchemy.orm import Query


def apply_filters(query: Query, model: Any, filters: Dict[str, Any]) -> Query:
    """
    Apply ``{column: value}`` equality filters to a query.

    Optional filters that were not given should be left out of ``filters``
    by the caller. Unknown columns raise ValueError.
    """
    for field, value in filters.items():
        column = getattr(model, field, None)
        if column is None:
            raise ValueError(f"Unknown filter field {field!r} for {model.__name__}")
        query = query.filter(column == value)
    return query
