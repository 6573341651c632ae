"""Canonical string form for entity references.

A reference may arrive as a bare identifier (UUID or string), as an expanded
object (``{"id": ...}`` / ``{"_id": ...}`` or an ORM instance with ``.id``),
or nested more than once. Comparisons must go through ``normalize_ref``.
"""

from __future__ import annotations

from typing import Any, Optional
from uuid import UUID

_ID_KEYS = ("id", "_id")


def normalize_ref(value: Any) -> Optional[str]:
    """Return the canonical identifier string for ``value``, or None if absent."""
    seen = 0
    while value is not None and seen < 8:
        seen += 1
        if isinstance(value, UUID):
            return str(value)
        if isinstance(value, str):
            text = value.strip()
            if not text:
                return None
            try:
                return str(UUID(text))
            except ValueError:
                return text
        if isinstance(value, dict):
            value = next((value[k] for k in _ID_KEYS if value.get(k) is not None), None)
            continue
        if hasattr(value, "id"):
            value = getattr(value, "id")
            continue
        return str(value)
    return None


def same_ref(left: Any, right: Any) -> bool:
    """True when both references resolve to the same non-empty identifier."""
    a = normalize_ref(left)
    return a is not None and a == normalize_ref(right)


def to_uuid(value: Any) -> UUID:
    """Normalize ``value`` and parse it as a UUID. Raises ValueError if it is not one."""
    ref = normalize_ref(value)
    if ref is None:
        raise ValueError("empty reference")
    return UUID(ref)
