"""Shared schema bases and the response envelope."""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Snake_case in Python, camelCase on the wire; either accepted on input."""

    model_config = {
        "alias_generator": to_camel,
        "populate_by_name": True,
        "from_attributes": True,
    }


class Envelope(CamelModel):
    """Every response carries ``success``; failures add ``message``."""

    success: bool = True


class ErrorResponse(Envelope):
    success: bool = False
    message: Optional[str] = None


class MessageEnvelope(Envelope):
    """Success response that only carries a human-readable message."""

    message: Optional[str] = None
