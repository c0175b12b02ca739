"""Validation helpers for SQL identifiers taken from configuration or URLs."""

from __future__ import annotations

import re

_MAX_IDENTIFIER_LEN = 63  # PostgreSQL NAMEDATALEN - 1
_IDENTIFIER_RE = re.compile(r"^[A-Za-z_][A-Za-z0-9_$]*$")


def validate_identifier(value: str) -> str:
    """Validate a table or column name, optionally schema-qualified.

    Policy (stricter than what PostgreSQL accepts when quoted):
    - one or two dot-separated parts ("table" or "schema.table")
    - each part starts with a letter or underscore
    - letters, digits, underscores and dollar signs only
    - max 63 chars per part

    Returns the stripped name or raises ValueError.
    """
    name = value.strip()

    if not name:
        raise ValueError("identifier must not be empty")

    parts = name.split(".")
    if len(parts) > 2:
        raise ValueError(f"identifier has too many parts: {name!r}")
    for part in parts:
        if len(part) > _MAX_IDENTIFIER_LEN:
            raise ValueError(f"identifier part is too long: {part!r}")
        if not _IDENTIFIER_RE.match(part):
            raise ValueError(f"invalid identifier: {name!r}")

    return name


def quote_identifier(value: str) -> str:
    """Validate and double-quote an identifier for use in SQL text."""
    return ".".join(f'"{part}"' for part in validate_identifier(value).split("."))
