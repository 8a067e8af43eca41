"""URL identifiers of the rental resources."""

from __future__ import annotations

from uuid import UUID

from shared.domain.exceptions import NotFoundError

# Hex UUID with or without dashes, the forms ``UUID()`` accepts.
UUID_LOOKUP_REGEX = (
    "[0-9a-fA-F]{8}-?[0-9a-fA-F]{4}-?[0-9a-fA-F]{4}-?[0-9a-fA-F]{4}-?[0-9a-fA-F]{12}"
)


def parse_lookup_id(value, resource: str = "Resource") -> UUID:
    """Turn a URL identifier into a UUID; one that cannot be parsed does not resolve."""
    try:
        return UUID(str(value))
    except ValueError:
        raise NotFoundError(f"{resource} {value} not found")
