"""Identifier checks shared by the catalog and cart services."""

import uuid

from storefront.core.exceptions import InvalidId


def require_valid_id(value: str | None) -> str:
    """Return the canonical form of a record ID.

    Raises:
        InvalidId: If the value is not a UUID.
    """
    if not value:
        raise InvalidId()
    try:
        return str(uuid.UUID(str(value)))
    except ValueError as e:
        raise InvalidId() from e
