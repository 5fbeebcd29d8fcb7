from __future__ import annotations


class InvalidInputError(ValueError):
    """Decision snapshot is incomplete relative to the subscription ids it references."""
