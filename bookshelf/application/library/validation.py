"""
Presence checks for use case inputs.

A field counts as missing when its value is falsy, so ``0`` and ``""``
are rejected the same way as an absent field.
"""

from bookshelf.domain.library.errors import MissingFieldsError


def require_fields(**values: object) -> None:
    """Raise MissingFieldsError naming every falsy keyword argument.

    Raises:
        MissingFieldsError: If any value is falsy.
    """
    missing = [name for name, value in values.items() if not value]
    if missing:
        raise MissingFieldsError(missing)
