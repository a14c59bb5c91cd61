"""Decode/encode error taxonomy for catalog records."""

from __future__ import annotations

from typing import Any, Iterable, Optional


class CatalogObjectError(ValueError):
    """Base class for every error raised while mapping catalog records."""


class InvalidArgumentError(CatalogObjectError):
    """Raised when the input document itself is missing."""


class MalformedInputError(CatalogObjectError):
    """Raised when the input text is not a well-formed JSON object."""


class TypeMismatchError(CatalogObjectError):
    """Raised when a field value is present but has the wrong shape."""

    def __init__(self, entity: str, field: str, value: Any, expected: str) -> None:
        self.entity = entity
        self.field = field
        self.value = value
        self.expected = expected
        super().__init__(f"{entity}.{field} expects {expected}, got {value!r}")


class UnknownFieldError(CatalogObjectError):
    """Raised when a JSON payload carries a key the entity does not know."""

    def __init__(self, entity: str, key: str, value: Any) -> None:
        self.entity = entity
        self.key = key
        self.value = value
        super().__init__(f"Unknown {entity} key '{key}'='{value}'")


class InvalidEnumValueError(CatalogObjectError):
    """Raised when a closed enum field receives a value outside its members."""

    def __init__(
        self,
        entity: str,
        field: str,
        value: Any,
        allowed: Optional[Iterable[str]] = None,
    ) -> None:
        self.entity = entity
        self.field = field
        self.value = value
        self.allowed = tuple(allowed or ())
        message = f"Invalid value for {entity}.{field}: '{value}'"
        if self.allowed:
            message += f". Acceptable values are {', '.join(repr(a) for a in self.allowed)}"
        super().__init__(message)
