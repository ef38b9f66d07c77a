"""Flattening failure taxonomy."""

from __future__ import annotations


class FlattenError(Exception):
    """Raised when one struct definition cannot be flattened."""

    kind = "FlattenError"


class UnknownFlattenTarget(FlattenError):
    """Raised when a flatten marker names a type that is not registered yet."""

    kind = "UnknownFlattenTarget"

    def __init__(
        self, type_name: str, *, host: str | None = None, field: str | None = None
    ) -> None:
        self.type_name = type_name
        self.host = host
        self.field = field
        location = f" (field '{field}' of '{host}')" if host and field else ""
        super().__init__(f"Unknown flatten target '{type_name}'{location}.")


class MalformedFlattenMarker(FlattenError):
    """Raised when a flatten marker follows a non-doc attribute in first-attribute mode."""

    kind = "MalformedFlattenMarker"

    def __init__(self, field: str, position: int, *, host: str | None = None) -> None:
        self.field = field
        self.position = position
        self.host = host
        owner = f" of '{host}'" if host else ""
        super().__init__(
            f"Flatten marker on field '{field}'{owner} must be the first attribute "
            f"after doc comments (found at position {position})."
        )


class DuplicateDefinition(FlattenError):
    """Raised when a type name is defined a second time."""

    kind = "DuplicateDefinition"

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Type '{name}' is already defined.")
