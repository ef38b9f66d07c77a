"""Name-to-resolved-fields store shared by one processing pass."""

from __future__ import annotations

from collections.abc import Iterable, Iterator

from .schema_models import Field, RegistryEntry


class SchemaRegistry:
    """Caller-owned registry of resolved struct layouts.

    Entries are only ever added or overwritten; nothing is pruned for the lifetime
    of the object. Registration order is remembered so reports stay deterministic.
    """

    def __init__(self) -> None:
        self._entries: dict[str, RegistryEntry] = {}

    def register(self, name: str, flat_fields: Iterable[Field]) -> RegistryEntry:
        """Store or overwrite the resolved field list for `name`."""
        fields = tuple(flat_fields)
        unresolved = [field.name for field in fields if field.is_flatten_marker]
        if unresolved:
            raise ValueError(
                f"Registry entry '{name}' must not contain flatten markers: {', '.join(unresolved)}"
            )
        entry = RegistryEntry(name=name, flat_fields=fields)
        # Overwrites keep the original insertion slot.
        self._entries[name] = entry
        return entry

    def lookup(self, name: str) -> tuple[Field, ...] | None:
        """Return the resolved fields registered for `name`, or None when unknown."""
        entry = self._entries.get(name)
        return entry.flat_fields if entry is not None else None

    def entry(self, name: str) -> RegistryEntry | None:
        return self._entries.get(name)

    def names(self) -> tuple[str, ...]:
        return tuple(self._entries)

    def entries(self) -> tuple[RegistryEntry, ...]:
        return tuple(self._entries.values())

    def __contains__(self, name: object) -> bool:
        return name in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[RegistryEntry]:
        return iter(self._entries.values())
