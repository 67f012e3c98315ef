"""Schema type catalog."""
from __future__ import annotations

import logging
from typing import Callable

from rankgraph.models import FieldSpec, SchemaDefinition, SchemaType

logger = logging.getLogger("rankgraph")

FieldExtender = Callable[[list[FieldSpec]], list[FieldSpec]]


class RegistryFrozenError(RuntimeError):
    """Raised when registering after the registry has been read or frozen."""


class SchemaCatalog:
    """Maps schema type names to their field generators.

    Registration happens during initialization only. The first read freezes
    the catalog and later registrations raise ``RegistryFrozenError``.
    """

    def __init__(self):
        self._types: dict[str, SchemaType] = {}
        self._extenders: dict[str, list[FieldExtender]] = {}
        self._frozen = False

    @property
    def frozen(self) -> bool:
        return self._frozen

    def freeze(self) -> None:
        self._frozen = True

    def _check_writable(self, what: str) -> None:
        if self._frozen:
            raise RegistryFrozenError(f"Cannot {what}: schema catalog is frozen")

    def register(self, type_name: str, generator: SchemaType) -> None:
        self._check_writable(f"register schema type '{type_name}'")
        if type_name in self._types:
            logger.debug("Replacing schema type %s", type_name)
        self._types[type_name] = generator

    def extend_fields(self, type_name: str, extender: FieldExtender) -> None:
        """Add a function that receives and returns the field list of ``type_name``."""
        self._check_writable(f"extend fields of '{type_name}'")
        self._extenders.setdefault(type_name, []).append(extender)

    def __contains__(self, type_name: str) -> bool:
        return type_name in self._types

    def names(self) -> list[str]:
        self.freeze()
        return list(self._types)

    def generator(self, type_name: str) -> SchemaType | None:
        self.freeze()
        return self._types.get(type_name)

    def fields(self, type_name: str) -> list[FieldSpec]:
        generator = self.generator(type_name)
        if generator is None:
            return []
        fields = generator.fields()
        for extender in self._extenders.get(type_name, []):
            fields = extender(list(fields))
        return fields

    def get(self, type_name: str) -> SchemaDefinition | None:
        generator = self.generator(type_name)
        if generator is None:
            return None
        return generator.definition(self.fields(type_name))

    def all(self) -> list[SchemaDefinition]:
        return [self.get(name) for name in self.names()]


def add_field(new_field: FieldSpec, after: str | None = None) -> FieldExtender:
    """Extender that inserts ``new_field``, replacing any field with the same id."""
    def extend(fields: list[FieldSpec]) -> list[FieldSpec]:
        kept = [f for f in fields if f.id != new_field.id]
        if after is not None:
            for index, existing in enumerate(kept):
                if existing.id == after:
                    return kept[: index + 1] + [new_field] + kept[index + 1:]
        return kept + [new_field]
    return extend
