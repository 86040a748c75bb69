"""Group scanned fields by the class that declares them."""

from collections.abc import Iterable

from .classify import describe
from .types import FieldDescriptor, OwningClassGroup, RequiredField
from .universe import TypeUniverse


def is_publicly_writable(modifiers: Iterable[str]) -> bool:
    """Check if a field with these modifiers can be assigned from another class."""
    modifiers = set(modifiers)
    return "public" in modifiers and "final" not in modifiers


def aggregate(fields: Iterable[RequiredField], universe: TypeUniverse) -> list[OwningClassGroup]:
    """Build one group per owning class.

    Classes keep the order in which they were first seen, and fields keep scan
    order inside each class.
    """
    grouped: dict[str, list[FieldDescriptor]] = {}
    for field in fields:
        package = field.class_name.rpartition(".")[0]
        grouped.setdefault(field.class_name, []).append(
            FieldDescriptor(
                name=field.field_name,
                declared_type=describe(field.type_name, universe, package),
                is_publicly_writable=is_publicly_writable(field.modifiers),
                requires_binding=field.bind,
            )
        )
    return [OwningClassGroup(class_name=name, fields=tuple(fs)) for name, fs in grouped.items()]
