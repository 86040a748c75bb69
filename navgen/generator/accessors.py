"""Accessor resolution: which Intent getter reads a field back, and with what default."""

from typing import assert_never

from .classify import BOXES
from .types import AccessorPlan, Category, StringLike, TypeDescriptor


def capitalize(name: str) -> str:
    """Uppercase only the first letter (``charSequence`` -> ``CharSequence``)."""
    return name[:1].upper() + name[1:]


def _unboxed(t: TypeDescriptor) -> str:
    return BOXES.get(t.name, t.name)


def resolve(category: Category, t: TypeDescriptor) -> AccessorPlan | None:
    """Return the read-back plan for a classified type.

    Returns None for unsupported types; the caller decides how to report them.
    """
    match category:
        case Category.WIDE_NUMERIC:
            return AccessorPlan(default="-1", suffix=capitalize(_unboxed(t)), needs_cast=False)
        case Category.NARROW_INTEGER:
            primitive = _unboxed(t)
            return AccessorPlan(
                default=f"({primitive}) -1", suffix=capitalize(primitive), needs_cast=False
            )
        case Category.CHAR:
            return AccessorPlan(default="'m'", suffix="Char", needs_cast=False)
        case Category.INT:
            # The platform getter is getIntExtra whatever the declared name
            return AccessorPlan(default="-1", suffix="Int", needs_cast=False)
        case Category.BOOLEAN:
            return AccessorPlan(default="false", suffix="Boolean", needs_cast=False)
        case Category.TRANSFERABLE_ARRAY:
            # getParcelableArrayExtra returns Parcelable[]
            return AccessorPlan(default=None, suffix="ParcelableArray", needs_cast=True)
        case Category.ARRAY:
            element = t.name[:-2].rpartition(".")[2]
            return AccessorPlan(
                default=None, suffix=capitalize(element) + "Array", needs_cast=False
            )
        case Category.STRING_LIKE:
            base = t.base if isinstance(t, StringLike) else t.name
            return AccessorPlan(
                default=None, suffix=base.rpartition(".")[2], needs_cast=t.name != base
            )
        case Category.TRANSFERABLE:
            return AccessorPlan(default=None, suffix="Parcelable", needs_cast=False)
        case Category.SERIALIZABLE:
            return AccessorPlan(default=None, suffix="Serializable", needs_cast=True)
        case Category.UNSUPPORTED:
            return None
        case _:
            assert_never(category)
