"""Field type description and classification."""

from .types import (
    ArrayOf,
    Boolean,
    Category,
    Char,
    GenericallySerializable,
    Numeric,
    PlatformTransferable,
    StringLike,
    TypeDescriptor,
    Unsupported,
    join_type_name,
    split_type_name,
)
from .universe import BUNDLE, CHAR_SEQUENCE, PARCELABLE, SERIALIZABLE, STRING, TypeUniverse

# primitive -> (width, floating)
NUMERIC_PRIMITIVES: dict[str, tuple[int, bool]] = {
    "byte": (8, False),
    "short": (16, False),
    "int": (32, False),
    "long": (64, False),
    "float": (32, True),
    "double": (64, True),
}

BOXES: dict[str, str] = {
    "java.lang.Byte": "byte",
    "java.lang.Short": "short",
    "java.lang.Integer": "int",
    "java.lang.Long": "long",
    "java.lang.Float": "float",
    "java.lang.Double": "double",
    "java.lang.Character": "char",
    "java.lang.Boolean": "boolean",
}

# Element types with a typed get<Element>ArrayExtra accessor
TYPED_ARRAY_ELEMENTS = frozenset(
    [
        "boolean",
        "byte",
        "short",
        "char",
        "int",
        "long",
        "float",
        "double",
        STRING,
        CHAR_SEQUENCE,
    ]
)


def qualify(type_name: str, universe: TypeUniverse, package: str = "") -> str:
    """Qualify a type name and every type argument inside it."""
    base, args, dims = split_type_name(type_name)
    return join_type_name(
        universe.qualify(base, package), [qualify(a, universe, package) for a in args], dims
    )


def describe(type_name: str, universe: TypeUniverse, package: str = "") -> TypeDescriptor:
    """Derive the descriptor for a declared type name such as ``User[]``.

    Type arguments are kept in the descriptor name, so ``ArrayList<User>`` is
    described as ``java.util.ArrayList<com.example.User>``.
    """
    if type_name.endswith("[]"):
        element = describe(type_name[:-2], universe, package)
        return ArrayOf(name=element.name + "[]", element=element)

    # Capabilities are looked up on the erased type
    erased = universe.qualify(split_type_name(type_name)[0], package)
    name = qualify(type_name, universe, package)
    primitive = BOXES.get(erased, erased)
    boxed = erased in BOXES

    if primitive in NUMERIC_PRIMITIVES:
        width, floating = NUMERIC_PRIMITIVES[primitive]
        return Numeric(
            name=name, primitive=primitive, width=width, signed=True, floating=floating, boxed=boxed
        )
    if primitive == "char":
        return Char(name=name, boxed=boxed)
    if primitive == "boolean":
        return Boolean(name=name, boxed=boxed)

    if not universe.knows(erased):
        return Unsupported(name=name)
    if erased in (STRING, CHAR_SEQUENCE):
        return StringLike(name=name, base=name, transferable=False)
    if universe.is_assignable_to(erased, BUNDLE):
        return StringLike(name=name, base=BUNDLE, transferable=True)
    if universe.is_assignable_to(erased, PARCELABLE):
        return PlatformTransferable(name=name)
    if universe.is_assignable_to(erased, SERIALIZABLE):
        return GenericallySerializable(name=name)
    return Unsupported(name=name)


def _is_transferable(t: TypeDescriptor) -> bool:
    if isinstance(t, PlatformTransferable):
        return True
    return isinstance(t, StringLike) and t.transferable


def classify(t: TypeDescriptor) -> Category:
    """Map a descriptor to exactly one category."""
    if isinstance(t, Numeric):
        if t.primitive == "int":
            return Category.INT
        if t.primitive in ("byte", "short"):
            return Category.NARROW_INTEGER
        return Category.WIDE_NUMERIC
    if isinstance(t, Char):
        return Category.CHAR
    if isinstance(t, Boolean):
        return Category.BOOLEAN
    if isinstance(t, ArrayOf):
        if _is_transferable(t.element):
            return Category.TRANSFERABLE_ARRAY
        if t.element.name in TYPED_ARRAY_ELEMENTS:
            return Category.ARRAY
        return Category.UNSUPPORTED
    if isinstance(t, StringLike):
        return Category.STRING_LIKE
    if isinstance(t, PlatformTransferable):
        return Category.TRANSFERABLE
    if isinstance(t, GenericallySerializable):
        return Category.SERIALIZABLE
    return Category.UNSUPPORTED
