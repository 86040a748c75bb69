"""Type definitions for declaration parsing and navigator generation."""

from dataclasses import dataclass, field
from enum import StrEnum, auto
from typing import Any

from dataclasses_json import DataClassJsonMixin

# Declaration file types (parser output)


@dataclass
class NavType(DataClassJsonMixin):
    """A type reference as written in a declaration file.

    dims counts trailing ``[]`` pairs, so ``User[]`` is name="User", dims=1.
    args holds type arguments, so ``ArrayList<String>`` has one.
    """

    name: str
    dims: int
    args: list["NavType"] = field(default_factory=list)

    def __str__(self) -> str:
        return join_type_name(self.name, [str(a) for a in self.args], "[]" * self.dims)


@dataclass
class NavAnnotationArg(DataClassJsonMixin):
    """Represents an argument to an annotation."""

    name: str | None
    value: Any


@dataclass
class NavAnnotation(DataClassJsonMixin):
    """Represents an annotation on a field."""

    name: str
    arguments: list[NavAnnotationArg]


@dataclass
class NavField(DataClassJsonMixin):
    """Represents a field declared inside a class block."""

    name: str
    type: NavType
    modifiers: list[str]
    annotations: list[NavAnnotation]


@dataclass
class NavClass(DataClassJsonMixin):
    """Represents an owning class (usually an activity) and its fields."""

    name: str
    fields: list[NavField]


@dataclass
class NavTypeDecl(DataClassJsonMixin):
    """Represents a user type and its direct supertypes."""

    name: str
    extends: list[str]
    implements: list[str]

    @property
    def supertypes(self) -> list[str]:
        return self.extends + self.implements


@dataclass
class NavOption(DataClassJsonMixin):
    """Represents a generation option."""

    name: str
    value: Any


# Scanned fields, as handed from the scanner to the generator


@dataclass(frozen=True)
class RequiredField:
    """One field carrying the marker annotation."""

    class_name: str
    field_name: str
    type_name: str
    modifiers: tuple[str, ...]
    bind: bool


# Type descriptors


@dataclass(frozen=True)
class TypeDescriptor:
    """Base of the descriptor union. name is the qualified Java type."""

    name: str


@dataclass(frozen=True)
class Numeric(TypeDescriptor):
    primitive: str
    width: int
    signed: bool
    floating: bool
    boxed: bool


@dataclass(frozen=True)
class Char(TypeDescriptor):
    boxed: bool


@dataclass(frozen=True)
class Boolean(TypeDescriptor):
    boxed: bool


@dataclass(frozen=True)
class ArrayOf(TypeDescriptor):
    element: TypeDescriptor


@dataclass(frozen=True)
class StringLike(TypeDescriptor):
    """String, CharSequence or a Bundle.

    base is the platform type whose typed accessor reads the value back.
    """

    base: str
    transferable: bool


@dataclass(frozen=True)
class PlatformTransferable(TypeDescriptor):
    pass


@dataclass(frozen=True)
class GenericallySerializable(TypeDescriptor):
    pass


@dataclass(frozen=True)
class Unsupported(TypeDescriptor):
    pass


class Category(StrEnum):
    """Classification of a field type for read-back purposes."""

    WIDE_NUMERIC = auto()  # double, long, float
    NARROW_INTEGER = auto()  # byte, short
    CHAR = auto()
    INT = auto()
    BOOLEAN = auto()
    TRANSFERABLE_ARRAY = auto()
    ARRAY = auto()
    STRING_LIKE = auto()
    TRANSFERABLE = auto()
    SERIALIZABLE = auto()
    UNSUPPORTED = auto()


@dataclass(frozen=True)
class FieldDescriptor:
    """A required field with its resolved type."""

    name: str
    declared_type: TypeDescriptor
    is_publicly_writable: bool
    requires_binding: bool


@dataclass(frozen=True)
class OwningClassGroup:
    """All required fields of one owning class, in scan order."""

    class_name: str
    fields: tuple[FieldDescriptor, ...]

    @property
    def simple_name(self) -> str:
        return self.class_name.rpartition(".")[2]


@dataclass(frozen=True)
class AccessorPlan:
    """How to read one field back out of an intent."""

    default: str | None
    suffix: str
    needs_cast: bool

    @property
    def method(self) -> str:
        return f"get{self.suffix}Extra"


JAVA_PRIMITIVES = frozenset(
    ["boolean", "byte", "short", "char", "int", "long", "float", "double", "void"]
)


def is_primitive(name: str) -> bool:
    """Check if a type name is a Java primitive."""
    return name in JAVA_PRIMITIVES


def split_type_name(type_name: str) -> tuple[str, list[str], str]:
    """Split ``a.Map<K, b.List<V>>[]`` into ``("a.Map", ["K", "b.List<V>"], "[]")``."""
    base = type_name.rstrip("[]")
    dims = type_name[len(base) :]
    if not base.endswith(">"):
        return base, [], dims

    start = base.index("<")
    args: list[str] = []
    depth = 0
    current = ""
    for c in base[start + 1 : -1]:
        if c == "," and depth == 0:
            args.append(current.strip())
            current = ""
            continue
        if c == "<":
            depth += 1
        elif c == ">":
            depth -= 1
        current += c
    args.append(current.strip())
    return base[:start], args, dims


def join_type_name(base: str, args: list[str], dims: str = "") -> str:
    if args:
        base += "<" + ", ".join(args) + ">"
    return base + dims
