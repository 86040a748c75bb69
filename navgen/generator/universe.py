"""Type universe: which Java types exist and what they are assignable to."""

from collections.abc import Iterable
from typing import Protocol

from .types import NavTypeDecl, is_primitive

PARCELABLE = "android.os.Parcelable"
SERIALIZABLE = "java.io.Serializable"
BUNDLE = "android.os.Bundle"
STRING = "java.lang.String"
CHAR_SEQUENCE = "java.lang.CharSequence"
OBJECT = "java.lang.Object"

# Builtin types and their direct supertypes
BUILTIN_SUPERTYPES: dict[str, tuple[str, ...]] = {
    OBJECT: (),
    SERIALIZABLE: (),
    PARCELABLE: (),
    CHAR_SEQUENCE: (),
    STRING: (CHAR_SEQUENCE, SERIALIZABLE),
    BUNDLE: (PARCELABLE,),
    "java.lang.Number": (SERIALIZABLE,),
    "java.lang.Boolean": (SERIALIZABLE,),
    "java.lang.Character": (SERIALIZABLE,),
    "java.lang.Byte": ("java.lang.Number",),
    "java.lang.Short": ("java.lang.Number",),
    "java.lang.Integer": ("java.lang.Number",),
    "java.lang.Long": ("java.lang.Number",),
    "java.lang.Float": ("java.lang.Number",),
    "java.lang.Double": ("java.lang.Number",),
    # Collections commonly sent as Serializable extras
    "java.util.ArrayList": (SERIALIZABLE,),
    "java.util.LinkedList": (SERIALIZABLE,),
    "java.util.HashMap": (SERIALIZABLE,),
    "java.util.LinkedHashMap": ("java.util.HashMap",),
    "java.util.TreeMap": (SERIALIZABLE,),
    "java.util.HashSet": (SERIALIZABLE,),
    "java.util.LinkedHashSet": ("java.util.HashSet",),
    "java.util.TreeSet": (SERIALIZABLE,),
}


class TypeUniverse(Protocol):
    """Capability queries against the set of known types."""

    def qualify(self, name: str, package: str = "") -> str: ...

    def knows(self, name: str) -> bool: ...

    def is_assignable_to(self, candidate: str, capability: str) -> bool: ...


class DeclaredTypeUniverse:
    """Universe built from the builtin types plus declared ``type`` entries."""

    def __init__(self, declarations: Iterable[NavTypeDecl] = ()) -> None:
        self._supertypes: dict[str, tuple[str, ...]] = dict(BUILTIN_SUPERTYPES)
        self._simple: dict[str, str] = {}
        for name in BUILTIN_SUPERTYPES:
            self._simple.setdefault(name.rpartition(".")[2], name)

        declarations = list(declarations)
        for decl in declarations:
            self._simple.setdefault(decl.name.rpartition(".")[2], decl.name)
        # Supertypes are qualified after every declared name is known
        for decl in declarations:
            package = decl.name.rpartition(".")[0]
            self._supertypes[decl.name] = tuple(
                self.qualify(s, package) for s in decl.supertypes
            )

    def qualify(self, name: str, package: str = "") -> str:
        """Resolve a simple type name to its qualified name.

        Builtins win over declared types, which win over the given package.
        """
        if "." in name or is_primitive(name):
            return name
        if name in self._simple:
            return self._simple[name]
        return f"{package}.{name}" if package else name

    def knows(self, name: str) -> bool:
        return name in self._supertypes

    def is_assignable_to(self, candidate: str, capability: str) -> bool:
        seen: set[str] = set()
        pending = [candidate]
        while pending:
            current = pending.pop()
            if current == capability:
                return True
            if current in seen:
                continue
            seen.add(current)
            pending.extend(self._supertypes.get(current, ()))
        return False
