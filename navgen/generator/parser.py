"""Navigation declaration parser using Lark."""

import os
import re
from dataclasses import dataclass
from typing import Any, TypeVar

from lark import Lark, Token
from lark.visitors import Transformer

from .types import (
    NavAnnotation,
    NavAnnotationArg,
    NavClass,
    NavField,
    NavOption,
    NavType,
    NavTypeDecl,
    RequiredField,
)

_g_parser: Lark | None = None

MARKER_ANNOTATION = "Required"

DEFAULT_PACKAGE = "navgen.generated"

# Names used by the generated launcher for its own parameter and local
RESERVED_NAMES = frozenset(["context", "intent"])

PACKAGE_NAME = re.compile(r"[A-Za-z_$][\w$]*(\.[A-Za-z_$][\w$]*)*")


class ValidationError(RuntimeError):
    """Raised when declaration validation fails."""


@dataclass
class GeneratorOptions:
    """Settings that control how the navigator is generated."""

    package: str = DEFAULT_PACKAGE
    strict: bool = True


@dataclass
class _Dim:
    pass


@dataclass
class _TypeArgs:
    values: list[NavType]


@dataclass
class _Modifier:
    value: str


@dataclass
class _Arguments:
    values: list[NavAnnotationArg]


@dataclass
class _Extends:
    names: list[str]


@dataclass
class _Implements:
    names: list[str]


@dataclass
class _Options:
    options: list[NavOption]


TFilter = TypeVar("TFilter", bound=object)


def _filter(args: list[Any], class_type: type[TFilter]) -> list[TFilter]:
    return [v for v in args if isinstance(v, class_type)]


def _find_one(args: list[Any], class_type: type[TFilter]) -> TFilter | None:
    filtered = _filter(args, class_type)
    if len(filtered) == 0:
        return None
    if len(filtered) > 1:
        raise RuntimeError(f"Found more than one {class_type}")
    return filtered[0]


class TreeTransformer(Transformer):
    """Transform parse tree into declaration types."""

    def SIGNED_NUMBER(self, token: Token) -> int | float:
        text = str(token)
        return float(text) if any(c in text for c in ".eE") else int(text)

    def ESCAPED_STRING(self, token: Token) -> str:
        return str(token)[1:-1]

    def qname(self, args: list[Any]) -> str:
        return ".".join(str(a) for a in args)

    def boolean(self, args: list[Any]) -> bool:
        return str(args[0]) == "true"

    def dim(self, args: list[Any]) -> _Dim:
        return _Dim()

    def type_args(self, args: list[Any]) -> _TypeArgs:
        return _TypeArgs(values=_filter(args, NavType))

    def type_ref(self, args: list[Any]) -> NavType:
        type_args = _find_one(args, _TypeArgs)
        return NavType(
            name=args[0],
            dims=len(_filter(args, _Dim)),
            args=type_args.values if type_args else [],
        )

    def modifier(self, args: list[Any]) -> _Modifier:
        return _Modifier(value=str(args[0]))

    def field_name(self, args: list[Any]) -> str:
        return str(args[0])

    def argument(self, args: list[Any]) -> NavAnnotationArg:
        if len(args) == 1:
            return NavAnnotationArg(name=None, value=args[0])
        if len(args) == 2:
            return NavAnnotationArg(name=str(args[0]), value=args[1])
        raise RuntimeError("Argument has more than two parts")

    def arguments(self, args: list[Any]) -> _Arguments:
        return _Arguments(values=_filter(args, NavAnnotationArg))

    def annotation(self, args: list[Any]) -> NavAnnotation:
        arguments = _find_one(args, _Arguments)
        return NavAnnotation(name=args[0], arguments=arguments.values if arguments else [])

    def field(self, args: list[Any]) -> NavField:
        return NavField(
            name=str(args[-1]),
            type=_filter(args, NavType)[0],
            modifiers=[m.value for m in _filter(args, _Modifier)],
            annotations=_filter(args, NavAnnotation),
        )

    def class_decl(self, args: list[Any]) -> NavClass:
        return NavClass(name=args[0], fields=_filter(args, NavField))

    def extends(self, args: list[Any]) -> _Extends:
        return _Extends(names=[str(a) for a in args])

    def implements(self, args: list[Any]) -> _Implements:
        return _Implements(names=[str(a) for a in args])

    def type_decl(self, args: list[Any]) -> NavTypeDecl:
        extends = _find_one(args, _Extends)
        implements = _find_one(args, _Implements)
        return NavTypeDecl(
            name=args[0],
            extends=extends.names if extends else [],
            implements=implements.names if implements else [],
        )

    def option(self, args: list[Any]) -> NavOption:
        return NavOption(name=str(args[0]), value=args[1])

    def options(self, args: list[Any]) -> _Options:
        return _Options(options=_filter(args, NavOption))

    def start(self, args: list[Any]) -> list[Any]:
        return args


def _marker(f: NavField) -> NavAnnotation | None:
    for annotation in f.annotations:
        if annotation.name.rpartition(".")[2] == MARKER_ANNOTATION:
            return annotation
    return None


def _bind_flag(cls: NavClass, f: NavField, marker: NavAnnotation) -> bool:
    bind = True
    for arg in marker.arguments:
        if arg.name != "bind":
            name = arg.name or repr(arg.value)
            raise ValidationError(
                f"{cls.name}.{f.name}: unknown @{MARKER_ANNOTATION} argument {name}"
            )
        if not isinstance(arg.value, bool):
            raise ValidationError(f"{cls.name}.{f.name}: bind must be true or false")
        bind = arg.value
    return bind


def is_package_name(value: Any) -> bool:
    return isinstance(value, str) and PACKAGE_NAME.fullmatch(value) is not None


def validate(
    options: list[NavOption],
    types: list[NavTypeDecl],
    classes: list[NavClass],
) -> None:
    """Validate parsed declarations."""
    known_options = {"package", "strict"}
    seen_options: set[str] = set()
    for option in options:
        if option.name not in known_options:
            raise ValidationError(f"Unknown option {option.name}")
        if option.name in seen_options:
            raise ValidationError(f"Option {option.name} set more than once")
        seen_options.add(option.name)
        if option.name == "strict" and not isinstance(option.value, bool):
            raise ValidationError("Option strict must be true or false")
        if option.name == "package" and not is_package_name(option.value):
            raise ValidationError(f"Option package must be a package name, not {option.value!r}")

    declared: set[str] = set()
    for decl in types:
        if decl.name in declared:
            raise ValidationError(f"Type {decl.name} declared more than once")
        declared.add(decl.name)

    # Launchers are named after the simple class name, so those must be unique
    simple_names: dict[str, str] = {}
    fields: dict[str, set[str]] = {}
    for cls in classes:
        simple = cls.name.rpartition(".")[2]
        if simple_names.setdefault(simple, cls.name) != cls.name:
            raise ValidationError(
                f"Classes {simple_names[simple]} and {cls.name} share the name {simple}"
            )
        seen = fields.setdefault(cls.name, set())
        for f in cls.fields:
            if f.name in seen:
                raise ValidationError(f"Field {cls.name}.{f.name} declared more than once")
            seen.add(f.name)
            marker = _marker(f)
            if marker:
                if f.name in RESERVED_NAMES:
                    raise ValidationError(
                        f"Field {cls.name}.{f.name} clashes with a generated local variable"
                    )
                _bind_flag(cls, f, marker)


def read_options(options: list[NavOption]) -> GeneratorOptions:
    """Collect options from a declaration file, filling in defaults."""
    result = GeneratorOptions()
    for option in options:
        setattr(result, option.name, option.value)
    return result


def scan(classes: list[NavClass]) -> list[RequiredField]:
    """Flatten every field carrying the marker annotation, in declaration order."""
    found: list[RequiredField] = []
    for cls in classes:
        for f in cls.fields:
            marker = _marker(f)
            if marker is None:
                continue
            found.append(
                RequiredField(
                    class_name=cls.name,
                    field_name=f.name,
                    type_name=str(f.type),
                    modifiers=tuple(f.modifiers),
                    bind=_bind_flag(cls, f, marker),
                )
            )
    return found


def parse(
    text: str,
) -> tuple[list[NavOption], list[NavTypeDecl], list[NavClass]]:
    """Parse a navigation declaration file."""
    global _g_parser

    if not _g_parser:
        with open(f"{os.path.dirname(__file__)}/navdef.lark", encoding="utf-8") as f:
            grammar = f.read()

        _g_parser = Lark(grammar, parser="lalr")

    tree = _g_parser.parse(text)
    items = TreeTransformer().transform(tree)

    options = [opt for block in _filter(items, _Options) for opt in block.options]
    types = _filter(items, NavTypeDecl)
    classes = _filter(items, NavClass)

    validate(options, types, classes)

    return (options, types, classes)
