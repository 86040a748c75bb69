"""Java code generator for the Navigator class."""

import logging
from dataclasses import dataclass

from jinja2 import Environment, PackageLoader

from .accessors import resolve
from .classify import classify
from .errors import UnsupportedTypeError
from .types import (
    FieldDescriptor,
    OwningClassGroup,
    is_primitive,
    join_type_name,
    split_type_name,
)
from .validator import validate

logger = logging.getLogger(__name__)

env = Environment(
    loader=PackageLoader("navgen.generator", "templates"),
    trim_blocks=True,
    lstrip_blocks=True,
    keep_trailing_newline=True,
    line_comment_prefix="%%",
    line_statement_prefix="%",
)

template = env.get_template("navigator.java.j2")

NAVIGATOR_CLASS = "Navigator"
CONTEXT_CLASS = "android.content.Context"
INTENT_CLASS = "android.content.Intent"


@dataclass(frozen=True)
class Parameter:
    type: str
    name: str

    def __str__(self) -> str:
        return f"final {self.type} {self.name}"


@dataclass(frozen=True)
class MethodSpec:
    name: str
    parameters: tuple[Parameter, ...]
    statements: tuple[str, ...]

    @property
    def signature(self) -> str:
        return ", ".join(str(p) for p in self.parameters)


@dataclass(frozen=True)
class NavigatorSpec:
    package: str
    name: str
    imports: tuple[str, ...]
    methods: tuple[MethodSpec, ...]


class ImportScope:
    """Turns qualified type names into source references, collecting imports.

    The first type to claim a simple name gets it; later clashes stay qualified.
    """

    def __init__(self, package: str, reserved: tuple[str, ...] = ()) -> None:
        self.package = package
        self._claimed: dict[str, str] = {name: f"{package}.{name}" for name in reserved}
        self._imports: set[str] = set()

    def ref(self, type_name: str) -> str:
        base, args, dims = split_type_name(type_name)
        if not is_primitive(base) and "." in base:
            base = self._claim(base)
        return join_type_name(base, [self.ref(a) for a in args], dims)

    def _claim(self, qualified: str) -> str:
        package, _, simple = qualified.rpartition(".")
        owner = self._claimed.setdefault(simple, qualified)
        if owner != qualified:
            return qualified
        if package not in ("java.lang", self.package):
            self._imports.add(qualified)
        return simple

    @property
    def imports(self) -> tuple[str, ...]:
        return tuple(sorted(self._imports))


def _bind_statement(
    group: OwningClassGroup, field: FieldDescriptor, scope: ImportScope, *, strict: bool
) -> tuple[str, ...]:
    validate(group.simple_name, field)

    t = field.declared_type
    plan = resolve(classify(t), t)
    if plan is None:
        if strict:
            raise UnsupportedTypeError(group.simple_name, field.name, t.name)
        logger.warning(
            "Not binding %s.%s: type %s cannot be read from an Intent",
            group.class_name,
            field.name,
            t.name,
        )
        return ()

    args = f'"{field.name}"' if plan.default is None else f'"{field.name}", {plan.default}'
    value = f"intent.{plan.method}({args})"
    if plan.needs_cast:
        value = f"({scope.ref(t.name)}) {value}"
    return (f"activity.{field.name} = {value}",)


def launcher(group: OwningClassGroup, scope: ImportScope) -> MethodSpec:
    """Build start<Class>(context, fields...) for one owning class."""
    intent = scope.ref(INTENT_CLASS)
    parameters = (Parameter(scope.ref(CONTEXT_CLASS), "context"),) + tuple(
        Parameter(scope.ref(f.declared_type.name), f.name) for f in group.fields
    )
    statements = (
        (f"{intent} intent = new {intent}(context, {scope.ref(group.class_name)}.class)",)
        + tuple(f'intent.putExtra("{f.name}", {f.name})' for f in group.fields)
        + ("context.startActivity(intent)",)
    )
    return MethodSpec(
        name=f"start{group.simple_name}", parameters=parameters, statements=statements
    )


def binder(group: OwningClassGroup, scope: ImportScope, *, strict: bool = True) -> MethodSpec:
    """Build bind(activity) for one owning class.

    Raises IncompatibleModifierError for a bound field that is not writable, and
    UnsupportedTypeError for an unreadable bound type when strict.
    """
    statements: tuple[str, ...] = (f"{scope.ref(INTENT_CLASS)} intent = activity.getIntent()",)
    for field in group.fields:
        if field.requires_binding:
            statements += _bind_statement(group, field, scope, strict=strict)
    return MethodSpec(
        name="bind",
        parameters=(Parameter(scope.ref(group.class_name), "activity"),),
        statements=statements,
    )


def build(groups: list[OwningClassGroup], *, package: str, strict: bool = True) -> NavigatorSpec:
    """Build the navigator for all owning classes."""
    scope = ImportScope(package, reserved=(NAVIGATOR_CLASS,))
    methods: list[MethodSpec] = []
    for group in groups:
        methods.append(launcher(group, scope))
        methods.append(binder(group, scope, strict=strict))
        logger.debug("Generated start%s and bind for %s", group.simple_name, group.class_name)

    return NavigatorSpec(
        package=package, name=NAVIGATOR_CLASS, imports=scope.imports, methods=tuple(methods)
    )


def render(groups: list[OwningClassGroup], *, package: str, strict: bool = True) -> str:
    """Render the navigator for all owning classes to Java source code."""
    spec = build(groups, package=package, strict=strict)
    return template.render(navigator=spec)
