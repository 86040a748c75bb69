"""Field checks performed before any binder statement is emitted."""

from .errors import IncompatibleModifierError
from .types import FieldDescriptor


def validate(class_name: str, field: FieldDescriptor) -> None:
    """Fail when the binder would have to assign a field it cannot write."""
    if field.requires_binding and not field.is_publicly_writable:
        raise IncompatibleModifierError(class_name, field.name)
