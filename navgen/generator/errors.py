"""Errors raised while generating the navigator."""


class GenerationError(RuntimeError):
    """Base class for errors that abort a generation run."""


class IncompatibleModifierError(GenerationError):
    """Raised when a field that must be bound is not publicly writable."""

    def __init__(self, class_name: str, field_name: str) -> None:
        super().__init__(
            f"{class_name}.{field_name} must be public and non-final to be bound"
        )
        self.class_name = class_name
        self.field_name = field_name


class UnsupportedTypeError(GenerationError):
    """Raised when a bound field has a type that cannot be read from an intent."""

    def __init__(self, class_name: str, field_name: str, type_name: str) -> None:
        super().__init__(
            f"{class_name}.{field_name} has type {type_name}, which cannot be read from an Intent"
        )
        self.class_name = class_name
        self.field_name = field_name
        self.type_name = type_name
