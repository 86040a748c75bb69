"""navgen navigator code generator."""

from .accessors import resolve as resolve
from .classify import describe as describe
from .errors import GenerationError as GenerationError
from .errors import IncompatibleModifierError as IncompatibleModifierError
from .errors import UnsupportedTypeError as UnsupportedTypeError
from .parser import *
from .types import *
from .universe import DeclaredTypeUniverse as DeclaredTypeUniverse
from .universe import TypeUniverse as TypeUniverse
