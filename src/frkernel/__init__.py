"""A minimal dependent type-checking kernel."""

from frkernel.config import DEFAULT_CONFIG, KernelConfig
from frkernel.errors import (
    DuplicateName,
    KernelError,
    MalformedIndices,
    NotAFunctionType,
    PositivityViolation,
    TypeMismatch,
    UnboundVariable,
    UniverseError,
    UnknownConstructor,
    UnknownInductive,
)
from frkernel.kernel import Environment

__all__ = [
    "DEFAULT_CONFIG",
    "KernelConfig",
    "DuplicateName",
    "KernelError",
    "MalformedIndices",
    "NotAFunctionType",
    "PositivityViolation",
    "TypeMismatch",
    "UnboundVariable",
    "UniverseError",
    "UnknownConstructor",
    "UnknownInductive",
    "Environment",
]
