"""Kernel error taxonomy.

Every kernel operation either succeeds or raises one of the exceptions below.
Nothing inside the kernel recovers from them; the environment tags the error
with the name of the declaration being processed before re-raising it.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from frkernel.kernel.ast import Term


class KernelError(Exception):
    """Base class for every rejection raised by the kernel."""

    def __init__(self, message: str) -> None:
        self.message = message
        self.declaration: str | None = None
        super().__init__(message)

    @property
    def kind(self) -> str:
        return type(self).__name__

    def for_declaration(self, name: str) -> KernelError:
        """Record the declaration that was being processed (first one wins)."""
        if self.declaration is None:
            self.declaration = name
        return self

    def __str__(self) -> str:
        if self.declaration is None:
            return self.message
        return f"in declaration {self.declaration}: {self.message}"


class UnboundVariable(KernelError):
    pass


class DuplicateName(KernelError):
    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Name already declared: {name}")


class PositivityViolation(KernelError):
    pass


class MalformedIndices(KernelError):
    pass


class NotAFunctionType(KernelError):
    pass


class TypeMismatch(KernelError):
    def __init__(
        self,
        message: str,
        expected: Term,
        inferred: Term,
        term: Term | None = None,
    ) -> None:
        self.expected = expected
        self.inferred = inferred
        self.term = term
        lines = [f"{message}:"]
        if term is not None:
            lines.append(f"  term = {term}")
        lines.append(f"  expected = {expected}")
        lines.append(f"  inferred = {inferred}")
        super().__init__("\n".join(lines))


class UniverseError(KernelError):
    pass


class UnknownConstructor(KernelError):
    pass


class UnknownInductive(KernelError):
    pass


__all__ = [
    "KernelError",
    "UnboundVariable",
    "DuplicateName",
    "PositivityViolation",
    "MalformedIndices",
    "NotAFunctionType",
    "TypeMismatch",
    "UniverseError",
    "UnknownConstructor",
    "UnknownInductive",
]
