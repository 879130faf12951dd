"""Local binding context for de Bruijn-indexed terms."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass

from frkernel.errors import UnboundVariable
from frkernel.kernel.ast import Term


@dataclass(frozen=True)
class CtxEntry:
    """Single context entry: the type of a bound variable and its display name."""

    ty: Term
    name: str = "_"


@dataclass(frozen=True)
class Ctx:
    """
    Typing context for de Bruijn-indexed terms.

    Representation:
        Index 0 refers to the *innermost (most recently introduced) binder*,
        index 1 to the next outer binder, and so on.

    Invariant:
        Each stored entry type is scoped in the *tail context* beneath it. The
        type of Var(0) is stored in the context of Var(1..), the type of Var(1)
        is stored in the context of Var(2..), and so on. Lookup shifts the
        stored type by ``k + 1`` to move it into the current scope.

    A context belongs to a single ``infer`` / ``check`` call and is discarded
    when that call returns.
    """

    entries: tuple[CtxEntry, ...] = ()

    def __len__(self) -> int:
        return len(self.entries)

    def __iter__(self) -> Iterator[CtxEntry]:
        return iter(self.entries)

    def __getitem__(self, idx: int) -> CtxEntry:
        return self.entries[idx]

    def bind(self, ty: Term, name: str = "_") -> Ctx:
        """Prepend a single named binder."""
        return Ctx((CtxEntry(ty, name), *self.entries))

    def type_of(self, k: int) -> Term:
        """Return the type of ``Var(k)`` in the current scope."""
        if k < 0 or k >= len(self.entries):
            raise UnboundVariable(
                "Unbound variable:\n"
                f"  index = {k}\n"
                f"  context size = {len(self.entries)}"
            )
        return self.entries[k].ty.shift(k + 1)

    def names(self) -> tuple[str, ...]:
        """Names ordered by de Bruijn index (0 = innermost)."""
        return tuple(e.name for e in self.entries)

    def __str__(self) -> str:
        if len(self.entries) < 2:
            return f"Ctx{self.entries}"
        lines = "".join(f"  #{i} {e.name}: {e.ty}\n" for i, e in enumerate(self))
        return f"Ctx(\n{lines})"


__all__ = ["Ctx", "CtxEntry"]
