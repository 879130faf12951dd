"""Delta reduction: unfolding references to global names."""

from __future__ import annotations

from typing import TYPE_CHECKING

from frkernel.errors import UnboundVariable
from frkernel.kernel.ast import Const, Ctor, Ind, Term
from frkernel.kernel.decls import (
    ConstructorEntry,
    Definition,
    InductiveEntry,
    UniverseAxiom,
)

if TYPE_CHECKING:
    from frkernel.kernel.env import Environment


def delta_head_step(env: Environment, t: Term) -> Term:
    """Replace a ``Const`` by what it names; postulated axioms stay stuck.

    Definitions unfold to their value and universe axioms to their universe.
    A ``Const`` naming an inductive or a constructor becomes the dedicated
    ``Ind`` / ``Ctor`` node.
    """
    if not isinstance(t, Const):
        return t
    match env.lookup(t.name):
        case Definition(value=value):
            return value
        case UniverseAxiom(universe=universe):
            return universe
        case InductiveEntry(name=name):
            return Ind(name)
        case ConstructorEntry(name=name, inductive=inductive):
            return Ctor(inductive, name)
        case None:
            raise UnboundVariable(f"Unknown global constant: {t.name}")
    return t


__all__ = ["delta_head_step"]
