"""Universe names and the polymorphic identity function."""

from __future__ import annotations

from frkernel.kernel.ast import Const, Lam, Pi, Prop, Term, Var
from frkernel.kernel.decls import Declaration, DefinitionDecl, UniverseAxiomDecl
from frkernel.kernel.tel import mk_app
from frkernel.kernel.universes import SET, type_n

PROP = UniverseAxiomDecl("Prop", Prop())
SET_AXIOM = UniverseAxiomDecl("Set", SET)
TYPE_AXIOM = UniverseAxiomDecl("Type", type_n(0))

# id : Fn(A: Set, x: A) -> A
ID_TYPE = Pi(Const("Set"), Pi(Var(0), Var(1), "x"), "A")
ID_VALUE = Lam(Const("Set"), Lam(Var(0), Var(0), "x"), "A")
ID = DefinitionDecl("id", ID_TYPE, ID_VALUE)


def identity(ty: Term, value: Term) -> Term:
    return mk_app(Const("id"), ty, value)


DECLARATIONS: tuple[Declaration, ...] = (PROP, SET_AXIOM, TYPE_AXIOM, ID)

__all__ = ["PROP", "SET_AXIOM", "TYPE_AXIOM", "ID", "identity", "DECLARATIONS"]
