"""The trivially true proposition."""

from __future__ import annotations

from frkernel.kernel.ast import Ctor, Ind, Prop
from frkernel.kernel.decls import ConstructorDecl, Declaration, InductiveDecl

TrueType = Ind("True")
Trivial = Ctor("True", "trivial")

TRUE = InductiveDecl(
    "True",
    sort=Prop(),
    constructors=(ConstructorDecl("trivial", TrueType),),
)

DECLARATIONS: tuple[Declaration, ...] = (TRUE,)

__all__ = ["TrueType", "Trivial", "TRUE", "DECLARATIONS"]
