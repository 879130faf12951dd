"""Length-indexed vectors ``Vec (T: Set) : Nat -> Set``."""

from __future__ import annotations

from frkernel.kernel.ast import Ctor, Elim, Ind, Pi, Term, Var
from frkernel.kernel.decls import ConstructorDecl, Declaration, InductiveDecl
from frkernel.kernel.tel import mk_app
from frkernel.kernel.universes import SET

from .nat import Nat, Succ, Zero

Vec = Ind("Vec")
NilCtor = Ctor("Vec", "nil")
ConsCtor = Ctor("Vec", "cons")

VEC = InductiveDecl(
    "Vec",
    params=(("T", SET),),
    indices=(("n", Nat),),
    sort=SET,
    constructors=(
        # nil : Vec T zero
        ConstructorDecl("nil", mk_app(Vec, Var(0), Zero)),
        # cons : Fn(n: Nat, x: T, xs: Vec T n) -> Vec T (succ n)
        ConstructorDecl(
            "cons",
            Pi(
                Nat,
                Pi(
                    Var(1),
                    Pi(
                        mk_app(Vec, Var(2), Var(1)),
                        mk_app(Vec, Var(3), Succ(Var(2))),
                        "xs",
                    ),
                    "x",
                ),
                "n",
            ),
        ),
    ),
)


def VecType(elem_ty: Term, length: Term) -> Term:
    return mk_app(Vec, elem_ty, length)


def Nil(elem_ty: Term) -> Term:
    return mk_app(NilCtor, elem_ty)


def Cons(elem_ty: Term, n: Term, head: Term, tail: Term) -> Term:
    return mk_app(ConsCtor, elem_ty, n, head, tail)


def VecElim(P: Term, base: Term, step: Term, xs: Term) -> Elim:
    return Elim("Vec", P, (base, step), xs)


DECLARATIONS: tuple[Declaration, ...] = (VEC,)

__all__ = [
    "Vec",
    "NilCtor",
    "ConsCtor",
    "VEC",
    "VecType",
    "Nil",
    "Cons",
    "VecElim",
    "DECLARATIONS",
]
