"""Natural numbers: the ``Nat`` inductive, numerals and addition."""

from __future__ import annotations

from frkernel.kernel.ast import App, Const, Ctor, Elim, Ind, Lam, Pi, Term, Var
from frkernel.kernel.decls import ConstructorDecl, Declaration, DefinitionDecl, InductiveDecl
from frkernel.kernel.tel import mk_app, mk_lams
from frkernel.kernel.universes import SET

Nat = Ind("Nat")
Zero = Ctor("Nat", "zero")
SuccCtor = Ctor("Nat", "succ")

NAT = InductiveDecl(
    "Nat",
    sort=SET,
    constructors=(
        ConstructorDecl("zero", Nat),
        ConstructorDecl("succ", Pi(Nat, Nat, "n")),
    ),
)


def Succ(n: Term) -> Term:
    return App(SuccCtor, n)


def numeral(value: int) -> Term:
    """Return the constructor form of the natural number ``value``."""

    term: Term = Zero
    for _ in range(value):
        term = Succ(term)
    return term


def NatElim(P: Term, base: Term, step: Term, n: Term) -> Elim:
    return Elim("Nat", P, (base, step), n)


def NatRec(A: Term, base: Term, step: Term, n: Term) -> Elim:
    """Non-dependent recursion: ``A`` is the constant motive."""
    return NatElim(Lam(Nat, A.shift(1)), base, step, n)


# add m n = NatRec Nat n (\_ r. succ r) m
ADD = DefinitionDecl(
    "add",
    Pi(Nat, Pi(Nat, Nat, "n"), "m"),
    Lam(
        Nat,
        Lam(
            Nat,
            NatRec(Nat, Var(0), mk_lams(Nat, Nat, body=Succ(Var(0))), Var(1)),
            "n",
        ),
        "m",
    ),
)


def add(lhs: Term, rhs: Term) -> Term:
    """
    add : Nat -> Nat -> Nat
    Addition by recursion on the first argument.

    Rules:
      add zero b = b
      add (succ a) b = succ (add a b)
    """
    return mk_app(Const("add"), lhs, rhs)


DECLARATIONS: tuple[Declaration, ...] = (NAT, ADD)

__all__ = [
    "Nat",
    "Zero",
    "SuccCtor",
    "Succ",
    "NAT",
    "numeral",
    "NatElim",
    "NatRec",
    "ADD",
    "add",
    "DECLARATIONS",
]
