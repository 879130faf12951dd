"""Full normalisation by repeated weak-head reduction under binders."""

from __future__ import annotations

from typing import TYPE_CHECKING

from frkernel.kernel.ast import App, Elim, Lam, Pi, Term

from .whnf import whnf

if TYPE_CHECKING:
    from frkernel.kernel.env import Environment


def normalize(env: Environment, t: Term) -> Term:
    """Return the normal form of ``t``.

    Only meaningful for well-typed terms; numerals are left as literals.
    """
    t = whnf(env, t)
    match t:
        case Pi(arg_ty, return_ty, name):
            return Pi(normalize(env, arg_ty), normalize(env, return_ty), name)
        case Lam(arg_ty, body, name):
            return Lam(normalize(env, arg_ty), normalize(env, body), name)
        case App(func, arg):
            return App(normalize(env, func), normalize(env, arg))
        case Elim(inductive, motive, cases, scrutinee):
            return Elim(
                inductive,
                normalize(env, motive),
                tuple(normalize(env, c) for c in cases),
                normalize(env, scrutinee),
            )
    return t


__all__ = ["normalize"]
