"""Beta reduction at the head of a term."""

from __future__ import annotations

from typing import TYPE_CHECKING

from frkernel.kernel.ast import App, Lam, Term

if TYPE_CHECKING:
    from frkernel.kernel.env import Environment


def beta_head_step(env: Environment, t: Term) -> Term:
    """``(\\x. body) arg`` becomes ``body[x := arg]``; anything else is returned as is.

    The function position is brought to weak-head normal form first so that
    redexes hidden behind definitions or eliminators are found.
    """
    from .whnf import whnf

    match t:
        case App(f, a):
            f1 = whnf(env, f)
            if isinstance(f1, Lam):
                return f1.body.subst(a)
            if f1 is not f:
                return App(f1, a)
    return t


__all__ = ["beta_head_step"]
