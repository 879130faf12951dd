"""Weak-head normalisation."""

from __future__ import annotations

from typing import TYPE_CHECKING

from frkernel.kernel.ast import App, Const, Elim, Term

from .beta import beta_head_step
from .delta import delta_head_step
from .iota import iota_head_step

if TYPE_CHECKING:
    from frkernel.kernel.env import Environment


def whnf_step(env: Environment, t: Term) -> Term:
    """Perform one head step; a stuck term is returned unchanged (``is``-identical)."""
    match t:
        case App():
            return beta_head_step(env, t)
        case Const():
            return delta_head_step(env, t)
        case Elim():
            return iota_head_step(env, t)
    return t


def whnf(env: Environment, t: Term) -> Term:
    """Reduce ``t`` until its head is a binder, sort, variable or stuck constant."""
    while (reduced := whnf_step(env, t)) is not t:
        t = reduced
    return t


__all__ = ["whnf", "whnf_step"]
